"""
Xtream Codes protocol client and relay

Decodes the inconsistent payloads of Xtream Codes style IPTV servers into one
stable, typed model.
"""
from xtream_proxy.errors import (
    DecoderError,
    HTTPError,
    ParameterValidationError,
    TransportError,
    XtreamError,
)
from xtream_proxy.services import ActionDispatcher, DispatchResult, Transport, XtreamClient

__version__ = "0.1.0"

__all__ = [
    'XtreamClient',
    'Transport',
    'ActionDispatcher',
    'DispatchResult',
    'XtreamError',
    'TransportError',
    'HTTPError',
    'DecoderError',
    'ParameterValidationError',
]
