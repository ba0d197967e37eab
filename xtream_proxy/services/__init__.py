"""
Services package for Xtream Proxy

This package contains the transport, the typed client, the action dispatcher
and the XMLTV/M3U document parsers.
"""
from xtream_proxy.services.transport_service import Transport
from xtream_proxy.services.xtream_client import XtreamClient
from xtream_proxy.services.action_dispatcher import ActionDispatcher, DispatchResult
from xtream_proxy.services.xmltv_parser_service import parse_xmltv_bytes, sanitize_xmltv
from xtream_proxy.services.m3u_parser_service import parse_m3u

__all__ = [
    'Transport',
    'XtreamClient',
    'ActionDispatcher',
    'DispatchResult',
    'parse_xmltv_bytes',
    'sanitize_xmltv',
    'parse_m3u',
]
