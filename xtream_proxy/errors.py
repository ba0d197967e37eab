"""
Error types

Every failure the client can report is one of these. None of them are retried
by this package; callers own retry policy.
"""
from xtream_proxy.utils.logging_helpers import sanitize_url_for_logging


class XtreamError(Exception):
    """Base class for all client errors"""
    pass


class TransportError(XtreamError):
    """Raised when the request could not be completed (network, timeout, deadline)"""

    def __init__(self, url: str, message: str):
        self.url = url
        super().__init__(f"Request to {sanitize_url_for_logging(url)} failed: {message}")


class HTTPError(XtreamError):
    """Raised when the upstream answers with a non-success status code"""

    def __init__(self, url: str, status_code: int, body: str | None = None):
        self.url = url
        self.status_code = status_code
        self.body = body

        safe_url = sanitize_url_for_logging(url)
        if body is None:
            message = f"HTTP request to {safe_url} failed with status code: {status_code}"
        else:
            message = f"HTTP request to {safe_url} failed with status code: {status_code}: body: {body}"
        super().__init__(message)


class DecoderError(XtreamError):
    """Raised when a response body does not match the expected shape"""

    def __init__(self, url: str, error: Exception):
        self.url = url
        self.error = error
        super().__init__(
            f"Failed to decode response from {sanitize_url_for_logging(url)}: {error}"
        )


class ParameterValidationError(XtreamError):
    """Raised by the dispatcher before any network call when parameters are unusable"""

    def __init__(self, message: str, status_code: int = 400):
        self.status_code = status_code
        super().__init__(message)


__all__ = [
    "XtreamError",
    "TransportError",
    "HTTPError",
    "DecoderError",
    "ParameterValidationError",
]
