"""
Logging helpers

Keeps upstream credentials out of log lines and error messages.
"""
import logging
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit


REDACTED = "***"
_SECRET_PARAMS = frozenset({"password"})


def sanitize_url_for_logging(url: str) -> str:
    """
    Remove credentials from URL for safe logging.

    Masks userinfo (user:pass@host) and the `password` query parameter.

    Args:
        url: URL that may carry credentials

    Returns:
        URL with credentials replaced by '***'
    """
    if "://" not in url:
        return url
    try:
        parts = urlsplit(url)
    except ValueError:
        return url

    netloc = parts.netloc
    if "@" in netloc:
        netloc = f"{REDACTED}:{REDACTED}@{netloc.split('@', 1)[1]}"

    query = parts.query
    if query:
        pairs = [
            (key, REDACTED if key.lower() in _SECRET_PARAMS else value)
            for key, value in parse_qsl(query, keep_blank_values=True)
        ]
        query = urlencode(pairs, safe="*")

    return urlunsplit((parts.scheme, netloc, parts.path, query, parts.fragment))


def log_request(logger: logging.Logger, url: str) -> None:
    """Log an outgoing upstream request with credentials masked."""
    logger.debug("GET %s", sanitize_url_for_logging(url))


def log_response(logger: logging.Logger, url: str, status_code: int, size: int) -> None:
    """Log an upstream response summary."""
    logger.debug(
        "GET %s -> %s (%s bytes)",
        sanitize_url_for_logging(url),
        status_code,
        size,
    )
