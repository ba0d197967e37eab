"""
Transport

Builds authenticated upstream URLs, executes GET requests with httpx and
classifies the outcome. Success returns the body; a non-success status raises
HTTPError; anything that prevents a response raises TransportError. Decoding
helpers wrap every parse failure in DecoderError together with the URL.

Nothing here retries: a failure is reported to the caller immediately.
"""
from __future__ import annotations

import json
import logging
import time
from typing import Any, Callable, Mapping, TypeVar
from urllib.parse import urlencode

import httpx
from pydantic import TypeAdapter

from xtream_proxy.errors import DecoderError, HTTPError, TransportError
from xtream_proxy.utils.logging_helpers import log_request, log_response


logger = logging.getLogger(__name__)

T = TypeVar("T")

DEFAULT_TIMEOUT = 30.0
DEFAULT_USER_AGENT = "xtream-proxy"

API_PATH = "/player_api.php"
XMLTV_PATH = "/xmltv.php"
PLAYLIST_PATH = "/get.php"


class Transport:
    """
    Authenticated HTTP access to one Xtream Codes server.

    Holds only immutable configuration (host, credentials, user agent,
    timeout) plus the httpx.Client, which is safe to share between threads.
    """

    def __init__(
        self,
        host: str,
        username: str,
        password: str,
        *,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout: float = DEFAULT_TIMEOUT,
        http_client: httpx.Client | None = None,
    ) -> None:
        self.host = host.rstrip("/")
        self.username = username
        self.password = password
        self.user_agent = user_agent
        self.timeout = timeout
        self._owns_client = http_client is None
        self._client = http_client or httpx.Client(timeout=timeout, follow_redirects=True)

    def __enter__(self) -> "Transport":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        """Close the underlying httpx client if this transport created it."""
        if self._owns_client:
            self._client.close()

    def build_url(self, path: str, params: Mapping[str, Any] | None = None) -> str:
        """
        Build the full request URL

        Credentials always come first, followed by the caller's parameters.

        Args:
            path: Path on the server (e.g., '/player_api.php')
            params: Additional query parameters

        Returns:
            Absolute URL
        """
        credentials = urlencode({"username": self.username, "password": self.password})
        url = f"{self.host}{path}?{credentials}"
        if params:
            url = f"{url}&{urlencode(params)}"
        return url

    def get(
        self,
        path: str,
        params: Mapping[str, Any] | None = None,
        *,
        deadline: float | None = None,
    ) -> tuple[str, bytes]:
        """
        Execute an authenticated GET request

        Args:
            path: Path on the server
            params: Additional query parameters

        Keyword Args:
            deadline: Absolute time.monotonic() value after which the call is abandoned

        Returns:
            Tuple of (url, body)

        Raises:
            TransportError: Network failure, timeout or expired deadline
            HTTPError: Upstream answered with a non-200 status
        """
        url = self.build_url(path, params)
        timeout = self._effective_timeout(url, deadline)

        log_request(logger, url)
        try:
            response = self._client.get(
                url,
                headers={"User-Agent": self.user_agent},
                timeout=timeout,
                follow_redirects=True,
            )
        except httpx.TimeoutException as e:
            raise TransportError(url, f"timed out after {timeout:.1f}s") from e
        except httpx.HTTPError as e:
            raise TransportError(url, f"{type(e).__name__}: {e}") from e

        log_response(logger, url, response.status_code, len(response.content))

        if response.status_code != httpx.codes.OK:
            raise HTTPError(url, response.status_code, _read_body(response))

        return url, response.content

    def get_json(
        self,
        path: str,
        params: Mapping[str, Any] | None,
        adapter: TypeAdapter[T],
        *,
        deadline: float | None = None,
    ) -> T:
        """
        GET a JSON document and validate it against a wire schema

        Raises:
            DecoderError: Body is not JSON or does not match the schema
        """
        url, body = self.get(path, params, deadline=deadline)
        return decode_body(url, body, lambda raw: adapter.validate_python(json.loads(raw)))

    def _effective_timeout(self, url: str, deadline: float | None) -> float:
        if deadline is None:
            return self.timeout

        remaining = deadline - time.monotonic()
        if remaining <= 0:
            raise TransportError(url, "deadline exceeded before the request was sent")
        return min(self.timeout, remaining)


def decode_body(
    url: str,
    body: bytes,
    decoder: Callable[[bytes], T],
    *,
    errors: tuple[type[Exception], ...] = (ValueError,),
) -> T:
    """
    Run a decoder over a response body, wrapping any failure with the URL

    Args:
        url: URL the body was fetched from
        body: Raw response body
        decoder: Callable turning bytes into a value

    Keyword Args:
        errors: Exception types that mean the body is malformed

    Returns:
        Decoded value

    Raises:
        DecoderError: If the decoder raises one of `errors` (the default covers
            pydantic ValidationError and json.JSONDecodeError)
    """
    try:
        return decoder(body)
    except errors as e:
        logger.error(f"Failed to decode response: {type(e).__name__}")
        raise DecoderError(url, e) from e


def _read_body(response: httpx.Response) -> str | None:
    """Best-effort capture of an error response body."""
    try:
        text = response.text
    except (UnicodeDecodeError, LookupError, httpx.HTTPError):
        return None
    return text or None
