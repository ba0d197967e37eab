"""
Action Dispatcher

Maps an incoming `action` plus query parameters onto the matching client call
and returns the result in the upstream wire shape. Required parameters are
validated before any network call. Unknown actions answer with a login
response that exposes the proxy's own credentials and address instead of the
upstream's.
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any, Callable, Mapping, Sequence

from xtream_proxy import converters
from xtream_proxy.errors import (
    DecoderError,
    HTTPError,
    ParameterValidationError,
    TransportError,
)
from xtream_proxy.models import AuthInfo, ServerInfo, UserInfo
from xtream_proxy.services import xtream_client as actions
from xtream_proxy.services.xtream_client import XtreamClient

if TYPE_CHECKING:
    from xtream_proxy.config import ProxySettings


logger = logging.getLogger(__name__)

Params = Mapping[str, str | Sequence[str]]


@dataclass(slots=True)
class DispatchResult:
    """Payload in wire shape plus the HTTP status and content type to relay it with"""
    payload: Any
    status_code: int = 200
    content_type: str = "application/json"


class ActionDispatcher:
    """Routes actions to an XtreamClient on behalf of downstream clients."""

    def __init__(self, client: XtreamClient, proxy_settings: ProxySettings) -> None:
        self.client = client
        self.proxy_settings = proxy_settings
        self._handlers: dict[str, Callable[[Params], Any]] = {
            actions.GET_LIVE_CATEGORIES: self._live_categories,
            actions.GET_LIVE_STREAMS: self._live_streams,
            actions.GET_VOD_CATEGORIES: self._vod_categories,
            actions.GET_VOD_STREAMS: self._vod_streams,
            actions.GET_VOD_INFO: self._vod_info,
            actions.GET_SERIES_CATEGORIES: self._series_categories,
            actions.GET_SERIES: self._series,
            actions.GET_SERIES_INFO: self._series_info,
            actions.GET_SHORT_EPG: self._short_epg,
            actions.GET_SIMPLE_DATA_TABLE: self._simple_data_table,
        }

    def dispatch(self, action: str | None, params: Params | None = None) -> DispatchResult:
        """
        Execute one action

        Args:
            action: Action name; None or unknown names produce the login response
            params: Query parameters (single values or lists, first value used)

        Returns:
            DispatchResult; errors are reported through status_code and an
            {"error": message} payload instead of being raised
        """
        params = params or {}
        handler = self._handlers.get(action or "", self._login)
        logger.debug(f"Dispatching action '{action or 'login'}'")

        try:
            payload = handler(params)
        except ParameterValidationError as e:
            logger.warning(f"Invalid parameters for action '{action}': {e}")
            return DispatchResult({"error": str(e)}, e.status_code)
        except (HTTPError, DecoderError, TransportError) as e:
            logger.error(f"Action '{action}' failed: {e}")
            return DispatchResult({"error": str(e)}, 500)

        return DispatchResult(payload)

    # Catalog

    def _live_categories(self, params: Params) -> list[dict[str, Any]]:
        return [converters.category_to_wire(c) for c in self.client.list_live_categories()]

    def _vod_categories(self, params: Params) -> list[dict[str, Any]]:
        return [converters.category_to_wire(c) for c in self.client.list_vod_categories()]

    def _series_categories(self, params: Params) -> list[dict[str, Any]]:
        return [converters.category_to_wire(c) for c in self.client.list_series_categories()]

    def _live_streams(self, params: Params) -> list[dict[str, Any]]:
        streams = self.client.list_live_streams(_first(params, "category_id"))
        return [converters.live_stream_to_wire(s) for s in streams]

    def _vod_streams(self, params: Params) -> list[dict[str, Any]]:
        streams = self.client.list_vod_streams(_first(params, "category_id"))
        return [converters.vod_stream_to_wire(s) for s in streams]

    def _series(self, params: Params) -> list[dict[str, Any]]:
        streams = self.client.list_series_streams(_first(params, "category_id"))
        return [converters.series_stream_to_wire(s) for s in streams]

    def _vod_info(self, params: Params) -> dict[str, Any]:
        vod_id = _require(params, "vod_id")
        return converters.vod_to_wire(self.client.get_vod_info(vod_id))

    def _series_info(self, params: Params) -> dict[str, Any]:
        series_id = _require(params, "series_id")
        return converters.series_to_wire(self.client.get_series_info(series_id))

    # EPG

    def _short_epg(self, params: Params) -> dict[str, Any]:
        stream_id = _require(params, "stream_id")

        limit = 0
        raw_limit = _first(params, "limit")
        if raw_limit is not None:
            try:
                limit = int(raw_limit)
            except ValueError as e:
                raise ParameterValidationError(f"invalid \"limit\": {raw_limit!r}", status_code=500) from e

        if limit > 0:
            epg = self.client.get_short_epg(stream_id, limit)
        else:
            epg = self.client.get_short_epg(stream_id)
        return converters.epg_to_wire(epg)

    def _simple_data_table(self, params: Params) -> dict[str, Any]:
        stream_id = _require(params, "stream_id")
        return converters.epg_to_wire(self.client.get_all_epg(stream_id))

    # Login

    def _login(self, params: Params) -> dict[str, Any]:
        """Upstream account status re-addressed to the proxy."""
        upstream = self.client.get_auth_info()
        proxy = self.proxy_settings

        login = AuthInfo(
            user_info=UserInfo(
                username=proxy.user,
                password=proxy.password,
                message=upstream.user_info.message,
                is_authorized=upstream.user_info.is_authorized,
                status=upstream.user_info.status,
                expires_at=upstream.user_info.expires_at,
                is_trial=upstream.user_info.is_trial,
                active_connections=upstream.user_info.active_connections,
                created_at=upstream.user_info.created_at,
                max_connections=upstream.user_info.max_connections,
                allowed_output_formats=list(upstream.user_info.allowed_output_formats),
            ),
            server_info=ServerInfo(
                url=proxy.advertised_url,
                http_port=proxy.advertised_port,
                https_port=proxy.advertised_port,
                rtmp_port=proxy.advertised_port,
                server_protocol=proxy.protocol,
                timezone=upstream.server_info.timezone,
                timestamp_now=upstream.server_info.timestamp_now,
                time_now=upstream.server_info.time_now,
            ),
        )
        return converters.auth_info_to_wire(login)


def _first(params: Params, name: str) -> str | None:
    """First value of a query parameter, None when absent or empty"""
    value = params.get(name)
    if value is None:
        return None
    if not isinstance(value, str):
        if not value:
            return None
        value = value[0]
    return value


def _require(params: Params, name: str) -> str:
    value = _first(params, name)
    if value is None:
        raise ParameterValidationError(f"missing \"{name}\"")
    return value
