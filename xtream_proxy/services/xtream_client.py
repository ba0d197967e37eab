"""
Xtream Client

One typed call per catalog operation. Each call issues exactly one request
through the Transport, validates the body against its wire schema and converts
it into domain values. Nothing is cached between calls.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, TypeVar

from pydantic import TypeAdapter

from xtream_proxy import converters
from xtream_proxy.models import (
    EPG,
    VOD,
    XMLTV,
    AuthInfo,
    Category,
    LiveStream,
    Playlist,
    Series,
    SeriesStream,
    VODStream,
)
from xtream_proxy.schemas import (
    AuthInfoWire,
    CategoryListAdapter,
    EPGWire,
    LiveStreamListAdapter,
    SeriesStreamListAdapter,
    SeriesWire,
    VODStreamListAdapter,
    VODWire,
)
from xtream_proxy.services.m3u_parser_service import parse_m3u
from xtream_proxy.services.transport_service import (
    API_PATH,
    PLAYLIST_PATH,
    XMLTV_PATH,
    Transport,
    decode_body,
)
from xtream_proxy.services.xmltv_parser_service import XMLTV_ERRORS, parse_xmltv_bytes

if TYPE_CHECKING:
    from xtream_proxy.config import ClientSettings


logger = logging.getLogger(__name__)

W = TypeVar("W")
D = TypeVar("D")

GET_LIVE_CATEGORIES = "get_live_categories"
GET_LIVE_STREAMS = "get_live_streams"
GET_VOD_CATEGORIES = "get_vod_categories"
GET_VOD_STREAMS = "get_vod_streams"
GET_VOD_INFO = "get_vod_info"
GET_SERIES_CATEGORIES = "get_series_categories"
GET_SERIES = "get_series"
GET_SERIES_INFO = "get_series_info"
GET_SHORT_EPG = "get_short_epg"
GET_SIMPLE_DATA_TABLE = "get_simple_data_table"

_AUTH_INFO_ADAPTER = TypeAdapter(AuthInfoWire)
_VOD_ADAPTER = TypeAdapter(VODWire)
_SERIES_ADAPTER = TypeAdapter(SeriesWire)
_EPG_ADAPTER = TypeAdapter(EPGWire)


class XtreamClient:
    """
    Typed client for the Xtream Codes control API.

    Every method accepts a keyword-only `deadline` (absolute time.monotonic()
    value). When it passes the call fails with TransportError.
    """

    def __init__(self, transport: Transport) -> None:
        self.transport = transport

    @classmethod
    def from_settings(cls, settings: ClientSettings) -> "XtreamClient":
        """Build a client with its own Transport from ClientSettings."""
        transport = Transport(
            settings.base_url,
            settings.username,
            settings.password,
            user_agent=settings.user_agent,
            timeout=settings.timeout_sec,
        )
        return cls(transport)

    def __enter__(self) -> "XtreamClient":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def close(self) -> None:
        self.transport.close()

    # Account

    def get_auth_info(self, *, deadline: float | None = None) -> AuthInfo:
        """Parameterless call to the control endpoint: account and server status."""
        wire = self.transport.get_json(API_PATH, None, _AUTH_INFO_ADAPTER, deadline=deadline)
        return converters.auth_info_from_wire(wire)

    # Categories

    def list_live_categories(self, *, deadline: float | None = None) -> list[Category]:
        return self._list(GET_LIVE_CATEGORIES, CategoryListAdapter, converters.category_from_wire, deadline=deadline)

    def list_vod_categories(self, *, deadline: float | None = None) -> list[Category]:
        return self._list(GET_VOD_CATEGORIES, CategoryListAdapter, converters.category_from_wire, deadline=deadline)

    def list_series_categories(self, *, deadline: float | None = None) -> list[Category]:
        return self._list(GET_SERIES_CATEGORIES, CategoryListAdapter, converters.category_from_wire, deadline=deadline)

    # Streams

    def list_live_streams(
        self,
        category_id: int | str | None = None,
        *,
        deadline: float | None = None,
    ) -> list[LiveStream]:
        """List live streams, optionally restricted to one category."""
        return self._list(
            GET_LIVE_STREAMS,
            LiveStreamListAdapter,
            converters.live_stream_from_wire,
            _category_filter(category_id),
            deadline=deadline,
        )

    def list_vod_streams(
        self,
        category_id: int | str | None = None,
        *,
        deadline: float | None = None,
    ) -> list[VODStream]:
        """List VOD streams, optionally restricted to one category."""
        return self._list(
            GET_VOD_STREAMS,
            VODStreamListAdapter,
            converters.vod_stream_from_wire,
            _category_filter(category_id),
            deadline=deadline,
        )

    def list_series_streams(
        self,
        category_id: int | str | None = None,
        *,
        deadline: float | None = None,
    ) -> list[SeriesStream]:
        """List series, optionally restricted to one category."""
        return self._list(
            GET_SERIES,
            SeriesStreamListAdapter,
            converters.series_stream_from_wire,
            _category_filter(category_id),
            deadline=deadline,
        )

    # Details

    def get_vod_info(self, vod_id: int | str, *, deadline: float | None = None) -> VOD:
        wire = self.transport.get_json(
            API_PATH,
            {"action": GET_VOD_INFO, "vod_id": vod_id},
            _VOD_ADAPTER,
            deadline=deadline,
        )
        return converters.vod_from_wire(wire)

    def get_series_info(self, series_id: int | str, *, deadline: float | None = None) -> Series:
        wire = self.transport.get_json(
            API_PATH,
            {"action": GET_SERIES_INFO, "series_id": series_id},
            _SERIES_ADAPTER,
            deadline=deadline,
        )
        return converters.series_from_wire(wire)

    # EPG

    def get_short_epg(
        self,
        stream_id: int | str,
        limit: int | None = None,
        *,
        deadline: float | None = None,
    ) -> EPG:
        """
        Fetch the short EPG of one stream

        Args:
            stream_id: Stream identifier
            limit: Maximum number of listings; None lets the server decide

        Raises:
            ValueError: If limit is given and not positive
        """
        params: dict[str, Any] = {"action": GET_SHORT_EPG, "stream_id": stream_id}
        if limit is not None:
            if limit <= 0:
                raise ValueError(f"limit must be > 0, got {limit}")
            params["limit"] = limit

        wire = self.transport.get_json(API_PATH, params, _EPG_ADAPTER, deadline=deadline)
        return converters.epg_from_wire(wire)

    def get_all_epg(self, stream_id: int | str, *, deadline: float | None = None) -> EPG:
        """Fetch the full EPG table of one stream."""
        wire = self.transport.get_json(
            API_PATH,
            {"action": GET_SIMPLE_DATA_TABLE, "stream_id": stream_id},
            _EPG_ADAPTER,
            deadline=deadline,
        )
        return converters.epg_from_wire(wire)

    # Documents

    def get_xmltv(self, *, deadline: float | None = None) -> XMLTV:
        """Fetch, sanitize and parse the XMLTV document."""
        url, body = self.transport.get(XMLTV_PATH, deadline=deadline)
        return decode_body(url, body, parse_xmltv_bytes, errors=XMLTV_ERRORS)

    def get_playlist(
        self,
        playlist_type: str = "m3u_plus",
        output_format: str = "ts",
        *,
        deadline: float | None = None,
    ) -> Playlist:
        """
        Fetch and parse the M3U playlist

        Args:
            playlist_type: 'm3u' or 'm3u_plus'
            output_format: Stream container, e.g. 'ts' or 'm3u8'
        """
        url, body = self.transport.get(
            PLAYLIST_PATH,
            {"type": playlist_type, "output": output_format},
            deadline=deadline,
        )
        return decode_body(url, body, lambda raw: parse_m3u(raw.decode("utf-8")))

    def _list(
        self,
        action: str,
        adapter: TypeAdapter[list[W]],
        convert: Callable[[W], D],
        params: dict[str, Any] | None = None,
        *,
        deadline: float | None = None,
    ) -> list[D]:
        query = {"action": action, **(params or {})}
        wires = self.transport.get_json(API_PATH, query, adapter, deadline=deadline)
        logger.debug(f"{action}: {len(wires)} items")
        return [convert(wire) for wire in wires]


def _category_filter(category_id: int | str | None) -> dict[str, Any]:
    if category_id is None or category_id == "":
        return {}
    return {"category_id": category_id}
