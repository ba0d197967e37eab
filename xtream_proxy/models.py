"""
Domain models

Plain value records handed to callers. They carry canonical Python types only;
every wire quirk is handled in xtream_proxy.schemas and xtream_proxy.utils.codecs.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Any


@dataclass(slots=True)
class UserInfo:
    """Account state of the authenticated user."""
    active_connections: int = 0
    allowed_output_formats: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    expires_at: datetime | None = None
    is_authorized: bool = False
    is_trial: bool = False
    max_connections: int = 0
    message: str = ""
    password: str = ""
    status: str = ""
    username: str = ""


@dataclass(slots=True)
class ServerInfo:
    """Connection details advertised by the server."""
    http_port: int = 0
    https_port: int = 0
    process: bool = False
    rtmp_port: int = 0
    server_protocol: str = ""
    time_now: datetime | None = None
    timestamp_now: datetime | None = None
    timezone: str = ""
    url: str = ""


@dataclass(slots=True)
class AuthInfo:
    user_info: UserInfo = field(default_factory=UserInfo)
    server_info: ServerInfo = field(default_factory=ServerInfo)


@dataclass(slots=True)
class Category:
    """Live, VOD and series categories all share this shape."""
    category_id: int
    category_name: str = ""
    parent_id: int = 0


LiveCategory = Category
VODCategory = Category
SeriesCategory = Category


@dataclass(slots=True)
class LiveStream:
    stream_id: int
    name: str = ""
    number: int = 0
    added_on: datetime | None = None
    catchup_duration_days: int = 0
    category_id: int | None = None
    category_ids: list[int] = field(default_factory=list)
    custom_sid: str | None = None
    direct_source: str = ""
    epg_channel_id: str | None = None
    has_catchup: bool = False
    is_adult: bool = False
    stream_icon: str = ""
    stream_type: str = ""


@dataclass(slots=True)
class VODStream:
    stream_id: int
    name: str = ""
    number: int = 0
    added_on: datetime | None = None
    category_id: int | None = None
    category_ids: list[int] = field(default_factory=list)
    container_extension: str = ""
    custom_sid: str | None = None
    direct_source: str = ""
    is_adult: bool = False
    rating: float = 0.0
    rating_5based: float = 0.0
    stream_icon: str = ""
    stream_type: str = ""
    tmdb_id: int | None = None
    trailer: str | None = None


@dataclass(slots=True)
class SeriesStream:
    series_id: int
    name: str = ""
    number: int = 0
    backdrop_path: list[str] = field(default_factory=list)
    cast: str = ""
    category_id: int | None = None
    category_ids: list[int] = field(default_factory=list)
    cover: str = ""
    director: str = ""
    episode_run_time: int = 0
    genre: str = ""
    last_modified_on: datetime | None = None
    plot: str = ""
    rating: float = 0.0
    rating_5based: float = 0.0
    release_date: date | None = None
    tmdb_id: int | None = None
    youtube_trailer: str = ""


@dataclass(slots=True)
class VODInfo:
    """Descriptive metadata of a single movie."""
    actors: str | None = None
    age: str | None = None
    audio: dict[str, Any] = field(default_factory=dict)
    backdrop: str | None = None
    backdrop_path: list[str] = field(default_factory=list)
    bitrate: int = 0
    cast: str = ""
    country: str | None = None
    cover_big: str | None = None
    description: str | None = None
    director: str = ""
    duration: timedelta = field(default_factory=timedelta)
    duration_seconds: int = 0
    genre: str = ""
    movie_image: str = ""
    name: str | None = None
    original_name: str | None = None
    plot: str = ""
    rating: float = 0.0
    release_date: date | None = None
    runtime: int | None = None
    status: str | None = None
    tmdb_id: int = 0
    video: dict[str, Any] = field(default_factory=dict)
    youtube_trailer: str = ""


@dataclass(slots=True)
class MovieData:
    """Playback data of a single movie."""
    stream_id: int = 0
    name: str = ""
    added_on: datetime | None = None
    category_id: int | None = None
    category_ids: list[int] = field(default_factory=list)
    container_extension: str = ""
    custom_sid: str | None = None
    direct_source: str = ""


@dataclass(slots=True)
class VOD:
    info: VODInfo = field(default_factory=VODInfo)
    movie_data: MovieData = field(default_factory=MovieData)


@dataclass(slots=True)
class SeriesInfo:
    name: str = ""
    backdrop_path: list[str] = field(default_factory=list)
    cast: str = ""
    category_id: int | None = None
    category_ids: list[int] = field(default_factory=list)
    cover: str = ""
    director: str = ""
    episode_run_time: int = 0
    genre: str = ""
    last_modified_on: datetime | None = None
    plot: str = ""
    rating: float = 0.0
    rating_5based: float = 0.0
    release_date: date | None = None
    tmdb_id: int | None = None
    youtube_trailer: str = ""


@dataclass(slots=True)
class Season:
    season_number: int = 0
    name: str = ""
    air_date: date | None = None
    cover: str = ""
    cover_big: str = ""
    cover_tmdb: str | None = None
    duration: int | None = None
    episode_count: int = 0
    id: int | None = None
    overview: str = ""
    release_date: date | None = None


@dataclass(slots=True)
class Episode:
    """One episode. `info` is server specific and never None."""
    id: int = 0
    title: str = ""
    episode_number: int = 0
    season: int = 0
    added_on: datetime | None = None
    container_extension: str = ""
    custom_sid: str | None = None
    direct_source: str = ""
    info: dict[str, Any] = field(default_factory=dict)


@dataclass(slots=True)
class Series:
    info: SeriesInfo = field(default_factory=SeriesInfo)
    seasons: list[Season] = field(default_factory=list)
    episodes: dict[str, list[Episode]] = field(default_factory=dict)


@dataclass(slots=True)
class EPGListing:
    """One programme of the JSON EPG. Title and description are already decoded."""
    id: int = 0
    epg_id: int = 0
    channel_id: str = ""
    title: str = ""
    description: str = ""
    language: str = ""
    start: datetime | None = None
    end: datetime | None = None
    start_timestamp: datetime | None = None
    stop_timestamp: datetime | None = None
    has_archive: bool | None = None
    now_playing: bool | None = None
    stream_id: int | None = None


@dataclass(slots=True)
class EPG:
    listings: list[EPGListing] = field(default_factory=list)


@dataclass(slots=True)
class XMLTVChannel:
    """In-memory representation of an XMLTV <channel> element."""
    xmltv_id: str
    display_name: str
    icon_url: str | None = None


@dataclass(slots=True)
class XMLTVProgramme:
    """In-memory representation of an XMLTV <programme> element."""
    xmltv_channel_id: str
    start_time: datetime
    stop_time: datetime | None
    title: str
    description: str | None = None
    date: date | None = None
    categories: list[str] = field(default_factory=list)


@dataclass(slots=True)
class XMLTV:
    """Parsed XMLTV document together with the sanitized source it was parsed from."""
    channels: list[XMLTVChannel] = field(default_factory=list)
    programmes: list[XMLTVProgramme] = field(default_factory=list)
    source: bytes = b""


@dataclass(slots=True)
class PlaylistEntry:
    url: str
    title: str = ""
    duration: int = -1
    attributes: dict[str, str] = field(default_factory=dict)


@dataclass(slots=True)
class Playlist:
    entries: list[PlaylistEntry] = field(default_factory=list)
    header_attributes: dict[str, str] = field(default_factory=dict)


__all__ = [
    "AuthInfo",
    "UserInfo",
    "ServerInfo",
    "Category",
    "LiveCategory",
    "VODCategory",
    "SeriesCategory",
    "LiveStream",
    "VODStream",
    "SeriesStream",
    "VOD",
    "VODInfo",
    "MovieData",
    "Series",
    "SeriesInfo",
    "Season",
    "Episode",
    "EPG",
    "EPGListing",
    "XMLTV",
    "XMLTVChannel",
    "XMLTVProgramme",
    "Playlist",
    "PlaylistEntry",
]
