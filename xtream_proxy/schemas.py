"""
Wire schemas

Pydantic models shaped exactly like the JSON the Xtream Codes API sends. Field
names are the wire keys. Ambiguous scalars are typed with the codecs from
xtream_proxy.utils.codecs, so validating a payload normalizes it and dumping a
model with mode="json" writes it back in the API's own encoding.

Legacy field names are decoded into their own excluded fields and folded into
the current field by an after-validator: the current name always wins when it
carries a value.
"""
from __future__ import annotations

from datetime import timedelta
from typing import Annotated, Any

from pydantic import BaseModel, BeforeValidator, ConfigDict, Field, TypeAdapter, model_validator

from xtream_proxy.utils.codecs import (
    Base64Text,
    BooleanAsInteger,
    DateAsString,
    DateTimeAsString,
    DurationAsString,
    Flag,
    FloatAsFloat,
    FreeForm,
    IntegerAsInteger,
    IntegerList,
    OptionalBooleanAsInteger,
    OptionalIntegerAsInteger,
    OptionalText,
    PlainInteger,
    StringList,
    Text,
    UnixTimeAsInteger,
    decode_free_form,
)


def _empty_list_when_falsy(value: Any) -> Any:
    return value or []


class WireModel(BaseModel):
    """Base for all wire schemas: unknown keys are ignored, aliases are accepted."""
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class UserInfoWire(WireModel):
    """`user_info` object of the authentication response"""
    active_cons: IntegerAsInteger = 0
    allowed_output_formats: StringList = Field(default_factory=list)
    created_at: UnixTimeAsInteger = None
    exp_date: UnixTimeAsInteger = None
    auth: BooleanAsInteger = False
    is_trial: BooleanAsInteger = False
    max_connections: IntegerAsInteger = 0
    message: Text = ""
    password: Text = ""
    status: Text = ""
    username: Text = ""


class ServerInfoWire(WireModel):
    """`server_info` object of the authentication response"""
    port: IntegerAsInteger = 0
    https_port: IntegerAsInteger = 0
    process: Flag = False
    rtmp_port: IntegerAsInteger = 0
    server_protocol: Text = ""
    time_now: DateTimeAsString = None
    timestamp_now: UnixTimeAsInteger = None
    timezone: Text = ""
    url: Text = ""


class AuthInfoWire(WireModel):
    """Response of the parameterless call to the control endpoint"""
    user_info: Annotated[UserInfoWire, BeforeValidator(decode_free_form)] = Field(
        default_factory=UserInfoWire
    )
    server_info: Annotated[ServerInfoWire, BeforeValidator(decode_free_form)] = Field(
        default_factory=ServerInfoWire
    )


class CategoryWire(WireModel):
    """Live, VOD or series category"""
    category_id: IntegerAsInteger = 0
    category_name: Text = ""
    parent_id: PlainInteger = 0


class LiveStreamWire(WireModel):
    """Entry of `get_live_streams`"""
    added: UnixTimeAsInteger = None
    tv_archive_duration: IntegerAsInteger = 0
    category_id: OptionalIntegerAsInteger = None
    category_ids: IntegerList = Field(default_factory=list)
    custom_sid: OptionalText = None
    direct_source: Text = ""
    epg_channel_id: OptionalText = None
    tv_archive: BooleanAsInteger = False
    is_adult: BooleanAsInteger = False
    name: Text = ""
    num: PlainInteger = 0
    stream_icon: Text = ""
    stream_id: PlainInteger = 0
    stream_type: Text = ""


class VODStreamWire(WireModel):
    """Entry of `get_vod_streams`"""
    added: UnixTimeAsInteger = None
    category_id: OptionalIntegerAsInteger = None
    category_ids: IntegerList = Field(default_factory=list)
    container_extension: Text = ""
    custom_sid: OptionalText = None
    direct_source: Text = ""
    is_adult: BooleanAsInteger = False
    name: Text = ""
    num: PlainInteger = 0
    rating: FloatAsFloat = 0.0
    rating_5based: FloatAsFloat = 0.0
    stream_icon: Text = ""
    stream_id: PlainInteger = 0
    stream_type: Text = ""
    tmdb: OptionalIntegerAsInteger = None
    trailer: OptionalText = None


class _ReleaseDateAliases(WireModel):
    """Folds the camelCase release date some deployments send into `release_date`."""
    release_date: DateAsString = None
    release_date_camel_case: DateAsString = Field(None, alias="releaseDate", exclude=True)

    @model_validator(mode="after")
    def pick_release_date(self):
        """Current key first, legacy key only when the current one is empty."""
        if self.release_date is None and self.release_date_camel_case is not None:
            self.release_date = self.release_date_camel_case
        return self


class SeriesStreamWire(_ReleaseDateAliases):
    """Entry of `get_series`"""
    backdrop_path: StringList = Field(default_factory=list)
    cast: Text = ""
    category_id: OptionalIntegerAsInteger = None
    category_ids: IntegerList = Field(default_factory=list)
    cover: Text = ""
    director: Text = ""
    episode_run_time: IntegerAsInteger = 0
    genre: Text = ""
    last_modified: UnixTimeAsInteger = None
    name: Text = ""
    num: PlainInteger = 0
    plot: Text = ""
    rating: FloatAsFloat = 0.0
    rating_5based: FloatAsFloat = 0.0
    series_id: PlainInteger = 0
    tmdb: OptionalIntegerAsInteger = None
    youtube_trailer: Text = ""


class VODInfoWire(WireModel):
    """`info` object of `get_vod_info`"""
    actors: OptionalText = None
    age: OptionalText = None
    audio: FreeForm = Field(default_factory=dict)
    backdrop: OptionalText = None
    backdrop_path: StringList = Field(default_factory=list)
    bitrate: PlainInteger = 0
    cast: Text = ""
    country: OptionalText = None
    cover_big: OptionalText = None
    description: OptionalText = None
    director: Text = ""
    duration: DurationAsString = Field(default_factory=timedelta)
    duration_secs: IntegerAsInteger = 0
    genre: Text = ""
    movie_image: Text = ""
    name: OptionalText = None
    o_name: OptionalText = None
    plot: Text = ""
    rating: FloatAsFloat = 0.0
    release_date: DateAsString = None
    release_date_lower_case: DateAsString = Field(None, alias="releasedate", exclude=True)
    runtime: OptionalIntegerAsInteger = None
    status: OptionalText = None
    tmdb_id: IntegerAsInteger = 0
    video: FreeForm = Field(default_factory=dict)
    youtube_trailer: Text = ""

    @model_validator(mode="after")
    def pick_release_date(self):
        """Current key first, legacy key only when the current one is empty."""
        if self.release_date is None and self.release_date_lower_case is not None:
            self.release_date = self.release_date_lower_case
        return self


class MovieDataWire(WireModel):
    """`movie_data` object of `get_vod_info`"""
    added: UnixTimeAsInteger = None
    category_id: OptionalIntegerAsInteger = None
    category_ids: IntegerList = Field(default_factory=list)
    container_extension: Text = ""
    custom_sid: OptionalText = None
    direct_source: Text = ""
    name: Text = ""
    stream_id: PlainInteger = 0


class VODWire(WireModel):
    """Response of `get_vod_info`"""
    info: Annotated[VODInfoWire, BeforeValidator(decode_free_form)] = Field(
        default_factory=VODInfoWire
    )
    movie_data: Annotated[MovieDataWire, BeforeValidator(decode_free_form)] = Field(
        default_factory=MovieDataWire
    )


class SeriesInfoWire(_ReleaseDateAliases):
    """`info` object of `get_series_info`"""
    backdrop_path: StringList = Field(default_factory=list)
    cast: Text = ""
    category_id: OptionalIntegerAsInteger = None
    category_ids: IntegerList = Field(default_factory=list)
    cover: Text = ""
    director: Text = ""
    episode_run_time: IntegerAsInteger = 0
    genre: Text = ""
    last_modified: UnixTimeAsInteger = None
    name: Text = ""
    plot: Text = ""
    rating: FloatAsFloat = 0.0
    rating_5based: FloatAsFloat = 0.0
    tmdb: OptionalIntegerAsInteger = None
    youtube_trailer: Text = ""


class SeasonWire(_ReleaseDateAliases):
    """Entry of the `seasons` list of `get_series_info`"""
    air_date: DateAsString = None
    cover: Text = ""
    cover_big: Text = ""
    cover_tmdb: OptionalText = None
    duration: OptionalIntegerAsInteger = None
    episode_count: IntegerAsInteger = 0
    id: int | None = None
    name: Text = ""
    overview: Text = ""
    season_number: PlainInteger = 0


class EpisodeWire(WireModel):
    """Entry of the per-season `episodes` lists of `get_series_info`"""
    added: UnixTimeAsInteger = None
    container_extension: Text = ""
    custom_sid: OptionalText = None
    direct_source: Text = ""
    info: FreeForm = Field(default_factory=dict)
    episode_num: PlainInteger = 0
    id: IntegerAsInteger = 0
    season: PlainInteger = 0
    title: Text = ""


class SeriesWire(WireModel):
    """Response of `get_series_info`"""
    episodes: Annotated[dict[str, list[EpisodeWire]], BeforeValidator(decode_free_form)] = Field(
        default_factory=dict
    )
    info: Annotated[SeriesInfoWire, BeforeValidator(decode_free_form)] = Field(
        default_factory=SeriesInfoWire
    )
    seasons: Annotated[list[SeasonWire], BeforeValidator(_empty_list_when_falsy)] = Field(
        default_factory=list
    )


class EPGListingWire(WireModel):
    """Entry of `epg_listings`; title and description travel base64-encoded"""
    channel_id: Text = ""
    description: Base64Text = ""
    end: DateTimeAsString = None
    epg_id: IntegerAsInteger = 0
    has_archive: OptionalBooleanAsInteger = None
    id: IntegerAsInteger = 0
    lang: Text = ""
    now_playing: OptionalBooleanAsInteger = None
    start: DateTimeAsString = None
    start_timestamp: UnixTimeAsInteger = None
    stop_timestamp: UnixTimeAsInteger = None
    stream_id: OptionalIntegerAsInteger = None
    title: Base64Text = ""


class EPGWire(WireModel):
    """Response of `get_short_epg` and `get_simple_data_table`"""
    epg_listings: Annotated[list[EPGListingWire], BeforeValidator(_empty_list_when_falsy)] = Field(
        default_factory=list
    )


CategoryListAdapter = TypeAdapter(list[CategoryWire])
LiveStreamListAdapter = TypeAdapter(list[LiveStreamWire])
VODStreamListAdapter = TypeAdapter(list[VODStreamWire])
SeriesStreamListAdapter = TypeAdapter(list[SeriesStreamWire])


__all__ = [
    "WireModel",
    "AuthInfoWire",
    "UserInfoWire",
    "ServerInfoWire",
    "CategoryWire",
    "LiveStreamWire",
    "VODStreamWire",
    "SeriesStreamWire",
    "VODWire",
    "VODInfoWire",
    "MovieDataWire",
    "SeriesWire",
    "SeriesInfoWire",
    "SeasonWire",
    "EpisodeWire",
    "EPGWire",
    "EPGListingWire",
    "CategoryListAdapter",
    "LiveStreamListAdapter",
    "VODStreamListAdapter",
    "SeriesStreamListAdapter",
]
