"""
Wire <-> domain conversion

One `*_from_wire` and one `*_to_wire` function per entity. `from_wire` turns a
validated wire schema into a plain domain record; `to_wire` goes the other way
and returns the JSON-ready dict in the API's own encoding, which is what the
dispatcher relays to downstream clients.

Wire models are rebuilt with model_construct on the way out: the values are
already canonical and must not be run through the decoders a second time.
"""
from __future__ import annotations

from typing import Any

from xtream_proxy.models import (
    EPG,
    VOD,
    AuthInfo,
    Category,
    Episode,
    EPGListing,
    LiveStream,
    MovieData,
    Season,
    Series,
    SeriesInfo,
    SeriesStream,
    ServerInfo,
    UserInfo,
    VODInfo,
    VODStream,
)
from xtream_proxy.schemas import (
    AuthInfoWire,
    CategoryWire,
    EpisodeWire,
    EPGListingWire,
    EPGWire,
    LiveStreamWire,
    MovieDataWire,
    SeasonWire,
    SeriesInfoWire,
    SeriesStreamWire,
    SeriesWire,
    ServerInfoWire,
    UserInfoWire,
    VODInfoWire,
    VODStreamWire,
    VODWire,
    WireModel,
)
from xtream_proxy.utils.timezone import localize_wall_clock


def dump_wire(model: WireModel) -> dict[str, Any]:
    """Serialize a wire model into the API's JSON encoding."""
    return model.model_dump(mode="json", by_alias=True)


# Authentication

def user_info_from_wire(wire: UserInfoWire) -> UserInfo:
    return UserInfo(
        active_connections=wire.active_cons,
        allowed_output_formats=list(wire.allowed_output_formats),
        created_at=wire.created_at,
        expires_at=wire.exp_date,
        is_authorized=wire.auth,
        is_trial=wire.is_trial,
        max_connections=wire.max_connections,
        message=wire.message,
        password=wire.password,
        status=wire.status,
        username=wire.username,
    )


def user_info_to_wire(user: UserInfo) -> UserInfoWire:
    return UserInfoWire.model_construct(
        active_cons=user.active_connections,
        allowed_output_formats=list(user.allowed_output_formats),
        created_at=user.created_at,
        exp_date=user.expires_at,
        auth=user.is_authorized,
        is_trial=user.is_trial,
        max_connections=user.max_connections,
        message=user.message,
        password=user.password,
        status=user.status,
        username=user.username,
    )


def server_info_from_wire(wire: ServerInfoWire) -> ServerInfo:
    return ServerInfo(
        http_port=wire.port,
        https_port=wire.https_port,
        process=wire.process,
        rtmp_port=wire.rtmp_port,
        server_protocol=wire.server_protocol,
        time_now=localize_wall_clock(wire.time_now, wire.timezone),
        timestamp_now=wire.timestamp_now,
        timezone=wire.timezone,
        url=wire.url,
    )


def server_info_to_wire(server: ServerInfo) -> ServerInfoWire:
    return ServerInfoWire.model_construct(
        port=server.http_port,
        https_port=server.https_port,
        process=server.process,
        rtmp_port=server.rtmp_port,
        server_protocol=server.server_protocol,
        time_now=server.time_now,
        timestamp_now=server.timestamp_now,
        timezone=server.timezone,
        url=server.url,
    )


def auth_info_from_wire(wire: AuthInfoWire) -> AuthInfo:
    return AuthInfo(
        user_info=user_info_from_wire(wire.user_info),
        server_info=server_info_from_wire(wire.server_info),
    )


def auth_info_to_wire(auth: AuthInfo) -> dict[str, Any]:
    return dump_wire(AuthInfoWire.model_construct(
        user_info=user_info_to_wire(auth.user_info),
        server_info=server_info_to_wire(auth.server_info),
    ))


# Categories

def category_from_wire(wire: CategoryWire) -> Category:
    return Category(
        category_id=wire.category_id,
        category_name=wire.category_name,
        parent_id=wire.parent_id,
    )


def category_to_wire(category: Category) -> dict[str, Any]:
    return dump_wire(CategoryWire.model_construct(
        category_id=category.category_id,
        category_name=category.category_name,
        parent_id=category.parent_id,
    ))


# Live streams

def live_stream_from_wire(wire: LiveStreamWire) -> LiveStream:
    return LiveStream(
        stream_id=wire.stream_id,
        name=wire.name,
        number=wire.num,
        added_on=wire.added,
        catchup_duration_days=wire.tv_archive_duration,
        category_id=wire.category_id,
        category_ids=list(wire.category_ids),
        custom_sid=wire.custom_sid,
        direct_source=wire.direct_source,
        epg_channel_id=wire.epg_channel_id,
        has_catchup=wire.tv_archive,
        is_adult=wire.is_adult,
        stream_icon=wire.stream_icon,
        stream_type=wire.stream_type,
    )


def live_stream_to_wire(stream: LiveStream) -> dict[str, Any]:
    return dump_wire(LiveStreamWire.model_construct(
        added=stream.added_on,
        tv_archive_duration=stream.catchup_duration_days,
        category_id=stream.category_id,
        category_ids=list(stream.category_ids),
        custom_sid=stream.custom_sid,
        direct_source=stream.direct_source,
        epg_channel_id=stream.epg_channel_id,
        tv_archive=stream.has_catchup,
        is_adult=stream.is_adult,
        name=stream.name,
        num=stream.number,
        stream_icon=stream.stream_icon,
        stream_id=stream.stream_id,
        stream_type=stream.stream_type,
    ))


# VOD streams

def vod_stream_from_wire(wire: VODStreamWire) -> VODStream:
    return VODStream(
        stream_id=wire.stream_id,
        name=wire.name,
        number=wire.num,
        added_on=wire.added,
        category_id=wire.category_id,
        category_ids=list(wire.category_ids),
        container_extension=wire.container_extension,
        custom_sid=wire.custom_sid,
        direct_source=wire.direct_source,
        is_adult=wire.is_adult,
        rating=wire.rating,
        rating_5based=wire.rating_5based,
        stream_icon=wire.stream_icon,
        stream_type=wire.stream_type,
        tmdb_id=wire.tmdb,
        trailer=wire.trailer,
    )


def vod_stream_to_wire(stream: VODStream) -> dict[str, Any]:
    return dump_wire(VODStreamWire.model_construct(
        added=stream.added_on,
        category_id=stream.category_id,
        category_ids=list(stream.category_ids),
        container_extension=stream.container_extension,
        custom_sid=stream.custom_sid,
        direct_source=stream.direct_source,
        is_adult=stream.is_adult,
        name=stream.name,
        num=stream.number,
        rating=stream.rating,
        rating_5based=stream.rating_5based,
        stream_icon=stream.stream_icon,
        stream_id=stream.stream_id,
        stream_type=stream.stream_type,
        tmdb=stream.tmdb_id,
        trailer=stream.trailer,
    ))


# Series streams

def series_stream_from_wire(wire: SeriesStreamWire) -> SeriesStream:
    return SeriesStream(
        series_id=wire.series_id,
        name=wire.name,
        number=wire.num,
        backdrop_path=list(wire.backdrop_path),
        cast=wire.cast,
        category_id=wire.category_id,
        category_ids=list(wire.category_ids),
        cover=wire.cover,
        director=wire.director,
        episode_run_time=wire.episode_run_time,
        genre=wire.genre,
        last_modified_on=wire.last_modified,
        plot=wire.plot,
        rating=wire.rating,
        rating_5based=wire.rating_5based,
        release_date=wire.release_date,
        tmdb_id=wire.tmdb,
        youtube_trailer=wire.youtube_trailer,
    )


def series_stream_to_wire(stream: SeriesStream) -> dict[str, Any]:
    return dump_wire(SeriesStreamWire.model_construct(
        backdrop_path=list(stream.backdrop_path),
        cast=stream.cast,
        category_id=stream.category_id,
        category_ids=list(stream.category_ids),
        cover=stream.cover,
        director=stream.director,
        episode_run_time=stream.episode_run_time,
        genre=stream.genre,
        last_modified=stream.last_modified_on,
        name=stream.name,
        num=stream.number,
        plot=stream.plot,
        rating=stream.rating,
        rating_5based=stream.rating_5based,
        release_date=stream.release_date,
        series_id=stream.series_id,
        tmdb=stream.tmdb_id,
        youtube_trailer=stream.youtube_trailer,
    ))


# VOD detail

def vod_info_from_wire(wire: VODInfoWire) -> VODInfo:
    return VODInfo(
        actors=wire.actors,
        age=wire.age,
        audio=dict(wire.audio),
        backdrop=wire.backdrop,
        backdrop_path=list(wire.backdrop_path),
        bitrate=wire.bitrate,
        cast=wire.cast,
        country=wire.country,
        cover_big=wire.cover_big,
        description=wire.description,
        director=wire.director,
        duration=wire.duration,
        duration_seconds=wire.duration_secs,
        genre=wire.genre,
        movie_image=wire.movie_image,
        name=wire.name,
        original_name=wire.o_name,
        plot=wire.plot,
        rating=wire.rating,
        release_date=wire.release_date,
        runtime=wire.runtime,
        status=wire.status,
        tmdb_id=wire.tmdb_id,
        video=dict(wire.video),
        youtube_trailer=wire.youtube_trailer,
    )


def vod_info_to_wire(info: VODInfo) -> VODInfoWire:
    return VODInfoWire.model_construct(
        actors=info.actors,
        age=info.age,
        audio=dict(info.audio),
        backdrop=info.backdrop,
        backdrop_path=list(info.backdrop_path),
        bitrate=info.bitrate,
        cast=info.cast,
        country=info.country,
        cover_big=info.cover_big,
        description=info.description,
        director=info.director,
        duration=info.duration,
        duration_secs=info.duration_seconds,
        genre=info.genre,
        movie_image=info.movie_image,
        name=info.name,
        o_name=info.original_name,
        plot=info.plot,
        rating=info.rating,
        release_date=info.release_date,
        runtime=info.runtime,
        status=info.status,
        tmdb_id=info.tmdb_id,
        video=dict(info.video),
        youtube_trailer=info.youtube_trailer,
    )


def movie_data_from_wire(wire: MovieDataWire) -> MovieData:
    return MovieData(
        stream_id=wire.stream_id,
        name=wire.name,
        added_on=wire.added,
        category_id=wire.category_id,
        category_ids=list(wire.category_ids),
        container_extension=wire.container_extension,
        custom_sid=wire.custom_sid,
        direct_source=wire.direct_source,
    )


def movie_data_to_wire(movie: MovieData) -> MovieDataWire:
    return MovieDataWire.model_construct(
        added=movie.added_on,
        category_id=movie.category_id,
        category_ids=list(movie.category_ids),
        container_extension=movie.container_extension,
        custom_sid=movie.custom_sid,
        direct_source=movie.direct_source,
        name=movie.name,
        stream_id=movie.stream_id,
    )


def vod_from_wire(wire: VODWire) -> VOD:
    return VOD(
        info=vod_info_from_wire(wire.info),
        movie_data=movie_data_from_wire(wire.movie_data),
    )


def vod_to_wire(vod: VOD) -> dict[str, Any]:
    return dump_wire(VODWire.model_construct(
        info=vod_info_to_wire(vod.info),
        movie_data=movie_data_to_wire(vod.movie_data),
    ))


# Series detail

def series_info_from_wire(wire: SeriesInfoWire) -> SeriesInfo:
    return SeriesInfo(
        name=wire.name,
        backdrop_path=list(wire.backdrop_path),
        cast=wire.cast,
        category_id=wire.category_id,
        category_ids=list(wire.category_ids),
        cover=wire.cover,
        director=wire.director,
        episode_run_time=wire.episode_run_time,
        genre=wire.genre,
        last_modified_on=wire.last_modified,
        plot=wire.plot,
        rating=wire.rating,
        rating_5based=wire.rating_5based,
        release_date=wire.release_date,
        tmdb_id=wire.tmdb,
        youtube_trailer=wire.youtube_trailer,
    )


def series_info_to_wire(info: SeriesInfo) -> SeriesInfoWire:
    return SeriesInfoWire.model_construct(
        backdrop_path=list(info.backdrop_path),
        cast=info.cast,
        category_id=info.category_id,
        category_ids=list(info.category_ids),
        cover=info.cover,
        director=info.director,
        episode_run_time=info.episode_run_time,
        genre=info.genre,
        last_modified=info.last_modified_on,
        name=info.name,
        plot=info.plot,
        rating=info.rating,
        rating_5based=info.rating_5based,
        release_date=info.release_date,
        tmdb=info.tmdb_id,
        youtube_trailer=info.youtube_trailer,
    )


def season_from_wire(wire: SeasonWire) -> Season:
    return Season(
        season_number=wire.season_number,
        name=wire.name,
        air_date=wire.air_date,
        cover=wire.cover,
        cover_big=wire.cover_big,
        cover_tmdb=wire.cover_tmdb,
        duration=wire.duration,
        episode_count=wire.episode_count,
        id=wire.id,
        overview=wire.overview,
        release_date=wire.release_date,
    )


def season_to_wire(season: Season) -> SeasonWire:
    return SeasonWire.model_construct(
        air_date=season.air_date,
        cover=season.cover,
        cover_big=season.cover_big,
        cover_tmdb=season.cover_tmdb,
        duration=season.duration,
        episode_count=season.episode_count,
        id=season.id,
        name=season.name,
        overview=season.overview,
        release_date=season.release_date,
        season_number=season.season_number,
    )


def episode_from_wire(wire: EpisodeWire) -> Episode:
    return Episode(
        id=wire.id,
        title=wire.title,
        episode_number=wire.episode_num,
        season=wire.season,
        added_on=wire.added,
        container_extension=wire.container_extension,
        custom_sid=wire.custom_sid,
        direct_source=wire.direct_source,
        info=dict(wire.info),
    )


def episode_to_wire(episode: Episode) -> EpisodeWire:
    return EpisodeWire.model_construct(
        added=episode.added_on,
        container_extension=episode.container_extension,
        custom_sid=episode.custom_sid,
        direct_source=episode.direct_source,
        info=dict(episode.info),
        episode_num=episode.episode_number,
        id=episode.id,
        season=episode.season,
        title=episode.title,
    )


def series_from_wire(wire: SeriesWire) -> Series:
    return Series(
        info=series_info_from_wire(wire.info),
        seasons=[season_from_wire(season) for season in wire.seasons],
        episodes={
            label: [episode_from_wire(episode) for episode in episodes]
            for label, episodes in wire.episodes.items()
        },
    )


def series_to_wire(series: Series) -> dict[str, Any]:
    return dump_wire(SeriesWire.model_construct(
        episodes={
            label: [episode_to_wire(episode) for episode in episodes]
            for label, episodes in series.episodes.items()
        },
        info=series_info_to_wire(series.info),
        seasons=[season_to_wire(season) for season in series.seasons],
    ))


# EPG

def epg_listing_from_wire(wire: EPGListingWire) -> EPGListing:
    return EPGListing(
        id=wire.id,
        epg_id=wire.epg_id,
        channel_id=wire.channel_id,
        title=wire.title,
        description=wire.description,
        language=wire.lang,
        start=wire.start,
        end=wire.end,
        start_timestamp=wire.start_timestamp,
        stop_timestamp=wire.stop_timestamp,
        has_archive=wire.has_archive,
        now_playing=wire.now_playing,
        stream_id=wire.stream_id,
    )


def epg_listing_to_wire(listing: EPGListing) -> EPGListingWire:
    return EPGListingWire.model_construct(
        channel_id=listing.channel_id,
        description=listing.description,
        end=listing.end,
        epg_id=listing.epg_id,
        has_archive=listing.has_archive,
        id=listing.id,
        lang=listing.language,
        now_playing=listing.now_playing,
        start=listing.start,
        start_timestamp=listing.start_timestamp,
        stop_timestamp=listing.stop_timestamp,
        stream_id=listing.stream_id,
        title=listing.title,
    )


def epg_from_wire(wire: EPGWire) -> EPG:
    return EPG(listings=[epg_listing_from_wire(listing) for listing in wire.epg_listings])


def epg_to_wire(epg: EPG) -> dict[str, Any]:
    return dump_wire(EPGWire.model_construct(
        epg_listings=[epg_listing_to_wire(listing) for listing in epg.listings],
    ))
