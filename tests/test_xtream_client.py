"""
Xtream Client Tests
One request per call with the right action and parameters, decoded into domain values.
"""
import pytest

from xtream_proxy.config import ClientSettings
from xtream_proxy.errors import DecoderError, HTTPError
from xtream_proxy.models import Category, LiveStream
from xtream_proxy.services.transport_service import API_PATH, PLAYLIST_PATH, XMLTV_PATH
from xtream_proxy.services.xtream_client import XtreamClient


XMLTV_DOCUMENT = b"""<?xml version="1.0" encoding="UTF-8"?>
<tv>
  <channel id="bbc1.uk"><display-name>BBC One</display-name></channel>
  <programme channel="bbc1.uk" start="20240703100000 +0000" stop="20240703103000 +0000">
    <title>News</title>
    <date>1999</date>
  </programme>
</tv>
"""

PLAYLIST = b"""#EXTM3U
#EXTINF:-1 tvg-id="bbc1.uk" group-title="UK",BBC One
http://upstream.example:8000/live/u/p/11.ts
"""


class TestAccount:
    """Authentication call"""

    def test_get_auth_info_sends_no_action(self, client, upstream, auth_payload):
        """The parameterless call carries only the credentials"""
        upstream.add_json(API_PATH, auth_payload)

        auth = client.get_auth_info()

        assert auth.user_info.username == "upstream-user"
        assert upstream.last_params == {"username": "upstream-user", "password": "upstream-secret"}


class TestListings:
    """Category and stream listings"""

    @pytest.mark.parametrize("method, action", [
        ("list_live_categories", "get_live_categories"),
        ("list_vod_categories", "get_vod_categories"),
        ("list_series_categories", "get_series_categories"),
    ])
    def test_categories(self, client, upstream, method, action):
        upstream.add_json(API_PATH, [{"category_id": "7", "category_name": "Sport", "parent_id": 0}], action=action)

        categories = getattr(client, method)()

        assert categories == [Category(category_id=7, category_name="Sport", parent_id=0)]
        assert len(upstream.requests) == 1

    def test_live_streams_category_filter(self, client, upstream):
        """category_id is forwarded only when given"""
        upstream.add_json(API_PATH, [{"stream_id": 11, "name": "BBC One", "num": 1}], action="get_live_streams")

        streams = client.list_live_streams()
        assert "category_id" not in upstream.last_params
        assert isinstance(streams[0], LiveStream)

        client.list_live_streams(category_id=3)
        assert upstream.last_params["category_id"] == "3"

        client.list_live_streams(category_id="")
        assert "category_id" not in upstream.last_params

    def test_vod_and_series_streams(self, client, upstream):
        upstream.add_json(API_PATH, [{"stream_id": 5, "name": "Inception"}], action="get_vod_streams")
        upstream.add_json(API_PATH, [{"series_id": 9, "name": "Breaking Bad"}], action="get_series")

        assert client.list_vod_streams("2")[0].name == "Inception"
        assert upstream.last_params["category_id"] == "2"
        assert client.list_series_streams()[0].series_id == 9


class TestDetails:
    """VOD and series detail calls"""

    def test_get_vod_info(self, client, upstream):
        upstream.add_json(API_PATH, {"info": {"name": "Inception"}, "movie_data": {"stream_id": 5}}, action="get_vod_info")

        vod = client.get_vod_info(5)

        assert vod.info.name == "Inception"
        assert upstream.last_params["vod_id"] == "5"

    def test_get_series_info(self, client, upstream):
        upstream.add_json(API_PATH, {"info": {"name": "Breaking Bad"}, "episodes": {}, "seasons": []}, action="get_series_info")

        series = client.get_series_info("9")

        assert series.info.name == "Breaking Bad"
        assert upstream.last_params["series_id"] == "9"

    def test_http_error_propagates(self, client, upstream):
        upstream.add_bytes(API_PATH, b"nope", action="get_vod_info", status_code=404)

        with pytest.raises(HTTPError):
            client.get_vod_info(5)


class TestEPG:
    """Short and full EPG"""

    def test_short_epg_unbounded(self, client, upstream):
        """Without a limit no limit parameter is sent"""
        upstream.add_json(API_PATH, {"epg_listings": []}, action="get_short_epg")

        client.get_short_epg(5)

        assert upstream.last_params["stream_id"] == "5"
        assert "limit" not in upstream.last_params

    def test_short_epg_bounded(self, client, upstream):
        upstream.add_json(API_PATH, {"epg_listings": [{"title": "TmV3cw=="}]}, action="get_short_epg")

        epg = client.get_short_epg(5, limit=10)

        assert upstream.last_params["limit"] == "10"
        assert epg.listings[0].title == "News"

    @pytest.mark.parametrize("limit", [0, -3])
    def test_short_epg_rejects_non_positive_limit(self, client, upstream, limit):
        """A non-positive limit is refused before any request"""
        with pytest.raises(ValueError):
            client.get_short_epg(5, limit=limit)
        assert upstream.requests == []

    def test_get_all_epg(self, client, upstream):
        upstream.add_json(API_PATH, {"epg_listings": []}, action="get_simple_data_table")

        assert client.get_all_epg(5).listings == []
        assert upstream.last_params["action"] == "get_simple_data_table"


class TestDocuments:
    """XMLTV and playlist documents"""

    def test_get_xmltv_sanitizes_and_parses(self, client, upstream):
        """Year-only dates are repaired before parsing"""
        upstream.add_bytes(XMLTV_PATH, XMLTV_DOCUMENT, content_type="application/xml")

        guide = client.get_xmltv()

        assert [channel.xmltv_id for channel in guide.channels] == ["bbc1.uk"]
        assert guide.programmes[0].date.year == 1999
        assert b"<date>19990101</date>" in guide.source

    def test_get_xmltv_malformed_raises_decoder_error(self, client, upstream):
        upstream.add_bytes(XMLTV_PATH, b"<tv><programme", content_type="application/xml")

        with pytest.raises(DecoderError) as exc_info:
            client.get_xmltv()
        assert "/xmltv.php" in exc_info.value.url

    def test_get_playlist(self, client, upstream):
        upstream.add_bytes(PLAYLIST_PATH, PLAYLIST)

        playlist = client.get_playlist("m3u_plus", "ts")

        assert upstream.last_params["type"] == "m3u_plus"
        assert upstream.last_params["output"] == "ts"
        assert playlist.entries[0].title == "BBC One"
        assert playlist.entries[0].attributes["tvg-id"] == "bbc1.uk"

    def test_get_playlist_not_m3u(self, client, upstream):
        upstream.add_bytes(PLAYLIST_PATH, b"<html>Forbidden</html>")

        with pytest.raises(DecoderError):
            client.get_playlist()


class TestFromSettings:
    """Construction from ClientSettings"""

    def test_builds_transport(self):
        settings = ClientSettings(
            base_url="http://upstream.example:8000/",
            username="u",
            password="p",
            timeout_sec=5,
            _env_file=None,
        )

        with XtreamClient.from_settings(settings) as client:
            assert client.transport.host == "http://upstream.example:8000"
            assert client.transport.timeout == 5
            assert client.transport.user_agent == "xtream-proxy"
