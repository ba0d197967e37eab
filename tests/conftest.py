"""
Shared fixtures

HTTP is stubbed with httpx.MockTransport: FakeUpstream answers from a route
table keyed by (path, action) and records every request it receives.
"""
import copy
import json

import httpx
import pytest

from xtream_proxy.config import ProxySettings
from xtream_proxy.services.transport_service import Transport
from xtream_proxy.services.xtream_client import XtreamClient


UPSTREAM_URL = "http://upstream.example:8000"
UPSTREAM_USER = "upstream-user"
UPSTREAM_PASSWORD = "upstream-secret"

AUTH_PAYLOAD = {
    "user_info": {
        "username": UPSTREAM_USER,
        "password": UPSTREAM_PASSWORD,
        "message": "Welcome",
        "auth": 1,
        "status": "Active",
        "exp_date": "1767225600",
        "is_trial": "0",
        "active_cons": "1",
        "created_at": "1700000000",
        "max_connections": "2",
        "allowed_output_formats": ["m3u8", "ts"],
    },
    "server_info": {
        "url": "upstream.example",
        "port": "8000",
        "https_port": "8443",
        "server_protocol": "http",
        "rtmp_port": "8001",
        "timezone": "Europe/London",
        "timestamp_now": 1720000000,
        "time_now": "2024-07-03 10:46:40",
        "process": True,
    },
}


class FakeUpstream:
    """Callable for httpx.MockTransport serving canned responses"""

    def __init__(self):
        self.requests: list[httpx.Request] = []
        self.routes: dict[tuple[str, str | None], tuple[int, bytes, str]] = {}

    def add_json(self, path, payload, *, action=None, status_code=200):
        self.routes[(path, action)] = (status_code, json.dumps(payload).encode(), "application/json")

    def add_bytes(self, path, content, *, action=None, status_code=200, content_type="text/plain"):
        self.routes[(path, action)] = (status_code, content, content_type)

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        key = (request.url.path, request.url.params.get("action"))
        if key not in self.routes:
            return httpx.Response(404, text="no route")
        status_code, content, content_type = self.routes[key]
        return httpx.Response(status_code, content=content, headers={"Content-Type": content_type})

    @property
    def last_params(self) -> dict[str, str]:
        return dict(self.requests[-1].url.params)


@pytest.fixture
def auth_payload():
    return copy.deepcopy(AUTH_PAYLOAD)


@pytest.fixture
def upstream():
    return FakeUpstream()


@pytest.fixture
def transport(upstream):
    http_client = httpx.Client(transport=httpx.MockTransport(upstream))
    transport = Transport(
        UPSTREAM_URL,
        UPSTREAM_USER,
        UPSTREAM_PASSWORD,
        user_agent="test-agent/1.0",
        http_client=http_client,
    )
    yield transport
    http_client.close()


@pytest.fixture
def client(transport):
    return XtreamClient(transport)


@pytest.fixture
def proxy_settings():
    return ProxySettings(
        user="proxy-user",
        password="proxy-secret",
        hostname="proxy.example",
        port=8080,
        advertised_port=443,
        https=True,
        _env_file=None,
    )
