"""
Configuration Tests
Settings validation and environment loading.
"""
import pytest
from pydantic import ValidationError

from xtream_proxy.config import ClientSettings, ProxySettings


class TestClientSettings:
    """Upstream settings"""

    def test_from_environment(self, monkeypatch):
        monkeypatch.setenv("XTREAM_BASE_URL", "https://upstream.example/")
        monkeypatch.setenv("XTREAM_USERNAME", "u")
        monkeypatch.setenv("XTREAM_PASSWORD", "p")

        settings = ClientSettings(_env_file=None)

        assert settings.base_url == "https://upstream.example"
        assert settings.user_agent == "xtream-proxy"
        assert settings.timeout_sec == 30

    def test_rejects_non_http_url(self):
        with pytest.raises(ValidationError):
            ClientSettings(base_url="ftp://upstream.example", username="u", password="p", _env_file=None)

    @pytest.mark.parametrize("timeout", [0, -1])
    def test_rejects_non_positive_timeout(self, timeout):
        with pytest.raises(ValidationError):
            ClientSettings(
                base_url="http://upstream.example",
                username="u",
                password="p",
                timeout_sec=timeout,
                _env_file=None,
            )

    def test_rejects_blank_credentials(self):
        with pytest.raises(ValidationError):
            ClientSettings(base_url="http://upstream.example", username=" ", password="p", _env_file=None)


class TestProxySettings:
    """Downstream-facing settings"""

    def test_advertised_port_defaults_to_port(self):
        settings = ProxySettings(user="u", password="p", port=9000, _env_file=None)

        assert settings.advertised_port == 9000
        assert settings.advertised_url == "http://localhost"
        assert settings.protocol == "http"

    def test_https(self, proxy_settings):
        assert proxy_settings.protocol == "https"
        assert proxy_settings.advertised_url == "https://proxy.example"
        assert proxy_settings.advertised_port == 443

    def test_log_level_normalized(self):
        assert ProxySettings(user="u", password="p", log_level="debug", _env_file=None).log_level == "DEBUG"

    def test_invalid_log_level(self):
        with pytest.raises(ValidationError):
            ProxySettings(user="u", password="p", log_level="chatty", _env_file=None)

    @pytest.mark.parametrize("port", [0, 70000])
    def test_invalid_port(self, port):
        with pytest.raises(ValidationError):
            ProxySettings(user="u", password="p", port=port, _env_file=None)
