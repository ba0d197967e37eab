import logging

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from xtream_proxy.services.transport_service import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT


logger = logging.getLogger(__name__)

_SETTINGS_CONFIG = dict(
    env_file=".env",
    env_file_encoding="utf-8",
    case_sensitive=False,
    extra="ignore",
)


class ClientSettings(BaseSettings):
    """Upstream Xtream Codes server settings loaded from XTREAM_* variables."""

    base_url: str
    username: str
    password: str
    user_agent: str = DEFAULT_USER_AGENT
    timeout_sec: float = DEFAULT_TIMEOUT

    model_config = SettingsConfigDict(env_prefix="XTREAM_", **_SETTINGS_CONFIG)

    @field_validator("base_url")
    @classmethod
    def validate_base_url(cls, value: str) -> str:
        """Validate upstream URL is HTTP/HTTPS and drop the trailing slash."""
        value = value.strip()
        if not value.lower().startswith(("http://", "https://")):
            raise ValueError(f"Upstream URL must be HTTP/HTTPS: {value}")
        return value.rstrip("/")

    @field_validator("username", "password")
    @classmethod
    def validate_credentials(cls, value: str, info) -> str:
        """Credentials must not be blank."""
        if not value.strip():
            raise ValueError(f"{info.field_name} must not be empty")
        return value

    @field_validator("timeout_sec")
    @classmethod
    def validate_timeout(cls, value: float) -> float:
        """Validate request timeout (seconds)."""
        if value <= 0:
            raise ValueError("timeout_sec must be > 0")
        return value

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.info("Upstream configuration loaded:")
        logger.info("  Server: %s", self.base_url)
        logger.info("  User: %s", self.username)
        logger.info("  User Agent: %s", self.user_agent)
        logger.info("  Timeout: %s seconds", self.timeout_sec)


class ProxySettings(BaseSettings):
    """Downstream-facing proxy settings loaded from PROXY_* variables."""

    user: str
    password: str
    hostname: str = "localhost"
    port: int = 8080
    advertised_port: int = 0  # 0 means same as port
    https: bool = False
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_prefix="PROXY_", **_SETTINGS_CONFIG)

    @field_validator("port", "advertised_port")
    @classmethod
    def validate_port(cls, value: int, info) -> int:
        """Validate TCP port range."""
        if value < 0 or value > 65535:
            raise ValueError(f"{info.field_name} must be between 0 and 65535")
        return value

    @field_validator("log_level")
    @classmethod
    def validate_log_level(cls, value: str) -> str:
        """Validate logging level name."""
        normalized = value.upper()
        allowed = {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}
        if normalized not in allowed:
            raise ValueError(f"log_level must be one of {sorted(allowed)}")
        return normalized

    @model_validator(mode="after")
    def validate_proxy_configuration(self):
        """Validate cross-field configuration."""
        if self.port == 0:
            raise ValueError("port must be > 0")
        if self.advertised_port == 0:
            self.advertised_port = self.port
        return self

    @property
    def protocol(self) -> str:
        return "https" if self.https else "http"

    @property
    def advertised_url(self) -> str:
        """Server URL handed to downstream clients in the login response."""
        return f"{self.protocol}://{self.hostname}"

    def __init__(self, **data):
        """Initialize settings and log configuration."""
        super().__init__(**data)

        logger.info("Proxy configuration loaded:")
        logger.info("  Listen Port: %s", self.port)
        logger.info("  Advertised: %s:%s", self.advertised_url, self.advertised_port)
        logger.info("  Log Level: %s", self.log_level)


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
