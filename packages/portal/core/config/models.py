"""Configuration models for the Portal client."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_HOST = "127.0.0.1"
DEFAULT_TOKEN = "123"
DEFAULT_PORT = 8443


class PortalConfig(BaseModel):
    """Connection settings for a Portal management endpoint."""

    model_config = ConfigDict(frozen=True)

    host: str = Field(default=DEFAULT_HOST, min_length=1, description="Host, optionally host:port")
    token: str = Field(default=DEFAULT_TOKEN, repr=False, description="X-AUTH-TOKEN value")
    port: int = Field(
        default=DEFAULT_PORT, gt=0, le=65535, description="Port used when host has none"
    )
    timeout_s: float = Field(default=10.0, gt=0, description="Read/write/pool timeout")
    connect_timeout_s: float = Field(default=5.0, gt=0, description="Connect timeout")
    verify: bool | str = Field(
        default=False, description="TLS verification (False, True, or CA bundle path)"
    )
    user_agent: str = "portal-client/1.0"


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON log lines")
    filename: str | None = None


class AppConfig(BaseModel):
    """Application-level configuration."""

    portal: PortalConfig = Field(default_factory=PortalConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
