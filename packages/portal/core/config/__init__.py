"""Configuration management for the Portal client."""

from portal.core.config.loader import (
    configure_logging,
    detect_format,
    load_app_config,
    load_config,
    parse_document,
)
from portal.core.config.models import AppConfig, LoggingConfig, PortalConfig

__all__ = [
    # Loaders
    "load_config",
    "load_app_config",
    "detect_format",
    "parse_document",
    "configure_logging",
    # Models
    "AppConfig",
    "PortalConfig",
    "LoggingConfig",
]
