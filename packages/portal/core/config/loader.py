"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from portal.core.config.models import AppConfig
from portal.core.utils.logging import configure_logging as _configure_logging

logger = logging.getLogger(__name__)

# Default app config path (can be overridden)
_DEFAULT_APP_CONFIG_PATH = Path("portal.yaml")

ENV_HOST = "PORTAL_HOST"
ENV_TOKEN = "PORTAL_TOKEN"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("portal.json")
        'json'
        >>> detect_format("portal.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def parse_document(text: str, fmt: str) -> Any:
    """Parse JSON or YAML text.

    Args:
        text: Document text
        fmt: "json" or "yaml"

    Returns:
        Parsed data (YAML documents that are empty parse to None)

    Raises:
        ValueError: If the text is not valid for the format
    """
    if fmt == "json":
        try:
            return json.loads(text)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON: {e}") from e
    if fmt == "yaml":
        try:
            return yaml.safe_load(text)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML: {e}") from e
    raise ValueError(f"Unsupported format: {fmt}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Supports both JSON and YAML formats. Format is auto-detected
    from file extension.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)
    try:
        content = parse_document(path.read_text(encoding="utf-8"), fmt)
    except ValueError as e:
        raise ValueError(f"{e} ({path})") from e

    # safe_load returns None for empty files
    if content is None:
        return {}
    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping: {path}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    A missing file yields the defaults. PORTAL_HOST and PORTAL_TOKEN from the
    environment fill in values the file does not set.

    Args:
        path: Path to app config file (.json, .yaml, or .yml).
              Defaults to portal.yaml

    Returns:
        Validated AppConfig instance

    Raises:
        ValidationError: If config is invalid
    """
    if path is None:
        path = _DEFAULT_APP_CONFIG_PATH

    raw_config: dict[str, Any] = {}
    if Path(path).exists():
        raw_config = load_config(path)
    else:
        logger.debug(f"No config file at {path}, using defaults")

    _load_env_vars_into_config(raw_config)
    return AppConfig.model_validate(raw_config)


def _load_env_vars_into_config(raw_config: dict[str, Any]) -> None:
    """Fill unset Portal connection values from environment variables.

    This mutates the raw config dictionary before validation.

    Args:
        raw_config: Raw configuration dictionary
    """
    portal = raw_config.setdefault("portal", {})
    if portal is None:
        portal = raw_config["portal"] = {}
    if not isinstance(portal, dict):
        # Left for model validation to report
        return

    for key, env_var in (("host", ENV_HOST), ("token", ENV_TOKEN)):
        if portal.get(key) is not None:
            continue
        value = os.getenv(env_var)
        if value:
            logger.debug(f"Loaded {env_var} from environment")
            portal[key] = value


def configure_logging(config: AppConfig | None = None) -> None:
    """Configure Python logging from app config.

    Args:
        config: AppConfig instance (loads default if None)
    """
    if config is None:
        config = load_app_config()

    _configure_logging(
        level=config.logging.level,
        format_string=config.logging.format,
        filename=config.logging.filename,
        structured=config.logging.structured,
    )
