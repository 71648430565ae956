"""Utility functions for HTTP client operations."""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any, TypeAlias
from urllib.parse import quote, urljoin

from pydantic import BaseModel

JsonValue: TypeAlias = (
    Mapping[str, "JsonValue"]
    | list["JsonValue"]
    | tuple["JsonValue", ...]
    | str
    | int
    | float
    | bool
    | None
)


def join_url(base_url: str, path: str) -> str:
    """Join base URL with path in a predictable way.

    Ensures base URL ends with '/' and strips leading '/' from path.

    Args:
        base_url: Base URL (e.g. "https://10.0.0.1:8443")
        path: Request path (e.g. "/services" or "services")

    Returns:
        Joined URL (e.g. "https://10.0.0.1:8443/services")
    """
    base = base_url if base_url.endswith("/") else base_url + "/"
    return urljoin(base, path.lstrip("/"))


def has_port(host: str) -> bool:
    """Check whether a host string already carries an explicit port.

    Handles "10.0.0.1:9000", "[::1]:9000" and bare IPv6 literals such as "::1"
    (which have colons but no port).

    Args:
        host: Host, optionally followed by ":port"

    Returns:
        True if a port is present
    """
    if host.startswith("["):
        _, _, rest = host.partition("]")
        return rest.startswith(":") and rest[1:].isdigit()
    if host.count(":") != 1:
        return False
    return host.rsplit(":", 1)[1].isdigit()


def build_base_url(host: str, default_port: int, scheme: str = "https") -> str:
    """Derive the management base URL for a host.

    Args:
        host: Host name or IP, optionally with ":port"
        default_port: Port appended when the host has none
        scheme: URL scheme

    Returns:
        Base URL such as "https://10.0.0.1:8443"
    """
    if has_port(host):
        return f"{scheme}://{host}"
    if ":" in host and not host.startswith("["):
        host = f"[{host}]"
    return f"{scheme}://{host}:{default_port}"


def quote_segment(value: Any) -> str:
    """Percent-encode a value for use as a single URL path segment."""
    return quote(str(value), safe="")


def to_jsonable(payload: Any) -> Any:
    """Convert a payload into plain JSON-serializable data.

    Pydantic models are dumped in JSON mode without unset optional fields;
    mappings and sequences are walked so they may mix models and plain data.

    Args:
        payload: Mapping, sequence, scalar or pydantic model

    Returns:
        Data accepted by json.dumps
    """
    if isinstance(payload, BaseModel):
        return payload.model_dump(mode="json", exclude_none=True)
    if isinstance(payload, Mapping):
        return {str(k): to_jsonable(v) for k, v in payload.items()}
    if isinstance(payload, (list, tuple)):
        return [to_jsonable(v) for v in payload]
    return payload


def get_request_id(headers: Mapping[str, str]) -> str | None:
    """Extract request ID from common tracing headers.

    Checks for: x-request-id, x-correlation-id, request-id, trace-id (case-insensitive).

    Args:
        headers: Response headers

    Returns:
        Request ID if found, None otherwise
    """
    for key in ("x-request-id", "x-correlation-id", "request-id", "trace-id"):
        for hk, hv in headers.items():
            if hk.lower() == key:
                return hv
    return None
