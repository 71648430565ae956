"""HTTPX transport for the Portal management API.

Exposes a small, ergonomic surface:
- ApiClient: request dispatch and status classification
- HttpClientConfig: configuration
- Exceptions: PortalError and subclasses
- TokenAuth: X-AUTH-TOKEN header authentication
"""

from portal.core.api.http.auth import TOKEN_HEADER, TokenAuth
from portal.core.api.http.client import ApiClient
from portal.core.api.http.config import HttpClientConfig
from portal.core.api.http.errors import (
    ClientError,
    ConnectionError,
    DecodeError,
    NotFoundError,
    PortalError,
    PortalErrorData,
    RedirectionError,
    ServerError,
    TimeoutError,
    UnauthorizedError,
    UnexpectedStatusError,
    error_for_status,
)
from portal.core.api.http.utils import JsonValue

__all__ = [
    "ApiClient",
    "HttpClientConfig",
    "TokenAuth",
    "TOKEN_HEADER",
    "JsonValue",
    "PortalError",
    "PortalErrorData",
    "ConnectionError",
    "TimeoutError",
    "RedirectionError",
    "UnauthorizedError",
    "NotFoundError",
    "ClientError",
    "ServerError",
    "UnexpectedStatusError",
    "DecodeError",
    "error_for_status",
]
