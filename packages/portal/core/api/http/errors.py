from __future__ import annotations

from pydantic import BaseModel, Field


class PortalErrorData(BaseModel):
    """Structured data for Portal API errors.

    Args:
        message: Human-readable error description ("{status}:{body}" for HTTP errors)
        method: HTTP method (GET, POST, etc.)
        url: Request URL
        status_code: HTTP status code (if available)
        request_id: Request ID for tracing (from X-Request-Id header)
        response_headers: Response headers (if available)
        response_body: Raw response body text (if available)
        cause: Original exception that caused this error
    """

    model_config = {"arbitrary_types_allowed": True}

    message: str
    method: str
    url: str
    status_code: int | None = None
    request_id: str | None = None
    response_headers: dict[str, str] | None = None
    response_body: str | None = None
    cause: BaseException | None = Field(default=None, repr=False)


class PortalError(Exception):
    """Base exception for all Portal client errors.

    Wraps structured error data in an exception for ergonomic error handling.

    Attributes:
        data: Structured error data (PortalErrorData)
        message: Human-readable error description
        method: HTTP method
        url: Request URL
        status_code: HTTP status code (if available)
        request_id: Request ID for tracing
        response_headers: Response headers (if available)
        response_body: Raw response body
        cause: Original exception that caused this error
    """

    def __init__(
        self,
        *,
        message: str,
        method: str,
        url: str,
        status_code: int | None = None,
        request_id: str | None = None,
        response_headers: dict[str, str] | None = None,
        response_body: str | None = None,
        cause: BaseException | None = None,
    ) -> None:
        self.data = PortalErrorData(
            message=message,
            method=method,
            url=url,
            status_code=status_code,
            request_id=request_id,
            response_headers=response_headers,
            response_body=response_body,
            cause=cause,
        )
        # Expose fields as attributes for convenience
        self.message = self.data.message
        self.method = self.data.method
        self.url = self.data.url
        self.status_code = self.data.status_code
        self.request_id = self.data.request_id
        self.response_headers = self.data.response_headers
        self.response_body = self.data.response_body
        self.cause = self.data.cause

        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def describe(self) -> str:
        """Format error with request context for logging and display."""
        parts = [self.message, f"{self.method} {self.url}"]
        if self.status_code is not None:
            parts.append(f"status={self.status_code}")
        if self.request_id:
            parts.append(f"request_id={self.request_id}")
        return " | ".join(parts)


class ConnectionError(PortalError):
    """Transport-level failure (DNS, refused connection, TLS handshake)."""


class TimeoutError(ConnectionError):
    """Request timed out before a response arrived."""


class RedirectionError(PortalError):
    """HTTP 3xx redirection."""


class UnauthorizedError(PortalError):
    """HTTP 401."""


class NotFoundError(PortalError):
    """HTTP 404."""


class ClientError(PortalError):
    """HTTP 4xx client error (excluding 401 and 404)."""


class ServerError(PortalError):
    """HTTP 5xx server error."""


class UnexpectedStatusError(PortalError):
    """Status outside every known range. Should not happen against a real server."""


class DecodeError(PortalError):
    """Successful response whose body is not valid JSON."""


def error_for_status(status_code: int) -> type[PortalError] | None:
    """Map an HTTP status code to its error class.

    Args:
        status_code: HTTP status code

    Returns:
        None for 2xx, otherwise the error class to raise
    """
    if 200 <= status_code < 300:
        return None
    if 300 <= status_code < 400:
        return RedirectionError
    if status_code == 401:
        return UnauthorizedError
    if status_code == 404:
        return NotFoundError
    if 400 <= status_code < 500:
        return ClientError
    if 500 <= status_code < 600:
        return ServerError
    return UnexpectedStatusError

