"""Synchronous HTTP dispatch for the Portal management API, built on HTTPX.

Provides:
- One request primitive that sends a JSON body on every verb
- Status classification into the Portal error taxonomy
- Request/response logging with header redaction
- Token header authentication
"""

from __future__ import annotations

import uuid
from collections.abc import Mapping
from typing import Any

import httpx

from portal.core.api.http.auth import TokenAuth
from portal.core.api.http.config import HttpClientConfig
from portal.core.api.http.errors import (
    ConnectionError,
    DecodeError,
    PortalError,
    TimeoutError,
    error_for_status,
)
from portal.core.api.http.logging_utils import RequestLog
from portal.core.api.http.utils import JsonValue, get_request_id, join_url, to_jsonable


def _merge_headers(base: Mapping[str, str], extra: Mapping[str, str] | None) -> dict[str, str]:
    """Merge base headers with request-specific headers."""
    out = dict(base)
    if extra:
        out.update(extra)
    return out


def _default_request_id() -> str:
    """Generate a random request ID."""
    return f"req_{uuid.uuid4().hex[:16]}"


def _build_error(
    *,
    exc_type: type[PortalError],
    message: str,
    method: str,
    url: str,
    response: httpx.Response | None = None,
    request_id: str | None = None,
    cause: BaseException | None = None,
) -> PortalError:
    """Build a Portal error with response context.

    Args:
        exc_type: Error class to instantiate
        message: Human-readable error message
        method: HTTP method
        url: Request URL
        response: HTTP response (if available)
        request_id: Request ID for tracing
        cause: Original exception that triggered this error

    Returns:
        Constructed error
    """
    status_code: int | None = None
    headers: dict[str, str] | None = None
    body: str | None = None
    if response is not None:
        status_code = response.status_code
        headers = dict(response.headers)
        body = response.text
        request_id = get_request_id(response.headers) or request_id

    return exc_type(
        message=message,
        method=method,
        url=url,
        status_code=status_code,
        request_id=request_id,
        response_headers=headers,
        response_body=body,
        cause=cause,
    )


class ApiClient:
    """Synchronous HTTP client for the Portal management API.

    Built on httpx.Client. Every call goes through request(), which encodes the
    payload, sends it, and turns the response into decoded JSON or a typed error.

    Args:
        config: Client configuration
        auth: Optional authentication handler (normally TokenAuth)
        transport: Optional custom transport (useful for testing)

    Example:
        >>> config = HttpClientConfig(base_url="https://127.0.0.1:8443")
        >>> with ApiClient(config, auth=TokenAuth(token="secret")) as client:
        ...     services = client.get("/services")
    """

    def __init__(
        self,
        config: HttpClientConfig,
        *,
        auth: httpx.Auth | None = None,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self.config = config
        self.auth = auth
        self._client = httpx.Client(
            base_url=config.base_url,
            headers={"User-Agent": config.user_agent, **config.headers},
            timeout=config.timeout,
            limits=config.limits,
            follow_redirects=config.follow_redirects,
            verify=config.verify,
            cert=config.cert,
            auth=auth,
            transport=transport,
        )

    @classmethod
    def with_token(
        cls,
        config: HttpClientConfig,
        token: str,
        *,
        transport: httpx.BaseTransport | None = None,
    ) -> ApiClient:
        """Create a client that authenticates with the Portal token header."""
        return cls(config, auth=TokenAuth(token=token), transport=transport)

    @property
    def base_url(self) -> str:
        return str(self._client.base_url)

    def close(self) -> None:
        """Close the underlying HTTP client and release resources."""
        self._client.close()

    def __enter__(self) -> ApiClient:
        """Context manager entry."""
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        """Context manager exit."""
        self.close()

    def request(
        self,
        method: str,
        path: str,
        payload: JsonValue | Any = None,
        *,
        headers: Mapping[str, str] | None = None,
    ) -> Any:
        """Send a request and return the decoded JSON body.

        The payload is JSON-encoded and sent as the body for every method,
        GET and DELETE included. A missing payload is sent as an empty object.

        Args:
            method: HTTP method
            path: Request path (relative to base_url)
            payload: JSON-serializable value or pydantic model(s)
            headers: Extra request headers

        Returns:
            Decoded JSON body, or None for 204 No Content

        Raises:
            ConnectionError: On transport failure (TimeoutError when it timed out)
            RedirectionError, UnauthorizedError, NotFoundError, ClientError,
            ServerError, UnexpectedStatusError: On non-2xx status
            DecodeError: If a successful response body is not valid JSON
        """
        method_u = method.upper()
        url = join_url(self.base_url, path)
        req_id = headers.get("X-Request-Id") if headers else None
        req_id = req_id or _default_request_id()

        merged_headers = _merge_headers(self._client.headers, headers)
        merged_headers.setdefault("X-Request-Id", req_id)

        body = to_jsonable({} if payload is None else payload)

        request = self._client.build_request(method_u, url, headers=merged_headers, json=body)
        log = RequestLog(method=method_u, url=url, request_id=req_id)
        log.sent(request, self.config.redact_headers)

        try:
            resp = self._client.send(request)
        except httpx.TimeoutException as e:
            err = _build_error(
                exc_type=TimeoutError,
                message=f"Request timed out: {e}",
                method=method_u,
                url=url,
                request_id=req_id,
                cause=e,
            )
            log.failed(err)
            raise err from e
        except httpx.TransportError as e:
            err = _build_error(
                exc_type=ConnectionError,
                message=f"Could not connect to {self.base_url}: {e}",
                method=method_u,
                url=url,
                request_id=req_id,
                cause=e,
            )
            log.failed(err)
            raise err from e

        exc_cls = error_for_status(resp.status_code)
        log.received(resp, exc_cls)
        if exc_cls is not None:
            raise _build_error(
                exc_type=exc_cls,
                message=f"{resp.status_code}:{resp.text}",
                method=method_u,
                url=url,
                response=resp,
                request_id=req_id,
            )

        return self.json(resp)

    def get(self, path: str, payload: Any = None, **kwargs: Any) -> Any:
        """Perform GET request. See request()."""
        return self.request("GET", path, payload, **kwargs)

    def post(self, path: str, payload: Any = None, **kwargs: Any) -> Any:
        """Perform POST request. See request()."""
        return self.request("POST", path, payload, **kwargs)

    def put(self, path: str, payload: Any = None, **kwargs: Any) -> Any:
        """Perform PUT request. See request()."""
        return self.request("PUT", path, payload, **kwargs)

    def delete(self, path: str, payload: Any = None, **kwargs: Any) -> Any:
        """Perform DELETE request. See request()."""
        return self.request("DELETE", path, payload, **kwargs)

    def json(self, response: httpx.Response) -> Any:
        """Decode a successful JSON response.

        Args:
            response: HTTP response to decode

        Returns:
            Decoded JSON data (dict, list, etc.), or None for 204 No Content

        Raises:
            DecodeError: If parsing fails (an empty body included)
        """
        if response.status_code == 204:
            return None
        try:
            return response.json()
        except ValueError as e:
            raise _build_error(
                exc_type=DecodeError,
                message=f"Failed to parse JSON response: {e}",
                method=response.request.method,
                url=str(response.request.url),
                response=response,
                cause=e,
            ) from e
