"""DEBUG logging for Portal API calls.

Each call gets one RequestLog: sent() before the request goes out, then
received() or failed(). The auth token header is always redacted, whatever
the configured redaction list says.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Iterable, Mapping
from typing import Any

import httpx
from pydantic import BaseModel, Field

from portal.core.api.http.auth import TOKEN_HEADER
from portal.core.api.http.errors import PortalError

logger = logging.getLogger("portal.core.api.http")

REDACTED = "***REDACTED***"


def redact_headers(headers: Mapping[str, str], redact: Iterable[str] = ()) -> dict[str, str]:
    """Copy headers with the token header and any `redact` names masked (case-insensitive)."""
    hidden = {TOKEN_HEADER.lower(), *(name.lower() for name in redact)}
    return {k: REDACTED if k.lower() in hidden else v for k, v in headers.items()}


class RequestLog(BaseModel):
    """Log records for a single Portal API call."""

    method: str
    url: str
    request_id: str | None = None
    started: float = Field(default_factory=time.perf_counter)

    @property
    def elapsed_ms(self) -> int:
        return int((time.perf_counter() - self.started) * 1000)

    def _fields(self, **extra: Any) -> dict[str, Any]:
        return {"method": self.method, "url": self.url, "request_id": self.request_id, **extra}

    def sent(self, request: httpx.Request, redact: Iterable[str] = ()) -> None:
        """Record the outgoing request and its JSON body size."""
        self.started = time.perf_counter()
        logger.debug(
            "HTTP request",
            extra=self._fields(
                headers=redact_headers(request.headers, redact),
                body_bytes=len(request.content),
            ),
        )

    def received(self, response: httpx.Response, error: type[PortalError] | None = None) -> None:
        """Record the response status, size, timing and the error class it maps to."""
        logger.debug(
            "HTTP response",
            extra=self._fields(
                status_code=response.status_code,
                body_bytes=len(response.content),
                elapsed_ms=self.elapsed_ms,
                error=error.__name__ if error else None,
            ),
        )

    def failed(self, exc: PortalError) -> None:
        """Record a call that never got a response."""
        logger.debug(
            "HTTP transport failure",
            extra=self._fields(error=type(exc).__name__, elapsed_ms=self.elapsed_ms),
        )
