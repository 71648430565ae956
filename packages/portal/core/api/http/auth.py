from __future__ import annotations

from collections.abc import Generator

import httpx
from pydantic import BaseModel, Field

TOKEN_HEADER = "X-AUTH-TOKEN"


class TokenAuth(httpx.Auth, BaseModel):
    """Static auth-token header authentication for the Portal API.

    Args:
        token: Portal auth token
        header_name: Header carrying the token (default: "X-AUTH-TOKEN")

    Example:
        >>> auth = TokenAuth(token="secret")
        >>> client = httpx.Client(auth=auth)
    """

    model_config = {"frozen": True, "arbitrary_types_allowed": True}

    token: str = Field(repr=False)  # Don't leak secrets in repr
    header_name: str = TOKEN_HEADER

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        """Apply the token header to the request.

        Args:
            request: Request to authenticate

        Yields:
            Request with token header
        """
        request.headers[self.header_name] = self.token
        yield request
