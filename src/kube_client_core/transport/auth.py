"""Authorization header injection."""

from collections.abc import Generator

import httpx


class AuthorizationHeaderAuth(httpx.Auth):
    """Attach a precomputed ``Authorization`` header to every request."""

    def __init__(self, header_value: str) -> None:
        self._header_value = header_value

    def __repr__(self) -> str:
        return "AuthorizationHeaderAuth(***)"

    def auth_flow(self, request: httpx.Request) -> Generator[httpx.Request, httpx.Response, None]:
        request.headers["Authorization"] = self._header_value
        yield request
