"""Structured exceptions for per-request failures."""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import httpx

    from kube_client_core.errors.models import Status


class APIError(Exception):
    """Base exception for failures of a single API request."""

    pass


class InvalidURLError(APIError):
    """The request target could not be turned into a valid URL."""

    pass


class BadRequestError(APIError):
    """The caller supplied an unusable combination of arguments."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class EmptyResponseError(APIError):
    """The server returned no content where a resource was required."""

    pass


class DecodingError(APIError):
    """The response body could not be read as the expected resource shape."""

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class RequestError(APIError):
    """The API server answered with a failure Status.

    The Status is kept verbatim so callers can inspect ``reason``,
    ``details`` and friends.
    """

    def __init__(self, message: str, status: "Status", response: "httpx.Response | None" = None):
        super().__init__(message)
        self.status = status
        self.response = response

    @property
    def status_code(self) -> int | None:
        if self.status.code is not None:
            return self.status.code
        return self.response.status_code if self.response is not None else None


class ClientClosedError(RuntimeError):
    """Raised when a client is used after its root client was closed."""

    pass
