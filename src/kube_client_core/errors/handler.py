"""Error handling utilities for HTTP responses."""

import httpx

from kube_client_core.errors.exceptions import RequestError
from kube_client_core.errors.models import Status


def raise_for_status(response: httpx.Response) -> None:
    """Raise RequestError for failed responses.

    The server's Status is preserved as-is. When the body carries none
    (proxies, load balancers), a Failure status is synthesized from the
    HTTP code and the start of the body.

    Args:
        response: HTTP response object, already read

    Raises:
        RequestError: For any non-2xx response
    """
    if response.is_success:
        return

    status = Status.from_response(response)
    if status is None:
        response_text = response.text[:200]
        status = Status(
            status="Failure",
            message=response_text or response.reason_phrase or None,
            reason=response.reason_phrase or None,
            code=response.status_code,
        )
    elif status.code is None:
        status.code = response.status_code

    raise RequestError(status.to_exception_message(), status=status, response=response)
