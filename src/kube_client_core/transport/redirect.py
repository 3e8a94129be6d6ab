"""Redirect-following transport with a hop limit and loop detection.

httpx's built-in redirect handling only counts hops. This transport wraps
the real transport, follows redirects itself and rejects both chains longer
than ``max_redirects`` and chains that revisit a request it already sent.

Example:
    ```python
    import httpx

    from kube_client_core.transport.redirect import RedirectTransport

    transport = RedirectTransport(
        wrapped_transport=httpx.AsyncHTTPTransport(),
        max_redirects=10,
    )

    async with httpx.AsyncClient(transport=transport) as client:
        response = await client.get("https://api.example.com/api/v1/pods")
    ```
"""

import logging

import httpx

logger = logging.getLogger(__name__)


class RedirectTransport(httpx.AsyncBaseTransport):
    """Transport that follows redirects up to a fixed number of hops.

    Args:
        wrapped_transport: The underlying transport to wrap
        max_redirects: Maximum number of redirect hops (default: 10)
    """

    REDIRECT_STATUS_CODES: frozenset[int] = frozenset([301, 302, 303, 307, 308])

    def __init__(
        self,
        *,
        wrapped_transport: httpx.AsyncBaseTransport,
        max_redirects: int = 10,
    ) -> None:
        self._wrapped_transport = wrapped_transport
        self.max_redirects = max_redirects

    async def __aenter__(self):
        """Enter async context, delegating to wrapped transport."""
        await self._wrapped_transport.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        """Exit async context, delegating to wrapped transport."""
        return await self._wrapped_transport.__aexit__(exc_type, exc_val, exc_tb)

    async def aclose(self) -> None:
        await self._wrapped_transport.aclose()

    async def handle_async_request(self, request: httpx.Request) -> httpx.Response:
        """Send the request, following redirects.

        Args:
            request: The HTTP request to send

        Returns:
            The first non-redirect response

        Raises:
            httpx.TooManyRedirects: If the hop limit is exceeded or a
                redirect loop is detected
        """
        visited = {(request.method, str(request.url))}
        hops = 0

        while True:
            response = await self._wrapped_transport.handle_async_request(request)

            if not self._is_redirect(response):
                return response

            await response.aclose()

            if hops >= self.max_redirects:
                raise httpx.TooManyRedirects(f"Exceeded maximum of {self.max_redirects} redirects", request=request)

            next_request = self._build_redirect_request(request, response)
            target = (next_request.method, str(next_request.url))
            if target in visited:
                raise httpx.TooManyRedirects(f"Redirect loop detected at {next_request.url}", request=request)

            visited.add(target)
            hops += 1
            logger.debug(f"Following {response.status_code} redirect to {next_request.url} ({hops}/{self.max_redirects})")
            request = next_request

    def _is_redirect(self, response: httpx.Response) -> bool:
        return response.status_code in self.REDIRECT_STATUS_CODES and "location" in response.headers

    def _build_redirect_request(self, request: httpx.Request, response: httpx.Response) -> httpx.Request:
        """Build the follow-up request for a redirect response.

        303 always switches to GET (except HEAD), as do 301 and 302 for POST.
        The body is dropped when the method changes. Credentials are kept only
        for the same origin (scheme, host and port) or an http to https
        upgrade on the same host and default ports.
        """
        try:
            url = request.url.join(response.headers["location"])
        except httpx.InvalidURL as e:
            raise httpx.RemoteProtocolError(f"Invalid redirect location: {e}", request=request) from e

        method = request.method
        if response.status_code == 303 and method != "HEAD":
            method = "GET"
        elif response.status_code in (301, 302) and method == "POST":
            method = "GET"

        headers = httpx.Headers(request.headers)
        headers["Host"] = url.netloc.decode("ascii")
        if not _keeps_credentials(request.url, url):
            logger.debug(f"Dropping credentials on redirect from {_origin(request.url)} to {_origin(url)}")
            headers.pop("Authorization", None)

        if method != request.method:
            headers.pop("Content-Length", None)
            headers.pop("Transfer-Encoding", None)
            return httpx.Request(method, url, headers=headers, extensions=request.extensions)

        return httpx.Request(method, url, headers=headers, stream=request.stream, extensions=request.extensions)


_DEFAULT_PORTS = {"http": 80, "https": 443}


def _effective_port(url: httpx.URL) -> int | None:
    return url.port or _DEFAULT_PORTS.get(url.scheme)


def _keeps_credentials(origin: httpx.URL, target: httpx.URL) -> bool:
    if origin.host != target.host:
        return False
    if origin.scheme == target.scheme:
        return _effective_port(origin) == _effective_port(target)
    return (
        origin.scheme == "http"
        and target.scheme == "https"
        and _effective_port(origin) == 80
        and _effective_port(target) == 443
    )


def _origin(url: httpx.URL) -> str:
    return f"{url.scheme}://{url.netloc.decode('ascii')}"
