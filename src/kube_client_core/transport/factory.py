"""Factory for the shared HTTP client."""

import logging

import httpx

from kube_client_core.auth.methods import authorization_header
from kube_client_core.config.models import ClientConfiguration
from kube_client_core.transport.auth import AuthorizationHeaderAuth
from kube_client_core.transport.redirect import RedirectTransport
from kube_client_core.transport.tls import TransportConfiguration

logger = logging.getLogger(__name__)


def create_http_client(
    config: ClientConfiguration,
    tls: TransportConfiguration,
    transport: httpx.AsyncBaseTransport | None = None,
) -> httpx.AsyncClient:
    """Create the pooled HTTP client shared by all resource clients.

    Args:
        config: The client configuration (server URL, auth, bounds).
        tls: The assembled TLS settings.
        transport: Innermost transport to use instead of a TLS-enabled
            ``httpx.AsyncHTTPTransport``. No SSL context is built when given.

    Returns:
        An ``httpx.AsyncClient`` with a bounded connect timeout, redirect
        following with loop detection, and the authorization header applied
        to every request.

    Raises:
        TransportAssemblyError: If the SSL context cannot be built.
    """
    if transport is None:
        transport = httpx.AsyncHTTPTransport(verify=tls.create_ssl_context())

    header_value = authorization_header(config.authentication)
    auth = AuthorizationHeaderAuth(header_value) if header_value is not None else None

    logger.debug(
        f"Creating HTTP client for {config.master_url} "
        f"(connect timeout {config.connect_timeout}s, max redirects {config.max_redirects})"
    )
    return httpx.AsyncClient(
        base_url=config.master_url,
        auth=auth,
        transport=RedirectTransport(wrapped_transport=transport, max_redirects=config.max_redirects),
        timeout=httpx.Timeout(None, connect=config.connect_timeout),
        follow_redirects=False,
    )
