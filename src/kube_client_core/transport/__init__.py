"""Transport layer for the Kubernetes client.

This module assembles the TLS-secured, pooled HTTP client that every resource
client shares. The pieces wrap httpx primitives:

Modules:
    tls: Secure-by-default TLS profile and client certificate injection
    auth: Authorization header injection
    redirect: Redirect following with a hop limit and loop detection
    factory: Factory function for the shared ``httpx.AsyncClient``

Example:
    ```python
    from kube_client_core.transport import assemble_tls, create_http_client

    http_client = create_http_client(config, assemble_tls(config))
    ```
"""

from kube_client_core.transport.auth import AuthorizationHeaderAuth
from kube_client_core.transport.factory import create_http_client
from kube_client_core.transport.redirect import RedirectTransport
from kube_client_core.transport.tls import TransportConfiguration, assemble_tls

__all__ = [
    "AuthorizationHeaderAuth",
    "RedirectTransport",
    "TransportConfiguration",
    "assemble_tls",
    "create_http_client",
]
