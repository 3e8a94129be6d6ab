"""Authentication methods for the Kubernetes API.

A client proves its identity in exactly one of three ways. Basic and bearer
authentication travel in the ``Authorization`` header of every request, while
client certificates are presented during the TLS handshake and therefore
produce no header at all.

Example:
    ```python
    from kube_client_core.auth import BearerToken, authorization_header

    authorization_header(BearerToken("abc"))  # "Bearer abc"
    ```
"""

import base64
from dataclasses import dataclass, field


@dataclass(frozen=True)
class BasicAuth:
    """HTTP basic authentication with a username and password."""

    username: str
    password: str = field(repr=False)


@dataclass(frozen=True)
class BearerToken:
    """Bearer token authentication (service account or OIDC token)."""

    token: str = field(repr=False)


@dataclass(frozen=True)
class ClientCertificate:
    """Mutual TLS authentication.

    Attributes:
        certificate: PEM encoded client certificate.
        private_key: PEM encoded private key matching the certificate.
    """

    certificate: str
    private_key: str = field(repr=False)


AuthenticationMethod = BasicAuth | BearerToken | ClientCertificate


def authorization_header(method: AuthenticationMethod) -> str | None:
    """Compute the ``Authorization`` header value for an authentication method.

    Args:
        method: The active authentication method.

    Returns:
        The header value for basic and bearer authentication, ``None`` for
        client certificates (identity is proven at the transport layer).
    """
    if isinstance(method, BasicAuth):
        credentials = f"{method.username}:{method.password}".encode()
        return f"Basic {base64.b64encode(credentials).decode('ascii')}"
    if isinstance(method, BearerToken):
        return f"Bearer {method.token}"
    if isinstance(method, ClientCertificate):
        return None
    raise TypeError(f"Unsupported authentication method: {type(method).__name__}")
