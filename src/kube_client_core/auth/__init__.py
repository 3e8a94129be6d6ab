"""Authentication components for the Kubernetes client.

This module provides the closed set of authentication methods:
- Basic authentication (username and password)
- Bearer tokens
- Client certificates (mutual TLS)

Example:
    ```python
    from kube_client_core.auth import ClientCertificate

    auth = ClientCertificate(certificate=cert_pem, private_key=key_pem)
    ```
"""

from kube_client_core.auth.methods import (
    AuthenticationMethod,
    BasicAuth,
    BearerToken,
    ClientCertificate,
    authorization_header,
)

__all__ = [
    "AuthenticationMethod",
    "BasicAuth",
    "BearerToken",
    "ClientCertificate",
    "authorization_header",
]
