"""Client configuration model."""

from dataclasses import dataclass

import httpx

from kube_client_core.auth.methods import AuthenticationMethod
from kube_client_core.config.exceptions import ConfigurationError

DEFAULT_NAMESPACE = "default"
DEFAULT_MAX_REDIRECTS = 10
DEFAULT_CONNECT_TIMEOUT = 1.0


@dataclass(frozen=True)
class ClientConfiguration:
    """Everything needed to reach and authenticate against one API server.

    Instances are immutable and shared by reference between the root client
    and every resource client derived from it.

    Attributes:
        master_url: Absolute http(s) URL of the API server.
        authentication: The active authentication method.
        trust_roots: PEM bundle of CA certificates trusted for the server.
        namespace: Namespace used when a namespaced call names none.
        max_redirects: Redirect hops followed before giving up.
        connect_timeout: Seconds allowed for establishing a connection.
    """

    master_url: str
    authentication: AuthenticationMethod
    trust_roots: str
    namespace: str = DEFAULT_NAMESPACE
    max_redirects: int = DEFAULT_MAX_REDIRECTS
    connect_timeout: float = DEFAULT_CONNECT_TIMEOUT

    def __post_init__(self) -> None:
        try:
            url = httpx.URL(self.master_url)
        except httpx.InvalidURL as e:
            raise ConfigurationError(f"Invalid API server URL {self.master_url!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise ConfigurationError(f"API server URL must be an absolute http(s) URL, got {self.master_url!r}")
        if self.max_redirects < 0:
            raise ConfigurationError("max_redirects must not be negative")
        if self.connect_timeout <= 0:
            raise ConfigurationError("connect_timeout must be positive")
