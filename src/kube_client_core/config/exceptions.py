"""Exceptions raised while building a usable client configuration.

Any of these escaping from ``KubernetesClient(...)`` means no client was
produced. Per-request failures live in ``kube_client_core.errors`` instead.

Example:
    ```python
    from kube_client_core.config.exceptions import ConfigNotFoundError

    try:
        client = KubernetesClient()
    except ConfigNotFoundError as e:
        print(f"Tried: {e.sources}")
    ```
"""


class ConfigurationError(Exception):
    """Base exception for configuration errors.

    All configuration-specific exceptions inherit from this class,
    so callers can treat any of them as "no client produced".
    """

    pass


class ConfigNotFoundError(ConfigurationError):
    """Raised when a required setting or configuration source cannot be found.

    Attributes:
        sources: Descriptions of the sources that were checked.
    """

    def __init__(self, message: str, sources: list[str] | None = None):
        super().__init__(message)
        self.sources = sources if sources is not None else []


class ConfigFileError(ConfigurationError):
    """Raised when a configuration file cannot be read or interpreted.

    Attributes:
        path: The offending file, if known.
    """

    def __init__(self, message: str, path: str | None = None):
        super().__init__(message)
        self.path = path


class TransportAssemblyError(ConfigurationError):
    """Raised when the TLS transport cannot be assembled from a configuration."""

    pass
