"""Client configuration and discovery.

This module provides:
- The immutable ``ClientConfiguration`` shared by every resource client
- Environment and secret-file resolution (python-dotenv aware)
- Discovery from a local kubeconfig or an in-cluster service account

Example:
    ```python
    from kube_client_core.auth import BearerToken
    from kube_client_core.config import ClientConfiguration

    config = ClientConfiguration(
        master_url="https://10.0.0.1:6443",
        authentication=BearerToken("abc"),
        trust_roots=ca_pem,
    )
    ```
"""

from kube_client_core.config.environment import EnvironmentResolver
from kube_client_core.config.exceptions import (
    ConfigFileError,
    ConfigNotFoundError,
    ConfigurationError,
    TransportAssemblyError,
)
from kube_client_core.config.loaders import (
    ConfigLoader,
    LocalFileConfigLoader,
    ServiceAccountConfigLoader,
    discover_config,
)
from kube_client_core.config.models import ClientConfiguration

__all__ = [
    "ClientConfiguration",
    "ConfigFileError",
    "ConfigLoader",
    "ConfigNotFoundError",
    "ConfigurationError",
    "EnvironmentResolver",
    "LocalFileConfigLoader",
    "ServiceAccountConfigLoader",
    "TransportAssemblyError",
    "discover_config",
]
