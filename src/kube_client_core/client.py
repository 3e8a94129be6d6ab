"""Root Kubernetes client.

The root client owns the pooled HTTP client. It hands a shared reference to
every resource client it creates: the named accessors for well-known kinds
(created on first use and then reused) and ad-hoc clients from
``for_resource`` (a new one per call).

Example:
    ```python
    from kube_client_core import KubernetesClient
    from kube_client_core.resources import PodList

    async with KubernetesClient() as client:
        nodes = await client.nodes.list()
        pods = client.for_resource(PodList)
        pod = await pods.get("web-0", namespace="shop")
    ```
"""

import enum
import logging
from collections.abc import Sequence
from typing import TypeVar

import httpx

from kube_client_core.config.loaders import ConfigLoader, discover_config
from kube_client_core.config.models import ClientConfiguration
from kube_client_core.errors.exceptions import ClientClosedError
from kube_client_core.generic import ClusterScopedResourceClient, GenericResourceClient, NamespacedResourceClient
from kube_client_core.resources import (
    ClusterRoleBindingList,
    ClusterRoleList,
    ConfigMapList,
    DaemonSetList,
    DeploymentList,
    IngressList,
    NamespaceList,
    NodeList,
    PodList,
    ResourceList,
    RoleBindingList,
    RoleList,
    SecretList,
    ServiceList,
    is_resource_list_type,
)
from kube_client_core.transport.factory import create_http_client
from kube_client_core.transport.tls import assemble_tls

logger = logging.getLogger(__name__)

L = TypeVar("L", bound=ResourceList)


class ClientState(enum.Enum):
    UNINITIALIZED = "uninitialized"
    CONSTRUCTING = "constructing"
    READY = "ready"
    DISPOSING = "disposing"
    DISPOSED = "disposed"


class KubernetesClient:
    """Entry point to the Kubernetes API.

    Construction either succeeds with a ready client or raises a
    ``ConfigurationError``; there is no partially usable client.

    Args:
        config: Explicit configuration. When omitted, ``loaders`` are tried
            in order (default: local kubeconfig, then in-cluster service
            account).
        loaders: Configuration loaders used for discovery.
        transport: Innermost httpx transport, replacing the TLS-enabled
            default (used for testing and custom connection handling).

    Raises:
        ConfigNotFoundError: If no configuration was given and discovery failed.
        TransportAssemblyError: If the TLS transport cannot be built.
    """

    def __init__(
        self,
        config: ClientConfiguration | None = None,
        *,
        loaders: Sequence[ConfigLoader] | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ):
        self.state = ClientState.UNINITIALIZED
        self._accessors: dict[type[ResourceList], ClusterScopedResourceClient | NamespacedResourceClient] = {}

        self.state = ClientState.CONSTRUCTING
        self.config = config if config is not None else discover_config(loaders)
        tls = assemble_tls(self.config)
        self._http_client = create_http_client(self.config, tls, transport=transport)
        self.state = ClientState.READY
        logger.debug(f"Kubernetes client ready for {self.config.master_url}")

    def __repr__(self) -> str:
        return f"KubernetesClient(master_url={self.config.master_url!r}, state={self.state.value})"

    async def __aenter__(self) -> "KubernetesClient":
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        await self.aclose()

    @property
    def is_closed(self) -> bool:
        return self.state in (ClientState.DISPOSING, ClientState.DISPOSED)

    async def aclose(self) -> None:
        """Close the shared HTTP client.

        Safe to call more than once; only the first call closes anything.
        Shutdown errors are logged and swallowed since no further requests
        can be issued anyway.
        """
        if self.state is not ClientState.READY:
            return

        self.state = ClientState.DISPOSING
        try:
            await self._http_client.aclose()
        except Exception as e:
            logger.warning(f"Error while closing Kubernetes client for {self.config.master_url}: {e}")
        finally:
            self._accessors.clear()
            self.state = ClientState.DISPOSED
        logger.debug(f"Kubernetes client for {self.config.master_url} closed")

    def _ensure_ready(self) -> None:
        if self.state is not ClientState.READY:
            raise ClientClosedError(f"Kubernetes client is {self.state.value}")

    def _accessor(self, list_type: type[L]) -> ClusterScopedResourceClient[L] | NamespacedResourceClient[L]:
        self._ensure_ready()
        client = self._accessors.get(list_type)
        if client is None:
            client_type = NamespacedResourceClient if list_type.item.namespaced else ClusterScopedResourceClient
            client = client_type(self._http_client, self.config, list_type)
            self._accessors[list_type] = client
            logger.debug(f"Created {client!r}")
        return client

    def for_resource(self, list_type: type[L]) -> GenericResourceClient[L]:
        """Create a new client for an arbitrary resource-list type.

        Unlike the named accessors, every call returns a fresh client; all of
        them share this client's connection pool and configuration.

        Raises:
            TypeError: If ``list_type`` is not a resource-list type whose
                ``item`` is an API resource.
            ClientClosedError: If this client has been closed.
        """
        if not is_resource_list_type(list_type):
            raise TypeError(f"{list_type!r} is not a resource list type with an API resource item")
        self._ensure_ready()
        return GenericResourceClient(self._http_client, self.config, list_type)

    @property
    def cluster_roles(self) -> ClusterScopedResourceClient[ClusterRoleList]:
        return self._accessor(ClusterRoleList)

    @property
    def cluster_role_bindings(self) -> ClusterScopedResourceClient[ClusterRoleBindingList]:
        return self._accessor(ClusterRoleBindingList)

    @property
    def namespaces(self) -> ClusterScopedResourceClient[NamespaceList]:
        return self._accessor(NamespaceList)

    @property
    def nodes(self) -> ClusterScopedResourceClient[NodeList]:
        return self._accessor(NodeList)

    @property
    def config_maps(self) -> NamespacedResourceClient[ConfigMapList]:
        return self._accessor(ConfigMapList)

    @property
    def daemon_sets(self) -> NamespacedResourceClient[DaemonSetList]:
        return self._accessor(DaemonSetList)

    @property
    def deployments(self) -> NamespacedResourceClient[DeploymentList]:
        return self._accessor(DeploymentList)

    @property
    def ingresses(self) -> NamespacedResourceClient[IngressList]:
        return self._accessor(IngressList)

    @property
    def pods(self) -> NamespacedResourceClient[PodList]:
        return self._accessor(PodList)

    @property
    def roles(self) -> NamespacedResourceClient[RoleList]:
        return self._accessor(RoleList)

    @property
    def role_bindings(self) -> NamespacedResourceClient[RoleBindingList]:
        return self._accessor(RoleBindingList)

    @property
    def secrets(self) -> NamespacedResourceClient[SecretList]:
        return self._accessor(SecretList)

    @property
    def services(self) -> NamespacedResourceClient[ServiceList]:
        return self._accessor(ServiceList)
