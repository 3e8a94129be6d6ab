"""Resource kinds and resource-list types.

A resource-list type names one collection of a single resource kind. Its
``item`` class attribute carries what requests need to know about the kind:
API group/version, plural name and whether it lives in a namespace.

Objects are kept as their JSON mappings; only the fields the client routes
on (``metadata.name``, ``metadata.namespace``) are surfaced.

Example:
    ```python
    from kube_client_core.resources import APIResource, ResourceList


    class Widget(APIResource):
        api_version = "example.com/v1"
        kind = "Widget"
        plural = "widgets"


    class WidgetList(ResourceList[Widget]):
        item = Widget
    ```
"""

from collections.abc import Iterator, Mapping
from typing import Any, ClassVar, Generic, TypeVar

from kube_client_core.errors.exceptions import DecodingError


class APIResource:
    """A single Kubernetes object of one kind."""

    api_version: ClassVar[str]
    kind: ClassVar[str]
    plural: ClassVar[str]
    namespaced: ClassVar[bool] = True

    def __init__(self, data: Mapping[str, Any] | None = None):
        self.data: dict[str, Any] = dict(data or {})

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r}, namespace={self.namespace!r})"

    def __eq__(self, other: object) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self.data == other.data

    @classmethod
    def api_path(cls) -> str:
        """Path prefix of the kind's API group, e.g. ``/apis/apps/v1``."""
        if "/" in cls.api_version:
            return f"/apis/{cls.api_version}"
        return f"/api/{cls.api_version}"

    @property
    def metadata(self) -> dict[str, Any]:
        return self.data.setdefault("metadata", {})

    @property
    def name(self) -> str | None:
        return self.metadata.get("name")

    @property
    def namespace(self) -> str | None:
        return self.metadata.get("namespace")

    @classmethod
    def from_dict(cls, data: Any) -> "APIResource":
        if not isinstance(data, dict):
            raise DecodingError(f"Expected a {cls.kind} object, got {type(data).__name__}")
        kind = data.get("kind")
        if kind is not None and kind != cls.kind:
            raise DecodingError(f"Expected a {cls.kind} object, got {kind}")
        return cls(data)

    def to_dict(self) -> dict[str, Any]:
        return {"apiVersion": self.api_version, "kind": self.kind, **self.data}


R = TypeVar("R", bound=APIResource)


class ResourceList(Generic[R]):
    """A collection of resources of the kind named by ``item``."""

    item: ClassVar[type[APIResource]]

    def __init__(self, items: list[R] | None = None, metadata: dict[str, Any] | None = None):
        self.items: list[R] = list(items or [])
        self.metadata: dict[str, Any] = dict(metadata or {})

    def __iter__(self) -> Iterator[R]:
        return iter(self.items)

    def __len__(self) -> int:
        return len(self.items)

    def __repr__(self) -> str:
        return f"{type(self).__name__}({len(self.items)} items)"

    @property
    def resource_version(self) -> str | None:
        return self.metadata.get("resourceVersion")

    @classmethod
    def from_dict(cls, data: Any) -> "ResourceList":
        if not isinstance(data, dict) or not isinstance(data.get("items"), list):
            raise DecodingError(f"Expected a {cls.__name__} with an items list")
        # List responses usually omit kind on their items
        items = [cls.item.from_dict(item) for item in data["items"]]
        return cls(items, data.get("metadata"))


def is_resource_list_type(tp: Any) -> bool:
    """Whether ``tp`` is a resource-list type whose items are API resources."""
    if not isinstance(tp, type) or not issubclass(tp, ResourceList):
        return False
    item = getattr(tp, "item", None)
    if not isinstance(item, type) or not issubclass(item, APIResource):
        return False
    return all(hasattr(item, attr) for attr in ("api_version", "kind", "plural"))


class ConfigMap(APIResource):
    api_version = "v1"
    kind = "ConfigMap"
    plural = "configmaps"


class ConfigMapList(ResourceList[ConfigMap]):
    item = ConfigMap


class Secret(APIResource):
    api_version = "v1"
    kind = "Secret"
    plural = "secrets"


class SecretList(ResourceList[Secret]):
    item = Secret


class Pod(APIResource):
    api_version = "v1"
    kind = "Pod"
    plural = "pods"


class PodList(ResourceList[Pod]):
    item = Pod


class Service(APIResource):
    api_version = "v1"
    kind = "Service"
    plural = "services"


class ServiceList(ResourceList[Service]):
    item = Service


class Node(APIResource):
    api_version = "v1"
    kind = "Node"
    plural = "nodes"
    namespaced = False


class NodeList(ResourceList[Node]):
    item = Node


class Namespace(APIResource):
    api_version = "v1"
    kind = "Namespace"
    plural = "namespaces"
    namespaced = False


class NamespaceList(ResourceList[Namespace]):
    item = Namespace


class Deployment(APIResource):
    api_version = "apps/v1"
    kind = "Deployment"
    plural = "deployments"


class DeploymentList(ResourceList[Deployment]):
    item = Deployment


class DaemonSet(APIResource):
    api_version = "apps/v1"
    kind = "DaemonSet"
    plural = "daemonsets"


class DaemonSetList(ResourceList[DaemonSet]):
    item = DaemonSet


class Ingress(APIResource):
    api_version = "networking.k8s.io/v1"
    kind = "Ingress"
    plural = "ingresses"


class IngressList(ResourceList[Ingress]):
    item = Ingress


class Role(APIResource):
    api_version = "rbac.authorization.k8s.io/v1"
    kind = "Role"
    plural = "roles"


class RoleList(ResourceList[Role]):
    item = Role


class RoleBinding(APIResource):
    api_version = "rbac.authorization.k8s.io/v1"
    kind = "RoleBinding"
    plural = "rolebindings"


class RoleBindingList(ResourceList[RoleBinding]):
    item = RoleBinding


class ClusterRole(APIResource):
    api_version = "rbac.authorization.k8s.io/v1"
    kind = "ClusterRole"
    plural = "clusterroles"
    namespaced = False


class ClusterRoleList(ResourceList[ClusterRole]):
    item = ClusterRole


class ClusterRoleBinding(APIResource):
    api_version = "rbac.authorization.k8s.io/v1"
    kind = "ClusterRoleBinding"
    plural = "clusterrolebindings"
    namespaced = False


class ClusterRoleBindingList(ResourceList[ClusterRoleBinding]):
    item = ClusterRoleBinding
