"""Selectors for list and watch queries.

List selectors narrow a result set server-side by labels or fields.
Namespace selectors pick the namespace a request is scoped to, or none at all.

Example:
    ```python
    from kube_client_core.selectors import FieldSelector, LabelSelector, selector_params

    selector_params([LabelSelector({"app": "web"}), FieldSelector({"status.phase": "Running"})])
    # {"labelSelector": "app=web", "fieldSelector": "status.phase=Running"}
    ```
"""

from collections.abc import Iterable, Mapping
from dataclasses import dataclass, field
from enum import Enum
from types import MappingProxyType

from kube_client_core.errors.exceptions import BadRequestError


@dataclass(frozen=True)
class _MappingSelector:
    pairs: Mapping[str, str] = field(default_factory=dict)

    name = ""

    def __post_init__(self) -> None:
        object.__setattr__(self, "pairs", MappingProxyType(dict(self.pairs)))

    def __hash__(self) -> int:
        return hash((type(self), frozenset(self.pairs.items())))

    @property
    def value(self) -> str:
        """``key=value`` pairs joined by commas, empty for an empty mapping."""
        return ",".join(f"{key}={value}" for key, value in self.pairs.items())

    def validate(self) -> None:
        """Reject pairs that would change meaning once joined.

        Raises:
            BadRequestError: For empty keys, or keys and values containing
                ``,`` or ``=``.
        """
        for key, value in self.pairs.items():
            if not key:
                raise BadRequestError(f"{self.name} keys must not be empty")
            for part in (key, value):
                if "," in part or "=" in part:
                    raise BadRequestError(f"Unusable {self.name} pair {key!r}={value!r}")


@dataclass(frozen=True, eq=False)
class LabelSelector(_MappingSelector):
    """Match resources whose labels equal every given value."""

    name = "labelSelector"


@dataclass(frozen=True, eq=False)
class FieldSelector(_MappingSelector):
    """Match resources whose fields equal every given value."""

    name = "fieldSelector"


ListSelector = LabelSelector | FieldSelector


def selector_params(selectors: Iterable[ListSelector]) -> dict[str, str]:
    """Build query parameters from list selectors.

    Selectors with the same name are combined. Empty selectors are left out
    of the query entirely, meaning "no filter" rather than "match nothing".
    """
    params: dict[str, str] = {}
    for selector in selectors:
        selector.validate()
        value = selector.value
        if not value:
            continue
        if selector.name in params:
            params[selector.name] = f"{params[selector.name]},{value}"
        else:
            params[selector.name] = value
    return params


@dataclass(frozen=True)
class NamedNamespace:
    """An explicitly named namespace."""

    name: str

    def __post_init__(self) -> None:
        if not self.name:
            raise ValueError("Namespace name must not be empty, use NamespaceSelector.ALL_NAMESPACES")

    def namespace_name(self) -> str:
        return self.name


class NamespaceSelector(Enum):
    """Well-known namespaces, plus the all-namespaces sentinel."""

    DEFAULT = "default"
    PUBLIC = "kube-public"
    SYSTEM = "kube-system"
    NODE_LEASE = "kube-node-lease"
    # Not a namespace: requests are not scoped by namespace at all.
    ALL_NAMESPACES = ""

    def namespace_name(self) -> str:
        return self.value

    @staticmethod
    def named(name: str) -> NamedNamespace:
        return NamedNamespace(name)


def resolve_namespace(namespace: str | NamespaceSelector | NamedNamespace) -> NamespaceSelector | NamedNamespace:
    """Normalize a plain string to a namespace selector."""
    if isinstance(namespace, (NamespaceSelector, NamedNamespace)):
        return namespace
    if not namespace:
        raise BadRequestError("Empty namespace name, use NamespaceSelector.ALL_NAMESPACES to list across namespaces")
    return NamedNamespace(namespace)
