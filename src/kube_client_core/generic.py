"""Resource clients bound to a shared HTTP client and configuration.

Three shapes share one implementation:

| Client | Namespace argument | Obtained from |
|--------|--------------------|---------------|
| `ClusterScopedResourceClient` | none | accessors for cluster-wide kinds |
| `NamespacedResourceClient` | optional, defaults to the configured namespace | accessors for namespaced kinds |
| `GenericResourceClient` | optional, validated against the kind | `KubernetesClient.for_resource()` |

None of them own the HTTP client. Once the root client is closed, every
call fails with ``ClientClosedError``.
"""

import json
import logging
from collections.abc import AsyncIterator, Iterable
from dataclasses import dataclass
from typing import Any, Generic, TypeVar

import httpx

from kube_client_core.config.models import ClientConfiguration
from kube_client_core.errors.exceptions import (
    BadRequestError,
    ClientClosedError,
    DecodingError,
    EmptyResponseError,
    InvalidURLError,
    RequestError,
)
from kube_client_core.errors.handler import raise_for_status
from kube_client_core.errors.models import Status
from kube_client_core.resources import APIResource, ResourceList
from kube_client_core.selectors import ListSelector, NamedNamespace, NamespaceSelector, resolve_namespace, selector_params

logger = logging.getLogger(__name__)

L = TypeVar("L", bound=ResourceList)

NamespaceArg = str | NamespaceSelector | NamedNamespace


@dataclass
class WatchEvent:
    """One change notification from a watch stream."""

    type: str  # ADDED, MODIFIED, DELETED or BOOKMARK
    resource: APIResource


class _ResourceClient(Generic[L]):
    def __init__(self, http_client: httpx.AsyncClient, config: ClientConfiguration, list_type: type[L]):
        self._http_client = http_client
        self.config = config
        self.list_type = list_type
        self.item_type = list_type.item

    def __repr__(self) -> str:
        return f"{type(self).__name__}[{self.list_type.__name__}]"

    def _ensure_open(self) -> None:
        if self._http_client.is_closed:
            raise ClientClosedError(f"{self!r} used after the Kubernetes client was closed")

    def _collection_path(self, namespace: NamespaceSelector | NamedNamespace | None) -> str:
        prefix = self.item_type.api_path()
        if namespace is None or namespace is NamespaceSelector.ALL_NAMESPACES:
            return f"{prefix}/{self.item_type.plural}"
        name = namespace.namespace_name()
        if "/" in name:
            raise InvalidURLError(f"Invalid namespace name {name!r}")
        return f"{prefix}/namespaces/{name}/{self.item_type.plural}"

    def _object_path(self, namespace: NamespaceSelector | NamedNamespace | None, name: str | None) -> str:
        if not name or "/" in name:
            raise InvalidURLError(f"Invalid {self.item_type.kind} name {name!r}")
        if namespace is NamespaceSelector.ALL_NAMESPACES:
            raise BadRequestError(f"A single {self.item_type.kind} cannot be addressed across all namespaces")
        return f"{self._collection_path(namespace)}/{name}"

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        self._ensure_open()
        logger.debug(f"{method} {path}")
        try:
            response = await self._http_client.request(method, path, **kwargs)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise InvalidURLError(str(e)) from e
        raise_for_status(response)
        return response

    def _decode(self, response: httpx.Response) -> Any:
        if not response.content:
            raise EmptyResponseError(f"Empty response from {response.request.method} {response.request.url}")
        try:
            return response.json()
        except ValueError as e:
            raise DecodingError(f"Response is not valid JSON: {e}") from e

    async def _get(self, namespace: NamespaceSelector | NamedNamespace | None, name: str) -> APIResource:
        response = await self._request("GET", self._object_path(namespace, name))
        return self.item_type.from_dict(self._decode(response))

    async def _list(
        self, namespace: NamespaceSelector | NamedNamespace | None, selectors: Iterable[ListSelector]
    ) -> L:
        params = selector_params(selectors)
        response = await self._request("GET", self._collection_path(namespace), params=params)
        return self.list_type.from_dict(self._decode(response))

    async def _create(self, namespace: NamespaceSelector | NamedNamespace | None, resource: APIResource) -> APIResource:
        if namespace is NamespaceSelector.ALL_NAMESPACES:
            raise BadRequestError(f"A {self.item_type.kind} cannot be created across all namespaces")
        self._check_kind(resource)
        response = await self._request("POST", self._collection_path(namespace), json=resource.to_dict())
        return self.item_type.from_dict(self._decode(response))

    async def _update(self, namespace: NamespaceSelector | NamedNamespace | None, resource: APIResource) -> APIResource:
        self._check_kind(resource)
        path = self._object_path(namespace, resource.name)
        response = await self._request("PUT", path, json=resource.to_dict())
        return self.item_type.from_dict(self._decode(response))

    async def _delete(self, namespace: NamespaceSelector | NamedNamespace | None, name: str) -> APIResource | Status:
        response = await self._request("DELETE", self._object_path(namespace, name))
        data = self._decode(response)
        if isinstance(data, dict) and data.get("kind") == "Status":
            return Status.from_dict(data)
        return self.item_type.from_dict(data)

    async def _watch(
        self, namespace: NamespaceSelector | NamedNamespace | None, selectors: Iterable[ListSelector]
    ) -> AsyncIterator[WatchEvent]:
        params = {**selector_params(selectors), "watch": "true"}
        path = self._collection_path(namespace)
        self._ensure_open()
        logger.debug(f"WATCH {path}")
        try:
            async with self._http_client.stream("GET", path, params=params) as response:
                if not response.is_success:
                    await response.aread()
                    raise_for_status(response)
                async for line in response.aiter_lines():
                    if line.strip():
                        yield self._watch_event(line)
        except (httpx.InvalidURL, httpx.UnsupportedProtocol) as e:
            raise InvalidURLError(str(e)) from e

    def _watch_event(self, line: str) -> WatchEvent:
        try:
            event = json.loads(line)
        except ValueError as e:
            raise DecodingError(f"Watch event is not valid JSON: {e}") from e
        if not isinstance(event, dict) or "type" not in event:
            raise DecodingError("Watch event has no type")

        if event["type"] == "ERROR":
            payload = event.get("object")
            if not isinstance(payload, dict):
                raise DecodingError("Watch ERROR event carries no Status object")
            status = Status.from_dict(payload)
            raise RequestError(status.to_exception_message(), status=status)
        return WatchEvent(type=event["type"], resource=self.item_type.from_dict(event.get("object")))

    def _check_kind(self, resource: APIResource) -> None:
        if not isinstance(resource, self.item_type):
            raise BadRequestError(f"Expected a {self.item_type.kind}, got {type(resource).__name__}")


class ClusterScopedResourceClient(_ResourceClient[L]):
    """Client for a cluster-wide kind; requests never carry a namespace."""

    async def get(self, name: str) -> APIResource:
        return await self._get(None, name)

    async def list(self, selectors: Iterable[ListSelector] = ()) -> L:
        return await self._list(None, selectors)

    async def create(self, resource: APIResource) -> APIResource:
        return await self._create(None, resource)

    async def update(self, resource: APIResource) -> APIResource:
        return await self._update(None, resource)

    async def delete(self, name: str) -> APIResource | Status:
        return await self._delete(None, name)

    def watch(self, selectors: Iterable[ListSelector] = ()) -> AsyncIterator[WatchEvent]:
        return self._watch(None, selectors)


class NamespacedResourceClient(_ResourceClient[L]):
    """Client for a namespaced kind.

    Every operation takes a namespace; when omitted, the configuration's
    default namespace is used. ``NamespaceSelector.ALL_NAMESPACES`` lists and
    watches across the whole cluster.
    """

    def _namespace(self, namespace: NamespaceArg | None) -> NamespaceSelector | NamedNamespace:
        return resolve_namespace(namespace if namespace is not None else self.config.namespace)

    async def get(self, name: str, namespace: NamespaceArg | None = None) -> APIResource:
        return await self._get(self._namespace(namespace), name)

    async def list(self, namespace: NamespaceArg | None = None, selectors: Iterable[ListSelector] = ()) -> L:
        return await self._list(self._namespace(namespace), selectors)

    async def create(self, resource: APIResource, namespace: NamespaceArg | None = None) -> APIResource:
        return await self._create(self._namespace(namespace or resource.namespace), resource)

    async def update(self, resource: APIResource, namespace: NamespaceArg | None = None) -> APIResource:
        return await self._update(self._namespace(namespace or resource.namespace), resource)

    async def delete(self, name: str, namespace: NamespaceArg | None = None) -> APIResource | Status:
        return await self._delete(self._namespace(namespace), name)

    def watch(
        self, namespace: NamespaceArg | None = None, selectors: Iterable[ListSelector] = ()
    ) -> AsyncIterator[WatchEvent]:
        return self._watch(self._namespace(namespace), selectors)


class GenericResourceClient(_ResourceClient[L]):
    """Client for an arbitrary resource-list type.

    Scope is checked at call time: a namespace is rejected for cluster-wide
    kinds and required for single objects of namespaced kinds.
    """

    def _namespace(
        self, namespace: NamespaceArg | None, required: bool = False
    ) -> NamespaceSelector | NamedNamespace | None:
        if not self.item_type.namespaced:
            if namespace is not None:
                raise BadRequestError(f"{self.item_type.kind} is cluster-scoped and takes no namespace")
            return None
        if namespace is None:
            if required:
                raise BadRequestError(f"{self.item_type.kind} is namespaced, a namespace is required")
            return None
        return resolve_namespace(namespace)

    async def get(self, name: str, namespace: NamespaceArg | None = None) -> APIResource:
        return await self._get(self._namespace(namespace, required=True), name)

    async def list(self, namespace: NamespaceArg | None = None, selectors: Iterable[ListSelector] = ()) -> L:
        return await self._list(self._namespace(namespace), selectors)

    async def create(self, resource: APIResource, namespace: NamespaceArg | None = None) -> APIResource:
        return await self._create(self._namespace(namespace or resource.namespace, required=True), resource)

    async def update(self, resource: APIResource, namespace: NamespaceArg | None = None) -> APIResource:
        return await self._update(self._namespace(namespace or resource.namespace, required=True), resource)

    async def delete(self, name: str, namespace: NamespaceArg | None = None) -> APIResource | Status:
        return await self._delete(self._namespace(namespace, required=True), name)

    def watch(
        self, namespace: NamespaceArg | None = None, selectors: Iterable[ListSelector] = ()
    ) -> AsyncIterator[WatchEvent]:
        return self._watch(self._namespace(namespace), selectors)
