"""Testing utilities for code built on the Kubernetes client.

Helpers for building configurations and API server payloads, meant to be
combined with ``httpx.MockTransport``.

Example:
    ```python
    import httpx

    from kube_client_core import KubernetesClient
    from kube_client_core.testing import list_payload, make_config


    async def test_lists_pods():
        transport = httpx.MockTransport(lambda request: httpx.Response(200, json=list_payload("PodList")))
        async with KubernetesClient(make_config(), transport=transport) as client:
            assert len(await client.pods.list()) == 0
    ```
"""

from typing import Any

from kube_client_core.auth.methods import AuthenticationMethod, BearerToken
from kube_client_core.config.models import ClientConfiguration

# Never parsed unless an SSL context is built, which a mock transport avoids.
PLACEHOLDER_TRUST_ROOTS = "-----BEGIN CERTIFICATE-----\nplaceholder\n-----END CERTIFICATE-----\n"


def make_config(
    master_url: str = "https://kubernetes.test:6443",
    authentication: AuthenticationMethod | None = None,
    trust_roots: str = PLACEHOLDER_TRUST_ROOTS,
    **kwargs: Any,
) -> ClientConfiguration:
    """Build a configuration for tests, bearer token ``test-token`` by default."""
    return ClientConfiguration(
        master_url=master_url,
        authentication=authentication or BearerToken("test-token"),
        trust_roots=trust_roots,
        **kwargs,
    )


def status_payload(code: int, reason: str, message: str = "", **extra: Any) -> dict[str, Any]:
    """A failure Status body as the API server sends it."""
    return {
        "kind": "Status",
        "apiVersion": "v1",
        "metadata": {},
        "status": "Failure",
        "message": message,
        "reason": reason,
        "code": code,
        **extra,
    }


def list_payload(kind: str, items: list[dict[str, Any]] | None = None, resource_version: str = "1") -> dict[str, Any]:
    """A list response body, e.g. ``list_payload("PodList", [...])``."""
    return {
        "kind": kind,
        "apiVersion": "v1",
        "metadata": {"resourceVersion": resource_version},
        "items": items or [],
    }


__all__ = ["PLACEHOLDER_TRUST_ROOTS", "list_payload", "make_config", "status_payload"]
