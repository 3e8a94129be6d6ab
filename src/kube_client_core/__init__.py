"""Kube Client Core - typed async client for the Kubernetes API.

This library provides the pieces needed to talk to a Kubernetes API server:
- Authentication methods (basic, bearer token, client certificate)
- TLS transport assembly with hardened redirect and connect bounds
- A root client exposing scope-correct resource clients
- Label, field and namespace selectors for list/watch queries

Example:
    ```python
    from kube_client_core import KubernetesClient
    from kube_client_core.selectors import LabelSelector, NamespaceSelector

    async with KubernetesClient() as client:
        pods = await client.pods.list(
            namespace=NamespaceSelector.SYSTEM,
            selectors=[LabelSelector({"app": "dns"})],
        )
        for pod in pods:
            print(pod.name)
    ```
"""

from kube_client_core.client import ClientState, KubernetesClient

__version__ = "0.1.0"

__all__ = ["ClientState", "KubernetesClient", "__version__"]
