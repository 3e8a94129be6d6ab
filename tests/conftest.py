"""Pytest configuration and shared fixtures for kube-client-core tests."""

import httpx
import pytest

from kube_client_core.testing import make_config


@pytest.fixture(autouse=True)
def clear_env(monkeypatch):
    """Auto-cleanup: Clear Kubernetes-related environment variables before each test.

    This keeps a developer's kubeconfig or an in-cluster environment from
    leaking into configuration discovery tests.
    """
    import os

    prefixes = ("KUBE", "KUBERNETES_")

    for key in list(os.environ.keys()):
        if key.startswith(prefixes):
            monkeypatch.delenv(key, raising=False)

    yield


@pytest.fixture
def config():
    return make_config()


@pytest.fixture
def recorded_requests():
    return []


@pytest.fixture
def recording_transport(recorded_requests):
    """Mock transport answering every request with an empty PodList."""

    def handler(request: httpx.Request) -> httpx.Response:
        recorded_requests.append(request)
        return httpx.Response(200, json={"kind": "PodList", "metadata": {}, "items": []})

    return httpx.MockTransport(handler)
