"""Tests for the shared HTTP client factory."""

import httpx
import pytest

from kube_client_core.auth import BasicAuth, BearerToken, ClientCertificate
from kube_client_core.testing import make_config
from kube_client_core.transport import AuthorizationHeaderAuth, RedirectTransport, assemble_tls, create_http_client


def _client(recorded, **config_kwargs):
    config = make_config(**config_kwargs)

    def handler(request):
        recorded.append(request)
        return httpx.Response(200, json={})

    return create_http_client(config, assemble_tls(config), transport=httpx.MockTransport(handler))


class TestCreateHttpClient:
    @pytest.mark.unit
    async def test_bearer_header_on_every_request(self):
        recorded = []

        async with _client(recorded, authentication=BearerToken("abc")) as client:
            await client.get("/api/v1/pods")
            await client.get("/api/v1/nodes")

        assert [request.headers["Authorization"] for request in recorded] == ["Bearer abc", "Bearer abc"]

    @pytest.mark.unit
    async def test_basic_header(self):
        recorded = []

        async with _client(recorded, authentication=BasicAuth("admin", "pw")) as client:
            await client.get("/api")

        assert recorded[0].headers["Authorization"] == "Basic YWRtaW46cHc="

    @pytest.mark.unit
    async def test_no_header_for_client_certificates(self):
        recorded = []

        async with _client(recorded, authentication=ClientCertificate("CERT", "KEY")) as client:
            await client.get("/api")

        assert "Authorization" not in recorded[0].headers

    @pytest.mark.unit
    async def test_relative_paths_resolve_against_master_url(self):
        recorded = []

        async with _client(recorded, master_url="https://k8s.example.com:6443") as client:
            await client.get("/api/v1/pods")

        assert str(recorded[0].url) == "https://k8s.example.com:6443/api/v1/pods"

    @pytest.mark.unit
    def test_connect_timeout_is_bounded(self):
        client = _client([], connect_timeout=1.0)

        assert client.timeout.connect == 1.0
        assert client.timeout.read is None

    @pytest.mark.unit
    def test_redirects_handled_by_redirect_transport(self):
        client = _client([], max_redirects=4)

        assert client.follow_redirects is False
        assert isinstance(client._transport, RedirectTransport)
        assert client._transport.max_redirects == 4

    @pytest.mark.unit
    def test_auth_is_header_auth(self):
        client = _client([], authentication=BearerToken("abc"))

        assert isinstance(client.auth, AuthorizationHeaderAuth)
        assert "abc" not in repr(client.auth)
