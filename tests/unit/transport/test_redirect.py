"""Tests for redirect following with hop limit and loop detection."""

import httpx
import pytest

from kube_client_core.transport.redirect import RedirectTransport


def _redirecting_handler(routes: dict[str, tuple[int, str]], seen: list[httpx.Request]):
    async def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        target = routes.get(request.url.path)
        if target is None:
            return httpx.Response(200, json={"path": request.url.path})
        status_code, location = target
        return httpx.Response(status_code, headers={"Location": location})

    return handler


class TestRedirectTransport:
    @pytest.mark.unit
    async def test_follows_redirect_chain(self):
        seen = []
        routes = {"/a": (302, "/b"), "/b": (301, "/c")}
        transport = RedirectTransport(wrapped_transport=httpx.MockTransport(_redirecting_handler(routes, seen)))

        async with httpx.AsyncClient(transport=transport) as client:
            response = await client.get("https://api.example.com/a")

        assert response.status_code == 200
        assert response.json() == {"path": "/c"}
        assert [request.url.path for request in seen] == ["/a", "/b", "/c"]

    @pytest.mark.unit
    async def test_passes_through_non_redirects(self):
        seen = []
        transport = RedirectTransport(wrapped_transport=httpx.MockTransport(_redirecting_handler({}, seen)))

        async with httpx.AsyncClient(transport=transport) as client:
            response = await client.get("https://api.example.com/x")

        assert response.status_code == 200
        assert len(seen) == 1

    @pytest.mark.unit
    async def test_redirect_without_location_is_returned(self):
        async def handler(request):
            return httpx.Response(302)

        transport = RedirectTransport(wrapped_transport=httpx.MockTransport(handler))

        async with httpx.AsyncClient(transport=transport) as client:
            response = await client.get("https://api.example.com/x")

        assert response.status_code == 302

    @pytest.mark.unit
    async def test_exactly_max_redirects_is_allowed(self):
        seen = []
        routes = {f"/{i}": (302, f"/{i + 1}") for i in range(3)}
        transport = RedirectTransport(
            wrapped_transport=httpx.MockTransport(_redirecting_handler(routes, seen)), max_redirects=3
        )

        async with httpx.AsyncClient(transport=transport) as client:
            response = await client.get("https://api.example.com/0")

        assert response.json() == {"path": "/3"}

    @pytest.mark.unit
    async def test_rejects_too_many_redirects(self):
        seen = []
        routes = {f"/{i}": (302, f"/{i + 1}") for i in range(20)}
        transport = RedirectTransport(wrapped_transport=httpx.MockTransport(_redirecting_handler(routes, seen)))

        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(httpx.TooManyRedirects, match="maximum of 10"):
                await client.get("https://api.example.com/0")

        assert len(seen) == 11

    @pytest.mark.unit
    async def test_rejects_redirect_loop(self):
        seen = []
        routes = {"/a": (307, "/b"), "/b": (307, "/a")}
        transport = RedirectTransport(wrapped_transport=httpx.MockTransport(_redirecting_handler(routes, seen)))

        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(httpx.TooManyRedirects, match="loop"):
                await client.get("https://api.example.com/a")

        assert len(seen) == 2

    @pytest.mark.unit
    async def test_rejects_self_redirect(self):
        seen = []
        transport = RedirectTransport(
            wrapped_transport=httpx.MockTransport(_redirecting_handler({"/a": (302, "/a")}, seen))
        )

        async with httpx.AsyncClient(transport=transport) as client:
            with pytest.raises(httpx.TooManyRedirects):
                await client.get("https://api.example.com/a")

    @pytest.mark.unit
    async def test_303_switches_post_to_get(self):
        seen = []
        transport = RedirectTransport(
            wrapped_transport=httpx.MockTransport(_redirecting_handler({"/a": (303, "/b")}, seen))
        )

        async with httpx.AsyncClient(transport=transport) as client:
            await client.post("https://api.example.com/a", json={"x": 1})

        assert [request.method for request in seen] == ["POST", "GET"]
        assert seen[1].content == b""

    @pytest.mark.unit
    async def test_307_preserves_method_and_body(self):
        seen = []
        transport = RedirectTransport(
            wrapped_transport=httpx.MockTransport(_redirecting_handler({"/a": (307, "/b")}, seen))
        )

        async with httpx.AsyncClient(transport=transport) as client:
            await client.put("https://api.example.com/a", content=b"payload")

        assert [request.method for request in seen] == ["PUT", "PUT"]
        assert seen[1].read() == b"payload"

    @pytest.mark.unit
    async def test_keeps_authorization_on_same_host(self):
        seen = []
        transport = RedirectTransport(
            wrapped_transport=httpx.MockTransport(_redirecting_handler({"/a": (302, "/b")}, seen))
        )

        async with httpx.AsyncClient(transport=transport) as client:
            await client.get("https://api.example.com/a", headers={"Authorization": "Bearer abc"})

        assert seen[1].headers["Authorization"] == "Bearer abc"

    @pytest.mark.unit
    async def test_drops_authorization_on_cross_host_redirect(self):
        seen = []
        routes = {"/a": (302, "https://other.example.com/b")}
        transport = RedirectTransport(wrapped_transport=httpx.MockTransport(_redirecting_handler(routes, seen)))

        async with httpx.AsyncClient(transport=transport) as client:
            await client.get("https://api.example.com/a", headers={"Authorization": "Bearer abc"})

        assert seen[1].url.host == "other.example.com"
        assert seen[1].headers["Host"] == "other.example.com"
        assert "Authorization" not in seen[1].headers

    @pytest.mark.unit
    @pytest.mark.parametrize(
        "location",
        ["http://api.example.com/b", "https://api.example.com:8443/b"],
        ids=["https-downgrade", "other-port"],
    )
    async def test_drops_authorization_when_origin_changes_on_same_host(self, location):
        seen = []
        transport = RedirectTransport(
            wrapped_transport=httpx.MockTransport(_redirecting_handler({"/a": (302, location)}, seen))
        )

        async with httpx.AsyncClient(transport=transport) as client:
            await client.get("https://api.example.com/a", headers={"Authorization": "Bearer abc"})

        assert str(seen[1].url) == location
        assert "Authorization" not in seen[1].headers

    @pytest.mark.unit
    async def test_keeps_authorization_on_https_upgrade(self):
        seen = []
        routes = {"/a": (301, "https://api.example.com/b")}
        transport = RedirectTransport(wrapped_transport=httpx.MockTransport(_redirecting_handler(routes, seen)))

        async with httpx.AsyncClient(transport=transport) as client:
            await client.get("http://api.example.com/a", headers={"Authorization": "Bearer abc"})

        assert seen[1].url.scheme == "https"
        assert seen[1].headers["Authorization"] == "Bearer abc"

    @pytest.mark.unit
    async def test_aclose_delegates_to_wrapped_transport(self):
        closed = []

        class ClosingTransport(httpx.AsyncBaseTransport):
            async def handle_async_request(self, request):
                return httpx.Response(200)

            async def aclose(self):
                closed.append(True)

        transport = RedirectTransport(wrapped_transport=ClosingTransport())
        await transport.aclose()

        assert closed == [True]
