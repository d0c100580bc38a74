"""Tests for gstats.engine.transport: httpx-backed HttpTransport."""

import httpx
import pytest

from gstats.engine.errors import TransportError
from gstats.engine.protocols import HttpTransport
from gstats.engine.transport import HttpxTransport


def mock_client(handler) -> httpx.AsyncClient:
    return httpx.AsyncClient(transport=httpx.MockTransport(handler), follow_redirects=True)


def test_satisfies_protocol():
    assert isinstance(HttpxTransport(client=mock_client(lambda r: httpx.Response(200))), HttpTransport)


class TestFetch:
    @pytest.mark.asyncio
    async def test_status_body_and_headers(self):
        def handler(request):
            return httpx.Response(418, text="teapot", headers={"X-Reply": "yes"})

        transport = HttpxTransport(client=mock_client(handler))
        got = await transport.fetch("https://127.0.0.1:1/x")

        assert got.status == 418
        assert got.body == "teapot"
        assert got.headers["x-reply"] == "yes"
        await transport.aclose()

    @pytest.mark.asyncio
    async def test_forwards_method_headers_and_body(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["auth"] = request.headers["Authorization"]
            seen["body"] = request.content
            return httpx.Response(200, json={})

        transport = HttpxTransport(client=mock_client(handler))
        await transport.fetch(
            "https://pd.na.a.pvp.net/x", method="put", headers={"Authorization": "Bearer t"}, body='{"a": 1}'
        )

        assert seen == {"method": "PUT", "auth": "Bearer t", "body": b'{"a": 1}'}

    @pytest.mark.asyncio
    async def test_follows_redirects(self):
        def handler(request):
            if request.url.path == "/old":
                return httpx.Response(302, headers={"Location": "/new"})
            return httpx.Response(200, text="moved")

        got = await HttpxTransport(client=mock_client(handler)).fetch("https://127.0.0.1:1/old")
        assert (got.status, got.body) == (200, "moved")

    @pytest.mark.asyncio
    async def test_non_200_is_not_an_exception(self):
        transport = HttpxTransport(client=mock_client(lambda r: httpx.Response(500, text="boom")))
        got = await transport.fetch("https://127.0.0.1:1/x")
        assert got.status == 500

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [httpx.ConnectError, httpx.ReadTimeout])
    async def test_network_failure_raises_transport_error(self, error):
        def handler(request):
            raise error("no route", request=request)

        transport = HttpxTransport(client=mock_client(handler))
        with pytest.raises(TransportError) as exc:
            await transport.fetch("https://127.0.0.1:1/x")

        assert exc.value.url == "https://127.0.0.1:1/x"
        assert isinstance(exc.value.__cause__, error)

    @pytest.mark.asyncio
    @pytest.mark.parametrize("error", [
        OverflowError("connect(): port must be 0-65535"),
        httpx.InvalidURL("Invalid port: '70000'"),
    ])
    async def test_unusable_address_raises_transport_error(self, error):
        def handler(request):
            raise error

        transport = HttpxTransport(client=mock_client(handler))
        with pytest.raises(TransportError) as exc:
            await transport.fetch("https://127.0.0.1:1/x")

        assert exc.value.__cause__ is error


@pytest.mark.asyncio
async def test_default_client_settings():
    transport = HttpxTransport(timeout=3.0)
    assert transport.client.follow_redirects is True
    assert transport.client.max_redirects == 15
    assert transport.client.timeout.read == 3.0
    await transport.aclose()
