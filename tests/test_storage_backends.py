"""
Tests for storage backends.

Covers HttpBackend (against httpx.MockTransport), MockBackend (local JSON
database), the ApiClient fallback chain and the backend factory.
"""

import json

import httpx
import pytest
from unittest.mock import AsyncMock

from botdesk.config import AppConfig
from botdesk.storage.client import ApiClient
from botdesk.storage.factory import create_client
from botdesk.storage.http_backend import HttpBackend
from botdesk.storage.mock_backend import DEFAULT_DB, MockBackend
from botdesk.storage.protocol import ApiBackend, ApiError, BackendOffline


def make_http(handler) -> HttpBackend:
    client = httpx.AsyncClient(base_url="http://bots.test", transport=httpx.MockTransport(handler))
    return HttpBackend("http://bots.test", client=client)


class TestHttpBackend:
    """Tests for HttpBackend response and error mapping."""

    @pytest.mark.asyncio
    async def test_get_json(self):
        def handler(request):
            assert request.method == "GET"
            assert request.url.path == "/bots"
            return httpx.Response(200, json=[{"id": "b1"}])

        backend = make_http(handler)
        assert await backend.request("GET", "/bots") == [{"id": "b1"}]

    @pytest.mark.asyncio
    async def test_post_sends_json_body(self):
        seen = {}

        def handler(request):
            seen["body"] = json.loads(request.content)
            seen["type"] = request.headers["content-type"]
            return httpx.Response(201, json={"ok": True})

        backend = make_http(handler)
        await backend.request("POST", "/bots/b1/flow", {"nodes": [{"id": "n1", "content": "preço"}]})
        assert seen["body"] == {"nodes": [{"id": "n1", "content": "preço"}]}
        assert seen["type"] == "application/json"

    @pytest.mark.asyncio
    async def test_upload_is_multipart(self):
        seen = {}

        def handler(request):
            seen["type"] = request.headers["content-type"]
            seen["body"] = request.content
            return httpx.Response(200, json={"id": "m1"})

        backend = make_http(handler)
        await backend.request("POST", "/media/upload", {"file": ("foto.png", b"\x89PNG", "image/png")})
        assert seen["type"].startswith("multipart/form-data")
        assert b'filename="foto.png"' in seen["body"]

    @pytest.mark.asyncio
    async def test_no_content(self):
        backend = make_http(lambda request: httpx.Response(204))
        assert await backend.request("DELETE", "/products/p1") is None

    @pytest.mark.asyncio
    async def test_error_uses_server_message(self):
        backend = make_http(lambda request: httpx.Response(400, json={"message": "Nome obrigatório"}))
        with pytest.raises(ApiError) as exc:
            await backend.request("POST", "/bots", {})
        assert str(exc.value) == "Nome obrigatório"
        assert exc.value.status_code == 400
        assert exc.value.endpoint == "/bots"

    @pytest.mark.asyncio
    async def test_error_without_message(self):
        backend = make_http(lambda request: httpx.Response(500, text="boom"))
        with pytest.raises(ApiError) as exc:
            await backend.request("GET", "/bots")
        assert str(exc.value) == "API Error: 500 Internal Server Error"

    @pytest.mark.asyncio
    async def test_transport_error_is_offline(self):
        def handler(request):
            raise httpx.ConnectError("connection refused", request=request)

        backend = make_http(handler)
        with pytest.raises(BackendOffline):
            await backend.request("GET", "/bots")

    def test_conforms_to_protocol(self):
        assert isinstance(HttpBackend("http://x"), ApiBackend)


class TestMockBackend:
    """Tests for the local JSON database backend."""

    @pytest.fixture
    def backend(self, tmp_path):
        return MockBackend(str(tmp_path / "db" / "mock_db.json"))

    @pytest.mark.asyncio
    async def test_seed_data(self, backend):
        bots = await backend.request("GET", "/bots")
        assert [b["id"] for b in bots] == ["b1", "b2"]
        assert not backend.db_path.exists()

    @pytest.mark.asyncio
    async def test_create_bot_persists(self, backend, tmp_path):
        created = await backend.request("POST", "/bots", {"name": "Vendas", "phoneNumber": "5511"})
        assert created["status"] == "OFFLINE"
        assert created["stats"]["conversations"] == 0

        fresh = MockBackend(str(backend.db_path))
        bots = await fresh.request("GET", "/bots")
        assert created["id"] in [b["id"] for b in bots]

    @pytest.mark.asyncio
    async def test_status_update_and_delete(self, backend):
        await backend.request("PUT", "/bots/b2/status", {"status": "ONLINE"})
        assert (await backend.request("GET", "/bots/b2"))["status"] == "ONLINE"

        await backend.request("DELETE", "/bots/b2")
        assert await backend.request("GET", "/bots/b2") is None

    @pytest.mark.asyncio
    async def test_flow_round_trip(self, backend):
        nodes = [{"id": "n1", "type": "message", "label": "Oi", "content": "Qual o preço?", "next": []}]
        assert await backend.request("GET", "/bots/b1/flow") == []
        await backend.request("POST", "/bots/b1/flow", {"nodes": nodes})
        assert await backend.request("GET", "/bots/b1/flow") == nodes
        assert "preço" in backend.db_path.read_text(encoding="utf-8")

    @pytest.mark.asyncio
    async def test_products_crud(self, backend):
        created = await backend.request("POST", "/products", {"name": "Curso", "price": 10, "type": "UPSELL"})
        await backend.request("PUT", f"/products/{created['id']}", {"price": 12})
        assert (await backend.request("GET", f"/products/{created['id']}"))["price"] == 12

        await backend.request("DELETE", f"/products/{created['id']}")
        products = await backend.request("GET", "/products")
        assert created["id"] not in [p["id"] for p in products]

    @pytest.mark.asyncio
    async def test_media_upload_and_list(self, backend):
        item = await backend.request("POST", "/media/upload", {"file": ("audio.mp3", b"ID3", "audio/mpeg")})
        assert item["name"] == "audio.mp3"
        assert await backend.request("GET", "/media-api") == [item]

        await backend.request("DELETE", f"/media/{item['id']}")
        assert await backend.request("GET", "/media") == []

    @pytest.mark.asyncio
    async def test_unknown_route(self, backend):
        assert await backend.request("GET", "/metrics/summary") is None

    def test_corrupt_file_uses_seed(self, backend):
        backend.db_path.write_text("{not json", encoding="utf-8")
        assert backend.load_db() == DEFAULT_DB

    def test_missing_keys_are_filled(self, backend):
        backend.db_path.write_text(json.dumps({"bots": []}), encoding="utf-8")
        db = backend.load_db()
        assert db["bots"] == []
        assert db["products"] == DEFAULT_DB["products"]

    @pytest.mark.asyncio
    async def test_wrong_typed_keys_are_reset(self, backend):
        backend.db_path.write_text(json.dumps({"flows": [], "media": {"x": 1}, "bots": []}), encoding="utf-8")
        db = backend.load_db()
        assert db["flows"] == {}
        assert db["media"] == []
        assert db["bots"] == []

        assert await backend.request("GET", "/bots/b1/flow") == []
        await backend.request("POST", "/bots/b1/flow", {"nodes": [{"id": "n1"}]})
        assert await backend.request("GET", "/bots/b1/flow") == [{"id": "n1"}]

    def test_seed_is_not_shared(self, backend):
        db = backend.load_db()
        db["bots"].clear()
        assert len(DEFAULT_DB["bots"]) == 2


class TestApiClient:
    """Tests for the primary/fallback chain."""

    def _backend(self, name, result=None, error=None):
        backend = AsyncMock()
        backend.backend_type = name
        if error is not None:
            backend.request.side_effect = error
        else:
            backend.request.return_value = result
        return backend

    @pytest.mark.asyncio
    async def test_uses_primary(self):
        primary = self._backend("http", result=[1])
        fallback = self._backend("mock", result=[2])
        client = ApiClient(primary, fallback)
        assert await client.get("/bots") == [1]
        fallback.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_falls_back_when_offline(self):
        primary = self._backend("http", error=BackendOffline("down"))
        fallback = self._backend("mock", result=[2])
        client = ApiClient(primary, fallback)
        assert await client.post("/bots", {"name": "x"}) == [2]
        fallback.request.assert_awaited_once_with("POST", "/bots", {"name": "x"})

    @pytest.mark.asyncio
    async def test_api_errors_are_not_masked(self):
        primary = self._backend("http", error=ApiError("bad", 422))
        fallback = self._backend("mock", result=[2])
        client = ApiClient(primary, fallback)
        with pytest.raises(ApiError):
            await client.put("/bots/b1", {})
        fallback.request.assert_not_called()

    @pytest.mark.asyncio
    async def test_offline_without_fallback(self):
        client = ApiClient(self._backend("http", error=BackendOffline("down")))
        with pytest.raises(BackendOffline):
            await client.delete("/bots/b1")

    def test_backend_type(self):
        assert ApiClient(self._backend("http"), self._backend("mock")).backend_type == "http+mock"
        assert ApiClient(self._backend("mock")).backend_type == "mock"


class TestFactory:
    """Tests for create_client."""

    @pytest.fixture
    def config(self, tmp_path):
        return AppConfig(api_url="http://bots.test", storage_backend="auto",
                         mock_db_path=str(tmp_path / "mock_db.json"), mock_latency=0)

    def test_auto_chains_mock_fallback(self, config):
        client = create_client(config)
        assert isinstance(client.primary, HttpBackend)
        assert isinstance(client.fallback, MockBackend)
        assert client.base_url == "http://bots.test"

    def test_http_only(self, config):
        client = create_client(config, force_backend="http")
        assert isinstance(client.primary, HttpBackend)
        assert client.fallback is None

    def test_mock_only(self, config):
        config.storage_backend = "mock"
        client = create_client(config)
        assert isinstance(client.primary, MockBackend)
        assert client.fallback is None
