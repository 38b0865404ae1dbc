"""
Tests for the typed records and the request/response services.
"""

import json

import httpx
import pytest
from unittest.mock import AsyncMock, MagicMock

from botdesk.flow.editor import FlowEditorSession
from botdesk.models import (
    ABTestConfig,
    AIConfig,
    Bot,
    BotStatus,
    Customer,
    PairingResponse,
    Product,
    ProductType,
    TimingConfig,
    WhatsAppStatus,
)
from botdesk.services import Services
from botdesk.services.flow import FlowService
from botdesk.services.media import MediaService, normalize_item
from botdesk.services.whatsapp import PairingCountdown
from botdesk.storage.client import ApiClient
from botdesk.storage.http_backend import HttpBackend
from botdesk.storage.mock_backend import MockBackend
from botdesk.storage.protocol import BackendOffline


@pytest.fixture
def client():
    """ApiClient stand-in with awaitable verbs."""
    mock = MagicMock()
    mock.base_url = "http://bots.test"
    mock.get = AsyncMock(return_value=None)
    mock.post = AsyncMock(return_value=None)
    mock.put = AsyncMock(return_value=None)
    mock.delete = AsyncMock(return_value=None)
    return mock


@pytest.fixture
def mock_services(tmp_path):
    return Services.create(ApiClient(MockBackend(str(tmp_path / "mock_db.json"))))


class TestModels:
    def test_bot_from_partial_payload(self):
        bot = Bot.from_dict({"id": 7, "status": "online", "stats": {"revenue": "12.5"}})
        assert bot.id == "7"
        assert bot.status == BotStatus.ONLINE
        assert bot.is_online
        assert bot.stats.revenue == 12.5
        assert bot.stats.conversations == 0

    def test_bot_unknown_status_is_offline(self):
        assert Bot.from_dict({"id": "b", "status": "???"}).status == BotStatus.OFFLINE
        assert Bot.from_dict(None).id == ""

    def test_bot_ab_group(self):
        assert Bot.from_dict({"id": "b", "abTestGroup": "A"}).ab_test_group == "A"
        assert Bot.from_dict({"id": "b", "abTestGroup": "C"}).ab_test_group is None

    def test_product_to_dict(self):
        product = Product.from_dict({"id": "p1", "name": "Curso", "price": "97.9", "type": "upsell"})
        assert product.type == ProductType.UPSELL
        assert product.to_dict(include_id=False) == {
            "name": "Curso", "description": "", "price": 97.9, "type": "UPSELL",
        }

    def test_customer_display_name(self):
        assert Customer.from_dict({"id": "c1", "name": ""}).display_name == "Unknown"
        assert Customer.from_dict({"id": "c1", "name": "Ana"}).display_name == "Ana"

    def test_ab_distribution_sums_to_100(self):
        config = ABTestConfig()
        config.set_distribution(70)
        assert (config.distribution_a, config.distribution_b) == (70, 30)
        config.set_distribution(140)
        assert (config.distribution_a, config.distribution_b) == (100, 0)
        config.set_distribution(-5)
        assert (config.distribution_a, config.distribution_b) == (0, 100)

    def test_ab_wire_keys(self):
        config = ABTestConfig.from_dict({"botA_Id": "b1", "botB_Id": "b2", "isEnabled": True})
        assert config.to_dict()["botA_Id"] == "b1"
        assert config.is_enabled

    def test_ai_config_defaults(self):
        config = AIConfig.from_dict({"model": "llama"}, bot_id="b1")
        assert config.bot_id == "b1"
        assert config.model == "gpt-4o"
        assert config.temperature == 0.7
        assert config.max_tokens == 500

    def test_timing_keeps_unknown_keys(self):
        timing = TimingConfig.from_dict({"typingDelay": "1500", "burstLimit": 3})
        assert timing.typing_delay == 1500
        timing.message_interval = 800
        assert timing.to_dict() == {
            "burstLimit": 3,
            "typingDelay": 1500,
            "messageInterval": 800,
            "readReceiptDelay": 0,
            "followUpDelay": 0,
        }

    def test_whatsapp_status(self):
        assert WhatsAppStatus.coerce({"status": "CONNECTED"}) == WhatsAppStatus.CONNECTED
        assert WhatsAppStatus.coerce("cooldown") == WhatsAppStatus.COOLDOWN
        assert WhatsAppStatus.coerce(None) == WhatsAppStatus.DISCONNECTED

    def test_enum_members_pass_through_coerce(self):
        assert BotStatus.coerce(BotStatus.PAUSADO) is BotStatus.PAUSADO
        assert ProductType.coerce(ProductType.DOWNSELL) is ProductType.DOWNSELL
        assert WhatsAppStatus.coerce(WhatsAppStatus.BLOCKED) is WhatsAppStatus.BLOCKED


class TestPairingCountdown:
    def test_countdown(self):
        countdown = PairingCountdown.start(PairingResponse("ABCD-1234", 120), now=1000.0)
        assert countdown.code == "ABCD-1234"
        assert countdown.display(now=1000.0) == "2:00"
        assert countdown.seconds_left(now=1055.2) == 65
        assert countdown.display(now=1055.2) == "1:05"
        assert not countdown.is_expired(now=1119.5)

    def test_expired(self):
        countdown = PairingCountdown.start(PairingResponse("X", 30), now=0.0)
        assert countdown.is_expired(now=30.0)
        assert countdown.seconds_left(now=90.0) == 0
        assert countdown.display(now=90.0) == "0:00"


class TestMedia:
    def test_normalize_prefers_known_keys(self):
        item = normalize_item({"id": 4, "fileName": "logo.PNG", "path": "/uploads/logo.PNG"}, "http://bots.test/")
        assert item.id == "4"
        assert item.name == "logo.PNG"
        assert item.url == "http://bots.test/uploads/logo.PNG"
        assert item.type == "image"

    def test_normalize_mime_and_defaults(self):
        audio = normalize_item({"name": "voz", "type": "audio/ogg", "url": "https://cdn/voz"})
        assert audio.type == "audio"
        empty = normalize_item("garbage")
        assert empty.name == "Sem Nome"
        assert empty.type == "file"
        assert empty.id

    @pytest.mark.asyncio
    async def test_grouped_payload(self, client):
        client.get.return_value = {
            "images": [{"id": "i", "name": "a.jpg"}],
            "audio": [{"id": "a", "name": "b.mp3"}],
            "files": [{"id": "f", "name": "c.pdf"}],
        }
        items = await MediaService(client).get_all()
        assert [(m.id, m.type) for m in items] == [("i", "image"), ("a", "audio"), ("f", "file")]
        client.get.assert_awaited_once_with("/media-api")

    @pytest.mark.asyncio
    async def test_get_all_never_raises(self, client):
        client.get.side_effect = BackendOffline("down")
        assert await MediaService(client).get_all() == []

    @pytest.mark.asyncio
    async def test_upload_sends_file_tuple(self, client):
        client.post.return_value = {"id": "m1", "name": "foto.jpg", "url": "/m/foto.jpg"}
        item = await MediaService(client).upload("foto.jpg", b"data", "image/jpeg")
        client.post.assert_awaited_once_with("/media/upload", {"file": ("foto.jpg", b"data", "image/jpeg")})
        assert item.url == "http://bots.test/m/foto.jpg"


class TestServicesAgainstMockBackend:
    @pytest.mark.asyncio
    async def test_bot_lifecycle(self, mock_services):
        created = await mock_services.bots.create("Vendas", "5511988887777")
        assert created.status == BotStatus.OFFLINE

        await mock_services.bots.toggle_status(created.id, BotStatus.ONLINE)
        assert (await mock_services.bots.get_by_id(created.id)).is_online

        await mock_services.bots.delete(created.id)
        assert await mock_services.bots.get_by_id(created.id) is None

    @pytest.mark.asyncio
    async def test_flow_round_trip(self, mock_services):
        nodes = [
            {"id": "n1", "type": "message", "label": "Oi", "content": "Qual o preço?", "trigger": "",
             "x": 10.0, "y": 20.0, "next": ["n2"]},
            {"id": "n2", "type": "input", "label": "Nome", "content": "", "trigger": "1",
             "x": 300.0, "y": 20.0, "next": []},
        ]
        await mock_services.flows.save_graph("b1", nodes)
        loaded = await mock_services.flows.load_graph("b1")
        assert [n.to_wire() for n in loaded] == nodes

    @pytest.mark.asyncio
    async def test_unsupported_route_gives_empty_results(self, mock_services):
        assert await mock_services.customers.get_all() == []


def http_services(handler) -> Services:
    transport = httpx.MockTransport(handler)
    backend = HttpBackend("http://bots.test", client=httpx.AsyncClient(base_url="http://bots.test", transport=transport))
    return Services.create(ApiClient(backend, base_url="http://bots.test"))


class TestFlowService:
    @pytest.mark.asyncio
    async def test_missing_flow_is_empty_graph(self):
        services = http_services(lambda request: httpx.Response(404, json={"message": "Flow not found"}))
        session = FlowEditorSession(services.flows)

        assert await session.select_bot("new-bot")
        assert len(session.store) == 0
        assert not session.offline
        assert session.last_error is None

    @pytest.mark.asyncio
    async def test_server_error_still_raises(self):
        services = http_services(lambda request: httpx.Response(500, json={"message": "DB down"}))
        session = FlowEditorSession(services.flows)

        assert not await session.select_bot("b1")
        assert session.offline
        assert session.last_error == "DB down"

    @pytest.mark.asyncio
    async def test_update_node_puts_fields(self, client):
        await FlowService(client).update_node("b1", "n2", {"label": "Menu", "trigger": "2"})
        client.put.assert_awaited_once_with("/bots/b1/flow/nodes/n2", {"label": "Menu", "trigger": "2"})

    @pytest.mark.asyncio
    async def test_update_node_over_http(self):
        seen = {}

        def handler(request):
            seen["method"] = request.method
            seen["path"] = request.url.path
            seen["body"] = json.loads(request.content)
            return httpx.Response(204)

        services = http_services(handler)
        await services.flows.update_node("b1", "n1", {"content": "Qual o preço?"})
        assert seen == {"method": "PUT", "path": "/bots/b1/flow/nodes/n1", "body": {"content": "Qual o preço?"}}
