"""
Tests for FlowEditorSession: loading, saving and editing a bot's flow
against an in-memory gateway.
"""

import asyncio
import copy

import pytest

from botdesk.flow.controller import Mode
from botdesk.flow.editor import FlowEditorSession
from botdesk.flow.graph_store import NodeKind, nodes_from_wire
from botdesk.storage.protocol import ApiError, BackendOffline


WELCOME_FLOW = [
    {"id": "n1", "type": "message", "label": "Boas-vindas", "content": "Olá! Bem-vindo.", "trigger": "",
     "x": 100, "y": 100, "next": ["n2"]},
    {"id": "n2", "type": "menu", "label": "Menu", "content": "1 - Preço\n2 - Suporte", "trigger": "",
     "x": 400, "y": 100, "next": ["n3"]},
    {"id": "n3", "type": "input", "label": "Pergunta", "content": "Qual o seu nome?", "trigger": "1",
     "x": 700, "y": 100, "next": []},
]


class FakeGateway:
    """Stores graphs per bot in wire format, like the server would."""

    def __init__(self, flows=None):
        self.flows = copy.deepcopy(flows or {})
        self.saved = []
        self.fail_load = None
        self.fail_save = None
        self.gates = {}

    async def load_graph(self, bot_id):
        gate = self.gates.get(bot_id)
        if gate is not None:
            await gate.wait()
        if self.fail_load:
            raise self.fail_load
        return nodes_from_wire(copy.deepcopy(self.flows.get(bot_id, [])))

    async def save_graph(self, bot_id, nodes):
        if self.fail_save:
            raise self.fail_save
        self.saved.append((bot_id, nodes))
        self.flows[bot_id] = copy.deepcopy(nodes)


@pytest.fixture
def gateway():
    return FakeGateway({"b1": WELCOME_FLOW})


@pytest.fixture
def session(gateway):
    return FlowEditorSession(gateway, width=1000, height=600)


class TestLoading:
    @pytest.mark.asyncio
    async def test_select_bot_loads_graph(self, session):
        assert await session.select_bot("b1")
        assert [n.id for n in session.store.nodes] == ["n1", "n2", "n3"]
        assert session.store.edges() == [("n1", "n2"), ("n2", "n3")]
        assert session.bot_id == "b1"
        assert not session.loading
        assert not session.offline

    @pytest.mark.asyncio
    async def test_unknown_bot_gets_empty_graph(self, session):
        assert await session.select_bot("nobody")
        assert len(session.store) == 0

    @pytest.mark.asyncio
    async def test_switching_bot_resets_view_and_selection(self, session):
        await session.select_bot("b1")
        session.store.select("n2")
        session.viewport.apply_pan((50, 50))
        session.viewport.zoom_in()
        session.controller.pointer_down((900, 550))
        assert session.controller.state.mode == Mode.PANNING

        await session.select_bot("b2")
        assert len(session.store) == 0
        assert session.store.selected_id is None
        assert session.viewport.scale == 1.0
        assert session.viewport.translate_x == 0
        assert session.controller.state.is_idle

    @pytest.mark.asyncio
    async def test_load_failure_marks_offline(self, session, gateway):
        gateway.fail_load = BackendOffline("Backend unreachable")
        assert not await session.select_bot("b1")
        assert session.offline
        assert session.last_error == "Backend unreachable"
        assert not session.loading
        assert len(session.store) == 0

        gateway.fail_load = None
        assert await session.reload()
        assert not session.offline
        assert len(session.store) == 3

    @pytest.mark.asyncio
    async def test_stale_response_is_discarded(self, session, gateway):
        gateway.flows["b2"] = [{"id": "z", "type": "message", "label": "Outro", "next": []}]
        gate = asyncio.Event()
        gateway.gates["b1"] = gate

        slow = asyncio.ensure_future(session.select_bot("b1"))
        await asyncio.sleep(0)
        assert await session.select_bot("b2")

        gate.set()
        assert await slow is False
        assert session.bot_id == "b2"
        assert [n.id for n in session.store.nodes] == ["z"]

    @pytest.mark.asyncio
    async def test_reload_without_bot(self, session):
        assert await session.reload() is False


class TestSaving:
    @pytest.mark.asyncio
    async def test_save_round_trip_keeps_text(self, session, gateway):
        await session.select_bot("b1")
        session.store.update_field("n3", "content", "Qual o preço?")
        assert await session.save()

        reloaded = FlowEditorSession(gateway)
        await reloaded.select_bot("b1")
        assert reloaded.store.get("n3").content == "Qual o preço?"
        assert reloaded.store.serialize() == session.store.serialize()

    @pytest.mark.asyncio
    async def test_save_sends_whole_graph(self, session, gateway):
        await session.select_bot("b1")
        assert await session.save()
        bot_id, nodes = gateway.saved[-1]
        assert bot_id == "b1"
        assert [n["id"] for n in nodes] == ["n1", "n2", "n3"]
        assert nodes[0]["next"] == ["n2"]

    @pytest.mark.asyncio
    async def test_save_failure_keeps_graph(self, session, gateway):
        await session.select_bot("b1")
        session.store.update_field("n1", "label", "Editado")
        before = session.store.serialize()

        gateway.fail_save = ApiError("Flow inválido", 400)
        assert not await session.save()
        assert session.last_error == "Flow inválido"
        assert session.store.serialize() == before
        assert not session.saving

    @pytest.mark.asyncio
    async def test_save_without_bot(self, session, gateway):
        assert not await session.save()
        assert gateway.saved == []


class TestEditing:
    @pytest.mark.asyncio
    async def test_delete_message_node_removes_its_edges(self, session):
        await session.select_bot("b1")
        assert session.delete_node("n1")
        assert "n1" not in session.store
        assert session.store.edges() == [("n2", "n3")]

    @pytest.mark.asyncio
    async def test_delete_middle_node_cascades(self, session):
        await session.select_bot("b1")
        session.delete_node("n2")
        assert session.store.edges() == []

    @pytest.mark.asyncio
    async def test_disconnect(self, session):
        await session.select_bot("b1")
        assert session.disconnect("n1", "n2")
        assert not session.disconnect("n1", "n2")
        assert session.store.edges() == [("n2", "n3")]

    def test_add_node_at_view_center(self, session):
        node = session.add_node(NodeKind.INPUT)
        # center (500, 300) minus half the node box
        assert node.position == (396, 258)
        assert node.label == "User Input"
        assert session.store.selected_id == node.id

    def test_add_node_respects_viewport(self, session):
        session.viewport.apply_pan((100, 100))
        session.viewport.scale = 2.0
        node = session.add_node(NodeKind.MESSAGE)
        # ((500 - 100) / 2, (300 - 100) / 2) minus (104, 42)
        assert node.position == (96, 58)


class TestInspector:
    @pytest.mark.asyncio
    async def test_inspect_selected_node(self, session):
        from botdesk.flow.inspector import inspect

        await session.select_bot("b1")
        assert inspect(session.store) is None

        session.store.select("n3")
        view = inspect(session.store)
        assert (view.node_id, view.kind, view.trigger) == ("n3", NodeKind.INPUT, "1")

        session.store.update_field("n3", "label", "Nome do cliente")
        assert inspect(session.store).label == "Nome do cliente"
