"""
Tests for the pointer-driven interaction state machine.

Layout used throughout (identity viewport unless noted):
  node A at (0, 0):   input handle (0, 42),   output handle (208, 42)
  node B at (400, 0): input handle (400, 42), output handle (608, 42)
"""

import pytest

from botdesk.flow.controller import HitKind, HitTarget, InteractionController, Mode
from botdesk.flow.graph_store import GraphStore, NodeKind
from botdesk.flow.viewport import ViewportTransform

EMPTY = (700, 500)


@pytest.fixture
def store():
    return GraphStore()


@pytest.fixture
def nodes(store):
    a = store.add_node(NodeKind.MESSAGE, (0, 0))
    b = store.add_node(NodeKind.MENU, (400, 0))
    store.select(None)
    return a, b


@pytest.fixture
def controller(store, nodes):
    return InteractionController(store, ViewportTransform())


class TestHitTesting:
    def test_output_handle_beats_node_body(self, controller, nodes):
        a, _ = nodes
        target = controller.hit_test((206, 42))
        assert target.kind == HitKind.OUTPUT_HANDLE
        assert target.node_id == a.id

    def test_input_handle(self, controller, nodes):
        _, b = nodes
        target = controller.hit_test((402, 40))
        assert target == controller.hit_test((400, 42))
        assert target.kind == HitKind.INPUT_HANDLE and target.node_id == b.id

    def test_node_body(self, controller, nodes):
        a, _ = nodes
        assert controller.hit_test((100, 70)).kind == HitKind.NODE
        assert controller.hit_test((100, 70)).node_id == a.id

    def test_topmost_node_wins(self, store, controller, nodes):
        top = store.add_node(NodeKind.INPUT, (50, 20))
        assert controller.hit_test((100, 60)).node_id == top.id

    def test_background(self, controller):
        assert controller.hit_test(EMPTY).kind == HitKind.BACKGROUND


class TestOverlappingNodes:
    @pytest.fixture
    def stacked(self):
        store = GraphStore()
        bottom = store.add_node(NodeKind.MESSAGE, (0, 0))
        top = store.add_node(NodeKind.MENU, (150, 0))
        store.select(None)
        return InteractionController(store, ViewportTransform()), bottom, top

    def test_top_body_shields_handle_beneath(self, stacked):
        controller, _, top = stacked
        # bottom node's output handle sits at (208, 42), inside the top node's box
        target = controller.pointer_down((208, 42))
        assert target == HitTarget(HitKind.NODE, node_id=top.id)
        assert controller.state.mode == Mode.DRAGGING_NODE
        assert controller.state.dragging_node_id == top.id

    def test_handle_outside_top_node_still_reachable(self, stacked):
        controller, bottom, _ = stacked
        assert controller.hit_test((0, 42)) == HitTarget(HitKind.INPUT_HANDLE, node_id=bottom.id)
        assert controller.hit_test((60, 70)) == HitTarget(HitKind.NODE, node_id=bottom.id)

    def test_top_node_handles_win(self, stacked):
        controller, _, top = stacked
        assert controller.hit_test((152, 42)) == HitTarget(HitKind.INPUT_HANDLE, node_id=top.id)


class TestTransitions:
    def test_background_pans(self, controller):
        controller.pointer_down(EMPTY)
        assert controller.state.mode == Mode.PANNING
        controller.pointer_move((710, 520))
        controller.pointer_move((705, 530))
        assert (controller.viewport.translate_x, controller.viewport.translate_y) == (5, 30)
        controller.pointer_up((705, 530))
        assert controller.state.is_idle

    def test_pan_ignores_scale(self, controller):
        controller.viewport.scale = 2.0
        controller.pointer_down((1500, 1200))
        controller.pointer_move((1510, 1190))
        assert (controller.viewport.translate_x, controller.viewport.translate_y) == (10, -10)

    def test_drag_node_selects_and_moves(self, store, controller, nodes):
        a, _ = nodes
        controller.pointer_down((100, 60))
        assert controller.state.mode == Mode.DRAGGING_NODE
        assert controller.state.dragging_node_id == a.id
        assert store.selected_id == a.id

        controller.pointer_move((130, 50))
        assert a.position == (30, -10)
        assert controller.viewport.translate_x == 0

    def test_drag_delta_divided_by_scale(self, controller, nodes):
        a, _ = nodes
        controller.viewport.scale = 2.0
        controller.pointer_down((100, 60))
        controller.pointer_move((120, 40))
        assert a.position == (10, -10)

    def test_pointer_down_on_input_handle_drags_its_node(self, controller, nodes):
        _, b = nodes
        controller.pointer_down((400, 42))
        assert controller.state.dragging_node_id == b.id

    def test_connect_to_input_handle(self, store, controller, nodes):
        a, b = nodes
        controller.pointer_down((208, 42))
        assert controller.state.mode == Mode.CONNECTING
        assert controller.state.connecting_from == a.id

        controller.pointer_move((300, 120))
        assert controller.state.live_point == (300, 120)

        created = controller.pointer_up((401, 43))
        assert created == (a.id, b.id)
        assert a.outgoing == [b.id]
        assert controller.state.is_idle

    def test_release_over_background_discards_connection(self, store, controller, nodes):
        a, _ = nodes
        before = store.serialize()
        controller.pointer_down((208, 42))
        controller.pointer_move((500, 300))
        created = controller.pointer_up((650, 450))
        assert created is None
        assert a.outgoing == []
        assert store.serialize() == before
        assert controller.state.is_idle
        assert controller.state.live_point is None

    def test_release_over_node_body_does_not_connect(self, controller, nodes):
        a, _ = nodes
        controller.pointer_down((208, 42))
        assert controller.pointer_up((500, 60)) is None
        assert a.outgoing == []

    def test_release_over_own_input_handle_does_not_self_connect(self, controller, nodes):
        a, _ = nodes
        controller.pointer_down((208, 42))
        assert controller.pointer_up((0, 42)) is None
        assert a.outgoing == []

    def test_live_point_tracks_virtual_coordinates(self, controller):
        controller.viewport.translate_x = 100
        controller.viewport.scale = 2.0
        # output handle of A on screen: 208 * 2 + 100 = 516, 42 * 2 = 84
        controller.pointer_down((516, 84))
        assert controller.state.mode == Mode.CONNECTING
        controller.pointer_move((300, 200))
        assert controller.state.live_point == (100, 100)

    def test_pointer_leave_returns_to_idle(self, controller, nodes):
        controller.pointer_down((100, 60))
        controller.pointer_leave()
        assert controller.state.is_idle
        controller.pointer_down((208, 42))
        controller.pointer_leave()
        assert controller.state.is_idle
        assert nodes[0].outgoing == []

    def test_new_pointer_down_replaces_stale_interaction(self, controller, nodes):
        controller.pointer_down(EMPTY)
        controller.pointer_down((100, 60))
        assert controller.state.mode == Mode.DRAGGING_NODE

    def test_idle_move_does_nothing_to_graph(self, store, controller):
        before = store.serialize()
        controller.pointer_move((100, 60))
        controller.pointer_move((150, 90))
        assert store.serialize() == before

    def test_wheel_zooms(self, controller):
        controller.wheel(100)
        assert controller.viewport.scale == pytest.approx(0.9)


class TestEdgeHover:
    @pytest.fixture
    def connected(self, store, nodes):
        a, b = nodes
        store.connect(a.id, b.id)
        return a, b

    def test_hover_reveals_edge(self, controller, connected):
        a, b = connected
        controller.pointer_move((304, 46))
        assert controller.state.hovered_edge == (a.id, b.id)
        controller.pointer_move(EMPTY)
        assert controller.state.hovered_edge is None

    def test_delete_badge_reports_edge_and_stays_idle(self, controller, connected):
        a, b = connected
        controller.pointer_move((304, 44))
        target = controller.pointer_down((304, 42))
        assert target.kind == HitKind.EDGE_DELETE
        assert target.edge == (a.id, b.id)
        assert controller.state.is_idle
        assert a.outgoing == [b.id]

    def test_badge_needs_hover_first(self, controller, connected):
        assert controller.pointer_down((304, 42)).kind == HitKind.BACKGROUND

    def test_leave_clears_hover(self, controller, connected):
        controller.pointer_move((304, 44))
        controller.pointer_leave()
        assert controller.state.hovered_edge is None


class TestStateCallback:
    def test_callback_on_transitions(self, controller):
        seen = []
        controller.set_on_state_change(lambda s: seen.append(s.mode))
        controller.pointer_down((208, 42))
        controller.pointer_move((300, 300))
        controller.pointer_up((300, 300))
        assert seen[0] == Mode.CONNECTING
        assert seen[-1] == Mode.IDLE

    def test_no_callback_when_nothing_changes(self, controller):
        seen = []
        controller.set_on_state_change(seen.append)
        controller.pointer_move(EMPTY)
        controller.pointer_up(EMPTY)
        assert seen == []
