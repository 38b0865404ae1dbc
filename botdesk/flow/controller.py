"""
Interaction Controller - pointer-driven state machine for the flow canvas.

The canvas element owns event capture and forwards every pointer event here.
At most one interaction is active at a time:

    Idle -> Panning             pointer-down on background
    Idle -> DraggingNode(id)    pointer-down on a node body (selects it)
    Idle -> Connecting(id, pt)  pointer-down on a node's output handle
    any  -> Idle                pointer-up or pointer-leave

A connection is created only when the pointer is released over another
node's input handle. Everything else discards the in-progress connection.
"""

import logging
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional, Tuple

from botdesk.flow import geometry
from botdesk.flow.constants import (
    HANDLE_RADIUS,
    EDGE_HOVER_TOLERANCE,
    EDGE_DELETE_RADIUS,
)
from botdesk.flow.graph_store import GraphStore
from botdesk.flow.viewport import Point, ViewportTransform

logger = logging.getLogger(__name__)

Edge = Tuple[str, str]


class Mode(str, Enum):
    IDLE = 'idle'
    PANNING = 'panning'
    DRAGGING_NODE = 'dragging_node'
    CONNECTING = 'connecting'


class HitKind(str, Enum):
    OUTPUT_HANDLE = 'output_handle'
    INPUT_HANDLE = 'input_handle'
    NODE = 'node'
    EDGE_DELETE = 'edge_delete'
    BACKGROUND = 'background'


@dataclass(frozen=True)
class HitTarget:
    kind: HitKind
    node_id: Optional[str] = None
    edge: Optional[Edge] = None


@dataclass(frozen=True)
class InteractionState:
    """Snapshot of the current interaction."""
    mode: Mode = Mode.IDLE
    node_id: Optional[str] = None
    live_point: Optional[Point] = None
    hovered_edge: Optional[Edge] = None

    @property
    def is_idle(self) -> bool:
        return self.mode == Mode.IDLE

    @property
    def dragging_node_id(self) -> Optional[str]:
        return self.node_id if self.mode == Mode.DRAGGING_NODE else None

    @property
    def connecting_from(self) -> Optional[str]:
        return self.node_id if self.mode == Mode.CONNECTING else None


class InteractionController:
    """Routes pointer events into viewport and graph store mutations."""

    def __init__(self, store: GraphStore, viewport: ViewportTransform):
        self.store = store
        self.viewport = viewport
        self._state = InteractionState()
        self._last_screen: Optional[Point] = None
        self._on_state_change: Optional[Callable[[InteractionState], None]] = None

    @property
    def state(self) -> InteractionState:
        return self._state

    def set_on_state_change(self, callback: Callable[[InteractionState], None]):
        self._on_state_change = callback

    def _notify_change(self):
        if self._on_state_change:
            self._on_state_change(self._state)

    def _set_state(self, state: InteractionState):
        self._state = state
        self._notify_change()

    # --- Hit testing ---

    def hit_test(self, point: Point) -> HitTarget:
        """
        Resolve what lies under a virtual point.

        Nodes are walked topmost first and the first node hit wins, so a node
        shields everything drawn beneath it. Within a node the precedence is
        output handle, input handle, body. Past all nodes comes the hovered
        edge's delete badge, then background.
        """
        for node in reversed(self.store.nodes):
            if geometry.distance(point, geometry.output_handle(node.position)) <= HANDLE_RADIUS:
                return HitTarget(HitKind.OUTPUT_HANDLE, node_id=node.id)
            if geometry.distance(point, geometry.input_handle(node.position)) <= HANDLE_RADIUS:
                return HitTarget(HitKind.INPUT_HANDLE, node_id=node.id)
            if geometry.point_in_node(point, node.position):
                return HitTarget(HitKind.NODE, node_id=node.id)

        hovered = self._state.hovered_edge
        if hovered is not None:
            endpoints = self._edge_endpoints(hovered)
            if endpoints is not None:
                midpoint = geometry.edge_midpoint(*endpoints)
                if geometry.distance(point, midpoint) <= EDGE_DELETE_RADIUS:
                    return HitTarget(HitKind.EDGE_DELETE, edge=hovered)

        return HitTarget(HitKind.BACKGROUND)

    def _edge_endpoints(self, edge: Edge) -> Optional[Tuple[Point, Point]]:
        source, target = self.store.get(edge[0]), self.store.get(edge[1])
        if source is None or target is None or edge[1] not in source.outgoing:
            return None
        return geometry.output_handle(source.position), geometry.input_handle(target.position)

    def find_edge_at(self, point: Point) -> Optional[Edge]:
        """Closest edge within hover tolerance of a virtual point."""
        closest = None
        closest_dist = float('inf')
        for edge in self.store.edges():
            endpoints = self._edge_endpoints(edge)
            if endpoints is None:
                continue
            dist = geometry.distance_to_edge(point, *endpoints)
            if dist < EDGE_HOVER_TOLERANCE and dist < closest_dist:
                closest_dist = dist
                closest = edge
        return closest

    # --- Pointer events (screen coordinates relative to the canvas) ---

    def pointer_down(self, screen: Point) -> HitTarget:
        """
        Start an interaction for the target under the pointer.

        Returns the resolved target; for EDGE_DELETE the machine stays Idle and
        the caller is expected to confirm and disconnect.
        """
        if not self._state.is_idle:
            self._state = replace(self._state, mode=Mode.IDLE, node_id=None, live_point=None)

        self._last_screen = screen
        virtual = self.viewport.screen_to_virtual(screen)
        target = self.hit_test(virtual)

        if target.kind == HitKind.OUTPUT_HANDLE:
            self._set_state(InteractionState(Mode.CONNECTING, node_id=target.node_id, live_point=virtual))
        elif target.kind in (HitKind.NODE, HitKind.INPUT_HANDLE):
            self.store.select(target.node_id)
            self._set_state(InteractionState(Mode.DRAGGING_NODE, node_id=target.node_id))
        elif target.kind == HitKind.BACKGROUND:
            self._set_state(InteractionState(Mode.PANNING))
        return target

    def pointer_move(self, screen: Point) -> InteractionState:
        last = self._last_screen if self._last_screen is not None else screen
        delta = (screen[0] - last[0], screen[1] - last[1])
        self._last_screen = screen
        mode = self._state.mode

        if mode == Mode.PANNING:
            self.viewport.apply_pan(delta)
            self._notify_change()
        elif mode == Mode.DRAGGING_NODE:
            self.store.move_node(self._state.node_id, self.viewport.screen_delta_to_virtual(delta))
            self._notify_change()
        elif mode == Mode.CONNECTING:
            self._set_state(replace(self._state, live_point=self.viewport.screen_to_virtual(screen)))
        else:
            hovered = self.find_edge_at(self.viewport.screen_to_virtual(screen))
            if hovered is None and self._state.hovered_edge is not None:
                # Keep the badge reachable while the pointer sits on it
                if self.hit_test(self.viewport.screen_to_virtual(screen)).kind == HitKind.EDGE_DELETE:
                    hovered = self._state.hovered_edge
            if hovered != self._state.hovered_edge:
                self._set_state(replace(self._state, hovered_edge=hovered))
        return self._state

    def pointer_up(self, screen: Point) -> Optional[Edge]:
        """Finish the active interaction. Returns the created edge, if any."""
        created = None
        if self._state.mode == Mode.CONNECTING:
            source_id = self._state.node_id
            target = self.hit_test(self.viewport.screen_to_virtual(screen))
            if target.kind == HitKind.INPUT_HANDLE and self.store.connect(source_id, target.node_id):
                created = (source_id, target.node_id)
                logger.debug(f"Connected {source_id} -> {target.node_id}")
        self._to_idle()
        return created

    def pointer_leave(self) -> None:
        self._to_idle(clear_hover=True)

    def wheel(self, delta_y: float) -> None:
        self.viewport.apply_zoom(delta_y)
        self._notify_change()

    def cancel(self) -> None:
        """Drop any interaction (used when the graph is replaced underneath)."""
        self._to_idle(clear_hover=True)

    def _to_idle(self, clear_hover: bool = False):
        self._last_screen = None
        hovered = None if clear_hover else self._state.hovered_edge
        if self._state.is_idle and hovered == self._state.hovered_edge:
            return
        self._set_state(InteractionState(Mode.IDLE, hovered_edge=hovered))

