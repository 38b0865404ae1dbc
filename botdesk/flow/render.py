"""
Flow renderer - projects the graph store and interaction state to SVG.

The scene is built first as plain data (testable without a browser), then
turned into SVG markup for the canvas. Rendering never mutates the store.

Edges are collected through a NetworkX DiGraph so that an edge is only drawn
when both of its endpoints are present.
"""

from dataclasses import dataclass, field
from html import escape
from typing import List, Optional, Tuple

import networkx as nx

from botdesk.flow import geometry
from botdesk.flow.constants import (
    NODE_WIDTH,
    NODE_HEIGHT,
    HANDLE_RADIUS,
    EDGE_DELETE_RADIUS,
    GRID_SPACING,
)
from botdesk.flow.controller import InteractionState
from botdesk.flow.graph_store import GraphStore, NodeKind
from botdesk.flow.viewport import Point, ViewportTransform

KIND_COLORS = {
    NodeKind.MESSAGE: '#3b82f6',
    NodeKind.INPUT: '#10b981',
    NodeKind.MENU: '#a855f7',
}

KIND_ICONS = {
    NodeKind.MESSAGE: '✉',
    NodeKind.INPUT: '✎',
    NodeKind.MENU: '☰',
}

PREVIEW_LENGTH = 38


@dataclass
class NodeView:
    id: str
    kind: NodeKind
    label: str
    preview: str
    x: float
    y: float
    selected: bool = False
    dragging: bool = False


@dataclass
class EdgeView:
    source: str
    target: str
    path: str
    midpoint: Point
    trigger: str = ''
    badge_width: float = 0.0
    hovered: bool = False

    @property
    def key(self) -> Tuple[str, str]:
        return (self.source, self.target)


@dataclass
class FlowScene:
    nodes: List[NodeView] = field(default_factory=list)
    edges: List[EdgeView] = field(default_factory=list)
    provisional_path: Optional[str] = None


def _preview(content: str) -> str:
    text = ' '.join(content.split())
    if len(text) > PREVIEW_LENGTH:
        return text[:PREVIEW_LENGTH - 1] + '…'
    return text


class FlowRenderer:
    """Builds FlowScene objects and their SVG representation."""

    def __init__(self):
        self.G = nx.DiGraph()

    def build_scene(self, store: GraphStore, state: Optional[InteractionState] = None) -> FlowScene:
        state = state or InteractionState()

        self.G = nx.DiGraph()
        for node in store.nodes:
            self.G.add_node(node.id, position=node.position)
        for source, target in store.edges():
            # Only add edges if both nodes exist
            if source in self.G.nodes and target in self.G.nodes:
                self.G.add_edge(source, target)

        scene = FlowScene()
        for node in store.nodes:
            scene.nodes.append(NodeView(
                id=node.id,
                kind=node.kind,
                label=node.label,
                preview=_preview(node.content),
                x=node.x,
                y=node.y,
                selected=node.id == store.selected_id,
                dragging=node.id == state.dragging_node_id,
            ))

        for source, target in self.G.edges():
            start = geometry.output_handle(self.G.nodes[source]['position'])
            end = geometry.input_handle(self.G.nodes[target]['position'])
            trigger = store.get(target).trigger
            scene.edges.append(EdgeView(
                source=source,
                target=target,
                path=geometry.edge_path(start, end),
                midpoint=geometry.edge_midpoint(start, end),
                trigger=trigger,
                badge_width=geometry.trigger_badge_width(trigger) if trigger else 0.0,
                hovered=state.hovered_edge == (source, target),
            ))

        source_id = state.connecting_from
        if source_id is not None and source_id in self.G.nodes and state.live_point is not None:
            start = geometry.output_handle(self.G.nodes[source_id]['position'])
            scene.provisional_path = geometry.edge_path(start, state.live_point)

        return scene

    def render_svg(self, scene: FlowScene, viewport: ViewportTransform,
                   width: float, height: float) -> str:
        """SVG content for the canvas: dotted background plus the transformed graph layer."""
        parts = [self._background(viewport, width, height), f'<g transform="{viewport.svg_transform()}">']

        for edge in scene.edges:
            parts.append(self._edge_svg(edge))
        if scene.provisional_path:
            parts.append(
                f'<path d="{scene.provisional_path}" fill="none" stroke="#94a3b8" '
                f'stroke-width="2" stroke-dasharray="6,4" />'
            )
        # Badges sit below nodes, matching hit testing where nodes take precedence
        for edge in scene.edges:
            parts.append(self._edge_badges_svg(edge))
        for node in scene.nodes:
            parts.append(self._node_svg(node))

        parts.append('</g>')
        return ''.join(parts)

    def render(self, store: GraphStore, viewport: ViewportTransform, state: Optional[InteractionState],
               width: float, height: float) -> str:
        return self.render_svg(self.build_scene(store, state), viewport, width, height)

    @staticmethod
    def _background(viewport: ViewportTransform, width: float, height: float) -> str:
        spacing = GRID_SPACING * viewport.scale
        offset_x = viewport.translate_x % spacing
        offset_y = viewport.translate_y % spacing
        return (
            '<defs><pattern id="flow-grid" patternUnits="userSpaceOnUse" '
            f'width="{spacing:.2f}" height="{spacing:.2f}" x="{offset_x:.2f}" y="{offset_y:.2f}">'
            '<circle cx="1" cy="1" r="1" fill="#334155" /></pattern></defs>'
            f'<rect x="0" y="0" width="{width}" height="{height}" fill="#0f172a" />'
            f'<rect x="0" y="0" width="{width}" height="{height}" fill="url(#flow-grid)" />'
        )

    @staticmethod
    def _edge_svg(edge: EdgeView) -> str:
        color = '#f87171' if edge.hovered else '#64748b'
        return f'<path d="{edge.path}" fill="none" stroke="{color}" stroke-width="2" />'

    @staticmethod
    def _edge_badges_svg(edge: EdgeView) -> str:
        mx, my = edge.midpoint
        parts = []
        if edge.trigger:
            w = edge.badge_width
            parts.append(
                f'<rect x="{mx - w / 2:.2f}" y="{my - 11:.2f}" width="{w:.2f}" height="22" rx="11" '
                f'fill="#1e293b" stroke="#f59e0b" />'
                f'<text x="{mx:.2f}" y="{my + 4:.2f}" text-anchor="middle" font-size="12" '
                f'fill="#fbbf24">{escape(edge.trigger)}</text>'
            )
        if edge.hovered:
            parts.append(
                f'<circle cx="{mx:.2f}" cy="{my:.2f}" r="{EDGE_DELETE_RADIUS}" fill="#ef4444" />'
                f'<text x="{mx:.2f}" y="{my + 4:.2f}" text-anchor="middle" font-size="12" '
                f'fill="#ffffff">✕</text>'
            )
        return ''.join(parts)

    @staticmethod
    def _node_svg(node: NodeView) -> str:
        color = KIND_COLORS.get(node.kind, KIND_COLORS[NodeKind.MESSAGE])
        border = '#f8fafc' if node.selected else '#334155'
        opacity = '0.85' if node.dragging else '1'
        out_x, out_y = geometry.output_handle((node.x, node.y))
        in_x, in_y = geometry.input_handle((node.x, node.y))
        return (
            f'<g opacity="{opacity}">'
            f'<rect x="{node.x:.2f}" y="{node.y:.2f}" width="{NODE_WIDTH}" height="{NODE_HEIGHT}" rx="10" '
            f'fill="#1e293b" stroke="{border}" stroke-width="{2 if node.selected else 1}" />'
            f'<rect x="{node.x:.2f}" y="{node.y:.2f}" width="6" height="{NODE_HEIGHT}" rx="3" fill="{color}" />'
            f'<text x="{node.x + 18:.2f}" y="{node.y + 28:.2f}" font-size="14" font-weight="600" '
            f'fill="#f1f5f9">{KIND_ICONS[node.kind]} {escape(node.label)}</text>'
            f'<text x="{node.x + 18:.2f}" y="{node.y + 56:.2f}" font-size="12" '
            f'fill="#94a3b8">{escape(node.preview)}</text>'
            f'<circle cx="{in_x:.2f}" cy="{in_y:.2f}" r="{HANDLE_RADIUS / 2}" fill="#64748b" '
            f'stroke="#0f172a" stroke-width="2" />'
            f'<circle cx="{out_x:.2f}" cy="{out_y:.2f}" r="{HANDLE_RADIUS / 2}" fill="{color}" '
            f'stroke="#0f172a" stroke-width="2" />'
            '</g>'
        )
