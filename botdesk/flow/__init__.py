"""
Visual flow editor.

Core (no UI dependency):
- viewport: screen <-> virtual coordinate transform with pan and zoom
- graph_store: node collection and its mutations
- controller: pointer-driven interaction state machine
- render: scene projection and SVG output
- editor: per-page session with load/save through the flow gateway

NiceGUI surface:
- surface.FlowCanvas, inspector.InspectorPanel
"""

from botdesk.flow.viewport import ViewportTransform
from botdesk.flow.graph_store import FlowNode, GraphStore, NodeKind, nodes_from_wire
from botdesk.flow.controller import HitKind, HitTarget, InteractionController, InteractionState, Mode
from botdesk.flow.render import FlowRenderer, FlowScene
from botdesk.flow.editor import FlowEditorSession

__all__ = [
    'ViewportTransform',
    'FlowNode',
    'GraphStore',
    'NodeKind',
    'nodes_from_wire',
    'HitKind',
    'HitTarget',
    'InteractionController',
    'InteractionState',
    'Mode',
    'FlowRenderer',
    'FlowScene',
    'FlowEditorSession',
]
