"""
Graph Store - authoritative node collection for the flow being edited.

All mutations go through GraphStore so rendering stays a pure projection.
Operations on unknown ids are silent no-ops: the interactive surface must
never crash because of a stale id.

Connections live in each node's `outgoing` list. A connection has no id of
its own; its identity is the (source, target) pair.
"""

import uuid
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Dict, Iterable, List, Optional, Tuple

from botdesk.flow.constants import DEFAULT_LABELS

EDITABLE_FIELDS = ('label', 'content', 'trigger')


class NodeKind(str, Enum):
    MESSAGE = 'message'
    INPUT = 'input'
    MENU = 'menu'

    @classmethod
    def coerce(cls, value: Any) -> 'NodeKind':
        if isinstance(value, cls):
            return value
        try:
            return cls(str(value).strip().lower())
        except ValueError:
            return cls.MESSAGE

    @property
    def default_label(self) -> str:
        return DEFAULT_LABELS[self.value]


def _as_float(value: Any) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _as_text(value: Any) -> str:
    return '' if value is None else str(value)


@dataclass
class FlowNode:
    """A conversation step."""
    id: str
    kind: NodeKind = NodeKind.MESSAGE
    label: str = ''
    content: str = ''
    trigger: str = ''
    x: float = 0.0
    y: float = 0.0
    outgoing: List[str] = field(default_factory=list)

    @property
    def position(self) -> Tuple[float, float]:
        return (self.x, self.y)

    def to_wire(self) -> Dict[str, Any]:
        """Serialize to the persisted shape ('type' and 'next' are the wire names)."""
        return {
            'id': self.id,
            'type': self.kind.value,
            'label': self.label,
            'content': self.content,
            'trigger': self.trigger,
            'x': self.x,
            'y': self.y,
            'next': list(self.outgoing),
        }

    @classmethod
    def from_wire(cls, data: Any) -> Optional['FlowNode']:
        """
        Build a node from a persisted record, coercing defensively.

        Returns None for records that cannot be nodes (not a dict, no id).
        """
        if not isinstance(data, dict):
            return None
        node_id = data.get('id')
        if node_id is None or node_id == '':
            return None

        kind = NodeKind.coerce(data.get('type'))
        raw_next = data.get('next')
        outgoing = [str(t) for t in raw_next if t is not None] if isinstance(raw_next, list) else []

        return cls(
            id=str(node_id),
            kind=kind,
            label=_as_text(data['label']) if 'label' in data else kind.default_label,
            content=_as_text(data.get('content')),
            trigger=_as_text(data.get('trigger')),
            x=_as_float(data.get('x')),
            y=_as_float(data.get('y')),
            outgoing=outgoing,
        )


def nodes_from_wire(payload: Any) -> List[FlowNode]:
    """Coerce a loaded payload into nodes; anything that is not a list is an empty graph."""
    if not isinstance(payload, list):
        return []
    nodes = []
    for record in payload:
        node = FlowNode.from_wire(record)
        if node is not None:
            nodes.append(node)
    return nodes


def new_node_id() -> str:
    return str(uuid.uuid4())


class GraphStore:
    """In-memory node collection with the editor's mutation operations."""

    def __init__(self, nodes: Optional[Iterable[FlowNode]] = None):
        self._nodes: Dict[str, FlowNode] = {}
        self._selected_id: Optional[str] = None
        if nodes is not None:
            self.replace_all(nodes)

    # --- Queries ---

    @property
    def nodes(self) -> List[FlowNode]:
        return list(self._nodes.values())

    @property
    def selected_id(self) -> Optional[str]:
        return self._selected_id

    @property
    def selected(self) -> Optional[FlowNode]:
        if self._selected_id is None:
            return None
        return self._nodes.get(self._selected_id)

    def get(self, node_id: str) -> Optional[FlowNode]:
        return self._nodes.get(node_id)

    def __contains__(self, node_id: str) -> bool:
        return node_id in self._nodes

    def __len__(self) -> int:
        return len(self._nodes)

    def edges(self) -> List[Tuple[str, str]]:
        """All (source, target) pairs in node order."""
        return [(n.id, t) for n in self._nodes.values() for t in n.outgoing]

    # --- Mutations ---

    def select(self, node_id: Optional[str]) -> None:
        if node_id is None or node_id in self._nodes:
            self._selected_id = node_id

    def add_node(self, kind: NodeKind, position: Tuple[float, float]) -> FlowNode:
        """Create a node at a virtual position; it becomes the selected node."""
        kind = NodeKind.coerce(kind)
        node_id = new_node_id()
        while node_id in self._nodes:
            node_id = new_node_id()

        node = FlowNode(
            id=node_id,
            kind=kind,
            label=kind.default_label,
            x=float(position[0]),
            y=float(position[1]),
        )
        self._nodes[node_id] = node
        self._selected_id = node_id
        return node

    def move_node(self, node_id: str, delta: Tuple[float, float]) -> None:
        node = self._nodes.get(node_id)
        if node is None:
            return
        node.x += delta[0]
        node.y += delta[1]

    def update_field(self, node_id: str, field_name: str, value: str) -> None:
        if field_name not in EDITABLE_FIELDS:
            raise ValueError(f"Field '{field_name}' is not editable (expected one of {EDITABLE_FIELDS})")
        node = self._nodes.get(node_id)
        if node is None:
            return
        setattr(node, field_name, _as_text(value))

    def connect(self, source_id: str, target_id: str) -> bool:
        """Add source -> target. Self-connections and duplicates are ignored. Returns True if added."""
        if source_id == target_id:
            return False
        source = self._nodes.get(source_id)
        if source is None or target_id not in self._nodes:
            return False
        if target_id in source.outgoing:
            return False
        source.outgoing.append(target_id)
        return True

    def disconnect(self, source_id: str, target_id: str) -> bool:
        source = self._nodes.get(source_id)
        if source is None or target_id not in source.outgoing:
            return False
        source.outgoing.remove(target_id)
        return True

    def delete_node(self, node_id: str) -> bool:
        """Remove a node and every connection pointing at it."""
        if node_id not in self._nodes:
            return False
        del self._nodes[node_id]
        for node in self._nodes.values():
            if node_id in node.outgoing:
                node.outgoing = [t for t in node.outgoing if t != node_id]
        if self._selected_id == node_id:
            self._selected_id = None
        return True

    def replace_all(self, nodes: Iterable[FlowNode]) -> None:
        """
        Bulk-replace the collection (used after a load).

        Duplicate ids keep the first record. Self-loops, repeated targets and
        targets that are not in the new collection are dropped.
        """
        fresh: Dict[str, FlowNode] = {}
        for node in nodes:
            if node.id not in fresh:
                fresh[node.id] = node

        for node in fresh.values():
            cleaned = []
            for target in node.outgoing:
                if target != node.id and target in fresh and target not in cleaned:
                    cleaned.append(target)
            node.outgoing = cleaned

        self._nodes = fresh
        if self._selected_id not in fresh:
            self._selected_id = None

    def serialize(self) -> List[Dict[str, Any]]:
        return [node.to_wire() for node in self._nodes.values()]
