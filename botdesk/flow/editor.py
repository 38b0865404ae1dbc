"""
Flow Editor Session - owns the editing state for one flow editor page.

Combines the graph store, viewport and interaction controller and talks to
the persistence gateway (FlowService) for whole-graph load and save.
"""

import logging
from typing import Any, Dict, List, Optional, Protocol

from botdesk.flow.constants import CANVAS_WIDTH, CANVAS_HEIGHT, NODE_WIDTH, NODE_HEIGHT
from botdesk.flow.controller import InteractionController
from botdesk.flow.graph_store import FlowNode, GraphStore, NodeKind
from botdesk.flow.viewport import ViewportTransform
from botdesk.storage.protocol import BackendError

logger = logging.getLogger(__name__)


class FlowGateway(Protocol):
    async def load_graph(self, bot_id: str) -> List[FlowNode]:
        ...

    async def save_graph(self, bot_id: str, nodes: List[Dict[str, Any]]) -> Any:
        ...


class FlowEditorSession:
    """Editing state for the currently selected bot's flow."""

    def __init__(self, gateway: FlowGateway, width: float = CANVAS_WIDTH, height: float = CANVAS_HEIGHT):
        self.gateway = gateway
        self.width = width
        self.height = height
        self.store = GraphStore()
        self.viewport = ViewportTransform()
        self.controller = InteractionController(self.store, self.viewport)
        self.bot_id: Optional[str] = None
        self.loading = False
        self.saving = False
        self.offline = False
        self.last_error: Optional[str] = None
        self._load_generation = 0

    async def select_bot(self, bot_id: str) -> bool:
        """
        Load the graph for a bot and make it the one being edited.

        The previous graph, selection and viewport are cleared right away. A
        response that arrives after another bot was selected is discarded.
        Returns True when the loaded graph was applied.
        """
        self._load_generation += 1
        generation = self._load_generation
        self.bot_id = bot_id
        self.controller.cancel()
        self.store.replace_all([])
        self.viewport.reset()
        self.loading = True

        try:
            nodes = await self.gateway.load_graph(bot_id)
        except BackendError as e:
            if generation != self._load_generation:
                logger.debug(f"Discarding failed load for {bot_id}; selection changed")
                return False
            logger.warning(f"Failed to load flow for {bot_id}: {e}")
            self.loading = False
            self.offline = True
            self.last_error = str(e)
            return False

        if generation != self._load_generation:
            logger.debug(f"Discarding stale flow for {bot_id}; selection changed")
            return False

        self.store.replace_all(nodes)
        self.loading = False
        self.offline = False
        self.last_error = None
        logger.info(f"Loaded flow for {bot_id} ({len(self.store)} nodes)")
        return True

    async def reload(self) -> bool:
        if self.bot_id is None:
            return False
        return await self.select_bot(self.bot_id)

    async def save(self) -> bool:
        """
        Hand the whole graph to the gateway.

        On failure the in-memory graph is left as it is and False is returned;
        the error text is kept in last_error.
        """
        if self.bot_id is None:
            return False

        bot_id = self.bot_id
        payload = self.store.serialize()
        self.saving = True
        try:
            await self.gateway.save_graph(bot_id, payload)
        except BackendError as e:
            logger.warning(f"Failed to save flow for {bot_id}: {e}")
            self.last_error = str(e)
            return False
        finally:
            self.saving = False

        self.last_error = None
        logger.info(f"Saved flow for {bot_id} ({len(payload)} nodes)")
        return True

    # --- Editing shortcuts used by the page ---

    def add_node(self, kind: NodeKind) -> FlowNode:
        """Add a node centered in the visible area."""
        cx, cy = self.viewport.view_center(self.width, self.height)
        return self.store.add_node(kind, (cx - NODE_WIDTH / 2, cy - NODE_HEIGHT / 2))

    def delete_node(self, node_id: str) -> bool:
        self.controller.cancel()
        return self.store.delete_node(node_id)

    def disconnect(self, source_id: str, target_id: str) -> bool:
        self.controller.cancel()
        return self.store.disconnect(source_id, target_id)
