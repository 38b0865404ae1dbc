"""
Flow persistence gateway.

Whole-graph load and save for one bot. Transport failures propagate as
BackendError so the editor can show its offline state; malformed payloads
are coerced to an empty or cleaned-up node list instead of raising.
"""

import logging
from typing import Any, Dict, List

from botdesk.flow.graph_store import FlowNode, nodes_from_wire
from botdesk.storage.client import ApiClient
from botdesk.storage.protocol import ApiError

logger = logging.getLogger(__name__)


class FlowService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def load_graph(self, bot_id: str) -> List[FlowNode]:
        """Nodes of a bot's flow. A bot without a stored flow (404) has an empty graph."""
        try:
            payload = await self.client.get(f'/bots/{bot_id}/flow')
        except ApiError as e:
            if e.status_code != 404:
                raise
            logger.info(f"No flow stored for {bot_id}; starting with an empty graph")
            return []
        if payload is not None and not isinstance(payload, list):
            logger.warning(f"Flow payload for {bot_id} is {type(payload).__name__}, expected list; using empty graph")
        return nodes_from_wire(payload)

    async def save_graph(self, bot_id: str, nodes: List[Dict[str, Any]]) -> None:
        await self.client.post(f'/bots/{bot_id}/flow', {'nodes': nodes})

    async def update_node(self, bot_id: str, node_id: str, fields: Dict[str, Any]) -> None:
        """Partial update of a single node (wire field names)."""
        await self.client.put(f'/bots/{bot_id}/flow/nodes/{node_id}', fields)
