from typing import Any, Dict, List, Optional

from botdesk.models import Bot, BotStatus
from botdesk.storage.client import ApiClient


class BotService:
    """Bot lifecycle on /bots."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self) -> List[Bot]:
        data = await self.client.get('/bots')
        return [Bot.from_dict(b) for b in data] if isinstance(data, list) else []

    async def get_by_id(self, bot_id: str) -> Optional[Bot]:
        data = await self.client.get(f'/bots/{bot_id}')
        return Bot.from_dict(data) if isinstance(data, dict) else None

    async def create(self, name: str, phone_number: str) -> Optional[Bot]:
        data = await self.client.post('/bots', {'name': name, 'phoneNumber': phone_number})
        return Bot.from_dict(data) if isinstance(data, dict) else None

    async def update(self, bot_id: str, fields: Dict[str, Any]) -> Optional[Bot]:
        data = await self.client.put(f'/bots/{bot_id}', fields)
        return Bot.from_dict(data) if isinstance(data, dict) else None

    async def toggle_status(self, bot_id: str, status: BotStatus) -> None:
        await self.client.put(f'/bots/{bot_id}/status', {'status': BotStatus(status).value})

    async def delete(self, bot_id: str) -> None:
        await self.client.delete(f'/bots/{bot_id}')
