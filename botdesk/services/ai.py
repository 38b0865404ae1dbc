from typing import List, Optional

from botdesk.models import AIConfig, KnowledgeItem, TrainingExample
from botdesk.storage.client import ApiClient


class AIService:
    """Per-bot AI behavior, knowledge base and training examples."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_config(self, bot_id: str) -> AIConfig:
        return AIConfig.from_dict(await self.client.get(f'/bots/{bot_id}/ai/config'), bot_id=bot_id)

    async def update_config(self, bot_id: str, config: AIConfig) -> None:
        await self.client.put(f'/bots/{bot_id}/ai/config', config.to_dict())

    async def get_knowledge(self, bot_id: str) -> List[KnowledgeItem]:
        data = await self.client.get(f'/bots/{bot_id}/ai/knowledge')
        return [KnowledgeItem.from_dict(k) for k in data] if isinstance(data, list) else []

    async def add_knowledge(self, bot_id: str, title: str, content: str) -> Optional[KnowledgeItem]:
        item = KnowledgeItem(id='', bot_id=bot_id, title=title, content=content)
        data = await self.client.post(f'/bots/{bot_id}/ai/knowledge', item.to_dict(include_id=False))
        return KnowledgeItem.from_dict(data) if isinstance(data, dict) else None

    async def delete_knowledge(self, item_id: str) -> None:
        await self.client.delete(f'/ai/knowledge/{item_id}')

    async def get_examples(self, bot_id: str) -> List[TrainingExample]:
        data = await self.client.get(f'/bots/{bot_id}/ai/examples')
        return [TrainingExample.from_dict(e) for e in data] if isinstance(data, list) else []

    async def add_example(self, bot_id: str, user_message: str, ideal_response: str) -> Optional[TrainingExample]:
        example = TrainingExample(id='', bot_id=bot_id, user_message=user_message, ideal_response=ideal_response)
        data = await self.client.post(f'/bots/{bot_id}/ai/examples', example.to_dict(include_id=False))
        return TrainingExample.from_dict(data) if isinstance(data, dict) else None

    async def delete_example(self, example_id: str) -> None:
        await self.client.delete(f'/ai/examples/{example_id}')

    async def preview(self, bot_id: str, message: str) -> str:
        """Ask the bot's AI for a reply to a test message."""
        data = await self.client.post(f'/bots/{bot_id}/ai/preview', {'message': message})
        if isinstance(data, dict):
            return str(data.get('response') or '')
        return ''
