from botdesk.models import ABTestConfig
from botdesk.storage.client import ApiClient


class ABTestService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_config(self) -> ABTestConfig:
        return ABTestConfig.from_dict(await self.client.get('/abtest'))

    async def update_config(self, config: ABTestConfig) -> None:
        await self.client.put('/abtest', config.to_dict())
