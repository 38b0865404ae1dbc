from botdesk.models import TimingConfig
from botdesk.storage.client import ApiClient


class TimingService:
    """Global message delays. Always read from the server."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_timing(self) -> TimingConfig:
        return TimingConfig.from_dict(await self.client.get('/api/timing'))

    async def update_timing(self, timing: TimingConfig) -> None:
        await self.client.put('/api/timing', timing.to_dict())
