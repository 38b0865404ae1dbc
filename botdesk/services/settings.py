from botdesk.models import GlobalSettings
from botdesk.storage.client import ApiClient


class SettingsService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_settings(self) -> GlobalSettings:
        return GlobalSettings.from_dict(await self.client.get('/settings'))

    async def update_settings(self, settings: GlobalSettings) -> None:
        await self.client.put('/settings', settings.to_dict())
