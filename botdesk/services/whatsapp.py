"""
WhatsApp pairing service and the pairing-code countdown.
"""

import math
import time
from dataclasses import dataclass
from typing import Optional

from botdesk.models import PairingResponse, WhatsAppStatus
from botdesk.storage.client import ApiClient


@dataclass
class PairingCountdown:
    """Expiry tracking for a pairing code shown to the user."""
    code: str
    expires_at: float

    @classmethod
    def start(cls, response: PairingResponse, now: Optional[float] = None) -> 'PairingCountdown':
        now = time.monotonic() if now is None else now
        return cls(code=response.pairing_code, expires_at=now + response.expires_in)

    def seconds_left(self, now: Optional[float] = None) -> int:
        now = time.monotonic() if now is None else now
        return max(0, math.ceil(self.expires_at - now))

    def is_expired(self, now: Optional[float] = None) -> bool:
        return self.seconds_left(now) == 0

    def display(self, now: Optional[float] = None) -> str:
        left = self.seconds_left(now)
        return f'{left // 60}:{left % 60:02d}'


class WhatsAppService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_status(self, bot_id: str) -> WhatsAppStatus:
        return WhatsAppStatus.coerce(await self.client.get(f'/bots/{bot_id}/whatsapp/status'))

    async def request_pairing_code(self, bot_id: str) -> PairingResponse:
        return PairingResponse.from_dict(await self.client.post(f'/bots/{bot_id}/whatsapp/pair', {}))

    async def disconnect(self, bot_id: str) -> None:
        await self.client.post(f'/bots/{bot_id}/whatsapp/disconnect', {})
