from typing import List

from botdesk.models import Customer
from botdesk.storage.client import ApiClient


class CustomerService:
    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self) -> List[Customer]:
        data = await self.client.get('/customers')
        return [Customer.from_dict(c) for c in data] if isinstance(data, list) else []
