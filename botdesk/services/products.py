from typing import Any, Dict, List, Optional

from botdesk.models import Product
from botdesk.storage.client import ApiClient


class ProductService:
    """Product catalog CRUD on /products."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_all(self) -> List[Product]:
        data = await self.client.get('/products')
        return [Product.from_dict(p) for p in data] if isinstance(data, list) else []

    async def get_by_id(self, product_id: str) -> Optional[Product]:
        data = await self.client.get(f'/products/{product_id}')
        return Product.from_dict(data) if isinstance(data, dict) else None

    async def create(self, product: Product) -> Optional[Product]:
        data = await self.client.post('/products', product.to_dict(include_id=False))
        return Product.from_dict(data) if isinstance(data, dict) else None

    async def update(self, product_id: str, fields: Dict[str, Any]) -> Optional[Product]:
        data = await self.client.put(f'/products/{product_id}', fields)
        return Product.from_dict(data) if isinstance(data, dict) else None

    async def delete(self, product_id: str) -> None:
        await self.client.delete(f'/products/{product_id}')
