from typing import List

from botdesk.models import MetricsSummary, SalesMetric
from botdesk.storage.client import ApiClient


class MetricsService:
    """Dashboard aggregates."""

    def __init__(self, client: ApiClient):
        self.client = client

    async def get_sales_data(self) -> List[SalesMetric]:
        data = await self.client.get('/metrics/sales')
        return [SalesMetric.from_dict(m) for m in data] if isinstance(data, list) else []

    async def get_summary(self) -> MetricsSummary:
        # from_dict zero-fills a missing summary
        return MetricsSummary.from_dict(await self.client.get('/metrics/summary'))
