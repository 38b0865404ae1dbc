"""
Request/response services, one per server concern.

Each service wraps an ApiClient and converts payloads into botdesk.models
records. BackendError propagates unless noted on the service.
"""

from dataclasses import dataclass

from botdesk.storage.client import ApiClient
from botdesk.services.abtest import ABTestService
from botdesk.services.ai import AIService
from botdesk.services.bots import BotService
from botdesk.services.customers import CustomerService
from botdesk.services.flow import FlowService
from botdesk.services.media import MediaService, normalize_item
from botdesk.services.metrics import MetricsService
from botdesk.services.products import ProductService
from botdesk.services.settings import SettingsService
from botdesk.services.timing import TimingService
from botdesk.services.whatsapp import PairingCountdown, WhatsAppService


@dataclass
class Services:
    """All services bound to one client."""
    client: ApiClient
    bots: BotService
    flows: FlowService
    products: ProductService
    media: MediaService
    metrics: MetricsService
    whatsapp: WhatsAppService
    ai: AIService
    settings: SettingsService
    timing: TimingService
    abtest: ABTestService
    customers: CustomerService

    @classmethod
    def create(cls, client: ApiClient) -> 'Services':
        return cls(
            client=client,
            bots=BotService(client),
            flows=FlowService(client),
            products=ProductService(client),
            media=MediaService(client),
            metrics=MetricsService(client),
            whatsapp=WhatsAppService(client),
            ai=AIService(client),
            settings=SettingsService(client),
            timing=TimingService(client),
            abtest=ABTestService(client),
            customers=CustomerService(client),
        )


__all__ = [
    'Services',
    'ABTestService',
    'AIService',
    'BotService',
    'CustomerService',
    'FlowService',
    'MediaService',
    'normalize_item',
    'MetricsService',
    'ProductService',
    'SettingsService',
    'TimingService',
    'PairingCountdown',
    'WhatsAppService',
]
