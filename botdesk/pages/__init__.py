"""
NiceGUI pages. Call register_pages() once at startup.
"""

from botdesk.pages.abtest import create_abtest_page
from botdesk.pages.ai import create_ai_page
from botdesk.pages.bots import create_bots_page
from botdesk.pages.customers import create_customers_page
from botdesk.pages.dashboard import create_dashboard_page
from botdesk.pages.flows import create_flows_page
from botdesk.pages.media import create_media_page
from botdesk.pages.products import create_products_page
from botdesk.pages.settings import create_settings_page
from botdesk.pages.timing import create_timing_page
from botdesk.pages.whatsapp import create_whatsapp_page
from botdesk.services import Services


def register_pages(services: Services):
    create_dashboard_page(services)
    create_bots_page(services)
    create_ai_page(services)
    create_whatsapp_page(services)
    create_abtest_page(services)
    create_products_page(services)
    create_flows_page(services)
    create_media_page(services)
    create_customers_page(services)
    create_timing_page(services)
    create_settings_page(services)


__all__ = ['register_pages']
