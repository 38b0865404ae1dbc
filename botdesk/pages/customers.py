"""
Customers page: searchable table of leads and buyers.
"""

from datetime import datetime

from nicegui import ui

from botdesk.components import load_section, page_frame
from botdesk.services import Services

COLUMNS = [
    {'name': 'name', 'label': 'Customer', 'field': 'name', 'align': 'left', 'sortable': True},
    {'name': 'phone', 'label': 'Phone', 'field': 'phone', 'align': 'left'},
    {'name': 'bot', 'label': 'Source Bot', 'field': 'bot', 'align': 'left', 'sortable': True},
    {'name': 'purchases', 'label': 'Purchases', 'field': 'purchases', 'align': 'right', 'sortable': True},
    {'name': 'created', 'label': 'Joined', 'field': 'created', 'align': 'left', 'sortable': True},
]


def format_date(value: str) -> str:
    """ISO timestamp to dd/mm/yyyy; anything unparsable is shown as-is."""
    try:
        return datetime.fromisoformat(value.replace('Z', '+00:00')).strftime('%d/%m/%Y')
    except (ValueError, AttributeError):
        return value or ''


def create_customers_page(services: Services):

    @ui.page('/customers')
    def customers_page():
        with page_frame('Customers', '/customers'):
            with ui.row().classes('w-full items-center justify-between'):
                with ui.column().classes('gap-0'):
                    ui.label('Customers').classes('text-3xl font-bold text-white')
                    ui.label('Leads and buyers collected by your bots.').classes('text-gray-400')
                search = ui.input(placeholder='Search name or phone...').props('outlined dense clearable') \
                    .classes('w-72')
            content = ui.column().classes('w-full')

        def render(customers):
            rows = [{
                'id': c.id,
                'name': c.display_name,
                'phone': c.phone_number,
                'bot': c.bot_id,
                'purchases': len(c.purchased_product_ids),
                'created': format_date(c.created_at),
            } for c in customers]
            table = ui.table(columns=COLUMNS, rows=rows, row_key='id').classes('w-full')
            search.bind_value_to(table, 'filter')

        ui.timer(0.1, lambda: load_section(content, services.customers.get_all, render), once=True)
