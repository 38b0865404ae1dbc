"""
Shared page frame: header, navigation drawer and footer.
"""

import logging
from contextlib import contextmanager
from typing import Any, Awaitable, Callable

from nicegui import ui

from botdesk import __version__
from botdesk.components.backend_offline import render_backend_offline
from botdesk.storage.protocol import BackendError

logger = logging.getLogger(__name__)

NAV_ITEMS = [
    ('Dashboard', 'dashboard', '/'),
    ('Bots', 'smart_toy', '/bots'),
    ('AI', 'psychology', '/ai'),
    ('WhatsApp', 'qr_code_2', '/whatsapp'),
    ('A/B Test', 'science', '/abtest'),
    ('Products', 'inventory_2', '/products'),
    ('Flows', 'account_tree', '/flows'),
    ('Media', 'perm_media', '/media'),
    ('Customers', 'groups', '/customers'),
    ('Timing', 'timer', '/timing'),
    ('Settings', 'settings', '/settings'),
]


@contextmanager
def page_frame(title: str, active_path: str = '/'):
    """Render the app shell and yield the content column."""
    ui.dark_mode().enable()

    with ui.header().classes('items-center bg-slate-900 border-b border-slate-800 px-4'):
        ui.button(icon='menu', on_click=lambda: drawer.toggle()).props('flat round color=white')
        ui.label('BotDesk').classes('text-lg font-bold text-white')
        ui.label(title).classes('text-sm text-gray-400 ml-2')

    with ui.left_drawer(value=True).classes('bg-slate-950 border-r border-slate-800') as drawer:
        with ui.column().classes('w-full gap-1'):
            for label, icon, path in NAV_ITEMS:
                active = path == active_path
                ui.button(label, icon=icon, on_click=lambda p=path: ui.navigate.to(p)) \
                    .props(f'flat align=left no-caps {"color=primary" if active else "color=grey-5"}') \
                    .classes('w-full')
        ui.space()
        ui.label(f'v{__version__}').classes('text-xs text-gray-600 mt-8')

    with ui.column().classes('w-full p-6 gap-4') as content:
        yield content


def render_loading(text: str = 'Loading...'):
    with ui.row().classes('w-full justify-center items-center gap-3 mt-12'):
        ui.spinner(size='lg')
        ui.label(text).classes('text-gray-400')


async def load_section(container, fetch: Callable[[], Awaitable[Any]], render: Callable[[Any], None],
                       loading_text: str = 'Loading...'):
    """
    Fill a container from an async fetch: spinner while waiting, the offline
    card (with retry) on BackendError, otherwise render(data).
    """
    container.clear()
    with container:
        render_loading(loading_text)

    try:
        data = await fetch()
    except BackendError as e:
        logger.warning(f"Section load failed: {e}")
        container.clear()
        with container:
            render_backend_offline(lambda: load_section(container, fetch, render, loading_text), str(e))
        return

    container.clear()
    with container:
        render(data)
