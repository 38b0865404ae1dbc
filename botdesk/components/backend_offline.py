from typing import Awaitable, Callable, Optional, Union

from nicegui import ui

RetryHandler = Callable[[], Union[None, Awaitable[None]]]


def render_backend_offline(on_retry: RetryHandler, message: Optional[str] = None):
    """Card shown in place of a page's content when the backend cannot be reached."""
    with ui.card().classes('w-full max-w-xl mx-auto mt-12 items-center bg-slate-900 border border-red-900'):
        ui.icon('cloud_off', color='red').classes('text-5xl')
        ui.label('Backend Offline').classes('text-xl font-bold text-white')
        ui.label(
            message or 'The server could not be reached. Check that it is running and try again.'
        ).classes('text-sm text-gray-400 text-center')
        ui.button('Retry', icon='refresh', on_click=on_retry).props('outline')
