"""
Timing page: global message delays that make bots feel human.
"""

from nicegui import ui

from botdesk.components import load_section, page_frame
from botdesk.models import TimingConfig
from botdesk.services import Services
from botdesk.storage import BackendError

FIELDS = [
    ('typing_delay', 'Typing delay'),
    ('message_interval', 'Interval between messages'),
    ('read_receipt_delay', 'Read receipt delay'),
    ('follow_up_delay', 'Follow-up delay'),
]


def create_timing_page(services: Services):

    @ui.page('/timing')
    def timing_page():
        with page_frame('Timing', '/timing'):
            ui.label('Timing Configuration').classes('text-3xl font-bold text-white')
            ui.label('Control message delays to simulate human behavior. Applies to every active bot.') \
                .classes('text-gray-400')
            content = ui.column().classes('w-full max-w-2xl gap-4')

        def render(timing: TimingConfig):
            with ui.card().classes('w-full bg-slate-900 border border-slate-800'):
                for attr, label in FIELDS:
                    ui.number(label, min=0, step=100, format='%d', suffix='ms') \
                        .bind_value(timing, attr, forward=lambda v: int(v or 0)).classes('w-full')
                if timing.extra:
                    ui.label('Other values from the server are kept unchanged.').classes('text-xs text-gray-500')

                async def save():
                    try:
                        await services.timing.update_timing(timing)
                    except BackendError as e:
                        ui.notify(f'Failed to save: {e}', type='negative')
                        return
                    ui.notify('Timing updated', type='positive')

                ui.button('Update timing', icon='save', on_click=save).classes('w-full')

        ui.timer(0.1, lambda: load_section(content, services.timing.get_timing, render), once=True)
