"""
A/B test page: split traffic between two bots.
"""

from nicegui import ui

from botdesk.components import load_section, page_frame
from botdesk.models import ABTestConfig
from botdesk.services import Services
from botdesk.storage import BackendError


def create_abtest_page(services: Services):

    @ui.page('/abtest')
    def abtest_page():
        with page_frame('A/B Test', '/abtest'):
            ui.label('A/B Test').classes('text-3xl font-bold text-white')
            ui.label('Split traffic between bots to compare flows and products.').classes('text-gray-400')
            content = ui.column().classes('w-full max-w-2xl gap-4')

        def render(config: ABTestConfig):
            with ui.card().classes('w-full bg-slate-900 border border-slate-800 gap-4'):
                with ui.row().classes('w-full items-center justify-between'):
                    ui.label('Traffic test').classes('font-bold text-white')
                    ui.switch('Enabled').bind_value(config, 'is_enabled')

                with ui.row().classes('w-full gap-2 text-amber-300 text-sm no-wrap'):
                    ui.icon('error_outline')
                    ui.label('Changing the split resets the current session metrics. '
                             'Make sure both bots are ONLINE before enabling.')

                with ui.row().classes('w-full justify-between text-sm font-bold'):
                    label_a = ui.label().classes('text-indigo-400')
                    label_b = ui.label().classes('text-pink-400')

                def update_labels():
                    label_a.set_text(f'Bot A: {config.bot_a_id} ({config.distribution_a}%)')
                    label_b.set_text(f'Bot B: {config.bot_b_id} ({config.distribution_b}%)')

                def on_slide(e):
                    config.set_distribution(e.value)
                    update_labels()

                ui.slider(min=0, max=100, step=1, value=config.distribution_a, on_change=on_slide).classes('w-full')
                update_labels()

                async def save():
                    try:
                        await services.abtest.update_config(config)
                    except BackendError as e:
                        ui.notify(f'Failed to save: {e}', type='negative')
                        return
                    ui.notify('A/B test configuration saved', type='positive')

                ui.button('Save configuration', icon='save', on_click=save).classes('w-full')

        ui.timer(0.1, lambda: load_section(content, services.abtest.get_config, render), once=True)
