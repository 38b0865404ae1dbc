"""
Settings page: global fallback message and admin notification phone.
"""

from nicegui import ui

from botdesk.components import confirm, load_section, page_frame
from botdesk.models import GlobalSettings
from botdesk.services import Services
from botdesk.storage import BackendError


def create_settings_page(services: Services):

    @ui.page('/settings')
    def settings_page():
        with page_frame('Settings', '/settings'):
            ui.label('System Settings').classes('text-3xl font-bold text-white')
            ui.label('Global configuration parameters.').classes('text-gray-400')
            content = ui.column().classes('w-full max-w-2xl gap-4')

        def render(settings: GlobalSettings):
            with ui.card().classes('w-full bg-slate-900 border border-slate-800'):
                ui.textarea('Global fallback message',
                            placeholder='Sent when no flow node or AI answer matches') \
                    .bind_value(settings, 'global_fallback_message').classes('w-full')
                ui.input('Admin notification phone', placeholder='5511999990000') \
                    .bind_value(settings, 'admin_phone').classes('w-full')

                async def save():
                    try:
                        await services.settings.update_settings(settings)
                    except BackendError as e:
                        ui.notify(f'Failed to save: {e}', type='negative')
                        return
                    await confirm('Settings Saved', 'Global settings were updated.', variant='success',
                                  confirm_text='OK', show_cancel=False)

                ui.button('Save settings', icon='save', on_click=save).classes('w-full')

        ui.timer(0.1, lambda: load_section(content, services.settings.get_settings, render), once=True)
