"""
Bots page: list, create, pause/resume and delete bots.

Creating a bot immediately requests a WhatsApp pairing code for it.
"""

import logging

from nicegui import ui

from botdesk.components import confirm, load_section, page_frame
from botdesk.models import Bot, BotStatus
from botdesk.services import PairingCountdown, Services
from botdesk.storage import BackendError

logger = logging.getLogger(__name__)

STATUS_COLORS = {
    BotStatus.ONLINE: 'green',
    BotStatus.OFFLINE: 'grey',
    BotStatus.PAUSADO: 'orange',
}


def create_bots_page(services: Services):

    @ui.page('/bots')
    def bots_page():
        with page_frame('Bots', '/bots'):
            with ui.row().classes('w-full items-center justify-between'):
                with ui.column().classes('gap-0'):
                    ui.label('My Bots').classes('text-3xl font-bold text-white')
                    ui.label('Manage your WhatsApp bot instances.').classes('text-gray-400')
                ui.button('New Bot', icon='add', on_click=lambda: open_create_dialog())
            content = ui.column().classes('w-full gap-4')

        async def reload():
            await load_section(content, services.bots.get_all, render)

        def render(bots):
            if not bots:
                ui.label('No bots yet. Create your first one.').classes('text-gray-500 self-center mt-8')
                return
            with ui.row().classes('w-full gap-4'):
                for bot in bots:
                    render_bot_card(bot)

        def render_bot_card(bot: Bot):
            with ui.card().classes('w-80 bg-slate-900 border border-slate-800'):
                with ui.row().classes('w-full items-center justify-between'):
                    ui.label(bot.name or bot.id).classes('text-lg font-bold text-white')
                    ui.badge(bot.status.value, color=STATUS_COLORS[bot.status])
                ui.label(bot.phone_number).classes('text-sm text-gray-400 font-mono')
                with ui.row().classes('w-full gap-4 text-sm text-gray-300'):
                    ui.label(f'{bot.stats.conversations} conversations')
                    ui.label(f'{bot.stats.sales} sales')
                    ui.label(f'R$ {bot.stats.revenue:,.2f}')
                with ui.row().classes('w-full justify-end gap-1'):
                    toggle_label = 'Pause' if bot.is_online else 'Activate'
                    ui.button(toggle_label, icon='pause' if bot.is_online else 'play_arrow',
                              on_click=lambda b=bot: toggle(b)).props('flat dense')
                    ui.button(icon='delete', color='red', on_click=lambda b=bot: delete(b)).props('flat dense')

        async def toggle(bot: Bot):
            new_status = BotStatus.PAUSADO if bot.is_online else BotStatus.ONLINE
            try:
                await services.bots.toggle_status(bot.id, new_status)
            except BackendError as e:
                ui.notify(f'Failed to change status: {e}', type='negative')
                return
            await reload()

        async def delete(bot: Bot):
            if not await confirm('Delete Bot', f'Delete "{bot.name}"? This cannot be undone.',
                                 confirm_text='Delete'):
                return
            try:
                await services.bots.delete(bot.id)
            except BackendError as e:
                ui.notify(f'Failed to delete: {e}', type='negative')
                return
            ui.notify('Bot deleted', type='warning')
            await reload()

        def open_create_dialog():
            countdown = {'value': None}

            with ui.dialog() as dialog, ui.card().classes('w-96 bg-slate-900 border border-slate-700'):
                ui.label('New Bot').classes('text-lg font-bold text-white')
                form = ui.column().classes('w-full gap-2')
                with form:
                    name_input = ui.input('Name').classes('w-full')
                    phone_input = ui.input('Phone number', placeholder='5511999990000').classes('w-full')
                pairing = ui.column().classes('w-full items-center gap-2')

                def tick():
                    current = countdown['value']
                    if current is None:
                        return
                    if current.is_expired():
                        countdown['value'] = None
                        timer_label.set_text('')
                        pairing.clear()
                        with pairing:
                            ui.label('Pairing code expired. Request a new one on the WhatsApp page.') \
                                .classes('text-sm text-orange-400')
                        return
                    timer_label.set_text(f'Expires in {current.display()}')

                async def create():
                    name = (name_input.value or '').strip()
                    phone = (phone_input.value or '').strip()
                    if not name or not phone:
                        ui.notify('Name and phone number are required', type='negative')
                        return
                    try:
                        bot = await services.bots.create(name, phone)
                    except BackendError as e:
                        ui.notify(f'Failed to create bot: {e}', type='negative')
                        return
                    ui.notify('Bot created', type='positive')
                    await reload()
                    if bot is None:
                        dialog.close()
                        return
                    try:
                        response = await services.whatsapp.request_pairing_code(bot.id)
                    except BackendError as e:
                        logger.warning(f"Pairing code request failed for {bot.id}: {e}")
                        dialog.close()
                        return
                    if not response.pairing_code:
                        dialog.close()
                        return
                    countdown['value'] = PairingCountdown.start(response)
                    form.clear()
                    create_button.set_visibility(False)
                    with pairing:
                        ui.label('Pairing code').classes('text-xs text-gray-400')
                        ui.label(response.pairing_code).classes('text-3xl font-mono font-bold text-white')
                        ui.button('Copy', icon='content_copy',
                                  on_click=lambda: ui.clipboard.write(response.pairing_code)).props('flat dense')
                        ui.label('WhatsApp > Linked devices > Link with phone number').classes('text-xs text-gray-500')

                with ui.row().classes('w-full justify-end'):
                    ui.button('Close', on_click=dialog.close, color='grey').props('flat')
                    create_button = ui.button('Create', on_click=create)

                timer_label = ui.label('').classes('text-xs text-amber-400 self-center')
                ui.timer(1.0, tick)

            dialog.open()

        ui.timer(0.1, reload, once=True)
