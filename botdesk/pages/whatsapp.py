"""
WhatsApp page: connection status and phone-number pairing per bot.
"""

import logging

from nicegui import ui

from botdesk.components import confirm, load_section, page_frame
from botdesk.models import WhatsAppStatus
from botdesk.services import PairingCountdown, Services
from botdesk.storage import BackendError

logger = logging.getLogger(__name__)

STATUS_STYLES = {
    WhatsAppStatus.CONNECTED: ('Connected', 'green', 'wifi'),
    WhatsAppStatus.DISCONNECTED: ('Disconnected', 'grey', 'wifi_off'),
    WhatsAppStatus.PAIRING: ('Waiting for pairing', 'amber', 'schedule'),
    WhatsAppStatus.COOLDOWN: ('In cooldown', 'orange', 'warning'),
    WhatsAppStatus.BLOCKED: ('Session blocked', 'red', 'block'),
}


def create_whatsapp_page(services: Services):

    @ui.page('/whatsapp')
    def whatsapp_page():
        state = {'bot_id': None, 'status': WhatsAppStatus.DISCONNECTED, 'countdown': None}

        with page_frame('WhatsApp', '/whatsapp'):
            ui.label('WhatsApp Connection').classes('text-3xl font-bold text-white')
            with ui.row().classes('w-full gap-6 items-start no-wrap'):
                bot_list = ui.column().classes('w-64 gap-2')
                panel = ui.column().classes('flex-1 gap-4')

        async def select_bot(bot_id: str):
            state['bot_id'] = bot_id
            state['countdown'] = None
            await check_status()

        async def check_status():
            bot_id = state['bot_id']
            if not bot_id:
                return

            async def fetch():
                return await services.whatsapp.get_status(bot_id)

            def render(status):
                state['status'] = status
                if status == WhatsAppStatus.CONNECTED:
                    state['countdown'] = None
                render_panel()

            await load_section(panel, fetch, render)

        async def connect():
            try:
                response = await services.whatsapp.request_pairing_code(state['bot_id'])
            except BackendError as e:
                ui.notify(f'Could not request a pairing code: {e}', type='negative')
                return
            state['countdown'] = PairingCountdown.start(response)
            state['status'] = WhatsAppStatus.PAIRING
            panel.clear()
            with panel:
                render_panel()

        async def disconnect():
            if not await confirm('Disconnect', 'Disconnect this bot from WhatsApp?', variant='warning',
                                 confirm_text='Disconnect'):
                return
            try:
                await services.whatsapp.disconnect(state['bot_id'])
            except BackendError as e:
                ui.notify(f'Failed to disconnect: {e}', type='negative')
                return
            state['status'] = WhatsAppStatus.DISCONNECTED
            panel.clear()
            with panel:
                render_panel()

        def render_panel():
            status = state['status']
            label, color, icon = STATUS_STYLES[status]
            with ui.card().classes('w-full bg-slate-900 border border-slate-800'):
                with ui.row().classes('w-full items-center justify-between'):
                    ui.label('Status').classes('text-sm text-gray-400')
                    ui.chip(label, icon=icon, color=color).props('outline')

                if status == WhatsAppStatus.CONNECTED:
                    ui.label('This bot is linked and receiving messages.').classes('text-gray-300')
                    ui.button('Disconnect', icon='link_off', color='red', on_click=disconnect).props('outline')
                elif status == WhatsAppStatus.COOLDOWN:
                    ui.label('Too many pairing attempts. Wait a few minutes and try again.') \
                        .classes('text-orange-300')
                    ui.button('Check again', icon='refresh', on_click=check_status).props('flat')
                elif status == WhatsAppStatus.BLOCKED:
                    ui.label('WhatsApp blocked this session. Use another number or contact support.') \
                        .classes('text-red-300')
                elif state['countdown'] is not None:
                    render_pairing_code(state['countdown'])
                else:
                    ui.label('Link this bot with a pairing code instead of a QR code.').classes('text-gray-300')
                    ui.button('Generate pairing code', icon='link', on_click=connect)

        def render_pairing_code(countdown: PairingCountdown):
            with ui.column().classes('w-full items-center gap-2'):
                ui.label(countdown.code).classes('text-4xl font-mono font-bold tracking-widest text-white')
                ui.button('Copy', icon='content_copy',
                          on_click=lambda: ui.clipboard.write(countdown.code)).props('flat dense')
                timer_label = ui.label(f'Expires in {countdown.display()}').classes('text-amber-400')
                ui.label('WhatsApp > Linked devices > Link with phone number').classes('text-xs text-gray-500')

            def tick():
                if state['countdown'] is not countdown:
                    ticker.deactivate()
                    return
                if countdown.is_expired():
                    ticker.deactivate()
                    state['countdown'] = None
                    panel.clear()
                    with panel:
                        render_panel()
                    return
                timer_label.set_text(f'Expires in {countdown.display()}')

            ticker = ui.timer(1.0, tick)

        async def init():
            async def fetch():
                return await services.bots.get_all()

            def render(bots):
                state['bots'] = bots
                if not bots:
                    ui.label('No bots available.').classes('text-gray-500')
                    return
                for bot in bots:
                    ui.button(bot.name or bot.id, icon='smartphone',
                              on_click=lambda b=bot: select_bot(b.id)).props('outline no-caps align=left') \
                        .classes('w-full')

            await load_section(bot_list, fetch, render)
            if state.get('bots') and state['bot_id'] is None:
                await select_bot(state['bots'][0].id)

        ui.timer(0.1, init, once=True)
