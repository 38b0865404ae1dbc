"""
AI page: per-bot AI mode and model settings, knowledge base, training
examples and a preview chat.
"""

import logging

from nicegui import ui

from botdesk.components import confirm, load_section, page_frame
from botdesk.models import AI_MODELS, AIMode
from botdesk.services import Services
from botdesk.storage import BackendError

logger = logging.getLogger(__name__)

MODE_LABELS = {
    AIMode.DESLIGADO: 'Off',
    AIMode.FALLBACK: 'Fallback (only when no flow matches)',
    AIMode.SEMPRE_ATIVO: 'Always active',
}


def create_ai_page(services: Services):

    @ui.page('/ai')
    def ai_page():
        state = {'bot_id': None}

        with page_frame('AI', '/ai'):
            with ui.row().classes('w-full items-center justify-between'):
                ui.label('AI & Behavior').classes('text-3xl font-bold text-white')
                bot_select = ui.select({}, label='Bot', on_change=lambda e: select_bot(e.value)) \
                    .classes('w-64').props('outlined dense')
            content = ui.column().classes('w-full gap-4')

        async def fetch_bot_data():
            bot_id = state['bot_id']
            config = await services.ai.get_config(bot_id)
            knowledge = await services.ai.get_knowledge(bot_id)
            examples = await services.ai.get_examples(bot_id)
            return bot_id, config, knowledge, examples

        async def select_bot(bot_id):
            if not bot_id:
                return
            state['bot_id'] = bot_id
            await load_section(content, fetch_bot_data, render)

        async def reload():
            if state['bot_id']:
                await load_section(content, fetch_bot_data, render)

        def render(data):
            bot_id, config, knowledge, examples = data

            with ui.tabs().classes('w-full') as tabs:
                config_tab = ui.tab('Configuration', icon='tune')
                knowledge_tab = ui.tab('Knowledge', icon='menu_book')
                examples_tab = ui.tab('Examples', icon='school')
                preview_tab = ui.tab('Preview', icon='chat')

            with ui.tab_panels(tabs, value=config_tab).classes('w-full bg-transparent'):
                with ui.tab_panel(config_tab):
                    ui.select({m: label for m, label in MODE_LABELS.items()}, label='AI mode') \
                        .bind_value(config, 'mode').classes('w-96')
                    ui.select(list(AI_MODELS), label='Model').bind_value(config, 'model').classes('w-96')
                    ui.label('Temperature').classes('text-sm text-gray-400')
                    ui.slider(min=0, max=2, step=0.1).bind_value(config, 'temperature').props('label').classes('w-96')
                    ui.number('Max tokens', min=1, step=50, format='%d') \
                        .bind_value(config, 'max_tokens', forward=lambda v: int(v or 0)).classes('w-96')
                    ui.textarea('System prompt', placeholder='You are a helpful assistant...') \
                        .bind_value(config, 'system_prompt').classes('w-full').props('autogrow')

                    async def save_config():
                        try:
                            await services.ai.update_config(bot_id, config)
                        except BackendError as e:
                            ui.notify(f'Failed to save: {e}', type='negative')
                            return
                        ui.notify('AI configuration saved', type='positive')

                    ui.button('Save configuration', icon='save', on_click=save_config)

                with ui.tab_panel(knowledge_tab):
                    for item in knowledge:
                        with ui.card().classes('w-full bg-slate-900 border border-slate-800'):
                            with ui.row().classes('w-full items-center justify-between'):
                                ui.label(item.title).classes('font-bold text-green-400')
                                ui.button(icon='delete', color='red',
                                          on_click=lambda i=item: delete_knowledge(i.id)).props('flat dense')
                            ui.label(item.content).classes('text-sm text-gray-300 whitespace-pre-wrap')

                    with ui.card().classes('w-full bg-slate-900 border border-slate-800'):
                        ui.label('Add knowledge').classes('font-bold text-white')
                        title = ui.input('Title', placeholder='e.g. Refund policy').classes('w-full')
                        body = ui.textarea('Content').classes('w-full')

                        async def add_knowledge():
                            if not title.value or not body.value:
                                ui.notify('Title and content are required', type='negative')
                                return
                            try:
                                await services.ai.add_knowledge(bot_id, title.value, body.value)
                            except BackendError as e:
                                ui.notify(f'Failed to add: {e}', type='negative')
                                return
                            await reload()

                        ui.button('Add', icon='add', on_click=add_knowledge)

                with ui.tab_panel(examples_tab):
                    for example in examples:
                        with ui.card().classes('w-full bg-slate-900 border border-slate-800'):
                            with ui.row().classes('w-full items-center justify-between'):
                                ui.label(f'User: {example.user_message}').classes('text-sm text-white')
                                ui.button(icon='delete', color='red',
                                          on_click=lambda x=example: delete_example(x.id)).props('flat dense')
                            ui.label(f'AI: {example.ideal_response}').classes('text-sm text-green-400')

                    with ui.card().classes('w-full bg-slate-900 border border-slate-800'):
                        ui.label('Add example').classes('font-bold text-white')
                        user_message = ui.input('User message').classes('w-full')
                        ideal_response = ui.textarea('Ideal AI response').classes('w-full')

                        async def add_example():
                            if not user_message.value or not ideal_response.value:
                                ui.notify('Both fields are required', type='negative')
                                return
                            try:
                                await services.ai.add_example(bot_id, user_message.value, ideal_response.value)
                            except BackendError as e:
                                ui.notify(f'Failed to add: {e}', type='negative')
                                return
                            await reload()

                        ui.button('Add', icon='add', on_click=add_example)

                with ui.tab_panel(preview_tab):
                    chat = ui.column().classes('w-full gap-2 min-h-40')
                    message = ui.input('Type a message to test...').classes('w-full')

                    async def send():
                        text = (message.value or '').strip()
                        if not text:
                            return
                        message.set_value('')
                        with chat:
                            ui.chat_message(text, name='You', sent=True)
                        try:
                            reply = await services.ai.preview(bot_id, text)
                        except BackendError as e:
                            reply = f'[error] {e}'
                        with chat:
                            ui.chat_message(reply or '(no response)', name='AI')

                    message.on('keydown.enter', send)
                    ui.button('Send', icon='send', on_click=send)

        async def delete_knowledge(item_id: str):
            if not await confirm('Delete Knowledge', 'Remove this knowledge entry?', confirm_text='Delete'):
                return
            try:
                await services.ai.delete_knowledge(item_id)
            except BackendError as e:
                ui.notify(f'Failed to delete: {e}', type='negative')
                return
            await reload()

        async def delete_example(example_id: str):
            if not await confirm('Delete Example', 'Remove this training example?', confirm_text='Delete'):
                return
            try:
                await services.ai.delete_example(example_id)
            except BackendError as e:
                ui.notify(f'Failed to delete: {e}', type='negative')
                return
            await reload()

        async def init():
            async def fetch_bots():
                return await services.bots.get_all()

            def render_bots(bots):
                bot_select.set_options({b.id: b.name or b.id for b in bots})
                if bots:
                    bot_select.set_value(bots[0].id)
                else:
                    ui.label('No bots available.').classes('text-gray-500')

            await load_section(content, fetch_bots, render_bots)

        ui.timer(0.1, init, once=True)
