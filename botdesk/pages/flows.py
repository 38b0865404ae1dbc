"""
Flows page: the visual flow editor.

One FlowEditorSession per page visit. The canvas and the inspector are both
projections of the session's GraphStore; structural edits (delete node,
delete connection) go through a confirmation dialog first.
"""

import logging

from nicegui import ui

from botdesk.components import confirm, page_frame, render_backend_offline, render_loading
from botdesk.flow.editor import FlowEditorSession
from botdesk.flow.graph_store import NodeKind
from botdesk.flow.inspector import InspectorPanel
from botdesk.flow.surface import FlowCanvas
from botdesk.services import Services
from botdesk.storage import BackendError

logger = logging.getLogger(__name__)

ADD_BUTTONS = [
    (NodeKind.MESSAGE, 'Message', 'chat_bubble'),
    (NodeKind.INPUT, 'Input', 'keyboard'),
    (NodeKind.MENU, 'Menu', 'list'),
]


def create_flows_page(services: Services):

    @ui.page('/flows')
    def flows_page():
        session = FlowEditorSession(services.flows)
        state = {'canvas': None, 'inspector': None, 'bots': []}

        with page_frame('Flows', '/flows'):
            with ui.row().classes('w-full items-center justify-between'):
                with ui.column().classes('gap-0'):
                    ui.label('Flow Builder').classes('text-3xl font-bold text-white')
                    ui.label('Drag from a node\'s right handle to another node\'s left handle to connect them.') \
                        .classes('text-gray-400')
                bot_select = ui.select({}, label='Bot', on_change=lambda e: select_bot(e.value)) \
                    .classes('w-64').props('outlined dense')
            body = ui.column().classes('w-full gap-4')

        def refresh_views():
            if state['canvas']:
                state['canvas'].refresh()
            if state['inspector']:
                state['inspector'].refresh()

        async def delete_node(node_id: str):
            node = session.store.get(node_id)
            if node is None:
                return
            if not await confirm('Delete Node', f'Delete "{node.label}" and all of its connections?',
                                 confirm_text='Delete'):
                return
            session.delete_node(node_id)
            refresh_views()

        async def delete_edge(edge):
            source, target = session.store.get(edge[0]), session.store.get(edge[1])
            if source is None or target is None:
                return
            if not await confirm('Delete Connection', f'Remove the connection "{source.label}" -> "{target.label}"?',
                                 confirm_text='Remove'):
                return
            session.disconnect(*edge)
            refresh_views()

        def add_node(kind: NodeKind):
            session.add_node(kind)
            refresh_views()

        async def save():
            if await session.save():
                await confirm('Flow Saved', 'The flow was saved successfully.', variant='success',
                              confirm_text='OK', show_cancel=False)
            else:
                ui.notify(f'Failed to save. Is the backend offline? ({session.last_error})', type='negative')

        def render_editor():
            body.clear()
            with body:
                with ui.row().classes('w-full items-center gap-2'):
                    for kind, label, icon in ADD_BUTTONS:
                        ui.button(label, icon=icon, on_click=lambda k=kind: add_node(k)).props('outline no-caps')
                    ui.space()
                    ui.button(icon='zoom_in', on_click=lambda: state['canvas'].zoom_in()).props('flat round')
                    ui.button(icon='zoom_out', on_click=lambda: state['canvas'].zoom_out()).props('flat round')
                    ui.button(icon='fit_screen', on_click=lambda: state['canvas'].reset_view()).props('flat round')
                    ui.button('Save', icon='save', on_click=save, color='green')

                with ui.row().classes('w-full gap-4 items-start no-wrap'):
                    state['canvas'] = FlowCanvas(
                        session,
                        on_edge_delete=delete_edge,
                        on_selection_change=lambda: state['inspector'] and state['inspector'].refresh(),
                    )
                    state['inspector'] = InspectorPanel(
                        session.store,
                        on_field_change=lambda: state['canvas'].refresh(),
                        on_delete=delete_node,
                    )

        async def select_bot(bot_id):
            if not bot_id:
                return
            state['canvas'] = state['inspector'] = None
            body.clear()
            with body:
                render_loading('Loading flow...')
            applied = await session.select_bot(bot_id)
            if session.bot_id != bot_id:
                return
            if not applied and session.offline:
                body.clear()
                with body:
                    render_backend_offline(lambda: select_bot(bot_id), session.last_error)
                return
            render_editor()

        async def init():
            body.clear()
            with body:
                render_loading()
            try:
                bots = await services.bots.get_all()
            except BackendError as e:
                body.clear()
                with body:
                    render_backend_offline(init, str(e))
                return
            state['bots'] = bots
            bot_select.set_options({b.id: b.name or b.id for b in bots})
            if not bots:
                body.clear()
                with body:
                    ui.label('Create a bot first to build its flow.').classes('text-gray-500 self-center mt-8')
                return
            if bot_select.value == bots[0].id:
                await select_bot(bots[0].id)
            else:
                bot_select.set_value(bots[0].id)

        ui.timer(0.1, init, once=True)
