"""
Flow Canvas - NiceGUI surface for the flow editor.

An interactive image sized to the canvas carries the rendered SVG. It owns
pointer capture: mouse and wheel events go straight into the session's
InteractionController, and every controller change triggers a redraw.
"""

import logging
from typing import Awaitable, Callable, Optional

from nicegui import ui
from nicegui.events import GenericEventArguments, MouseEventArguments

from botdesk.flow.controller import Edge, HitKind, InteractionState
from botdesk.flow.editor import FlowEditorSession
from botdesk.flow.render import FlowRenderer

logger = logging.getLogger(__name__)

EdgeDeleteHandler = Callable[[Edge], Awaitable[None]]


class FlowCanvas:
    """Renders a FlowEditorSession and routes gestures into it."""

    def __init__(self, session: FlowEditorSession,
                 on_edge_delete: Optional[EdgeDeleteHandler] = None,
                 on_selection_change: Optional[Callable[[], None]] = None):
        self.session = session
        self.renderer = FlowRenderer()
        self._on_edge_delete = on_edge_delete
        self._on_selection_change = on_selection_change

        self.image = ui.interactive_image(
            size=(int(session.width), int(session.height)),
            content=self._render(),
            on_mouse=self._handle_mouse,
            events=['mousedown', 'mousemove', 'mouseup', 'mouseleave'],
            cross=False,
        ).classes('rounded-lg border border-slate-800').style('cursor: grab')
        self.image.on('wheel.prevent', self._handle_wheel, ['deltaY'])

        session.controller.set_on_state_change(self._on_state_change)

    def _render(self) -> str:
        s = self.session
        return self.renderer.render(s.store, s.viewport, s.controller.state, s.width, s.height)

    def refresh(self):
        self.image.set_content(self._render())

    def _on_state_change(self, _state: InteractionState):
        self.refresh()

    async def _handle_mouse(self, e: MouseEventArguments):
        point = (e.image_x, e.image_y)
        controller = self.session.controller

        if e.type == 'mousedown':
            previous = self.session.store.selected_id
            target = controller.pointer_down(point)
            if self.session.store.selected_id != previous and self._on_selection_change:
                self._on_selection_change()
            if target.kind == HitKind.EDGE_DELETE and self._on_edge_delete:
                await self._on_edge_delete(target.edge)
        elif e.type == 'mousemove':
            controller.pointer_move(point)
        elif e.type == 'mouseup':
            created = controller.pointer_up(point)
            if created:
                self.refresh()
        elif e.type == 'mouseleave':
            controller.pointer_leave()

    def _handle_wheel(self, e: GenericEventArguments):
        delta = e.args.get('deltaY', 0) if isinstance(e.args, dict) else 0
        self.session.controller.wheel(float(delta or 0))

    # --- Toolbar actions ---

    def zoom_in(self):
        self.session.viewport.zoom_in()
        self.refresh()

    def zoom_out(self):
        self.session.viewport.zoom_out()
        self.refresh()

    def reset_view(self):
        self.session.viewport.reset()
        self.refresh()
