"""
Inspector Panel - edit form for the selected node.

`inspect()` is the pure projection; InspectorPanel renders it with NiceGUI
and writes every change straight back through GraphStore.update_field.
"""

from dataclasses import dataclass
from typing import Awaitable, Callable, Optional

from nicegui import ui

from botdesk.flow.graph_store import GraphStore, NodeKind


@dataclass(frozen=True)
class InspectorView:
    node_id: str
    kind: NodeKind
    label: str
    trigger: str
    content: str


def inspect(store: GraphStore) -> Optional[InspectorView]:
    """Snapshot of the selected node's editable fields, or None when nothing is selected."""
    node = store.selected
    if node is None:
        return None
    return InspectorView(node.id, node.kind, node.label, node.trigger, node.content)


class InspectorPanel:
    """Side panel bound to a GraphStore's selection."""

    def __init__(self, store: GraphStore,
                 on_field_change: Optional[Callable[[], None]] = None,
                 on_delete: Optional[Callable[[str], Awaitable[None]]] = None):
        self.store = store
        self._on_field_change = on_field_change
        self._on_delete = on_delete
        self.container = ui.column().classes('w-80 gap-3 p-4 bg-slate-900 border border-slate-800 rounded-lg')
        self.refresh()

    def _update(self, node_id: str, field_name: str, value: str):
        self.store.update_field(node_id, field_name, value or '')
        if self._on_field_change:
            self._on_field_change()

    async def _delete(self, node_id: str):
        if self._on_delete:
            await self._on_delete(node_id)

    def refresh(self):
        view = inspect(self.store)
        self.container.clear()
        with self.container:
            if view is None:
                ui.icon('touch_app').classes('text-4xl text-gray-600 self-center mt-8')
                ui.label('Select a node to edit it').classes('text-sm text-gray-500 self-center')
                return

            with ui.row().classes('w-full items-center justify-between'):
                ui.label('Node').classes('text-xs font-bold text-gray-400')
                ui.badge(view.kind.value).props('outline')

            ui.input('Label', value=view.label,
                     on_change=lambda e: self._update(view.node_id, 'label', e.value)).classes('w-full')
            ui.input('Trigger', value=view.trigger,
                     placeholder='Empty means default path',
                     on_change=lambda e: self._update(view.node_id, 'trigger', e.value)).classes('w-full')
            ui.textarea('Content', value=view.content,
                        on_change=lambda e: self._update(view.node_id, 'content', e.value)) \
                .classes('w-full').props('autogrow')

            ui.separator()
            ui.button('Delete node', icon='delete', color='red',
                      on_click=lambda: self._delete(view.node_id)).props('flat')
