"""
Media page: upload, preview and delete media files.
"""

from nicegui import ui
from nicegui.events import UploadEventArguments

from botdesk.components import confirm, page_frame, render_loading
from botdesk.models import MediaItem
from botdesk.services import Services
from botdesk.storage import BackendError

TYPE_ICONS = {'image': 'image', 'audio': 'audiotrack', 'file': 'description'}


def create_media_page(services: Services):

    @ui.page('/media')
    def media_page():
        with page_frame('Media', '/media'):
            with ui.row().classes('w-full items-center justify-between'):
                with ui.column().classes('gap-0'):
                    ui.label('Media Library').classes('text-3xl font-bold text-white')
                    ui.label('Images, audio and files used by your flows.').classes('text-gray-400')
                ui.upload(label='Upload', auto_upload=True, on_upload=lambda e: upload(e)) \
                    .props('accept="image/*,audio/*,.pdf" flat bordered').classes('w-64')
            content = ui.column().classes('w-full gap-4')

        async def reload():
            content.clear()
            with content:
                render_loading()
            # MediaService.get_all never raises; an offline server just yields an empty library
            items = await services.media.get_all()
            content.clear()
            with content:
                render(items)

        def render(items):
            if not items:
                ui.label('No media uploaded yet.').classes('text-gray-500 self-center mt-8')
                return
            with ui.row().classes('w-full gap-4'):
                for item in items:
                    render_item(item)

        def render_item(item: MediaItem):
            with ui.card().classes('w-56 bg-slate-900 border border-slate-800'):
                if item.type == 'image' and item.url:
                    ui.image(item.url).classes('w-full h-32 rounded')
                elif item.type == 'audio' and item.url:
                    ui.audio(item.url).classes('w-full')
                else:
                    ui.icon(TYPE_ICONS[item.type]).classes('text-5xl text-gray-500 self-center')
                with ui.row().classes('w-full items-center justify-between no-wrap'):
                    ui.label(item.name).classes('text-sm text-white truncate')
                    ui.button(icon='delete', color='red', on_click=lambda i=item: delete(i)).props('flat dense')

        async def upload(e: UploadEventArguments):
            try:
                await services.media.upload(e.name, e.content.read(), e.type or 'application/octet-stream')
            except BackendError as err:
                ui.notify(f'Upload failed: {err}', type='negative')
                return
            ui.notify(f'Uploaded {e.name}', type='positive')
            await reload()

        async def delete(item: MediaItem):
            if not await confirm('Delete Media', f'Delete "{item.name}"?', confirm_text='Delete'):
                return
            try:
                await services.media.delete(item.id)
            except BackendError as e:
                ui.notify(f'Failed to delete: {e}', type='negative')
                return
            await reload()

        ui.timer(0.1, reload, once=True)
