"""
Products page: catalog cards with create, rename/edit and delete.
"""

from nicegui import ui

from botdesk.components import confirm, load_section, page_frame
from botdesk.models import Product, ProductType
from botdesk.services import Services
from botdesk.storage import BackendError

TYPE_COLORS = {
    ProductType.PRINCIPAL: 'green',
    ProductType.ORDER_BUMP: 'blue',
    ProductType.UPSELL: 'purple',
    ProductType.DOWNSELL: 'orange',
}


def create_products_page(services: Services):

    @ui.page('/products')
    def products_page():
        with page_frame('Products', '/products'):
            with ui.row().classes('w-full items-center justify-between'):
                with ui.column().classes('gap-0'):
                    ui.label('Products').classes('text-3xl font-bold text-white')
                    ui.label('Offers the bots can sell inside a flow.').classes('text-gray-400')
                ui.button('New Product', icon='add', on_click=lambda: open_editor(None))
            content = ui.column().classes('w-full gap-4')

        async def reload():
            await load_section(content, services.products.get_all, render)

        def render(products):
            if not products:
                ui.label('No products registered.').classes('text-gray-500 self-center mt-8')
                return
            with ui.row().classes('w-full gap-4'):
                for product in products:
                    with ui.card().classes('w-72 bg-slate-900 border border-slate-800'):
                        ui.badge(product.type.value, color=TYPE_COLORS[product.type]).props('outline')
                        ui.label(product.name).classes('text-lg font-bold text-white')
                        ui.label(product.description).classes('text-sm text-gray-400')
                        ui.label(f'R$ {product.price:,.2f}').classes('text-xl font-bold text-green-400')
                        with ui.row().classes('w-full justify-end'):
                            ui.button(icon='edit', on_click=lambda p=product: open_editor(p)).props('flat dense')
                            ui.button(icon='delete', color='red',
                                      on_click=lambda p=product: delete(p)).props('flat dense')

        async def delete(product: Product):
            if not await confirm('Delete Product', f'Delete "{product.name}"?', confirm_text='Delete'):
                return
            try:
                await services.products.delete(product.id)
            except BackendError as e:
                ui.notify(f'Failed to delete: {e}', type='negative')
                return
            await reload()

        def open_editor(product):
            draft = product or Product(id='')

            with ui.dialog() as dialog, ui.card().classes('w-96 bg-slate-900 border border-slate-700'):
                ui.label('Edit Product' if product else 'New Product').classes('text-lg font-bold text-white')
                name = ui.input('Name', value=draft.name).classes('w-full')
                description = ui.textarea('Description', value=draft.description).classes('w-full')
                price = ui.number('Price (R$)', value=draft.price, min=0, step=0.1, format='%.2f').classes('w-full')
                kind = ui.select([t.value for t in ProductType], label='Type', value=draft.type.value) \
                    .classes('w-full')

                async def save():
                    if not (name.value or '').strip():
                        ui.notify('Name is required', type='negative')
                        return
                    draft.name = name.value.strip()
                    draft.description = description.value or ''
                    draft.price = float(price.value or 0)
                    draft.type = ProductType.coerce(kind.value)
                    try:
                        if product:
                            await services.products.update(product.id, draft.to_dict(include_id=False))
                        else:
                            await services.products.create(draft)
                    except BackendError as e:
                        ui.notify(f'Failed to save: {e}', type='negative')
                        return
                    dialog.close()
                    ui.notify('Product saved', type='positive')
                    await reload()

                with ui.row().classes('w-full justify-end'):
                    ui.button('Cancel', on_click=dialog.close, color='grey').props('flat')
                    ui.button('Save', on_click=save)

            dialog.open()

        ui.timer(0.1, reload, once=True)
