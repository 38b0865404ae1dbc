"""
Confirmation dialog shared by every destructive or notable action.
"""

from nicegui import ui

VARIANTS = {
    'danger': {'icon': 'warning', 'color': 'red'},
    'warning': {'icon': 'error_outline', 'color': 'orange'},
    'success': {'icon': 'check_circle', 'color': 'green'},
}


async def confirm(
    title: str,
    message: str,
    variant: str = 'danger',
    confirm_text: str = 'Confirm',
    cancel_text: str = 'Cancel',
    show_cancel: bool = True,
) -> bool:
    """
    Show a modal and wait for the answer.

    Args:
        title: Dialog heading
        message: Body text
        variant: 'danger', 'warning' or 'success' (icon and button color)
        confirm_text: Label of the confirming button
        cancel_text: Label of the dismissing button
        show_cancel: False for acknowledgement-only dialogs

    Returns:
        True when the user confirmed, False when cancelled or dismissed
    """
    style = VARIANTS.get(variant, VARIANTS['danger'])

    with ui.dialog() as dialog, ui.card().classes('w-96 bg-slate-900 border border-slate-700'):
        with ui.row().classes('w-full items-center gap-3'):
            ui.icon(style['icon'], color=style['color']).classes('text-3xl')
            ui.label(title).classes('text-lg font-bold text-white')
        ui.label(message).classes('text-sm text-gray-300')
        with ui.row().classes('w-full justify-end gap-2 mt-2'):
            if show_cancel:
                ui.button(cancel_text, on_click=lambda: dialog.submit(False), color='grey').props('flat')
            ui.button(confirm_text, on_click=lambda: dialog.submit(True), color=style['color'])

    result = await dialog
    dialog.clear()
    return bool(result)
