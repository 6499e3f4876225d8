"""
Node Modal Component

A dialog for inspecting and editing the selected node:
- Read mode: the node's scalar fields as JSON, plus its JSON path
- Edit mode: one input per field, plus the read-only JSON path
- Edit / Save / Cancel / close buttons

All state lives in the EditSession; this module only renders it.
"""

from nicegui import ui
from typing import Callable, Optional

from nodeedit.session import EditSession


def _field_label(key: str) -> str:
    return key[:1].upper() + key[1:]


def _input_text(value) -> str:
    if value is None:
        return 'null'
    if isinstance(value, bool):
        return 'true' if value else 'false'
    return str(value)


def render_node_modal(
    session: EditSession,
    on_saved: Optional[Callable[[], None]] = None,
    on_close: Optional[Callable[[], None]] = None,
) -> 'ui.dialog':
    """
    Create and return the node modal dialog.

    Args:
        session: EditSession bound to the workspace stores
        on_saved: Callback after a successful save (e.g. redraw the chart)
        on_close: Callback after the dialog is closed

    Returns:
        The dialog instance (call dialog.open() to show)
    """
    dialog = ui.dialog()

    def handle_close():
        session.close()
        dialog.close()
        if on_close:
            on_close()

    dialog.on('hide', lambda: session.close())

    @ui.refreshable
    def body():
        with ui.row().classes('w-full items-center justify-between'):
            ui.label('Edit Node' if session.is_editing else 'Content').classes('text-xs font-medium')
            with ui.row().classes('gap-1 items-center'):
                if not session.is_editing:
                    ui.button('Edit', color='blue', on_click=do_enter_edit).props('size=sm')
                else:
                    ui.button('Save', color='green', on_click=do_save).props('size=sm')
                    ui.button('Cancel', color='red', on_click=do_cancel).props('size=sm outline')
                ui.button(icon='close', on_click=handle_close).props('flat round dense size=sm').tooltip('Close')

        if session.node is None:
            ui.label('No node selected').classes('text-sm text-gray-400')
            return

        if session.is_editing:
            with ui.column().classes('w-full gap-2'):
                for key, value in session.values.items():
                    field_input = ui.input(label=_field_label(key), value=_input_text(value)).classes('w-full')
                    field_input.on_value_change(lambda e, k=key: session.set_field_text(k, e.value))
        else:
            with ui.scroll_area().classes('w-[600px] max-h-[250px]'):
                ui.code(session.content_text, language='json').classes('w-full')

        ui.label('JSON Path').classes('text-xs font-medium')
        ui.code(session.json_path, language='json').classes('w-full')

    def do_enter_edit():
        session.enter_edit()
        body.refresh()

    def do_cancel():
        session.cancel()
        body.refresh()

    def do_save():
        result = session.save()
        if result.ok:
            ui.notify(result.message, type='positive')
            if on_saved:
                on_saved()
        elif result.status == 'selection_changed':
            ui.notify(result.message, type='warning')
        else:
            ui.notify(result.message, type='negative')
        body.refresh()

    with dialog:
        with ui.card().classes('min-w-[380px] max-w-[640px] bg-slate-900 border border-slate-700'):
            body()

    dialog.on('before-show', lambda: body.refresh())
    # A source edit can drop or replace the selected node; the session has
    # already reset itself by the time this listener runs.
    session.graph_store.on('selection_change', lambda node: body.refresh())
    return dialog
