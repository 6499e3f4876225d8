"""
Main NiceGUI application for the JSON node editor.

Renders the source text editor next to the document graph (ui.echart).
Clicking a node selects it and opens the node modal, where its scalar
fields can be edited and saved back into the document.
"""

from nicegui import ui
import logging
import sys

from dotenv import load_dotenv
load_dotenv()

from nodeedit.config import get_settings
from nodeedit.chart_builder import (
    build_echart_options,
    normalize_click_payload,
    resolve_node_path_from_payload,
    REQUESTED_EVENT_KEYS,
)
from nodeedit.components import render_node_modal
from nodeedit.errors import MalformedDocumentError
from nodeedit.workspace import EditorWorkspace

settings = get_settings()

logging.basicConfig(
    level=getattr(logging, settings.log_level, logging.INFO),
    format='%(asctime)s %(levelname)s %(name)s: %(message)s',
)
logger = logging.getLogger(__name__)


def load_workspace() -> EditorWorkspace:
    """Open the configured document, falling back to an empty one."""
    path = settings.resolved_document_path
    try:
        return EditorWorkspace.from_file(path, indent=settings.indent)
    except FileNotFoundError:
        logger.warning(f"Document {path} not found; starting with an empty document")
    except MalformedDocumentError as e:
        logger.error(f"Document {path} is not valid JSON ({e}); starting with an empty document")
    return EditorWorkspace("{}", indent=settings.indent)


@ui.page('/')
def main_page():
    workspace = load_workspace()
    state = {'chart': None, 'editor': None}

    def refresh_chart_ui():
        chart = state['chart']
        if chart is None:
            return
        chart.options.clear()
        chart.options.update(build_echart_options(workspace.graph_store))
        chart.update()

    def on_saved():
        refresh_chart_ui()

    modal = render_node_modal(workspace.session, on_saved=on_saved)

    def handle_chart_click(event):
        payload = normalize_click_payload(event.args)
        path = resolve_node_path_from_payload(payload, workspace.graph_store)
        if path is None:
            return
        workspace.select(path)
        refresh_chart_ui()
        modal.open()

    # Keep the textarea in sync with programmatic buffer writes (saves from the modal).
    def on_buffer_change(text, programmatic):
        editor = state['editor']
        if programmatic and editor is not None and editor.value != text:
            editor.value = text

    workspace.source_buffer.on('change', on_buffer_change)

    def on_editor_input(e):
        if e.value == workspace.source_buffer.contents:
            return
        workspace.source_buffer.set_contents(e.value, programmatic=False)
        if workspace.last_error is None:
            status.set_text('')
            refresh_chart_ui()
        else:
            status.set_text(f'Invalid JSON: {workspace.last_error}')

    # --- Layout ---
    with ui.row().classes('w-full h-screen no-wrap gap-0'):
        with ui.column().classes('w-1/3 h-full p-2 gap-1 bg-slate-900'):
            ui.label('Source').classes('text-xs text-gray-400')
            state['editor'] = ui.textarea(value=workspace.source_buffer.contents).props(
                'outlined dense input-style="font-family: monospace; min-height: 80vh"'
            ).classes('w-full')
            state['editor'].on_value_change(on_editor_input)
            status = ui.label('').classes('text-xs text-red-400')

        with ui.column().classes('w-2/3 h-full gap-0'):
            state['chart'] = ui.echart(build_echart_options(workspace.graph_store)).classes('w-full h-full')
            state['chart'].on('componentClick', handle_chart_click, REQUESTED_EVENT_KEYS)


if __name__ in {"__main__", "__mp_main__"}:
    ui.run(
        title='JSON Node Editor',
        port=settings.port,
        reload=not getattr(sys, 'frozen', False),
        dark=True,
    )
