"""
Editor workspace - wires the stores, synchronizer and edit session together.

Two update paths reach the stores:
- node modal save: EditSession -> StateSynchronizer (programmatic buffer write)
- the user typing in the source editor: a 'user_edit' buffer event, handled
  here by re-parsing the text and, when valid, updating the document and graph

Programmatic buffer writes never trigger the second path.
"""

import logging
from pathlib import Path
from typing import Optional, Sequence, Union

from nodeedit.errors import MalformedDocumentError
from nodeedit.models import NodeData, PathSegment
from nodeedit.patcher import DEFAULT_INDENT
from nodeedit.session import EditSession
from nodeedit.stores import GraphStore, JsonDocumentStore, SourceBuffer
from nodeedit.sync import StateSynchronizer

logger = logging.getLogger(__name__)


class EditorWorkspace:
    """One open document with its dependent views."""

    def __init__(self, document_text: str = "{}", indent: int = DEFAULT_INDENT):
        self.document_store = JsonDocumentStore(document_text)
        self.source_buffer = SourceBuffer(document_text)
        self.graph_store = GraphStore()
        self.synchronizer = StateSynchronizer(self.document_store, self.source_buffer, self.graph_store)
        self.session = EditSession(
            self.document_store,
            self.graph_store,
            self.synchronizer,
            indent=indent,
        )
        self.last_error: Optional[MalformedDocumentError] = None

        self.graph_store.set_graph(document_text)
        self.source_buffer.on('user_edit', self._on_user_edit)
        self.graph_store.on('selection_change', self.session.on_selection_change)

    @classmethod
    def from_file(cls, path: Union[str, Path], indent: int = DEFAULT_INDENT) -> "EditorWorkspace":
        store = JsonDocumentStore.from_file(path)
        return cls(store.get_document_text(), indent=indent)

    def select(self, path: Sequence[PathSegment]) -> Optional[NodeData]:
        return self.graph_store.select(path)

    def _on_user_edit(self, text: str) -> None:
        """Apply text typed into the source editor, keeping the last good document on parse errors."""
        try:
            self.graph_store.set_graph(text)
        except MalformedDocumentError as e:
            self.last_error = e
            logger.info(f"Source buffer is not valid JSON yet: {e}")
            return
        self.last_error = None
        self.document_store.set_document_text(text)
        self.graph_store.refresh_selected_node()
