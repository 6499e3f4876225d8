"""
Edit Session - state machine behind the node modal.

States:
- viewing: fields are shown read-only, derived fresh from the selected node
- editing: the user mutates an in-memory copy of the fields; the document
  is not touched until save

Transitions:
- viewing --enter_edit--> editing
- editing --cancel--> viewing (edits discarded)
- editing --save--> viewing on success; on failure the session stays in
  editing with the edits intact so no work is lost
- selection change / close --> viewing from any state

Save always re-reads the document-of-record instead of a snapshot taken when
editing started, so changes made elsewhere in between are not clobbered.
"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Literal, Optional

from nodeedit.errors import NodeEditError
from nodeedit.json_path import format_path
from nodeedit.models import EditableFieldMap, NodeData, NodePath
from nodeedit.normalizer import coerce_field_value, normalize_node_rows
from nodeedit.patcher import DEFAULT_INDENT, apply_edits
from nodeedit.stores.protocol import DocumentStore, GraphModelStore
from nodeedit.sync import StateSynchronizer

logger = logging.getLogger(__name__)

SessionMode = Literal['viewing', 'editing']
SaveStatus = Literal[
    'saved', 'missing_path', 'malformed_document', 'no_selection', 'selection_changed', 'not_editing'
]


@dataclass
class SaveResult:
    """Outcome of EditSession.save()."""
    status: SaveStatus
    document: Optional[str] = None
    error: Optional[NodeEditError] = None

    @property
    def ok(self) -> bool:
        return self.status == 'saved'

    @property
    def message(self) -> str:
        if self.status == 'saved':
            return 'Changes saved'
        if self.status == 'no_selection':
            return 'No node selected'
        if self.status == 'not_editing':
            return 'Not in edit mode'
        if self.status == 'selection_changed':
            return 'Selection changed before saving; edits discarded'
        if self.status == 'missing_path':
            return f'Node no longer exists in the document: {self.error}'
        return f'Document is not valid JSON: {self.error}'


class EditSession:
    """Edit state for one node modal instance."""

    def __init__(
        self,
        document_store: DocumentStore,
        graph_store: GraphModelStore,
        synchronizer: StateSynchronizer,
        indent: int = DEFAULT_INDENT,
    ):
        self.document_store = document_store
        self.graph_store = graph_store
        self.synchronizer = synchronizer
        self.indent = indent

        self._mode: SessionMode = 'viewing'
        self._values: EditableFieldMap = {}
        self._edit_path: Optional[NodePath] = None

    # --- Derived view of the selected node ---

    @property
    def node(self) -> Optional[NodeData]:
        return self.graph_store.selected_node

    @property
    def mode(self) -> SessionMode:
        return self._mode

    @property
    def is_editing(self) -> bool:
        return self._mode == 'editing'

    @property
    def fields(self) -> EditableFieldMap:
        """Normalized fields of the selected node (never the in-progress edits)."""
        node = self.node
        return normalize_node_rows(node.text if node else None)

    @property
    def values(self) -> EditableFieldMap:
        """What the modal should show: session edits while editing, fields otherwise."""
        if self.is_editing:
            return dict(self._values)
        return self.fields

    @property
    def json_path(self) -> str:
        node = self.node
        return format_path(node.path if node else None)

    @property
    def content_text(self) -> str:
        """Fields rendered as indented JSON for the read-only code view."""
        return json.dumps(self.fields, indent=self.indent, ensure_ascii=False)

    # --- Transitions ---

    def enter_edit(self) -> EditableFieldMap:
        """Snapshot the normalized fields into the session and start editing."""
        node = self.node
        self._values = self.fields
        self._edit_path = node.path if node else None
        self._mode = 'editing'
        return dict(self._values)

    def set_field(self, key: str, value: Any) -> None:
        """Change one field of the in-memory edit map. The document is untouched."""
        if not self.is_editing:
            raise RuntimeError("set_field() called outside edit mode")
        if key not in self._values:
            raise KeyError(key)
        self._values[key] = value

    def set_field_text(self, key: str, raw: str) -> None:
        """Like set_field(), converting input text back to the field's original kind."""
        self.set_field(key, coerce_field_value(raw, self.fields.get(key)))

    def cancel(self) -> EditableFieldMap:
        """Discard session edits and return to viewing."""
        self._reset()
        return self.fields

    def close(self) -> None:
        """Modal closed: discard any in-progress edits."""
        self._reset()

    def on_selection_change(self, node: Optional[NodeData] = None) -> None:
        """
        Graph selection changed. A different node discards the session; the same
        path re-resolved after a commit keeps it.
        """
        new_path = node.path if node else None
        if self.is_editing and new_path == self._edit_path:
            return
        self._reset()

    def save(self) -> SaveResult:
        """
        Patch the latest document with the session edits and commit it.

        Returns:
            SaveResult with status 'saved' and the new document on success.
            On 'missing_path' or 'malformed_document' the document is
            unchanged and the session keeps its edits.
        """
        if not self.is_editing:
            return SaveResult('not_editing')

        node = self.node
        if node is None:
            logger.warning("Save requested with no selected node")
            return SaveResult('no_selection')
        if node.path != self._edit_path:
            logger.info(f"Selection moved to {format_path(node.path)} during edit; discarding session")
            self._reset()
            return SaveResult('selection_changed')

        current = self.document_store.get_document_text()
        outcome = apply_edits(current, node.path, self._values, indent=self.indent)

        if outcome.missing_path:
            logger.warning(f"Save aborted, stale selection {format_path(node.path)}: {outcome.error}")
            return SaveResult('missing_path', error=outcome.error)
        if outcome.malformed_document:
            logger.warning(f"Save aborted, document does not parse: {outcome.error}")
            return SaveResult('malformed_document', error=outcome.error)

        self.synchronizer.commit(outcome.document)
        self._reset()
        logger.info(f"Saved node {format_path(node.path)}")
        return SaveResult('saved', document=outcome.document)

    def _reset(self) -> None:
        self._mode = 'viewing'
        self._values = {}
        self._edit_path = None
