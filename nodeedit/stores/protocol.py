"""
Store Protocol Definitions.

The edit engine depends on three store-shaped collaborators. They are passed in
explicitly (never looked up as globals) so commit ordering can be tested with
any conforming object.
"""

from typing import Protocol, Optional, Callable, Any, Sequence, runtime_checkable

from nodeedit.models import NodeData, PathSegment


@runtime_checkable
class DocumentStore(Protocol):
    """Holds the document-of-record as serialized JSON text."""

    def get_document_text(self) -> str:
        """Return the current document text."""
        ...

    def set_document_text(self, text: str) -> None:
        """Replace the document text."""
        ...


@runtime_checkable
class SourceBufferStore(Protocol):
    """
    The text shown in the source editor.

    Listeners registered for 'user_edit' only fire for non-programmatic
    updates, so a programmatic write never starts an edit-detection cycle.
    """

    @property
    def contents(self) -> str:
        ...

    def set_contents(self, text: str, programmatic: bool = False) -> None:
        """
        Replace the buffer contents.

        Args:
            text: New buffer text
            programmatic: True when the engine (not the user) wrote the text
        """
        ...

    def on(self, event: str, callback: Callable[..., Any]) -> None:
        ...

    def off(self, event: str, callback: Callable[..., Any]) -> None:
        ...


@runtime_checkable
class GraphModelStore(Protocol):
    """The visualized graph and the current selection."""

    @property
    def selected_node(self) -> Optional[NodeData]:
        ...

    def set_graph(self, document_text: str) -> None:
        """Rebuild the whole graph from document text."""
        ...

    def refresh_selected_node(self) -> None:
        """Re-resolve the selected node by path against the current graph."""
        ...

    def select(self, path: Sequence[PathSegment]) -> Optional[NodeData]:
        """Select the node at `path`; returns it, or None when absent."""
        ...

    def get_node(self, path: Sequence[PathSegment]) -> Optional[NodeData]:
        ...

    def clear_selection(self) -> None:
        ...
