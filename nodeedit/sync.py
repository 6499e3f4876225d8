"""
State synchronizer.

Commits an updated document to every dependent store, always in this order:

1. document store (document-of-record)
2. source buffer, flagged programmatic
3. graph store rebuild
4. selected node re-resolved by path

There is no rollback: each step is assumed to succeed.
"""

import logging

from nodeedit.stores.protocol import DocumentStore, GraphModelStore, SourceBufferStore

logger = logging.getLogger(__name__)


class StateSynchronizer:
    """Propagates a committed document to the injected stores."""

    def __init__(
        self,
        document_store: DocumentStore,
        source_buffer: SourceBufferStore,
        graph_store: GraphModelStore,
    ):
        self.document_store = document_store
        self.source_buffer = source_buffer
        self.graph_store = graph_store

    def commit(self, updated_document: str) -> None:
        """Write `updated_document` to every store and refresh the selection."""
        self.document_store.set_document_text(updated_document)
        self.source_buffer.set_contents(updated_document, programmatic=True)
        self.graph_store.set_graph(updated_document)
        self.graph_store.refresh_selected_node()
        logger.info(f"Committed document ({len(updated_document)} chars)")
