"""
Stores the edit engine reads from and commits to.

- JsonDocumentStore: document-of-record text
- SourceBuffer: source editor text with programmatic/user change events
- GraphStore: networkx graph of document nodes and the current selection
"""

from nodeedit.stores.protocol import DocumentStore, SourceBufferStore, GraphModelStore
from nodeedit.stores.document_store import JsonDocumentStore
from nodeedit.stores.source_buffer import SourceBuffer
from nodeedit.stores.graph_store import GraphStore

__all__ = [
    'DocumentStore',
    'SourceBufferStore',
    'GraphModelStore',
    'JsonDocumentStore',
    'SourceBuffer',
    'GraphStore',
]
