"""
Graph model store.

Owns the networkx graph derived from the document and the current selection.
The selection is tracked by path, so after a rebuild the selected node can be
re-resolved against the new graph and its stale NodeData replaced.
"""

import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Tuple

import networkx as nx

from nodeedit.graph_builder import build_graph
from nodeedit.json_path import format_path
from nodeedit.models import NodeData, NodePath, PathSegment
from nodeedit.patcher import parse_document

logger = logging.getLogger(__name__)


class GraphStore:
    """
    Graph of document nodes plus the selected node.

    Events ('graph_change', 'selection_change') are emitted to registered
    callbacks; selection_change receives the new NodeData or None.
    """

    def __init__(self):
        self.G = nx.DiGraph()
        self._selected: Optional[NodeData] = None
        self._callbacks: Dict[str, List[Callable[..., Any]]] = {
            'graph_change': [],
            'selection_change': [],
        }

    # --- Graph ---

    def set_graph(self, document_text: str) -> None:
        """
        Rebuild the graph from document text.

        Raises:
            MalformedDocumentError: the text does not parse; the previous
                graph is kept
        """
        document = parse_document(document_text)
        self.G = build_graph(document)
        logger.debug(f"Graph rebuilt: {self.G.number_of_nodes()} nodes, {self.G.number_of_edges()} edges")
        self._emit('graph_change', self.G)

    @property
    def nodes(self) -> List[NodeData]:
        """All nodes in graph order (root first, depth-first)."""
        return [attrs['data'] for _, attrs in self.G.nodes(data=True)]

    @property
    def edges(self) -> List[Tuple[NodePath, NodePath]]:
        """(parent_path, child_path) pairs."""
        return [
            (self.G.nodes[src]['data'].path, self.G.nodes[tgt]['data'].path)
            for src, tgt in self.G.edges()
        ]

    def get_node(self, path: Sequence[PathSegment]) -> Optional[NodeData]:
        node_id = format_path(path)
        if node_id not in self.G:
            return None
        return self.G.nodes[node_id]['data']

    def get_node_by_id(self, node_id: str) -> Optional[NodeData]:
        """Look a node up by its canonical path string."""
        if node_id not in self.G:
            return None
        return self.G.nodes[node_id]['data']

    # --- Selection ---

    @property
    def selected_node(self) -> Optional[NodeData]:
        return self._selected

    @property
    def selected_path(self) -> Optional[NodePath]:
        return self._selected.path if self._selected else None

    def select(self, path: Sequence[PathSegment]) -> Optional[NodeData]:
        """Select the node at `path`. Selecting an absent path clears the selection."""
        node = self.get_node(path)
        if node is None:
            logger.info(f"No node at {format_path(path)}; clearing selection")
        self._set_selected(node)
        return node

    def clear_selection(self) -> None:
        self._set_selected(None)

    def refresh_selected_node(self) -> None:
        """
        Replace the selected NodeData with the node at the same path in the
        current graph. If the path no longer exists the selection is cleared.
        """
        if self._selected is None:
            return
        path = self._selected.path
        fresh = self.get_node(path)
        if fresh is None:
            logger.warning(f"Selected node {format_path(path)} no longer exists after rebuild")
        self._set_selected(fresh)

    def _set_selected(self, node: Optional[NodeData]) -> None:
        self._selected = node
        self._emit('selection_change', node)

    # --- Events ---

    def on(self, event: str, callback: Callable[..., Any]) -> None:
        if event in self._callbacks:
            self._callbacks[event].append(callback)

    def off(self, event: str, callback: Callable[..., Any]) -> None:
        if event in self._callbacks and callback in self._callbacks[event]:
            self._callbacks[event].remove(callback)

    def _emit(self, event: str, data: Any = None) -> None:
        for callback in list(self._callbacks.get(event, [])):
            try:
                callback(data)
            except Exception as e:
                logger.error(f"Error in graph callback for {event}: {e}")
