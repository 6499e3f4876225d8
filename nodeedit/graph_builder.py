"""
Graph derivation for a JSON document.

Every object and array in the document becomes one graph node, keyed by its
canonical path string and carrying its NodeData:

- object members with scalar values become keyed rows
- array elements with scalar values become keyless rows
- composite children become "object"/"array" rows whose value is the child
  count, plus an edge from the container to the child's own node

A scalar document yields a single root node with one keyless row.
The graph is always rebuilt from scratch; there is no incremental update.
"""

from typing import Any, List

import networkx as nx

from nodeedit.json_path import format_path
from nodeedit.models import NodeData, NodePath, Row, value_type


def _row_for(key, value: Any) -> Row:
    kind = value_type(value)
    if kind in ('object', 'array'):
        return Row(key=key, value=len(value), type=kind)
    return Row(key=key, value=value, type=kind)


def _add_container(G: nx.DiGraph, value: Any, path: NodePath) -> str:
    node_id = format_path(path)
    rows: List[Row] = []
    children = []

    if isinstance(value, dict):
        for key, child in value.items():
            rows.append(_row_for(key, child))
            if isinstance(child, (dict, list)):
                children.append((child, path + (key,)))
    elif isinstance(value, list):
        for index, child in enumerate(value):
            rows.append(_row_for(None, child))
            if isinstance(child, (dict, list)):
                children.append((child, path + (index,)))
    else:
        rows.append(_row_for(None, value))

    G.add_node(node_id, data=NodeData(path=path, text=tuple(rows)), depth=len(path))

    for child, child_path in children:
        child_id = _add_container(G, child, child_path)
        G.add_edge(node_id, child_id, segment=child_path[-1])

    return node_id


def build_graph(document: Any) -> nx.DiGraph:
    """
    Build the node graph for a parsed JSON document.

    Returns:
        nx.DiGraph whose node ids are canonical path strings. Each node has a
        'data' attribute (NodeData) and a 'depth' attribute (path length).
    """
    G = nx.DiGraph()
    _add_container(G, document, ())
    return G


def node_label(node: NodeData, max_rows: int = 4) -> str:
    """Short multi-line label used when drawing a node."""
    lines = []
    for row in node.text[:max_rows]:
        if row.type == 'object':
            shown = f"{{{row.value}}}"
        elif row.type == 'array':
            shown = f"[{row.value}]"
        elif row.type == 'null':
            shown = 'null'
        elif row.type == 'boolean':
            shown = 'true' if row.value else 'false'
        else:
            shown = str(row.value)
        lines.append(f"{row.key}: {shown}" if row.key else shown)
    if len(node.text) > max_rows:
        lines.append(f"… +{len(node.text) - max_rows}")
    return "\n".join(lines) or "(empty)"
