"""
ECharts options builder for the document graph.

Converts the GraphStore's nodes and edges into an ECharts 'graph' series and
maps chart click payloads back to node paths.
"""

from typing import Any, Dict, Iterable, List, Optional, Tuple

from nodeedit.graph_builder import node_label
from nodeedit.json_path import format_path
from nodeedit.models import NodeData, NodePath
from nodeedit.stores.graph_store import GraphStore

# Event keys we request from ECharts click events
REQUESTED_EVENT_KEYS = ['componentType', 'name', 'seriesType', 'value', 'dataType']

COLUMN_WIDTH = 260
ROW_HEIGHT = 110

NODE_COLOR = '#1e293b'
SELECTED_COLOR = '#2563eb'
EDGE_COLOR = '#64748b'


def layered_positions(nodes: Iterable[NodeData]) -> Dict[str, Tuple[float, float]]:
    """
    Left-to-right layout: x from path depth, y from order of appearance
    within that depth.
    """
    positions = {}
    rows_per_depth: Dict[int, int] = {}
    for data in nodes:
        depth = len(data.path)
        row = rows_per_depth.get(depth, 0)
        rows_per_depth[depth] = row + 1
        positions[format_path(data.path)] = (depth * COLUMN_WIDTH, row * ROW_HEIGHT)
    return positions


def build_echart_options(graph_store: GraphStore, selected_path: Optional[NodePath] = None) -> Dict[str, Any]:
    """
    Build ECharts options for the current graph.

    Args:
        graph_store: Store holding the graph
        selected_path: Path of the node to highlight (defaults to the store's selection)

    Returns:
        ECharts options dict ready for ui.echart()
    """
    if selected_path is None:
        selected_path = graph_store.selected_path

    nodes = graph_store.nodes
    positions = layered_positions(nodes)

    e_nodes: List[Dict[str, Any]] = []
    for data in nodes:
        node_id = format_path(data.path)
        is_selected = selected_path is not None and data.path == tuple(selected_path)
        x, y = positions[node_id]
        e_nodes.append({
            'id': node_id,
            'name': node_id,
            'x': x,
            'y': y,
            'symbol': 'roundRect',
            'symbolSize': [200, 24 + 14 * min(len(data.text), 5)],
            'itemStyle': {
                'color': SELECTED_COLOR if is_selected else NODE_COLOR,
                'borderColor': '#93c5fd' if is_selected else '#475569',
                'borderWidth': 2 if is_selected else 1,
            },
            'label': {
                'show': True,
                'position': 'inside',
                'color': '#e2e8f0',
                'fontFamily': 'monospace',
                'formatter': node_label(data),
            },
            'tooltip': {'formatter': node_id},
        })

    e_links = []
    for parent_path, child_path in graph_store.edges:
        e_links.append({
            'source': format_path(parent_path),
            'target': format_path(child_path),
            'label': {'show': True, 'formatter': str(child_path[-1])},
            'lineStyle': {'color': EDGE_COLOR, 'width': 1.5, 'curveness': 0.1},
            'symbol': ['none', 'arrow'],
        })

    return {
        'backgroundColor': '#0f172a',
        'tooltip': {},
        'animationDurationUpdate': 0,
        'series': [{
            'type': 'graph',
            'layout': 'none',
            'roam': True,
            'data': e_nodes,
            'links': e_links,
        }],
    }


def normalize_click_payload(raw_payload: Any) -> Dict[str, Any]:
    """Normalize NiceGUI chart click payloads into a dictionary for easier parsing."""
    if isinstance(raw_payload, dict):
        return raw_payload
    if isinstance(raw_payload, (list, tuple)):
        return {
            REQUESTED_EVENT_KEYS[i]: raw_payload[i]
            for i in range(min(len(raw_payload), len(REQUESTED_EVENT_KEYS)))
        }
    if isinstance(raw_payload, str):
        return {'name': raw_payload}
    return {}


def resolve_node_path_from_payload(payload: Dict[str, Any], graph_store: GraphStore) -> Optional[NodePath]:
    """Return the node path for a normalized click payload, or None for non-node clicks."""
    if not isinstance(payload, dict):
        return None
    if payload.get('componentType') != 'series':
        return None
    if payload.get('dataType') == 'edge':
        return None

    node_id = payload.get('name')
    if not node_id:
        return None

    node = graph_store.get_node_by_id(node_id)
    return node.path if node else None
