"""
Data model for the node edit engine.

A node is read-only data derived from the document and the graph layout.
It is replaced wholesale whenever the selection or the document changes.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Tuple, Union

PathSegment = Union[int, str]
NodePath = Tuple[PathSegment, ...]

RowType = Literal['object', 'array', 'string', 'number', 'boolean', 'null']
COMPOSITE_TYPES = ('object', 'array')

# field name -> scalar value, in row order
EditableFieldMap = Dict[str, Any]


def value_type(value: Any) -> RowType:
    """Return the row type tag for a parsed JSON value."""
    if isinstance(value, dict):
        return 'object'
    if isinstance(value, list):
        return 'array'
    if value is None:
        return 'null'
    # bool before int: bool is an int subclass
    if isinstance(value, bool):
        return 'boolean'
    if isinstance(value, (int, float)):
        return 'number'
    return 'string'


@dataclass(frozen=True)
class Row:
    """One displayed attribute of a node."""
    key: Optional[str]
    value: Any
    type: RowType

    @property
    def is_composite(self) -> bool:
        return self.type in COMPOSITE_TYPES


@dataclass(frozen=True)
class NodeData:
    """The selected node: its structural path and its rows."""
    path: NodePath = ()
    text: Tuple[Row, ...] = field(default_factory=tuple)
