"""
Path addressing for nodes in a JSON document.

A node path is the ordered list of segments walked from the document root:
integer segments index arrays, string segments key objects.

- format_path(): canonical display string, e.g. $[0]["children"][2]
- walk_to_parent(): the container that directly holds the node
- resolve_path(): the node value itself

The canonical string is for display and copy only. Addressing always uses the
raw segment sequence.
"""

import json
from typing import Any, Optional, Sequence

from nodeedit.errors import MissingPathError
from nodeedit.models import PathSegment

ROOT_MARKER = "$"


def is_index(segment: Any) -> bool:
    """True for integer segments (bool is excluded)."""
    return isinstance(segment, int) and not isinstance(segment, bool)


def format_segment(segment: PathSegment) -> str:
    if is_index(segment):
        return f"[{segment}]"
    # Keys render as JSON string literals, so quotes and backslashes are escaped.
    return f"[{json.dumps(str(segment), ensure_ascii=False)}]"


def format_path(path: Optional[Sequence[PathSegment]]) -> str:
    """
    Render a node path as a JSONPath-like bracket string.

    >>> format_path([0, "children", 2])
    '$[0]["children"][2]'
    """
    if not path:
        return ROOT_MARKER
    return ROOT_MARKER + "".join(format_segment(seg) for seg in path)


def step_into(value: Any, segment: PathSegment, path: Sequence[PathSegment], depth: int) -> Any:
    """Index one level into `value`, raising MissingPathError when nothing is there."""
    if isinstance(value, dict) and isinstance(segment, str):
        if segment in value:
            return value[segment]
    elif isinstance(value, list) and is_index(segment):
        if 0 <= segment < len(value):
            return value[segment]
    raise MissingPathError(
        f"No value at {format_path(path[:depth + 1])}",
        path=path,
        depth=depth,
    )


def walk_to_parent(document: Any, path: Sequence[PathSegment]) -> Any:
    """
    Follow every segment except the last and return the container reached.

    For an empty path there is no parent; the document itself is returned.
    """
    ref = document
    for depth, segment in enumerate(path[:-1]):
        ref = step_into(ref, segment, path, depth)
    return ref


def resolve_path(document: Any, path: Sequence[PathSegment]) -> Any:
    """Return the value addressed by `path` (the document itself for an empty path)."""
    if not path:
        return document
    parent = walk_to_parent(document, path)
    return step_into(parent, path[-1], path, len(path) - 1)
