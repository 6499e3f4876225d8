"""
Field normalization for the node modal.

Projects a node's row list into the flat key/value map shown in the modal.
Composite rows (objects, arrays) have no flat scalar editor and are skipped,
as are keyless rows (array elements).
"""

import json
import math
from typing import Any, Iterable, Optional

from nodeedit.models import COMPOSITE_TYPES, EditableFieldMap, Row


def normalize_node_rows(rows: Optional[Iterable[Row]]) -> EditableFieldMap:
    """
    Build the editable field map for a node.

    Args:
        rows: The node's rows, or None (treated as empty)

    Returns:
        Dict of key -> value for every keyed, non-composite row, in row order.
        Duplicate keys: last value wins.
    """
    fields: EditableFieldMap = {}
    for row in rows or ():
        if row.type in COMPOSITE_TYPES:
            continue
        if row.key:
            fields[row.key] = row.value
    return fields


def _reject_constant(name: str) -> Any:
    raise ValueError(f"non-standard JSON constant: {name}")


def coerce_field_value(raw: Any, previous: Any) -> Any:
    """
    Convert text typed into an input back to the kind of value it replaces.

    Numbers, booleans and null only round-trip when the text parses as that
    kind; anything else is kept as typed.
    """
    if not isinstance(raw, str) or isinstance(previous, str):
        return raw

    text = raw.strip()
    if previous is None:
        return None if text == 'null' else raw

    if isinstance(previous, bool):
        if text in ('true', 'false'):
            return text == 'true'
        return raw

    if isinstance(previous, (int, float)):
        try:
            number = json.loads(text, parse_constant=_reject_constant)
        except ValueError:
            return raw
        if isinstance(number, bool) or not isinstance(number, (int, float)):
            return raw
        if isinstance(number, float) and not math.isfinite(number):
            return raw
        return number

    return raw
