"""
Document patcher.

Merges a node's edited scalar fields back into the full document at the node's
path, leaving sibling and unrelated structure untouched.

patch_document() raises on failure. apply_edits() wraps the same operation and
returns a PatchOutcome so callers can decide how to surface the failure.
"""

import json
import logging
import math
from dataclasses import dataclass
from typing import Any, Mapping, Optional, Sequence

from nodeedit.errors import MalformedDocumentError, MissingPathError, NodeEditError
from nodeedit.json_path import format_path, resolve_path
from nodeedit.models import PathSegment

logger = logging.getLogger(__name__)

DEFAULT_INDENT = 2


def _reject_constant(name: str) -> Any:
    raise ValueError(f"Non-standard JSON constant: {name}")


def _parse_finite_float(text: str) -> float:
    value = float(text)
    if not math.isfinite(value):
        raise ValueError(f"Number out of range: {text}")
    return value


def parse_document(document_text: str) -> Any:
    """Parse document text, raising MalformedDocumentError if it is not valid JSON."""
    if not isinstance(document_text, str):
        raise MalformedDocumentError(f"Expected document text, got {type(document_text).__name__}")
    try:
        return json.loads(document_text, parse_float=_parse_finite_float, parse_constant=_reject_constant)
    except json.JSONDecodeError as e:
        raise MalformedDocumentError(e.msg, e.lineno, e.colno) from e
    except ValueError as e:
        raise MalformedDocumentError(str(e)) from e


def serialize_document(document: Any, indent: int = DEFAULT_INDENT) -> str:
    """Serialize with key order preserved and the given indentation."""
    try:
        return json.dumps(document, indent=indent, ensure_ascii=False, allow_nan=False)
    except ValueError as e:
        # non-finite floats can still arrive through edit values
        raise MalformedDocumentError(str(e)) from e


def patch_document(
    document_text: str,
    path: Sequence[PathSegment],
    edits: Mapping[str, Any],
    indent: int = DEFAULT_INDENT,
) -> str:
    """
    Merge `edits` into the object at `path` and return the new document text.

    Args:
        document_text: Current document-of-record text
        path: Node path (raw segments, not the display string)
        edits: Field name -> new scalar value
        indent: Indentation used when re-serializing

    Returns:
        Updated document text

    Raises:
        MalformedDocumentError: document_text is not valid JSON, or holds a
            number that cannot be serialized back
        MissingPathError: a segment resolves to nothing, or the target is not
            an object while there are edits to apply
    """
    path = tuple(path or ())
    document = parse_document(document_text)

    # An empty path addresses the top-level value itself.
    target = resolve_path(document, path)

    if edits:
        if not isinstance(target, dict):
            raise MissingPathError(
                f"{format_path(path)} does not address an object",
                path=path,
                depth=max(len(path) - 1, 0),
            )
        # merge, never replace: keys absent from edits keep their value
        for key, value in edits.items():
            target[key] = value

    return serialize_document(document, indent=indent)


@dataclass
class PatchOutcome:
    """Result of apply_edits: either the new document or the failure."""
    document: Optional[str] = None
    error: Optional[NodeEditError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @property
    def missing_path(self) -> bool:
        return isinstance(self.error, MissingPathError)

    @property
    def malformed_document(self) -> bool:
        return isinstance(self.error, MalformedDocumentError)


def apply_edits(
    document_text: str,
    path: Sequence[PathSegment],
    edits: Mapping[str, Any],
    indent: int = DEFAULT_INDENT,
) -> PatchOutcome:
    """Like patch_document(), but returns a PatchOutcome instead of raising."""
    try:
        return PatchOutcome(document=patch_document(document_text, path, edits, indent=indent))
    except NodeEditError as e:
        logger.debug(f"Patch at {format_path(path)} aborted: {e}")
        return PatchOutcome(error=e)
