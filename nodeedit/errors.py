"""
Error taxonomy for the node edit engine.

Normalization and path formatting are total and never raise.
Patching raises one of the errors below; callers that need a value instead of
an exception use `patcher.apply_edits`, which wraps them in a PatchOutcome.
"""

from typing import Optional, Sequence

from nodeedit.models import PathSegment


class NodeEditError(Exception):
    """Base class for failures while applying node edits."""


class MalformedDocumentError(NodeEditError):
    """The document-of-record text does not parse as JSON."""
    def __init__(self, message: str, lineno: Optional[int] = None, colno: Optional[int] = None):
        self.lineno = lineno
        self.colno = colno
        if lineno is not None:
            message = f"{message} (line {lineno}, column {colno})"
        super().__init__(message)


class MissingPathError(NodeEditError):
    """
    A path segment resolves to nothing in the current document.

    This usually means the selected node is stale relative to the document.
    `depth` is the index of the segment that failed.
    """
    def __init__(self, message: str, path: Sequence[PathSegment] = (), depth: int = 0):
        self.path = tuple(path)
        self.depth = depth
        super().__init__(message)
