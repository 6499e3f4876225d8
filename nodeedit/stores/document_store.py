"""
Document-of-record store.

Holds the authoritative document as serialized text. The text is not parsed
here; the patcher and graph store parse it when they need structure.
"""

import logging
from pathlib import Path
from typing import Union

logger = logging.getLogger(__name__)

EMPTY_DOCUMENT = "{}"


class JsonDocumentStore:
    """In-memory document-of-record."""

    def __init__(self, text: str = EMPTY_DOCUMENT):
        self._text = text

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "JsonDocumentStore":
        """Load the document text from a JSON file."""
        path = Path(path)
        with open(path, "r", encoding="utf-8") as f:
            text = f.read()
        logger.info(f"Loaded document from {path} ({len(text)} chars)")
        return cls(text)

    def get_document_text(self) -> str:
        return self._text

    def set_document_text(self, text: str) -> None:
        if not isinstance(text, str):
            raise TypeError(f"Document text must be str, got {type(text).__name__}")
        self._text = text
