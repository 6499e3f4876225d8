"""
Node edit engine for a visualized JSON document.

Modules:
- normalizer: row list -> editable field map
- json_path: canonical path strings and path walking
- patcher: merge edited fields into the document
- sync: commit a document to every dependent store
- session: per-modal edit state machine
"""

__version__ = "0.1.0"
