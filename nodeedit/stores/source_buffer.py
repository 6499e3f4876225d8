"""
Source text buffer.

Mirrors the text shown in the source editor and fans out change events:

- 'change': every update, called as callback(text, programmatic)
- 'user_edit': only updates typed by the user, called as callback(text)
"""

import logging
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


class SourceBuffer:
    """Source editor contents plus change listeners."""

    EVENTS = ('change', 'user_edit')

    def __init__(self, contents: str = ""):
        self._contents = contents
        self._callbacks: Dict[str, List[Callable[..., Any]]] = {e: [] for e in self.EVENTS}

    @property
    def contents(self) -> str:
        return self._contents

    def on(self, event: str, callback: Callable[..., Any]) -> None:
        """Register a callback for 'change' or 'user_edit'."""
        if event not in self._callbacks:
            raise ValueError(f"Unknown buffer event: {event}")
        self._callbacks[event].append(callback)

    def off(self, event: str, callback: Callable[..., Any]) -> None:
        """Remove a callback for an event type."""
        if event in self._callbacks and callback in self._callbacks[event]:
            self._callbacks[event].remove(callback)

    def set_contents(self, text: str, programmatic: bool = False) -> None:
        """
        Replace the buffer text.

        Args:
            text: New contents
            programmatic: True for engine writes; suppresses 'user_edit'
        """
        self._contents = text
        self._emit('change', text, programmatic)
        if not programmatic:
            self._emit('user_edit', text)

    def _emit(self, event: str, *args: Any) -> None:
        """Call every callback registered for `event`; a failing listener does not stop the rest."""
        for callback in list(self._callbacks.get(event, [])):
            try:
                callback(*args)
            except Exception as e:
                logger.error(f"Error in buffer callback for {event}: {e}")
