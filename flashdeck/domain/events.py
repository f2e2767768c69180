"""Change notifications for deck state.

Rendering layers (the HTML page, a WebSocket feed, a terminal view) subscribe
to an :class:`Observable` and re-render on each :class:`StateChange` instead of
relying on a framework's data binding.
"""

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)


class ChangeKind(str, Enum):
    CARD_ADDED = "card_added"
    DECK_CLEARED = "deck_cleared"
    CARD_FLIPPED = "card_flipped"
    FORM_OPENED = "form_opened"
    FORM_DISMISSED = "form_dismissed"
    DRAFT_UPDATED = "draft_updated"
    FORM_SUBMITTED = "form_submitted"


@dataclass(frozen=True)
class StateChange:
    """A single mutation of deck state."""

    kind: ChangeKind
    payload: Dict[str, Any] = field(default_factory=dict)

    def to_message(self) -> Dict[str, Any]:
        return {"event": self.kind.value, "payload": self.payload}


Listener = Callable[[StateChange], None]


class Observable:
    """Synchronous publisher; listeners run in subscription order."""

    def __init__(self):
        self._listeners: List[Listener] = []

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """
        Register a listener for state changes.

        Args:
            listener (Listener): Called with every StateChange

        Returns:
            Callable[[], None]: Function that removes the listener again
        """
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def notify(self, change: StateChange) -> None:
        logger.debug("State change %s", change.kind.value, extra={"details": change.payload})
        for listener in list(self._listeners):
            listener(change)
