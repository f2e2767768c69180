import logging
from typing import Dict

from flashdeck.core.exceptions.domain import CardNotFoundError
from flashdeck.domain.events import ChangeKind, Observable, StateChange

from .models import CardId

logger = logging.getLogger(__name__)


class FlipStates(Observable):
    """Which side of each card is showing. False is the question side."""

    def __init__(self):
        super().__init__()
        self._flipped: Dict[CardId, bool] = {}

    def track(self, card_id: CardId) -> None:
        """Start tracking a newly rendered card on its question side."""
        self._flipped[card_id] = False

    def toggle(self, card_id: CardId) -> bool:
        if card_id not in self._flipped:
            raise CardNotFoundError(card_id)

        self._flipped[card_id] = not self._flipped[card_id]
        flipped = self._flipped[card_id]
        self.notify(StateChange(ChangeKind.CARD_FLIPPED, {"id": card_id, "flipped": flipped}))
        return flipped

    def is_flipped(self, card_id: CardId) -> bool:
        if card_id not in self._flipped:
            raise CardNotFoundError(card_id)
        return self._flipped[card_id]

    def discard_all(self) -> None:
        self._flipped.clear()

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._flipped

    def __len__(self) -> int:
        return len(self._flipped)
