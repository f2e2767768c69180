import logging
from typing import Dict, Iterator, List, Optional

from flashdeck.domain.events import ChangeKind, Observable, StateChange

from .models import Card, CardId

logger = logging.getLogger(__name__)


class CardCollection(Observable):
    """Ordered deck of cards; insertion order is display order."""

    def __init__(self):
        super().__init__()
        self._cards: List[Card] = []
        self._index: Dict[CardId, Card] = {}

    def append(self, question: str, answer: str) -> CardId:
        """
        Create a card and add it to the end of the deck.

        Args:
            question (str): Question text, stored as-is
            answer (str): Answer text, stored as-is

        Returns:
            CardId: Identifier of the new card
        """
        card = Card(question=question, answer=answer)
        # uuid4 collisions are not expected; regenerate rather than break uniqueness
        while card.id in self._index:
            card = Card(question=question, answer=answer)

        self._cards.append(card)
        self._index[card.id] = card
        logger.debug("Card %s appended at position %d", card.id, len(self._cards) - 1)

        self.notify(
            StateChange(
                ChangeKind.CARD_ADDED,
                {"id": card.id, "question": card.question, "answer": card.answer, "position": len(self._cards) - 1},
            )
        )
        return card.id

    def clear(self) -> None:
        """Remove every card."""
        removed = len(self._cards)
        self._cards.clear()
        self._index.clear()
        logger.debug("Deck cleared, %d cards removed", removed)
        self.notify(StateChange(ChangeKind.DECK_CLEARED, {"removed": removed}))

    def get(self, card_id: CardId) -> Optional[Card]:
        return self._index.get(card_id)

    def page(self, offset: int, limit: int) -> List[Card]:
        return self._cards[offset : offset + limit]

    def __contains__(self, card_id: object) -> bool:
        return card_id in self._index

    def __iter__(self) -> Iterator[Card]:
        return iter(list(self._cards))

    def __len__(self) -> int:
        return len(self._cards)
