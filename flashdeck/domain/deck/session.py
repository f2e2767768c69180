import logging
from dataclasses import dataclass
from typing import List, Optional

from flashdeck.core.exceptions.domain import CardNotFoundError
from flashdeck.domain.events import ChangeKind, Observable, StateChange
from flashdeck.domain.flashcard.collection import CardCollection
from flashdeck.domain.flashcard.flip import FlipStates
from flashdeck.domain.flashcard.form import CreationForm
from flashdeck.domain.flashcard.models import Card, CardId

logger = logging.getLogger(__name__)


@dataclass
class CardView:
    id: CardId
    question: str
    answer: str
    flipped: bool
    face: str


@dataclass
class CardPage:
    cards: List[CardView]
    total: int
    offset: int
    next_offset: Optional[int]


@dataclass
class FormView:
    visible: bool
    question: str
    answer: str


@dataclass
class DeckSnapshot:
    page: CardPage
    form: FormView


class DeckSession(Observable):
    """
    The study screen: a scrollable list of cards plus "Clear" and
    "New Flashcard" actions.

    Owns the collection, the per-card flip map and the creation form, and
    re-publishes every change of those to its own subscribers.
    """

    def __init__(self, session_id: str):
        super().__init__()
        self.session_id = session_id
        self.collection = CardCollection()
        self.flips = FlipStates()
        self.form = CreationForm(self.collection)

        # Flip map follows the collection; must run before change forwarding
        self.collection.subscribe(self._sync_flips)
        for source in (self.collection, self.flips, self.form):
            source.subscribe(self.notify)

    def _sync_flips(self, change: StateChange) -> None:
        if change.kind is ChangeKind.CARD_ADDED:
            self.flips.track(change.payload["id"])
        elif change.kind is ChangeKind.DECK_CLEARED:
            self.flips.discard_all()

    # Top-level actions

    def clear(self) -> None:
        self.collection.clear()

    def new_flashcard(self) -> None:
        self.form.open()

    def add_card(self, question: str, answer: str) -> CardId:
        return self.collection.append(question, answer)

    def toggle(self, card_id: CardId) -> CardView:
        self.flips.toggle(card_id)
        return self.view(card_id)

    # Rendering

    def face(self, card_id: CardId) -> str:
        """Text currently showing on the card: the answer when flipped, else the question."""
        card = self._card(card_id)
        return card.answer if self.flips.is_flipped(card_id) else card.question

    def view(self, card_id: CardId) -> CardView:
        return self._render(self._card(card_id))

    def page(self, offset: int = 0, limit: int = 20) -> CardPage:
        """
        Materialize one window of the card list.

        Args:
            offset (int): Position of the first card to render
            limit (int): Maximum number of cards to render

        Returns:
            CardPage: Rendered cards, deck size and where the next window starts
        """
        offset = max(offset, 0)
        limit = max(limit, 0)
        cards = [self._render(card) for card in self.collection.page(offset, limit)]
        end = offset + len(cards)
        total = len(self.collection)
        return CardPage(cards=cards, total=total, offset=offset, next_offset=end if end < total else None)

    def form_view(self) -> FormView:
        return FormView(**self.form.state())

    def snapshot(self, offset: int = 0, limit: int = 20) -> DeckSnapshot:
        return DeckSnapshot(page=self.page(offset, limit), form=self.form_view())

    def _card(self, card_id: CardId) -> Card:
        card = self.collection.get(card_id)
        if card is None:
            raise CardNotFoundError(card_id)
        return card

    def _render(self, card: Card) -> CardView:
        flipped = self.flips.is_flipped(card.id)
        return CardView(
            id=card.id,
            question=card.question,
            answer=card.answer,
            flipped=flipped,
            face=card.answer if flipped else card.question,
        )
