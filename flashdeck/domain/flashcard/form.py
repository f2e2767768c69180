import logging

from flashdeck.domain.events import ChangeKind, Observable, StateChange

from .collection import CardCollection
from .models import CardId

logger = logging.getLogger(__name__)


class CreationForm(Observable):
    """
    Draft state of the "New Flashcard" form.

    Input fields feed the draft through explicit change handlers. Submitting
    commits the draft into the collection and resets the form; dismissing
    only hides it and keeps the draft for the next open.
    """

    def __init__(self, collection: CardCollection):
        super().__init__()
        self.collection = collection
        self.question = ""
        self.answer = ""
        self.visible = False

    def open(self) -> None:
        self.visible = True
        self.notify(StateChange(ChangeKind.FORM_OPENED, self.state()))

    def dismiss(self) -> None:
        self.visible = False
        self.notify(StateChange(ChangeKind.FORM_DISMISSED, self.state()))

    def update_draft_question(self, text: str) -> None:
        self.question = text
        self.notify(StateChange(ChangeKind.DRAFT_UPDATED, {"field": "question", "text": text}))

    def update_draft_answer(self, text: str) -> None:
        self.answer = text
        self.notify(StateChange(ChangeKind.DRAFT_UPDATED, {"field": "answer", "text": text}))

    def submit(self) -> CardId:
        """
        Commit the draft as a new card, even when both fields are empty.

        Returns:
            CardId: Identifier of the committed card
        """
        card_id = self.collection.append(self.question, self.answer)
        self.question = ""
        self.answer = ""
        self.visible = False
        logger.debug("Form submitted as card %s", card_id)
        self.notify(StateChange(ChangeKind.FORM_SUBMITTED, {"id": card_id, **self.state()}))
        return card_id

    def state(self) -> dict:
        return {"visible": self.visible, "question": self.question, "answer": self.answer}
