import uuid
from dataclasses import dataclass, field

CardId = str


def new_card_id() -> CardId:
    return str(uuid.uuid4())


@dataclass(frozen=True)
class Card:
    """Domain model representing a Flashcard.

    Text is stored exactly as entered; empty questions and answers are valid.
    """

    question: str
    answer: str
    id: CardId = field(default_factory=new_card_id)
