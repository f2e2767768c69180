from .base import ResourceNotFoundError


class CardNotFoundError(ResourceNotFoundError):
    """Raised when a card id is not part of the session's deck, e.g. after a clear"""

    def __init__(self, card_id: str):
        super().__init__("Card", card_id)
        self.card_id = card_id
