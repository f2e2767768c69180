import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Response

from flashdeck.api.models.models import CardRequest
from flashdeck.api.models.responses import CardPageResponse, CardResponse, DeckResponse
from flashdeck.core.config import settings
from flashdeck.core.container import get_deck_service
from flashdeck.core.error_handling import handle_exceptions
from flashdeck.core.exceptions.domain import CardNotFoundError
from flashdeck.domain.deck.service import DeckService

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api", tags=["cards"])


@router.get("/deck", response_model=DeckResponse)
@handle_exceptions()
async def get_deck(
    offset: int = Query(default=0, ge=0),
    limit: Optional[int] = Query(default=None, ge=1, le=200),
    service: DeckService = Depends(get_deck_service),
) -> DeckResponse:
    """
    Full screen state: the first window of cards and the creation form.

    Args:
        offset (int): Position of the first card to render
        limit (int): Cards per window, defaults to the configured page size
        service (DeckService): Caller's deck service

    Returns:
        DeckResponse: Card window and form state
    """
    snapshot = service.snapshot(offset, limit or settings.page_size)
    return DeckResponse.model_validate(snapshot)


@router.get("/cards", response_model=CardPageResponse)
@handle_exceptions()
async def list_cards(
    offset: int = Query(default=0, ge=0),
    limit: Optional[int] = Query(default=None, ge=1, le=200),
    service: DeckService = Depends(get_deck_service),
) -> CardPageResponse:
    """
    One window of the card list, fetched by the page as the user scrolls.

    Returns:
        CardPageResponse: Cards in display order and the offset of the next window
    """
    return CardPageResponse.model_validate(service.page(offset, limit or settings.page_size))


@router.post("/cards", response_model=CardResponse, status_code=201)
@handle_exceptions()
async def add_card(request: CardRequest, service: DeckService = Depends(get_deck_service)) -> CardResponse:
    view = await service.add_card(request.question, request.answer)
    return CardResponse.model_validate(view)


@router.delete("/cards", status_code=204)
@handle_exceptions()
async def clear_cards(service: DeckService = Depends(get_deck_service)) -> Response:
    """Clear action: remove every card of the caller's deck."""
    await service.clear()
    return Response(status_code=204)


@router.post("/cards/{card_id}/flip", response_model=CardResponse)
@handle_exceptions({CardNotFoundError: (404, "Card not found")}, log_level=logging.WARNING)
async def flip_card(card_id: str, service: DeckService = Depends(get_deck_service)) -> CardResponse:
    """
    Flip a card between its question and answer side.

    Raises:
        HTTPException: 404 if the card is no longer in the deck
    """
    view = await service.toggle(card_id)
    return CardResponse.model_validate(view)
