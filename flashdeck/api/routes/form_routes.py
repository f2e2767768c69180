from typing import Optional

from fastapi import APIRouter, Body, Depends

from flashdeck.api.models.models import DraftUpdate, FormSubmit
from flashdeck.api.models.responses import CardResponse, FormResponse
from flashdeck.core.container import get_deck_service
from flashdeck.core.error_handling import handle_exceptions
from flashdeck.domain.deck.service import DeckService

router = APIRouter(prefix="/api/form", tags=["form"])


@router.get("", response_model=FormResponse)
@handle_exceptions()
async def get_form(service: DeckService = Depends(get_deck_service)) -> FormResponse:
    return FormResponse.model_validate(service.form())


@router.post("/open", response_model=FormResponse)
@handle_exceptions()
async def open_form(service: DeckService = Depends(get_deck_service)) -> FormResponse:
    """New Flashcard action: show the creation form."""
    return FormResponse.model_validate(await service.open_form())


@router.post("/dismiss", response_model=FormResponse)
@handle_exceptions()
async def dismiss_form(service: DeckService = Depends(get_deck_service)) -> FormResponse:
    """Hide the form without submitting. The draft is kept for the next open."""
    return FormResponse.model_validate(await service.dismiss_form())


@router.put("/question", response_model=FormResponse)
@handle_exceptions()
async def update_question(update: DraftUpdate, service: DeckService = Depends(get_deck_service)) -> FormResponse:
    return FormResponse.model_validate(await service.update_draft_question(update.text))


@router.put("/answer", response_model=FormResponse)
@handle_exceptions()
async def update_answer(update: DraftUpdate, service: DeckService = Depends(get_deck_service)) -> FormResponse:
    return FormResponse.model_validate(await service.update_draft_answer(update.text))


@router.post("/submit", response_model=CardResponse, status_code=201)
@handle_exceptions()
async def submit_form(
    final: Optional[FormSubmit] = Body(default=None), service: DeckService = Depends(get_deck_service)
) -> CardResponse:
    """
    Add action: commit the draft as a new card and reset the form.

    Field contents sent with the request replace the draft first, so the card
    never depends on the last input event having arrived.

    Returns:
        CardResponse: The committed card, showing its question side
    """
    return CardResponse.model_validate(
        await service.submit_form(final.question if final else None, final.answer if final else None)
    )
