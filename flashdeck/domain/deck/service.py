import asyncio
import logging
from typing import List, Optional

from flashdeck.common.websocket import WebSocketManager
from flashdeck.domain.events import StateChange
from flashdeck.domain.flashcard.models import CardId

from .session import CardPage, CardView, DeckSession, DeckSnapshot, FormView

logger = logging.getLogger(__name__)


class DeckService:
    """
    Async entry point for one deck session.

    Mutations run synchronously on the session and their result is rendered
    before anything is awaited; the changes they produce are then pushed to
    the session's WebSocket connections in mutation order.
    """

    def __init__(self, session: DeckSession, websocket_manager: WebSocketManager):
        self.session = session
        self.websocket_manager = websocket_manager
        self._pending: List[StateChange] = []
        self._publish_lock = asyncio.Lock()
        session.subscribe(self._queue)

    @property
    def session_id(self) -> str:
        return self.session.session_id

    def _queue(self, change: StateChange) -> None:
        self._pending.append(change)

    async def _publish(self) -> None:
        # One publisher at a time, so every socket sees changes in the order they happened
        async with self._publish_lock:
            changes = list(self._pending)
            self._pending.clear()
            for change in changes:
                await self.websocket_manager.broadcast(self.session_id, change.to_message())

    async def add_card(self, question: str, answer: str) -> CardView:
        card_id = self.session.add_card(question, answer)
        view = self.session.view(card_id)
        await self._publish()
        return view

    async def clear(self) -> None:
        self.session.clear()
        logger.info(f"Deck cleared for session {self.session_id}")
        await self._publish()

    async def toggle(self, card_id: CardId) -> CardView:
        view = self.session.toggle(card_id)
        await self._publish()
        return view

    async def open_form(self) -> FormView:
        self.session.new_flashcard()
        form = self.session.form_view()
        await self._publish()
        return form

    async def dismiss_form(self) -> FormView:
        self.session.form.dismiss()
        form = self.session.form_view()
        await self._publish()
        return form

    async def update_draft_question(self, text: str) -> FormView:
        self.session.form.update_draft_question(text)
        form = self.session.form_view()
        await self._publish()
        return form

    async def update_draft_answer(self, text: str) -> FormView:
        self.session.form.update_draft_answer(text)
        form = self.session.form_view()
        await self._publish()
        return form

    async def submit_form(self, question: Optional[str] = None, answer: Optional[str] = None) -> CardView:
        if question is not None:
            self.session.form.update_draft_question(question)
        if answer is not None:
            self.session.form.update_draft_answer(answer)
        card_id = self.session.form.submit()
        view = self.session.view(card_id)
        await self._publish()
        return view

    def page(self, offset: int, limit: int) -> CardPage:
        return self.session.page(offset, limit)

    def form(self) -> FormView:
        return self.session.form_view()

    def snapshot(self, offset: int, limit: int) -> DeckSnapshot:
        return self.session.snapshot(offset, limit)
