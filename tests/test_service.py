import asyncio
import logging

import pytest

from flashdeck.common.websocket import WebSocketManager
from flashdeck.core.container import SessionRegistry
from flashdeck.core.exceptions.domain import CardNotFoundError
from flashdeck.domain.deck.service import DeckService


@pytest.fixture
def service(session, mock_websocket_manager):
    return DeckService(session, mock_websocket_manager)


def sent_events(manager):
    return [call.args[1]["event"] for call in manager.broadcast.await_args_list]


class TestDeckService:

    async def test_add_card_broadcasts(self, service, mock_websocket_manager):
        view = await service.add_card("2+2?", "4")

        assert view.face == "2+2?"
        mock_websocket_manager.broadcast.assert_awaited_once()
        session_id, message = mock_websocket_manager.broadcast.await_args.args
        assert session_id == "test-session"
        assert message["event"] == "card_added"
        assert message["payload"]["id"] == view.id

    async def test_submit_broadcasts_add_then_submit(self, service, mock_websocket_manager):
        await service.open_form()
        await service.update_draft_question("Capital of France?")
        await service.update_draft_answer("Paris")
        view = await service.submit_form()

        assert (view.question, view.answer) == ("Capital of France?", "Paris")
        assert sent_events(mock_websocket_manager) == [
            "form_opened",
            "draft_updated",
            "draft_updated",
            "card_added",
            "form_submitted",
        ]
        assert service.form().visible is False

    async def test_toggle_and_clear(self, service, mock_websocket_manager):
        view = await service.add_card("q", "a")

        flipped = await service.toggle(view.id)
        await service.clear()

        assert flipped.face == "a"
        assert sent_events(mock_websocket_manager) == ["card_added", "card_flipped", "deck_cleared"]
        assert service.page(0, 10).total == 0

    async def test_failed_toggle_sends_nothing(self, service, mock_websocket_manager):
        with pytest.raises(CardNotFoundError):
            await service.toggle("missing")

        mock_websocket_manager.broadcast.assert_not_awaited()

    async def test_dismiss_keeps_draft(self, service):
        await service.open_form()
        await service.update_draft_answer("Paris")

        form = await service.dismiss_form()

        assert form.visible is False
        assert form.answer == "Paris"


class TestSessionRegistry:

    async def test_same_id_same_service(self, mock_websocket_manager):
        registry = SessionRegistry(mock_websocket_manager, maxsize=10, ttl=60)

        first = await registry.get_service("a")
        again = await registry.get_service("a")
        other = await registry.get_service("b")

        assert first is again
        assert first is not other
        assert len(registry) == 2

    async def test_sessions_are_isolated(self, mock_websocket_manager):
        registry = SessionRegistry(mock_websocket_manager, maxsize=10, ttl=60)

        await (await registry.get_service("a")).add_card("q", "a")

        assert (await registry.get_service("b")).page(0, 10).total == 0

    async def test_drop_and_clear(self, mock_websocket_manager):
        registry = SessionRegistry(mock_websocket_manager, maxsize=10, ttl=60)
        await registry.get_service("a")
        await registry.get_service("b")

        await registry.drop("a")
        assert len(registry) == 1

        await registry.clear()
        assert len(registry) == 0

    async def test_oldest_session_evicted_at_capacity(self, mock_websocket_manager, caplog):
        registry = SessionRegistry(mock_websocket_manager, maxsize=2, ttl=60)
        first = await registry.get_service("a")
        await registry.get_service("b")
        await registry.get_service("c")

        assert len(registry) == 2
        assert await registry.get_service("a") is not first
        evictions = [r for r in caplog.records if r.levelno == logging.WARNING and "evicted" in r.getMessage()]
        assert len(evictions) == 2

    async def test_clear_is_not_reported_as_eviction(self, mock_websocket_manager, caplog):
        registry = SessionRegistry(mock_websocket_manager, maxsize=2, ttl=60)
        await registry.get_service("a")
        await registry.get_service("b")

        await registry.clear()

        assert len(registry) == 0
        assert not [r for r in caplog.records if "evicted" in r.getMessage()]


class RecordingSocket:
    """Stand-in browser tab; each send yields to the event loop like a real network write."""

    def __init__(self, delay: float = 0):
        self.delay = delay
        self.events = []

    async def accept(self):
        pass

    async def send_json(self, message):
        self.events.append(message["event"])
        await asyncio.sleep(self.delay)


class TestDeckServiceConcurrency:

    async def test_every_mutation_is_broadcast(self, service, mock_websocket_manager):
        await service.open_form()
        await service.open_form()
        await service.open_form()

        assert sent_events(mock_websocket_manager) == ["form_opened"] * 3

    async def test_add_overlapping_clear_returns_committed_card(self, session):
        manager = WebSocketManager()
        await manager.connect("test-session", RecordingSocket(delay=0.01))
        service = DeckService(session, manager)

        view, _ = await asyncio.gather(service.add_card("q", "a"), service.clear())

        assert (view.question, view.answer, view.face) == ("q", "a", "q")
        assert service.page(0, 10).total == 0

    async def test_submit_overlapping_clear_returns_committed_card(self, session):
        manager = WebSocketManager()
        await manager.connect("test-session", RecordingSocket(delay=0.01))
        service = DeckService(session, manager)

        view, _ = await asyncio.gather(service.submit_form("Q", "A"), service.clear())

        assert (view.question, view.answer) == ("Q", "A")

    async def test_overlapping_requests_reach_every_tab_in_order(self, session):
        manager = WebSocketManager()
        slow_tab, fast_tab = RecordingSocket(delay=0.01), RecordingSocket()
        await manager.connect("test-session", slow_tab)
        await manager.connect("test-session", fast_tab)
        service = DeckService(session, manager)

        await asyncio.gather(service.add_card("q", "a"), service.clear())

        assert slow_tab.events == ["card_added", "deck_cleared"]
        assert fast_tab.events == ["card_added", "deck_cleared"]

    async def test_submit_with_final_text_replaces_draft(self, service):
        await service.open_form()
        await service.update_draft_question("Capital of Fr")

        view = await service.submit_form("Capital of France?", "Paris")

        assert (view.question, view.answer) == ("Capital of France?", "Paris")
        assert service.form().question == ""
        assert service.form().visible is False
