from typing import Generator
from unittest.mock import AsyncMock, Mock

import pytest
from fastapi.testclient import TestClient

from flashdeck.api.main import app
from flashdeck.core.container import DependencyContainer
from flashdeck.domain.deck.session import DeckSession


@pytest.fixture(autouse=True)
def reset_container():
    DependencyContainer.reset()
    yield
    DependencyContainer.reset()


@pytest.fixture
def session() -> DeckSession:
    return DeckSession("test-session")


@pytest.fixture
def recorder():
    """Listener that remembers every change it receives."""
    return Mock()


@pytest.fixture
def mock_websocket_manager():
    manager = Mock(spec=["broadcast", "connection_count"])
    manager.broadcast = AsyncMock()
    manager.connection_count.return_value = 0
    return manager


@pytest.fixture
def client() -> Generator[TestClient, None, None]:
    with TestClient(app) as test_client:
        yield test_client
