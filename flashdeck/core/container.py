import asyncio
import logging
from typing import Optional

from cachetools import TTLCache
from fastapi import Depends, WebSocket

from flashdeck.common.websocket import WebSocketManager
from flashdeck.core.auth import get_current_user
from flashdeck.core.config import settings
from flashdeck.domain.deck.service import DeckService
from flashdeck.domain.deck.session import DeckSession

logger = logging.getLogger(__name__)


class SessionCache(TTLCache):
    """TTLCache that reports decks dropped because the session limit was reached."""

    def popitem(self):
        # Only capacity eviction goes through popitem; idle expiry does not
        session_id, service = super().popitem()
        logger.warning(
            f"Deck session {session_id} evicted: session limit of {self.maxsize} reached",
            extra={"details": {"session_id": session_id, "cards": len(service.session.collection)}},
        )
        return session_id, service


class SessionRegistry:
    """In-memory deck sessions, one per browser session, evicted when idle or over capacity."""

    def __init__(self, websocket_manager: WebSocketManager, maxsize: int, ttl: int):
        self.websocket_manager = websocket_manager
        self.maxsize = maxsize
        self.ttl = ttl
        self._services = SessionCache(maxsize=maxsize, ttl=ttl)
        self._lock = asyncio.Lock()

    async def get_service(self, session_id: str) -> DeckService:
        """Get or create the deck service of a session and refresh its idle timer."""
        async with self._lock:
            service = self._services.get(session_id)
            if service is None:
                service = DeckService(DeckSession(session_id), self.websocket_manager)
                logger.info(f"Created deck session {session_id}")
            self._services[session_id] = service
            return service

    async def drop(self, session_id: str) -> None:
        async with self._lock:
            self._services.pop(session_id, None)

    async def clear(self) -> None:
        async with self._lock:
            # A fresh cache, since MutableMapping.clear() would report each deck as evicted
            self._services = SessionCache(maxsize=self.maxsize, ttl=self.ttl)

    def __len__(self) -> int:
        return len(self._services)


class DependencyContainer:
    """Singleton container for application-wide dependencies."""

    _websocket_manager: Optional[WebSocketManager] = None
    _registry: Optional[SessionRegistry] = None

    @classmethod
    def get_websocket_manager(cls) -> WebSocketManager:
        """Get or create WebSocketManager instance."""
        if cls._websocket_manager is None:
            cls._websocket_manager = WebSocketManager()
            logger.info("Created new WebSocketManager instance")
        return cls._websocket_manager

    @classmethod
    def get_registry(cls) -> SessionRegistry:
        """Get or create SessionRegistry instance with shared WebSocketManager."""
        if cls._registry is None:
            cls._registry = SessionRegistry(
                websocket_manager=cls.get_websocket_manager(),
                maxsize=settings.session_maxsize,
                ttl=settings.session_ttl,
            )
            logger.info("Created new SessionRegistry instance")
        return cls._registry

    @classmethod
    def reset(cls) -> None:
        cls._websocket_manager = None
        cls._registry = None


# FastAPI dependencies
async def get_websocket_manager() -> WebSocketManager:
    """Dependency for getting WebSocketManager instance."""
    return DependencyContainer.get_websocket_manager()


async def get_session_registry() -> SessionRegistry:
    """Dependency for getting SessionRegistry instance."""
    return DependencyContainer.get_registry()


async def get_deck_service(
    user_id: str = Depends(get_current_user),
    registry: SessionRegistry = Depends(get_session_registry),
) -> DeckService:
    """Dependency for getting the caller's DeckService."""
    return await registry.get_service(user_id)


async def get_websocket_user(websocket: WebSocket) -> Optional[str]:
    """Session id for a WebSocket; the page must have been loaded first to set the cookie."""
    return websocket.session.get("user_id")


# Application lifecycle management
async def init_dependencies():
    """Initialize application dependencies."""
    try:
        logger.info("Initializing application dependencies...")
        DependencyContainer.get_registry()
        logger.info("Dependencies initialized successfully")
    except Exception as e:
        logger.error(f"Failed to initialize dependencies: {e}")
        raise


async def cleanup_dependencies():
    """Cleanup application dependencies."""
    try:
        logger.info("Cleaning up application dependencies...")
        await DependencyContainer.get_registry().clear()
        logger.info("Dependencies cleaned up successfully")
    except Exception as e:
        logger.error(f"Error during dependency cleanup: {e}")
        raise
