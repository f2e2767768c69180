from dataclasses import asdict, dataclass

from flashdeck.common.websocket import WebSocketManager
from flashdeck.core.config import settings
from flashdeck.core.container import SessionRegistry


@dataclass
class ServiceHealth:
    status: str
    environment: str
    sessions: int
    connections: int


class HealthCheck:
    """Health check for the in-memory deck service"""

    def __init__(self, registry: SessionRegistry, websocket_manager: WebSocketManager):
        self.registry = registry
        self.websocket_manager = websocket_manager

    def check(self) -> dict:
        """Report live session and connection counts; there are no external services to probe."""
        return asdict(
            ServiceHealth(
                status="healthy",
                environment=settings.environment,
                sessions=len(self.registry),
                connections=self.websocket_manager.connection_count(),
            )
        )
