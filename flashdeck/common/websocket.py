import logging
from typing import Dict, List

from fastapi import WebSocket

logger = logging.getLogger(__name__)


class WebSocketManager:
    """Manages WebSocket connections that follow a deck session's changes."""

    def __init__(self):
        """Initialize WebSocket connections dictionary."""
        self.connections: Dict[str, List[WebSocket]] = {}
        logger.info("WebSocketManager initialized")

    async def connect(self, session_id: str, websocket: WebSocket):
        """
        Accept a WebSocket connection for a deck session.

        A session may be open in several tabs, so each session keeps a list
        of sockets.

        Args:
            session_id (str): Deck session identifier
            websocket (WebSocket): WebSocket connection
        """
        try:
            await websocket.accept()
            self.connections.setdefault(session_id, []).append(websocket)
            logger.info(f"WebSocket connection established for session {session_id}")
        except Exception as e:
            logger.error(f"Failed to establish WebSocket connection for session {session_id}: {str(e)}")
            raise

    def disconnect(self, session_id: str, websocket: WebSocket):
        """
        Remove a WebSocket connection.

        Args:
            session_id (str): Deck session identifier
            websocket (WebSocket): Connection to drop
        """
        sockets = self.connections.get(session_id, [])
        if websocket in sockets:
            sockets.remove(websocket)
            logger.info(f"WebSocket connection removed for session {session_id}")
        if not sockets:
            self.connections.pop(session_id, None)

    def connection_count(self) -> int:
        return sum(len(sockets) for sockets in self.connections.values())

    async def broadcast(self, session_id: str, message: Dict):
        """
        Send a change event to every connection of a session.

        Args:
            session_id (str): Deck session identifier
            message (Dict): JSON-serializable change event
        """
        for websocket in list(self.connections.get(session_id, [])):
            try:
                await websocket.send_json(message)
                logger.debug(f"Change sent for session {session_id}: {message}")
            except Exception as e:
                logger.error(f"Failed to send change for session {session_id}: {str(e)}")
                self.disconnect(session_id, websocket)
