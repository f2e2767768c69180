import logging
from typing import Optional

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect, status
from starlette.websockets import WebSocketState

from flashdeck.common.websocket import WebSocketManager
from flashdeck.core.container import get_websocket_manager, get_websocket_user

logger = logging.getLogger(__name__)
router = APIRouter()


@router.websocket("/ws")
async def websocket_endpoint(
    websocket: WebSocket,
    session_id: Optional[str] = Depends(get_websocket_user),
    websocket_manager: WebSocketManager = Depends(get_websocket_manager),
):
    """
    WebSocket endpoint streaming the caller's deck changes.

    Every mutation of the session is sent as ``{"event": ..., "payload": ...}``;
    the page re-renders from these events. Incoming messages are ignored.

    Args:
        websocket (WebSocket): WebSocket connection
        session_id (str): Deck session from the session cookie
        websocket_manager (WebSocketManager): Connection registry
    """
    if not session_id:
        logger.warning("WebSocket rejected: no deck session cookie")
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION)
        return

    try:
        await websocket_manager.connect(session_id, websocket)

        while True:
            try:
                await websocket.receive_text()
            except WebSocketDisconnect:
                logger.info(f"WebSocket connection closed for session {session_id}")
                break

    except Exception:
        logger.exception(f"Unexpected error in WebSocket for session {session_id}")
        if websocket.application_state != WebSocketState.DISCONNECTED:
            await websocket.close(code=status.WS_1011_INTERNAL_ERROR, reason="Internal server error")

    finally:
        websocket_manager.disconnect(session_id, websocket)
