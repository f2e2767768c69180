from fastapi import APIRouter, Depends

from flashdeck.api.models.responses import HealthResponse
from flashdeck.common.websocket import WebSocketManager
from flashdeck.core.container import SessionRegistry, get_session_registry, get_websocket_manager
from flashdeck.core.error_handling import handle_exceptions
from flashdeck.monitoring.health import HealthCheck

router = APIRouter()


@router.get("/health", response_model=HealthResponse)
@handle_exceptions()
async def health_check(
    registry: SessionRegistry = Depends(get_session_registry),
    websocket_manager: WebSocketManager = Depends(get_websocket_manager),
):
    """
    Perform system health check.

    Returns:
        HealthResponse: Health status with live session and connection counts
    """
    return HealthCheck(registry, websocket_manager).check()
