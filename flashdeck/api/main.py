from contextlib import asynccontextmanager
from pathlib import Path

import uvicorn
from fastapi import Depends, FastAPI, Request
from fastapi.staticfiles import StaticFiles
from fastapi.templating import Jinja2Templates
from starlette.middleware.sessions import SessionMiddleware

from flashdeck.core.config import settings
from flashdeck.core.container import cleanup_dependencies, get_deck_service, init_dependencies
from flashdeck.core.logging import setup_logging
from flashdeck.domain.deck.service import DeckService

from .routes import card_routes, form_routes, health_routes, websocket_routes

PACKAGE_DIR = Path(__file__).resolve().parent.parent


@asynccontextmanager
async def lifespan(app: FastAPI):
    # Startup
    setup_logging()
    await init_dependencies()
    yield
    # Shutdown
    await cleanup_dependencies()


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        FastAPI: Configured application instance
    """
    app = FastAPI(
        title="Flashcards API",
        description="Single-screen flashcard study app: create, list, flip and clear cards",
        version="1.0.0",
        lifespan=lifespan,
    )
    app.add_middleware(SessionMiddleware, secret_key=settings.secret_key)

    # Mount static files and templates
    app.mount("/static", StaticFiles(directory=PACKAGE_DIR / "static"), name="static")

    # Include routers
    app.include_router(card_routes.router)
    app.include_router(form_routes.router)
    app.include_router(health_routes.router)
    app.include_router(websocket_routes.router)

    return app


app = create_app()
templates = Jinja2Templates(directory=PACKAGE_DIR / "templates")


@app.get("/")
async def home(request: Request, service: DeckService = Depends(get_deck_service)):
    """
    Home route rendering the study screen.

    Renders the first window of cards server-side; the page script fetches
    further windows while scrolling and follows changes over the WebSocket.

    Args:
        request (Request): Incoming HTTP request
        service (DeckService): Caller's deck service

    Returns:
        TemplateResponse: Rendered index page
    """
    return templates.TemplateResponse(
        request,
        "index.html",
        {
            "title": settings.app_title,
            "deck": service.snapshot(0, settings.page_size),
            "page_size": settings.page_size,
            "flip_transition_ms": settings.flip_transition_ms,
        },
    )


def run(host: str = settings.host, port: int = settings.port, reload: bool = False) -> None:
    uvicorn.run(
        "flashdeck.api.main:app", host=host, port=port, reload=reload, ws="websockets", log_level=settings.log_level.lower()
    )


if __name__ == "__main__":
    run()
