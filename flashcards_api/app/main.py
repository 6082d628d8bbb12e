"""
Main entrypoint for the Flashcards API.

This module assembles the FastAPI application, sets up logging, wires
the services and includes the versioned routers.  The ``create_app``
function builds and configures the app, which is then instantiated at
module import time as ``app``.  Run it with uvicorn, e.g.::

    uvicorn flashcards_api.app.main:app --reload

or through ``run.py`` at the project root.
"""

import logging
from typing import Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .api.v1.router import router as v1_router
from .core.config import Settings, settings as default_settings
from .core.db import Database
from .core.errors import FlashcardsError
from .core.logging_config import setup_logging
from .services import CardService, DeckService, UserService

logger = logging.getLogger(__name__)


def _error(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def _validation_message(exc: RequestValidationError) -> str:
    """Condense pydantic's error list into one line for the client."""
    errors = exc.errors()
    if not errors:
        return "invalid request"
    if any(err.get("type") == "json_invalid" for err in errors):
        return "invalid json"
    first = errors[0]
    location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
    return f"{location}: {first.get('msg')}" if location else str(first.get("msg"))


def register_exception_handlers(app: FastAPI) -> None:
    """Render every error as ``{"error": "..."}``."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
        return _error(exc.status_code, str(exc.detail))

    @app.exception_handler(RequestValidationError)
    async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
        # Malformed JSON, missing or mistyped fields are all client errors.
        return _error(status.HTTP_400_BAD_REQUEST, _validation_message(exc))

    @app.exception_handler(FlashcardsError)
    async def service_exception_handler(request: Request, exc: FlashcardsError) -> JSONResponse:
        return _error(exc.status_code, exc.message)

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
        return _error(status.HTTP_500_INTERNAL_SERVER_ERROR, "internal server error")


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Create and configure a FastAPI application.

    One ``Database`` and one instance of each service are built here and
    stored on ``app.state``; endpoints receive them through the
    providers in ``api.deps``.  Passing ``settings`` points the app at
    another database file, which is how the tests isolate themselves.
    """
    settings = settings or default_settings
    setup_logging(settings.log_level, settings.log_file)

    app = FastAPI(title=settings.project_name, version=settings.api_version)

    database = Database(settings.database_url)
    app.state.database = database
    app.state.user_service = UserService(database)
    app.state.deck_service = DeckService(database)
    app.state.card_service = CardService(database)

    register_exception_handlers(app)
    app.include_router(v1_router, prefix=settings.api_prefix)

    @app.on_event("startup")
    async def startup_event() -> None:
        # Creates the database file if needed, applies migrations once
        # and seeds the initial user.
        database.init_db()

    return app


# Create the application instance at import time so that tools such as
# uvicorn can discover it without calling create_app manually.
app = create_app()
