"""
FastAPI Application - HTTP endpoints for the game referee.

Endpoints:
    GET    /          Snake details (apiversion, color, head, tail, ...)
    POST   /start     A game is starting
    POST   /move      Choose a move for this turn
    POST   /end       A game has ended
    GET    /health    Health check

Lifecycle per game id:
    start -> move* -> end

A move for a game that was never started (or already ended) is
rejected with GAME_NOT_FOUND. A repeated start resets the game.
An end for an unknown game is accepted.

All responses are JSON. Errors use the ErrorResponse schema.

Run with:
    uvicorn snakefight.api.app:create_app --factory
"""

from typing import Optional
import logging
import time

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from .schemas import (
    ErrorCode,
    ErrorResponse,
    GameRequest,
    HealthResponse,
    MoveResponse,
)
from .service import APIService
from ..logging_config import ACCESS_LOGGER
from ..session import GameNotFoundError

logger = logging.getLogger(__name__)
access_logger = logging.getLogger(ACCESS_LOGGER)


def create_app(service: Optional[APIService] = None, settings=None) -> FastAPI:
    """
    Create the FastAPI application.

    Args:
        service: Optional APIService instance (built from settings if not provided)
        settings: Optional Settings (read from the environment if not provided)

    Returns:
        FastAPI application instance
    """
    from .. import __version__

    if service is None:
        from ..bots import get_policy
        from ..config import Settings

        settings = settings or Settings.from_env()
        service = APIService(
            policy=get_policy(settings.policy),
            details=settings.details,
        )

    app = FastAPI(
        title="Snakefight",
        description="Turn-based grid game server: tracks each game's boards and answers moves.",
        version=__version__,
    )
    app.state.service = service

    # =========================================================================
    # Error helpers
    # =========================================================================

    def make_error_response(
        error_code: ErrorCode,
        message: str,
        status_code: int = 400,
        details: Optional[dict] = None,
    ) -> JSONResponse:
        """Create a standardized error response."""
        return JSONResponse(
            status_code=status_code,
            content=ErrorResponse(
                error=message,
                error_code=error_code,
                details=details,
            ).model_dump(mode="json"),
        )

    @app.exception_handler(GameNotFoundError)
    async def game_not_found_handler(request: Request, exc: GameNotFoundError):
        logger.warning("%s %s: %s", request.method, request.url.path, exc)
        return make_error_response(
            ErrorCode.GAME_NOT_FOUND,
            "game not found",
            details={"id": exc.game_id},
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(request: Request, exc: StarletteHTTPException):
        if exc.status_code in (404, 405):
            return make_error_response(
                ErrorCode.NOT_FOUND,
                "not found",
                status_code=404,
                details={"method": request.method, "path": request.url.path},
            )
        return make_error_response(
            ErrorCode.INTERNAL_ERROR,
            str(exc.detail),
            status_code=exc.status_code,
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return make_error_response(
            ErrorCode.VALIDATION_ERROR,
            "invalid request body",
            details={"errors": [
                {"loc": list(err.get("loc", ())), "msg": err.get("msg", "")}
                for err in exc.errors()
            ]},
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return make_error_response(
            ErrorCode.INTERNAL_ERROR,
            f"Unknown error: {exc!r}",
            status_code=500,
        )

    @app.middleware("http")
    async def access_log_middleware(request: Request, call_next):
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000
        access_logger.info(
            '"%s %s" %d %.1fms',
            request.method, request.url.path, response.status_code, elapsed_ms,
        )
        return response

    # =========================================================================
    # Referee Endpoints
    # =========================================================================

    @app.get("/", tags=["Referee"], summary="Snake details")
    async def info():
        """Appearance and API version for the referee."""
        return JSONResponse(service.info().model_dump(exclude_none=True))

    @app.post("/start", tags=["Referee"], summary="Start a game")
    async def start(request: GameRequest):
        """Begin tracking a game. A repeated start resets its history."""
        service.start(request)
        return {}

    @app.post(
        "/move",
        response_model=MoveResponse,
        response_model_exclude_none=True,
        responses={400: {"model": ErrorResponse}},
        tags=["Referee"],
        summary="Choose a move",
    )
    async def move(request: GameRequest) -> MoveResponse:
        """Record this turn's board and return the chosen move."""
        return service.move(request)

    @app.post("/end", tags=["Referee"], summary="End a game")
    async def end(request: GameRequest):
        """Stop tracking a game. Unknown games are ignored."""
        service.end(request)
        return {}

    # =========================================================================
    # Health Check
    # =========================================================================

    @app.get(
        "/health",
        response_model=HealthResponse,
        tags=["System"],
        summary="Health check",
    )
    async def health_check() -> HealthResponse:
        """Health check endpoint for load balancers."""
        return service.health()

    return app
