"""
API Service - Translation layer between wire schemas and the engine.

The service:
1. Translates decoded requests into engine board snapshots
2. Drives the game loop for start, move and end
3. Formats move decisions for the referee

This layer is framework-agnostic (can be used with FastAPI, Flask, etc.)
"""

from __future__ import annotations
from dataclasses import dataclass, field

from .schemas import (
    MAX_SHOUT_LENGTH,
    BoardModel,
    CoordModel,
    GameRequest,
    HealthResponse,
    MoveDirection,
    MoveResponse,
    SnakeDetails,
    SnakeModel,
)
from .. import __version__
from ..bots import MovePolicy, RandomPolicy
from ..engine_core.state import Board, Coord, Snake
from ..session import GameLoop, SessionStore


@dataclass
class APIService:
    """
    Main API service for the referee.

    Usage:
        service = APIService()

        service.start(request)
        response = service.move(request)
        service.end(request)
    """
    store: SessionStore = field(default_factory=SessionStore)
    policy: MovePolicy = field(default_factory=RandomPolicy)
    details: SnakeDetails = field(default_factory=SnakeDetails)

    def __post_init__(self):
        self.game_loop = GameLoop(self.store, self.policy)

    def info(self) -> SnakeDetails:
        """Snake details for GET /."""
        return self.details

    def start(self, request: GameRequest):
        """Begin tracking a game."""
        self.game_loop.start(request.game.id, request.turn, to_board(request.board))

    def move(self, request: GameRequest) -> MoveResponse:
        """
        Record the turn and choose a move.

        Raises:
            GameNotFoundError: the game is not active
        """
        you = to_snake(request.you) if request.you else None
        decision = self.game_loop.move(
            request.game.id,
            request.turn,
            to_board(request.board),
            you,
        )
        shout = decision.shout
        if shout is not None and len(shout) > MAX_SHOUT_LENGTH:
            # Trim to the referee limit, keep the move
            shout = shout[:MAX_SHOUT_LENGTH]
        return MoveResponse(
            move=MoveDirection(decision.action.value),
            shout=shout,
        )

    def end(self, request: GameRequest):
        """Stop tracking a game."""
        self.game_loop.end(request.game.id, request.turn, to_board(request.board))

    def health(self) -> HealthResponse:
        return HealthResponse(
            status="healthy",
            service="snakefight",
            version=__version__,
            active_games=len(self.store),
        )


# =============================================================================
# Conversion Helpers
# =============================================================================

def to_coord(model: CoordModel) -> Coord:
    return Coord(model.x, model.y)


def to_snake(model: SnakeModel) -> Snake:
    """Convert a wire snake to an engine snake."""
    return Snake(
        snake_id=model.id,
        body=tuple(to_coord(c) for c in model.body),
        health=model.health,
        length=model.length or len(model.body),
        name=model.name,
        head=to_coord(model.head) if model.head else None,
        shout=model.shout,
        squad=model.squad,
        latency=model.latency,
    )


def to_board(model: BoardModel) -> Board:
    """Convert a wire board to an immutable engine snapshot."""
    return Board.create(
        height=model.height,
        width=model.width,
        food=(to_coord(c) for c in model.food),
        hazards=(to_coord(c) for c in model.hazards),
        snakes=(to_snake(s) for s in model.snakes),
    )
