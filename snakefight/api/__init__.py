"""
API Module - Referee interface.

Exposes the engine over HTTP for the game referee.
The referee:
1. Reads snake details from GET /
2. Starts a game
3. Asks for a move every turn
4. Ends the game

All game state is session-scoped and in-memory.
"""

from .schemas import (
    BoardModel,
    CoordModel,
    ErrorCode,
    ErrorResponse,
    GameInfo,
    GameRequest,
    MoveResponse,
    SnakeDetails,
    SnakeModel,
)
from .service import APIService
from .app import create_app

__all__ = [
    # Requests
    "GameRequest",
    "GameInfo",
    "BoardModel",
    "SnakeModel",
    "CoordModel",
    # Responses
    "SnakeDetails",
    "MoveResponse",
    "ErrorResponse",
    "ErrorCode",
    # Service
    "APIService",
    "create_app",
]
