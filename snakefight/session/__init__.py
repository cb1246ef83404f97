"""
Session Module - Manages per-game turn history.

A session represents one running game:
- Created when the referee starts a game
- Records the board for every turn
- Answers collision queries against the latest board
- Destroyed when the game ends

Sessions are EPHEMERAL:
- No persistence to disk or database
- A restart forgets every in-progress game
"""

from .manager import GameNotFoundError, GameSession, GameSessionView, SessionStore
from .game_loop import GameLoop

__all__ = [
    "GameLoop",
    "GameNotFoundError",
    "GameSession",
    "GameSessionView",
    "SessionStore",
]
