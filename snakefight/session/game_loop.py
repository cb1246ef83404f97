"""
Game Loop - The start -> move* -> end turn pipeline.

The loop:
1. Referee starts a game -> session created (or reset)
2. Referee asks for a move -> board recorded, policy consulted
3. Referee ends the game -> session dropped
4. Repeat for every game, many at once

The loop never chooses a move itself. It records what the referee
sends and hands the policy the collision check of the recorded turn.
"""

from __future__ import annotations
from typing import TYPE_CHECKING
import logging

from .manager import SessionStore

if TYPE_CHECKING:
    from ..bots.policy import MoveDecision, MovePolicy
    from ..engine_core.state import Board, Snake

logger = logging.getLogger(__name__)


class GameLoop:
    """
    Drives the per-game lifecycle against a session store.

    Usage:
        loop = GameLoop(store, RandomPolicy())

        loop.start(game_id, 0, board)
        decision = loop.move(game_id, 1, board, you)
        loop.end(game_id, 42, board)
    """

    def __init__(self, store: SessionStore, policy: MovePolicy):
        self.store = store
        self.policy = policy

    def start(self, game_id: str, turn: int, board: Board):
        """Handle a start event."""
        self.store.create_or_reset(game_id, turn, board)
        logger.info("game %s started at turn %d", game_id, turn)

    def move(self, game_id: str, turn: int, board: Board, you: Snake | None = None) -> MoveDecision:
        """
        Handle a move event.

        Raises:
            GameNotFoundError: the game was never started or has ended
        """
        view = self.store.record_turn(game_id, turn, board)
        decision = self.policy.select_move(view.latest, you, view.would_collide)
        logger.debug(
            "game %s turn %d: %s chose %s",
            game_id, turn, self.policy.get_name(), decision.action.value,
        )
        return decision

    def end(self, game_id: str, turn: int, board: Board):
        """Handle an end event. Ending an unknown game is not an error."""
        logger.info("game ended after %d turns", turn)
        logger.info("game %s final board: %r", game_id, board)
        if not self.store.remove(game_id):
            logger.debug("end for unknown game %s ignored", game_id)
