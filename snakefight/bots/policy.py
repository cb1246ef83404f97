"""
Move Policy - Interface for per-turn move selection.

A MovePolicy takes the latest board and returns a decision.
Decisions include:
- Which direction to move
- An optional shout (short text shown by the referee)

Policies may consult a collision check bound to the current game,
but the session store never picks a move itself.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Callable
import random

from .shouts import SHOUTS

if TYPE_CHECKING:
    from ..engine_core.state import Board, Coord, Snake

CollisionCheck = Callable[["Coord"], bool]


class Action(str, Enum):
    """The four directions a snake can move."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"

    @property
    def delta(self) -> tuple[int, int]:
        return _DELTAS[self]


_DELTAS = {
    Action.UP: (0, 1),
    Action.DOWN: (0, -1),
    Action.LEFT: (-1, 0),
    Action.RIGHT: (1, 0),
}


@dataclass(frozen=True)
class MoveDecision:
    """A move chosen by a policy, with an optional shout."""
    action: Action
    shout: str | None = None


class MovePolicy(ABC):
    """
    Abstract base class for move policies.

    Implementations range from a coin flip to full search;
    swapping one for another never touches the session store.
    """

    @abstractmethod
    def select_move(
        self,
        board: Board,
        you: Snake | None,
        would_collide: CollisionCheck,
    ) -> MoveDecision:
        """
        Select a move for this turn.

        Args:
            board: Latest recorded board for the game
            you: This server's snake, if the request carried one
            would_collide: Check for known snake bodies on the latest board

        Returns:
            MoveDecision with the chosen action
        """
        pass

    def get_name(self) -> str:
        """Get the policy's name/identifier."""
        return self.__class__.__name__


class RandomPolicy(MovePolicy):
    """
    Random policy - moves uniformly at random.

    A shout is attached by drawing a random byte and indexing the
    shout pool, so most turns go without one.
    """

    def __init__(self, seed: int | None = None, rng: random.Random | None = None):
        self.rng = rng or random.Random(seed)

    def select_move(
        self,
        board: Board,
        you: Snake | None,
        would_collide: CollisionCheck,
    ) -> MoveDecision:
        action = self.rng.choice(list(Action))
        return MoveDecision(action=action, shout=self.pick_shout())

    def pick_shout(self) -> str | None:
        index = self.rng.randrange(256)
        return SHOUTS[index] if index < len(SHOUTS) else None


class CautiousPolicy(RandomPolicy):
    """
    Cautious policy - random among moves that stay on the board
    and avoid every known snake body.

    Falls back to a plain random move when trapped or when the
    request did not say which snake is ours.
    """

    def safe_moves(self, board: Board, you: Snake | None, would_collide: CollisionCheck) -> list[Action]:
        if you is None or you.head is None:
            return []
        safe = []
        for action in Action:
            target = you.head.moved(action)
            if board.contains(target) and not would_collide(target):
                safe.append(action)
        return safe

    def select_move(
        self,
        board: Board,
        you: Snake | None,
        would_collide: CollisionCheck,
    ) -> MoveDecision:
        safe = self.safe_moves(board, you, would_collide)
        if not safe:
            return super().select_move(board, you, would_collide)
        return MoveDecision(action=self.rng.choice(safe), shout=self.pick_shout())


class FixedPolicy(MovePolicy):
    """
    Fixed policy - always makes the same move.

    Used for deterministic testing.
    """

    def __init__(self, action: Action = Action.UP, shout: str | None = None):
        self.action = action
        self.shout = shout

    def select_move(
        self,
        board: Board,
        you: Snake | None,
        would_collide: CollisionCheck,
    ) -> MoveDecision:
        return MoveDecision(action=self.action, shout=self.shout)


POLICIES: dict[str, type[MovePolicy]] = {
    "random": RandomPolicy,
    "cautious": CautiousPolicy,
}


def get_policy(name: str) -> MovePolicy:
    """Build a policy by its configured name."""
    try:
        return POLICIES[name.lower()]()
    except KeyError:
        raise ValueError(
            f"Unknown policy '{name}'. Choose one of: {', '.join(sorted(POLICIES))}"
        ) from None
