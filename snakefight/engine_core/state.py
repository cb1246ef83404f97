"""
Board State - Immutable per-turn snapshot of a game board.

Design principles:
- Immutable: a new turn produces a new Board, never an in-place edit
- Hashable coordinates: usable as set members and dict keys
- Passthrough: snake fields other than the body are carried for strategies
- Game-agnostic: no rule simulation, the referee owns that
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Iterable

if TYPE_CHECKING:
    from ..bots.policy import Action


@dataclass(frozen=True)
class Distance:
    """Signed per-axis offset between two coordinates."""
    dx: int
    dy: int

    def __neg__(self) -> Distance:
        return Distance(dx=-self.dx, dy=-self.dy)


@dataclass(frozen=True, order=True)
class Coord:
    """
    A grid position.

    Ordering compares x, then y.
    """
    x: int
    y: int

    def distance(self, other: Coord) -> Distance:
        """Offset from `other` to this coordinate."""
        return Distance(dx=self.x - other.x, dy=self.y - other.y)

    def moved(self, action: Action) -> Coord:
        """Neighbouring coordinate one step in the given direction."""
        dx, dy = action.delta
        return Coord(self.x + dx, self.y + dy)


def distance(a: Coord, b: Coord) -> Distance:
    """Signed (dx, dy) from b to a."""
    return a.distance(b)


@dataclass(frozen=True)
class Snake:
    """
    A snake as seen in one board snapshot.

    Only `body` is used for collision checks. The rest is passed
    through untouched to decision strategies.
    """
    snake_id: str
    body: tuple[Coord, ...] = ()
    health: int = 0
    length: int = 0
    name: str = ""
    head: Coord | None = None
    shout: str = ""
    squad: str = ""
    latency: str = ""

    def __post_init__(self):
        # Accept any iterable for body, store as tuple
        object.__setattr__(self, "body", tuple(self.body))
        if self.head is None and self.body:
            object.__setattr__(self, "head", self.body[0])

    def occupies(self, coord: Coord) -> bool:
        return coord in self.body


@dataclass(frozen=True)
class Board:
    """
    Complete spatial state of a game as of one turn.

    Contains:
    - Grid dimensions (width is optional on the wire)
    - Food and hazard positions
    - Every snake's body, head first
    """
    height: int
    width: int | None = None
    food: frozenset[Coord] = field(default_factory=frozenset)
    hazards: frozenset[Coord] = field(default_factory=frozenset)
    snakes: tuple[Snake, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "food", frozenset(self.food))
        object.__setattr__(self, "hazards", frozenset(self.hazards))
        object.__setattr__(self, "snakes", tuple(self.snakes))

    @classmethod
    def create(
        cls,
        height: int,
        width: int | None = None,
        food: Iterable[Coord] = (),
        hazards: Iterable[Coord] = (),
        snakes: Iterable[Snake] = (),
    ) -> Board:
        """Build a board from plain iterables."""
        return cls(
            height=height,
            width=width,
            food=frozenset(food),
            hazards=frozenset(hazards),
            snakes=tuple(snakes),
        )

    def occupied(self) -> frozenset[Coord]:
        """All coordinates covered by any snake body."""
        return frozenset(c for snake in self.snakes for c in snake.body)

    def collides(self, coord: Coord) -> bool:
        """Exact match against every body segment of every snake."""
        return any(snake.occupies(coord) for snake in self.snakes)

    def contains(self, coord: Coord) -> bool:
        """Whether a coordinate lies on the grid."""
        width = self.width if self.width is not None else self.height
        return 0 <= coord.x < width and 0 <= coord.y < self.height
