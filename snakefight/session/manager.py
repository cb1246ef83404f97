"""
Session Store - Tracks every running game's board history.

LIFECYCLE (per game id):
1. Referee sends start -> session created (or reset if the id is reused)
2. Referee sends move  -> turn snapshot recorded, view returned
3. Referee sends end   -> session removed, ALL history deleted

States are implicit in store membership:
- Absent: no session (initial, and again after end)
- Active: session exists with at least one recorded turn

PERSISTENCE RULES:
- In-memory only, lost on process restart
- History is kept for the whole game, no eviction

CONCURRENCY:
- The registry lock is held only to look up, insert or drop a game id
- Each session has its own lock guarding its turn history
- Boards are immutable, so a view never exposes a partial snapshot
"""

from __future__ import annotations
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Mapping
import logging
import threading

from ..engine_core.state import Board, Coord

logger = logging.getLogger(__name__)


class GameNotFoundError(LookupError):
    """Raised when a turn arrives for a game with no active session."""

    def __init__(self, game_id: str):
        self.game_id = game_id
        super().__init__(f"Game not found with id: `{game_id}`")


@dataclass(frozen=True)
class GameSessionView:
    """
    Read-only view of a session at one point in time.

    The latest turn and board are fixed when the view is made, and all
    queries run against them. `history` copies the session's turns on
    access, so the move path never pays for it.
    """
    game_id: str
    latest_turn: int | None = None
    latest: Board | None = None
    _session: GameSession | None = field(default=None, repr=False, compare=False)

    @property
    def history(self) -> Mapping[int, Board]:
        """Turn -> Board, ordered by turn."""
        if self._session is None:
            return MappingProxyType({})
        return self._session.history_copy()

    def would_collide(self, coord: Coord) -> bool:
        if self.latest is None:
            # No board means no known obstacle
            return False
        return self.latest.collides(coord)


@dataclass
class GameSession:
    """
    One game's turn history, keyed by turn number.

    Inserting a turn number that already exists overwrites that slot.
    """
    game_id: str
    history: dict[int, Board] = field(default_factory=dict)
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    def push(self, turn: int, board: Board) -> GameSessionView:
        """Record the board for a turn and return the view right after."""
        with self._lock:
            if self.history and turn < next(reversed(self.history)):
                # Keep the mapping ordered by turn
                self.history[turn] = board
                self.history = dict(sorted(self.history.items()))
            else:
                self.history[turn] = board
            return self._view()

    def view(self) -> GameSessionView:
        with self._lock:
            return self._view()

    def _view(self) -> GameSessionView:
        if not self.history:
            return GameSessionView(game_id=self.game_id, _session=self)
        turn = next(reversed(self.history))
        return GameSessionView(
            game_id=self.game_id,
            latest_turn=turn,
            latest=self.history[turn],
            _session=self,
        )

    def history_copy(self) -> Mapping[int, Board]:
        with self._lock:
            return MappingProxyType(dict(self.history))

    def latest(self) -> Board | None:
        with self._lock:
            if not self.history:
                return None
            return self.history[next(reversed(self.history))]

    def __len__(self) -> int:
        with self._lock:
            return len(self.history)


class SessionStore:
    """
    Registry of active game sessions.

    Responsibilities:
    - Create sessions on start, replacing any stale one
    - Record each turn's board
    - Answer collision queries against the latest board
    - Drop sessions on end

    Construct one per application and pass it to whatever handles
    requests. Tests build their own isolated stores.
    """

    def __init__(self):
        self._sessions: dict[str, GameSession] = {}
        self._lock = threading.Lock()

    def create_or_reset(self, game_id: str, turn: int, snapshot: Board):
        """
        Start a fresh session for a game.

        Any existing session under the same id is discarded.
        """
        session = GameSession(game_id=game_id)
        session.push(turn, snapshot)
        with self._lock:
            replaced = game_id in self._sessions
            self._sessions[game_id] = session
        if replaced:
            logger.warning("Reset existing session for game %s", game_id)

    def record_turn(self, game_id: str, turn: int, snapshot: Board) -> GameSessionView:
        """
        Record a turn's board and return the session as it is afterwards.

        Raises:
            GameNotFoundError: no session exists for game_id. Nothing is
                created or changed in that case.
        """
        session = self._lookup(game_id)
        if session is None:
            raise GameNotFoundError(game_id)
        return session.push(turn, snapshot)

    def remove(self, game_id: str) -> bool:
        """Drop a session. Removing an unknown game is a no-op."""
        with self._lock:
            session = self._sessions.pop(game_id, None)
        return session is not None

    def would_collide(self, game_id: str, coord: Coord) -> bool:
        """
        Check whether coord is on any snake body in the latest board.

        Unknown games and empty histories report no collision.
        """
        session = self._lookup(game_id)
        if session is None:
            return False
        board = session.latest()
        if board is None:
            return False
        return board.collides(coord)

    def get(self, game_id: str) -> GameSessionView | None:
        """Get a read-only view of a session, if active."""
        session = self._lookup(game_id)
        return None if session is None else session.view()

    def game_ids(self) -> list[str]:
        """List IDs of active games."""
        with self._lock:
            return list(self._sessions)

    def _lookup(self, game_id: str) -> GameSession | None:
        with self._lock:
            return self._sessions.get(game_id)

    def __contains__(self, game_id: str) -> bool:
        return self._lookup(game_id) is not None

    def __len__(self) -> int:
        with self._lock:
            return len(self._sessions)
