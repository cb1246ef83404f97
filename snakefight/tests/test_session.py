"""
Tests for the session store.

Tests:
- Create, record, remove lifecycle
- Collision queries against the latest board
- Reset and unknown-game behaviour
- Safety under concurrent access
"""

from concurrent.futures import ThreadPoolExecutor
import random
import threading

import pytest

from ..engine_core.state import Coord
from ..session import GameNotFoundError, GameSession, SessionStore
from .conftest import make_board, make_snake


class TestSessionLifecycle:
    """Tests for create_or_reset / record_turn / remove."""

    def test_create_registers_game(self, store, empty_board):
        store.create_or_reset("g", 0, empty_board)

        assert "g" in store
        assert store.game_ids() == ["g"]
        assert store.get("g").latest == empty_board

    def test_record_turn_returns_view_after_insert(self, store, empty_board, l_shaped_board):
        store.create_or_reset("g", 0, empty_board)

        view = store.record_turn("g", 1, l_shaped_board)

        assert view.game_id == "g"
        assert list(view.history) == [0, 1]
        assert view.latest_turn == 1
        assert view.latest == l_shaped_board

    def test_view_is_read_only(self, store, empty_board):
        store.create_or_reset("g", 0, empty_board)
        view = store.get("g")

        with pytest.raises(TypeError):
            view.history[5] = empty_board

    def test_view_is_not_affected_by_later_turns(self, store, empty_board, l_shaped_board):
        store.create_or_reset("g", 0, empty_board)
        view = store.record_turn("g", 1, empty_board)

        store.record_turn("g", 2, l_shaped_board)

        assert view.latest_turn == 1
        assert store.get("g").latest_turn == 2

    def test_view_latest_is_fixed_but_history_is_read_on_access(self, store, empty_board, l_shaped_board):
        store.create_or_reset("g", 0, empty_board)
        view = store.record_turn("g", 1, l_shaped_board)
        before = view.history

        store.record_turn("g", 2, empty_board)

        assert view.latest == l_shaped_board
        assert view.would_collide(Coord(2, 2))
        assert list(before) == [0, 1]
        assert list(view.history) == [0, 1, 2]

    def test_same_turn_overwrites_slot(self, store, empty_board, l_shaped_board):
        store.create_or_reset("g", 0, empty_board)
        store.record_turn("g", 1, empty_board)

        view = store.record_turn("g", 1, l_shaped_board)

        assert len(view.history) == 2
        assert view.history[1] == l_shaped_board

    def test_smaller_turn_is_keyed_not_appended(self, store, empty_board, l_shaped_board):
        """A late, smaller turn fills its own slot; the latest stays the highest turn."""
        store.create_or_reset("g", 0, empty_board)
        store.record_turn("g", 5, l_shaped_board)

        view = store.record_turn("g", 3, empty_board)

        assert list(view.history) == [0, 3, 5]
        assert view.latest_turn == 5
        assert view.latest == l_shaped_board

    def test_unknown_game_move_rejected(self, store, empty_board):
        """record_turn on an unknown game fails and creates nothing."""
        with pytest.raises(GameNotFoundError) as exc_info:
            store.record_turn("no-such-game", 0, empty_board)

        assert exc_info.value.game_id == "no-such-game"
        assert "no-such-game" in str(exc_info.value)
        assert "no-such-game" not in store
        assert len(store) == 0

    def test_not_found_is_lookup_error(self):
        assert issubclass(GameNotFoundError, LookupError)

    def test_remove_is_idempotent(self, store, empty_board):
        """Removing twice, or removing an unknown game, never fails."""
        store.create_or_reset("g", 0, empty_board)

        assert store.remove("g") is True
        assert store.remove("g") is False
        assert store.remove("never-created") is False
        assert "g" not in store

    def test_record_after_remove_rejected(self, store, empty_board):
        store.create_or_reset("g", 0, empty_board)
        store.remove("g")

        with pytest.raises(GameNotFoundError):
            store.record_turn("g", 1, empty_board)

    def test_id_reusable_after_end(self, store, empty_board, l_shaped_board):
        store.create_or_reset("g", 0, empty_board)
        store.remove("g")

        store.create_or_reset("g", 0, l_shaped_board)

        assert store.would_collide("g", Coord(2, 2))

    def test_reset_discards_history(self, store, empty_board, l_shaped_board):
        """A second start wipes every earlier turn."""
        store.create_or_reset("g", 5, l_shaped_board)
        store.record_turn("g", 6, l_shaped_board)
        store.record_turn("g", 7, l_shaped_board)

        store.create_or_reset("g", 0, empty_board)

        view = store.get("g")
        assert dict(view.history) == {0: empty_board}
        assert not store.would_collide("g", Coord(2, 2))

    def test_stores_are_isolated(self, empty_board):
        first, second = SessionStore(), SessionStore()
        first.create_or_reset("g", 0, empty_board)
        assert "g" not in second


class TestCollisionQuery:
    """Tests for would_collide."""

    def test_unknown_game_never_collides(self, store):
        assert store.would_collide("never-seen", Coord(0, 0)) is False

    def test_empty_history_never_collides(self):
        session = GameSession(game_id="g")
        view = session.view()

        assert view.latest is None
        assert view.latest_turn is None
        assert view.would_collide(Coord(0, 0)) is False

    def test_exact_match_only(self, store, l_shaped_board):
        store.create_or_reset("g", 0, l_shaped_board)

        assert store.would_collide("g", Coord(2, 2)) is True
        assert store.would_collide("g", Coord(2, 3)) is True
        assert store.would_collide("g", Coord(3, 3)) is True
        assert store.would_collide("g", Coord(2, 4)) is False

    def test_any_snake_counts(self, store):
        board = make_board(make_snake("a", (0, 0)), make_snake("b", (9, 9), (9, 8)))
        store.create_or_reset("g", 0, board)

        assert store.would_collide("g", Coord(9, 8))

    def test_monotonic_visibility(self, store):
        """Only the newest board's bodies are considered."""
        snap0 = make_board(make_snake("a", (1, 1), (1, 2)))
        snap1 = make_board(make_snake("a", (1, 0), (1, 1)))
        store.create_or_reset("g", 0, snap0)

        store.record_turn("g", 1, snap1)

        assert store.would_collide("g", Coord(1, 0))
        assert not store.would_collide("g", Coord(1, 2))

    def test_view_collision_matches_store(self, store, l_shaped_board):
        store.create_or_reset("g", 0, l_shaped_board)
        view = store.record_turn("g", 1, l_shaped_board)

        assert view.would_collide(Coord(2, 2)) == store.would_collide("g", Coord(2, 2))

    def test_query_has_no_side_effects(self, store):
        store.would_collide("g", Coord(1, 1))
        assert len(store) == 0


class TestConcurrency:
    """Tests for concurrent access from many threads."""

    GAMES = [f"game-{i}" for i in range(8)]

    def test_concurrent_mixed_operations(self, store):
        """Mixed writes, reads and removals never fail and never expose torn boards."""
        # Each turn's board places every segment on row `turn`, so a
        # consistent board has all segments sharing one y value.
        def board_for(turn):
            return make_board(make_snake("s", *[(x, turn) for x in range(5)]), height=1000)

        for game_id in self.GAMES:
            store.create_or_reset(game_id, 0, board_for(0))

        errors = []
        seen_boards = []

        def writer(game_id, turns):
            for turn in turns:
                try:
                    view = store.record_turn(game_id, turn, board_for(turn))
                    seen_boards.append(view.latest)
                except GameNotFoundError:
                    # Removed by a concurrent end, then maybe restarted
                    store.create_or_reset(game_id, turn, board_for(turn))

        def reader(seed):
            rng = random.Random(seed)
            for _ in range(300):
                game_id = rng.choice(self.GAMES)
                store.would_collide(game_id, Coord(rng.randrange(5), rng.randrange(50)))
                view = store.get(game_id)
                if view is not None and view.latest is not None:
                    seen_boards.append(view.latest)

        def remover(seed):
            rng = random.Random(seed)
            for _ in range(20):
                store.remove(rng.choice(self.GAMES))

        with ThreadPoolExecutor(max_workers=16) as pool:
            futures = []
            for game_id in self.GAMES:
                futures.append(pool.submit(writer, game_id, range(1, 50)))
            for seed in range(6):
                futures.append(pool.submit(reader, seed))
            for seed in range(3):
                futures.append(pool.submit(remover, seed))
            for future in futures:
                try:
                    future.result(timeout=30)
                except Exception as e:  # pragma: no cover - reported below
                    errors.append(e)

        assert errors == []
        for board in seen_boards:
            rows = {c.y for c in board.snakes[0].body}
            assert len(rows) == 1
            assert len(board.snakes[0].body) == 5

    def test_concurrent_turns_for_one_game(self, store, empty_board):
        """Concurrent turns for the same game all land in the history."""
        store.create_or_reset("g", 0, empty_board)
        barrier = threading.Barrier(10)

        def push(offset):
            barrier.wait()
            for turn in range(offset, 200, 10):
                store.record_turn("g", turn, empty_board)

        threads = [threading.Thread(target=push, args=(i,)) for i in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=30)
            assert not t.is_alive(), "writer thread did not finish"

        view = store.get("g")
        assert list(view.history) == list(range(200))
        assert view.latest_turn == 199
