"""
Pytest fixtures for Snakefight tests.
"""

import pytest

from ..engine_core.state import Board, Coord, Snake
from ..session import SessionStore


def make_snake(snake_id: str, *cells: tuple[int, int], health: int = 90) -> Snake:
    """Build a snake from (x, y) pairs, head first."""
    body = tuple(Coord(x, y) for x, y in cells)
    return Snake(snake_id=snake_id, body=body, health=health, length=len(body))


def make_board(*snakes: Snake, height: int = 11, width: int | None = 11, food=()) -> Board:
    return Board.create(
        height=height,
        width=width,
        food=(Coord(x, y) for x, y in food),
        snakes=snakes,
    )


def wire_payload(game_id: str = "game-1", turn: int = 0, snakes=None, you=None) -> dict:
    """A referee request body as it appears on the wire."""
    if snakes is None:
        snakes = [wire_snake("me", [(1, 1), (1, 2), (1, 3)])]
    if you is None:
        you = snakes[0]
    return {
        "game": {
            "id": game_id,
            "ruleset": {
                "name": "standard",
                "version": "v1.2.3",
                "settings": {
                    "foodSpawnChance": 15,
                    "minimumFood": 1,
                    "hazardDamagePerTurn": 14,
                    "royale": {"shrinkEveryNTurns": 25},
                    "squad": {
                        "allowBodyCollisions": False,
                        "sharedElimination": False,
                        "sharedHealth": False,
                        "sharedLength": False,
                    },
                },
            },
            "map": "standard",
            "timeout": 500,
            "source": "league",
        },
        "turn": turn,
        "board": {
            "height": 11,
            "width": 11,
            "food": [{"x": 5, "y": 5}],
            "hazards": [],
            "snakes": snakes,
        },
        "you": you,
    }


def wire_snake(snake_id: str, cells: list[tuple[int, int]]) -> dict:
    body = [{"x": x, "y": y} for x, y in cells]
    return {
        "id": snake_id,
        "name": f"Snake {snake_id}",
        "health": 100,
        "body": body,
        "latency": "111",
        "head": body[0],
        "length": len(body),
        "shout": "",
        "squad": "",
        "customizations": {"color": "#26CF04", "head": "default", "tail": "default"},
    }


@pytest.fixture
def store() -> SessionStore:
    """A fresh, isolated session store."""
    return SessionStore()


@pytest.fixture
def l_shaped_board() -> Board:
    """Board with one snake on (2,2), (2,3), (3,3)."""
    return make_board(make_snake("s1", (2, 2), (2, 3), (3, 3)))


@pytest.fixture
def empty_board() -> Board:
    return make_board()
