"""
Engine Core - Board snapshot types.

Provides:
- Coord / Distance: grid positions and signed offsets
- Snake: per-snake data embedded in a snapshot
- Board: immutable per-turn snapshot
"""

from .state import Board, Coord, Distance, Snake, distance

__all__ = [
    "Board",
    "Coord",
    "Distance",
    "Snake",
    "distance",
]
