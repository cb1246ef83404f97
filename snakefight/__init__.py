"""
Snakefight - Turn-based grid game server

An HTTP server for a multiplayer snake game referee. The referee sends the
board every turn; the server keeps each game's history and answers with a move.
Provides:
- Immutable board snapshots
- A concurrent per-game session store
- A start -> move -> end turn pipeline
- Pluggable move policies
"""

__version__ = "0.1.0"
