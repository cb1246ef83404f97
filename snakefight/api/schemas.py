"""
Pydantic Schemas for API - Request/response models for the referee protocol.

These models define the exact wire contract with the game referee.
Field names follow the referee's JSON; rule settings use camelCase aliases.

Error Codes:
- GAME_NOT_FOUND: A move arrived for a game that was never started or has ended
- NOT_FOUND: No such route
- VALIDATION_ERROR: Request body did not match the schema
- INTERNAL_ERROR: Unexpected server failure
"""

from enum import Enum
from typing import Optional, Any
from pydantic import BaseModel, ConfigDict, Field, field_validator

# Longest shout the referee accepts
MAX_SHOUT_LENGTH = 256


# =============================================================================
# Enums
# =============================================================================

class Source(str, Enum):
    """Where a game was created."""
    TOURNAMENT = "tournament"
    LEAGUE = "league"
    ARENA = "arena"
    CHALLENGE = "challenge"
    CUSTOM = "custom"


class MoveDirection(str, Enum):
    """Directions accepted by the referee."""
    UP = "up"
    DOWN = "down"
    LEFT = "left"
    RIGHT = "right"


class ErrorCode(str, Enum):
    """Structured error codes."""
    GAME_NOT_FOUND = "GAME_NOT_FOUND"
    NOT_FOUND = "NOT_FOUND"
    VALIDATION_ERROR = "VALIDATION_ERROR"
    INTERNAL_ERROR = "INTERNAL_ERROR"


# =============================================================================
# Snake Details
# =============================================================================

class SnakeDetails(BaseModel):
    """Appearance and metadata returned from GET /."""
    apiversion: str = "1"
    author: Optional[str] = None
    color: Optional[str] = None
    head: Optional[str] = None
    tail: Optional[str] = None
    version: Optional[str] = None


# =============================================================================
# Rules
# =============================================================================

class RoyaleSettings(BaseModel):
    """Royale mode settings."""
    shrink_every_n_turns: int = Field(
        alias="shrinkEveryNTurns",
        description="Turns between new hazards shrinking the safe area",
    )

    model_config = ConfigDict(populate_by_name=True)


class SquadSettings(BaseModel):
    """Squad mode settings."""
    allow_body_collisions: bool = Field(False, alias="allowBodyCollisions")
    shared_elimination: bool = Field(False, alias="sharedElimination")
    shared_health: bool = Field(False, alias="sharedHealth")
    shared_length: bool = Field(False, alias="sharedLength")

    model_config = ConfigDict(populate_by_name=True)


class RulesetSettings(BaseModel):
    """Rule settings. Opaque to the engine, kept for logging."""
    food_spawn_chance: Optional[int] = Field(
        None, alias="foodSpawnChance", description="Percent chance of new food each round"
    )
    minimum_food: Optional[int] = Field(
        None, alias="minimumFood", description="Minimum food kept on the board"
    )
    hazard_damage_per_turn: Optional[int] = Field(
        None, alias="hazardDamagePerTurn", description="Extra damage for ending a turn in a hazard"
    )
    royale: Optional[RoyaleSettings] = None
    squad: Optional[SquadSettings] = None

    model_config = ConfigDict(populate_by_name=True)


class Ruleset(BaseModel):
    """Ruleset a game is played under."""
    name: str
    version: str = ""
    settings: RulesetSettings = Field(default_factory=RulesetSettings)


class GameInfo(BaseModel):
    """Game descriptor sent with every lifecycle event."""
    id: str = Field(..., min_length=1)
    ruleset: Ruleset
    map: str = ""
    timeout: int = Field(500, ge=0, description="Milliseconds allowed per move")
    source: Optional[Source] = None

    @field_validator("source", mode="before")
    @classmethod
    def empty_source_is_custom(cls, value: Any) -> Any:
        if value == "":
            return Source.CUSTOM
        return value


# =============================================================================
# Board
# =============================================================================

class CoordModel(BaseModel):
    """A grid position."""
    x: int = Field(..., ge=0)
    y: int = Field(..., ge=0)


class Customizations(BaseModel):
    """Snake appearance."""
    color: str = ""
    head: str = ""
    tail: str = ""


class SnakeModel(BaseModel):
    """A snake on the board."""
    id: str
    name: str = ""
    health: int = Field(0, ge=0)
    body: list[CoordModel] = Field(default_factory=list, description="Head first")
    latency: str = ""
    head: Optional[CoordModel] = None
    length: int = Field(0, ge=0)
    shout: str = ""
    squad: str = ""
    customizations: Customizations = Field(default_factory=Customizations)


class BoardModel(BaseModel):
    """Board state for one turn."""
    height: int = Field(..., ge=0)
    width: Optional[int] = Field(None, ge=0)
    food: list[CoordModel] = Field(default_factory=list)
    hazards: list[CoordModel] = Field(default_factory=list)
    snakes: list[SnakeModel] = Field(default_factory=list)


# =============================================================================
# Requests
# =============================================================================

class GameRequest(BaseModel):
    """Body of POST /start, /move and /end."""
    game: GameInfo
    turn: int = Field(..., ge=0)
    board: BoardModel
    you: Optional[SnakeModel] = None


# =============================================================================
# Responses
# =============================================================================

class MoveResponse(BaseModel):
    """Response to POST /move. `shout` is dropped from the JSON when absent."""
    move: MoveDirection
    shout: Optional[str] = Field(None, max_length=MAX_SHOUT_LENGTH)


class ErrorResponse(BaseModel):
    """Standard error response."""
    error: str
    error_code: ErrorCode
    details: Optional[dict[str, Any]] = None


class HealthResponse(BaseModel):
    """Health check response."""
    status: str
    service: str
    version: str
    active_games: int = 0
