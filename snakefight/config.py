"""
Configuration - Process settings from the environment.

Environment variables:
    SNAKEFIGHT_CONFIG     Path to the snake details JSON (default: config.json)
    SNAKEFIGHT_HOST       Bind address (default: 127.0.0.1)
    SNAKEFIGHT_PORT       Bind port (default: 3030)
    SNAKEFIGHT_POLICY     Move policy name: random, cautious (default: random)
    SNAKEFIGHT_LOG_LEVEL  Logging level (default: INFO)

The details file is what GET / returns to the referee, e.g.:

    {"apiversion": "1", "author": "me", "color": "#33aa55"}

A missing file falls back to the bare default details.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from pathlib import Path
import json
import logging
import os

from pydantic import ValidationError

from .api.schemas import SnakeDetails

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = "config.json"
DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 3030
DEFAULT_POLICY = "random"
DEFAULT_LOG_LEVEL = "INFO"


class ConfigError(Exception):
    """Raised when configuration cannot be loaded."""


def load_details(path: str | os.PathLike | None = None) -> SnakeDetails:
    """
    Load snake details from a JSON file.

    Args:
        path: File to read (default: SNAKEFIGHT_CONFIG or config.json)

    Returns:
        Parsed SnakeDetails

    Raises:
        ConfigError: the file exists but is not valid details JSON
    """
    config_path = Path(path or os.getenv("SNAKEFIGHT_CONFIG", DEFAULT_CONFIG_PATH))
    if not config_path.exists():
        logger.warning("No config at %s, using default snake details", config_path)
        return SnakeDetails()

    try:
        with open(config_path, "r", encoding="utf-8") as f:
            data = json.load(f)
        return SnakeDetails.model_validate(data)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"Invalid snake details in {config_path}: {e}") from e


@dataclass(frozen=True)
class Settings:
    """Resolved process settings."""
    details: SnakeDetails = field(default_factory=SnakeDetails)
    host: str = DEFAULT_HOST
    port: int = DEFAULT_PORT
    policy: str = DEFAULT_POLICY
    log_level: str = DEFAULT_LOG_LEVEL

    @classmethod
    def from_env(cls, config_path: str | None = None) -> Settings:
        """Build settings from environment variables."""
        port = os.getenv("SNAKEFIGHT_PORT", str(DEFAULT_PORT))
        try:
            port_number = int(port)
        except ValueError:
            raise ConfigError(f"SNAKEFIGHT_PORT must be an integer, got '{port}'") from None

        return cls(
            details=load_details(config_path),
            host=os.getenv("SNAKEFIGHT_HOST", DEFAULT_HOST),
            port=port_number,
            policy=os.getenv("SNAKEFIGHT_POLICY", DEFAULT_POLICY),
            log_level=os.getenv("SNAKEFIGHT_LOG_LEVEL", DEFAULT_LOG_LEVEL),
        )
