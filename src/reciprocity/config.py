"""Environment configuration for Reciprocity.

Run defaults can be overridden via environment variables. Values set
explicitly on a SimulationConfig always win over the environment.
"""

import logging
import os

from reciprocity.parameters import (
    DEFAULT_GAMES_PER_PAIRING,
    DEFAULT_POPULATION_SIZE,
    DEFAULT_TOTAL_GAMES,
)

DEFAULT_LOG_LEVEL = "WARNING"


def _get_int(name: str, default: int | None) -> int | None:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


def get_default_seed() -> int | None:
    """Get the random seed from RECIPROCITY_SEED (None means unseeded)."""
    return _get_int("RECIPROCITY_SEED", None)


def get_population_size() -> int:
    """Get the default population size from environment."""
    return _get_int("RECIPROCITY_POPULATION_SIZE", DEFAULT_POPULATION_SIZE)


def get_total_games() -> int:
    """Get the default total games from environment."""
    return _get_int("RECIPROCITY_TOTAL_GAMES", DEFAULT_TOTAL_GAMES)


def get_games_per_pairing() -> int:
    """Get the default games per pairing from environment."""
    return _get_int("RECIPROCITY_GAMES_PER_PAIRING", DEFAULT_GAMES_PER_PAIRING)


def get_log_level() -> int:
    """Get the CLI log level from RECIPROCITY_LOG_LEVEL.

    Accepts level names (case-insensitive). Unknown names raise ValueError.
    """
    name = os.environ.get("RECIPROCITY_LOG_LEVEL", DEFAULT_LOG_LEVEL).upper()
    level = logging.getLevelName(name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {name}")
    return level
