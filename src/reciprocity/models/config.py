"""Simulation configuration model.

The configuration is validated by pydantic when a controller is initialized.
Field names are snake_case; the camelCase names used by the browser front end
(populationSize, totalGames, gamesPerPairing, ...) are accepted as aliases.

Global constraints:
- exactly two distinct strategy ids
- 0 <= proportion <= 1
- population_size >= 2 (a pairing needs two agents)
- total_games, games_per_pairing, progress_interval >= 1
"""

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from reciprocity.config import (
    get_default_seed,
    get_games_per_pairing,
    get_population_size,
    get_total_games,
)
from reciprocity.parameters import DEFAULT_PROPORTION


class SimulationConfig(BaseModel):
    """Parameters for one tournament run."""

    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    strategies: tuple[str, str]
    proportion: float = Field(default=DEFAULT_PROPORTION, ge=0.0, le=1.0)
    population_size: int = Field(default_factory=get_population_size, ge=2, alias="populationSize")
    total_games: int = Field(default_factory=get_total_games, ge=1, alias="totalGames")
    games_per_pairing: int = Field(default_factory=get_games_per_pairing, ge=1, alias="gamesPerPairing")
    seed: int | None = Field(default_factory=get_default_seed)
    shuffle_pairings: bool = Field(default=True, alias="shufflePairings")
    progress_interval: int = Field(default=1, ge=1, alias="progressInterval")

    @field_validator("strategies", mode="before")
    @classmethod
    def coerce_strategy_keys(cls, v: Any) -> Any:
        # The front end passes {strategy_id: placeholder, ...}; only keys matter.
        if isinstance(v, Mapping):
            return tuple(v.keys())
        if isinstance(v, str):
            raise ValueError("strategies must be a collection of two strategy ids, not a string")
        if isinstance(v, (set, frozenset)):
            raise ValueError("strategies must be an ordered sequence; a set has no first strategy")
        if isinstance(v, list):
            return tuple(v)
        return v

    @field_validator("strategies")
    @classmethod
    def validate_distinct(cls, v: tuple[str, str]) -> tuple[str, str]:
        if v[0] == v[1]:
            raise ValueError(f"strategies must be two distinct ids, got {v[0]!r} twice")
        return v

    @property
    def strategy_a(self) -> str:
        return self.strategies[0]

    @property
    def strategy_b(self) -> str:
        return self.strategies[1]
