"""Strategy registry for Reciprocity.

A strategy is a pure decision rule: given the ordered history against one
opponent (empty on the first game), return a Move. The registry maps stable
string ids to strategies and their display metadata.

Registries are instances, not module globals, so concurrent runs never share
mutable state. See reciprocity.strategies.builtin for the built-in set.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable, Iterator

from reciprocity.errors import UnknownStrategy
from reciprocity.models.moves import History, Move

logger = logging.getLogger(__name__)

DecisionFunction = Callable[[History], Move]


@dataclass(frozen=True)
class Strategy:
    """A registered strategy.

    Attributes:
        strategy_id: Stable registry key (e.g. "tit-for-tat")
        name: Display name
        description: One-sentence explanation shown next to the selector
        decide: Decision function from per-opponent history to a Move
    """

    strategy_id: str
    name: str
    description: str
    decide: DecisionFunction

    def __call__(self, history: History) -> Move:
        return self.decide(history)


class StrategyRegistry:
    """Maps strategy ids to Strategy records.

    Usage:
        registry = StrategyRegistry()
        registry.register("always-cooperate", "Always Cooperate", "...", lambda h: Move.COOPERATE)
        strategy = registry.get("always-cooperate")
    """

    def __init__(self) -> None:
        self._strategies: dict[str, Strategy] = {}

    def register(
        self,
        strategy_id: str,
        name: str,
        description: str,
        decide: DecisionFunction,
    ) -> Strategy:
        """Register a strategy.

        Raises:
            ValueError: If the id is empty or already registered
        """
        if not strategy_id:
            raise ValueError("strategy_id must be a non-empty string")
        if strategy_id in self._strategies:
            raise ValueError(f"Strategy already registered: {strategy_id}")
        if not callable(decide):
            raise ValueError(f"Decision function for {strategy_id} is not callable")

        strategy = Strategy(strategy_id=strategy_id, name=name, description=description, decide=decide)
        self._strategies[strategy_id] = strategy
        logger.debug(f"Registered strategy {strategy_id!r} ({name})")
        return strategy

    def get(self, strategy_id: str) -> Strategy:
        """Look up a strategy by id.

        Raises:
            UnknownStrategy: If the id is not registered
        """
        try:
            return self._strategies[strategy_id]
        except KeyError:
            raise UnknownStrategy(strategy_id) from None

    def list_strategies(self) -> list[Strategy]:
        """All registered strategies in registration order."""
        return list(self._strategies.values())

    def describe(self, strategy_id: str) -> str:
        return self.get(strategy_id).description

    def __contains__(self, strategy_id: object) -> bool:
        return strategy_id in self._strategies

    def __iter__(self) -> Iterator[str]:
        return iter(self._strategies)

    def __len__(self) -> int:
        return len(self._strategies)
