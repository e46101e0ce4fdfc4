"""Agent pool for Reciprocity.

The pool owns every Agent in a run. Other components refer to agents by id
(equal to their index) and get read-only AgentView copies; the only mutation
path is record_game(), used by the GameEngine.
"""

from __future__ import annotations

import logging
import math
from collections import Counter
from typing import Iterator

from reciprocity.errors import InvalidConfiguration, InvalidPairing
from reciprocity.models.agent import Agent, AgentView
from reciprocity.models.moves import HistoryEntry, Move

logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer, halves away from zero for non-negatives.

    Python's round() rounds halves to even; population splits round 2.5 up
    to 3 like the browser front end does.
    """
    return math.floor(value + 0.5)


class AgentPool:
    """The population of a single run, split between two strategies."""

    def __init__(self, agents: list[Agent]) -> None:
        self._agents = agents

    @classmethod
    def build(
        cls,
        population_size: int,
        strategy_a: str,
        strategy_b: str,
        proportion: float,
    ) -> AgentPool:
        """Create a pool of population_size agents.

        The first round_half_up(population_size * proportion) agents play
        strategy_a, the rest play strategy_b. Ids are assigned sequentially
        from 0.

        Raises:
            InvalidConfiguration: If population_size < 2 or proportion is
                outside [0, 1]
        """
        if isinstance(population_size, bool) or not isinstance(population_size, int):
            raise InvalidConfiguration(f"population_size must be an integer, got {population_size!r}")
        if population_size < 2:
            raise InvalidConfiguration(f"population_size must be at least 2, got {population_size}")
        if not 0.0 <= proportion <= 1.0:
            raise InvalidConfiguration(f"proportion must be in [0, 1], got {proportion}")

        count_a = round_half_up(population_size * proportion)
        agents = [
            Agent(agent_id=i, strategy_id=strategy_a if i < count_a else strategy_b)
            for i in range(population_size)
        ]
        logger.debug(
            f"Built pool of {population_size}: {count_a} x {strategy_a}, "
            f"{population_size - count_a} x {strategy_b}"
        )
        return cls(agents)

    def __len__(self) -> int:
        return len(self._agents)

    def __contains__(self, agent_id: object) -> bool:
        return isinstance(agent_id, int) and not isinstance(agent_id, bool) and 0 <= agent_id < len(self._agents)

    def ids(self) -> range:
        return range(len(self._agents))

    def get(self, agent_id: int) -> AgentView:
        """Read-only view of one agent.

        Raises:
            KeyError: If agent_id is not in the pool
        """
        return AgentView.of(self._lookup(agent_id))

    def strategy_of(self, agent_id: int) -> str:
        return self._lookup(agent_id).strategy_id

    def score_of(self, agent_id: int) -> int:
        return self._lookup(agent_id).score

    def history_between(self, agent_id: int, opponent_id: int) -> tuple[HistoryEntry, ...]:
        """History of agent_id against opponent_id, from agent_id's side."""
        return self._lookup(agent_id).history_against(opponent_id)

    def count_by_strategy(self) -> dict[str, int]:
        return dict(Counter(agent.strategy_id for agent in self._agents))

    def scores(self) -> Iterator[tuple[str, int]]:
        """Yield (strategy_id, score) for every agent, in id order."""
        for agent in self._agents:
            yield agent.strategy_id, agent.score

    def total_score(self) -> int:
        return sum(agent.score for agent in self._agents)

    def record_game(
        self,
        agent1_id: int,
        agent2_id: int,
        move1: Move,
        move2: Move,
        payoff1: int,
        payoff2: int,
    ) -> None:
        """Apply one game's outcome to both agents.

        Both histories get the game appended from their own side, own move
        first. Validation happens before any mutation.

        Raises:
            InvalidPairing: If either id is unknown or both ids are the same
        """
        self.check_pair(agent1_id, agent2_id)
        self._agents[agent1_id].record(agent2_id, move1, move2, payoff1)
        self._agents[agent2_id].record(agent1_id, move2, move1, payoff2)

    def check_pair(self, agent1_id: int, agent2_id: int) -> None:
        """Raise InvalidPairing unless both ids exist and differ."""
        for agent_id in (agent1_id, agent2_id):
            if agent_id not in self:
                raise InvalidPairing(f"Agent {agent_id!r} is not in a pool of {len(self)}")
        if agent1_id == agent2_id:
            raise InvalidPairing(f"Agent {agent1_id} cannot be paired with itself")

    def _lookup(self, agent_id: int) -> Agent:
        if agent_id not in self:
            raise KeyError(f"Agent not found: {agent_id!r}")
        return self._agents[agent_id]
