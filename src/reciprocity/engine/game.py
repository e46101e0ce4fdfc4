"""Game engine for Reciprocity.

Plays one game between a scheduled pair:
1. Look up both agents in the pool
2. Ask each strategy for a move, given its history against this opponent
3. Resolve payoffs through the payoff table
4. Add payoffs to scores and append the game to both histories
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from reciprocity.engine.pool import AgentPool
from reciprocity.engine.scheduler import Pairing
from reciprocity.models.moves import Move
from reciprocity.models.payoffs import PAYOFF_TABLE, PayoffTable, resolve
from reciprocity.strategies.registry import StrategyRegistry

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GameResult:
    """Outcome of a single game.

    Attributes:
        agent1_id: First agent of the pairing
        agent2_id: Second agent of the pairing
        move1: Move played by agent1
        move2: Move played by agent2
        payoff1: Payoff awarded to agent1
        payoff2: Payoff awarded to agent2
        pairing_index: Schedule index of the pairing (-1 if unscheduled)
        game_number: 1-based global game counter (0 if not assigned)
    """

    agent1_id: int
    agent2_id: int
    move1: Move
    move2: Move
    payoff1: int
    payoff2: int
    pairing_index: int = -1
    game_number: int = 0

    @property
    def total_payoff(self) -> int:
        return self.payoff1 + self.payoff2

    @property
    def outcome_code(self) -> str:
        """Two-letter outcome key from agent1's side, e.g. "DC"."""
        return self.move1.short_code + self.move2.short_code

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "agent1_id": self.agent1_id,
            "agent2_id": self.agent2_id,
            "move1": self.move1.value,
            "move2": self.move2.value,
            "payoff1": self.payoff1,
            "payoff2": self.payoff2,
            "pairing_index": self.pairing_index,
            "game_number": self.game_number,
        }


class GameEngine:
    """Executes single games against an agent pool."""

    def __init__(
        self,
        pool: AgentPool,
        registry: StrategyRegistry,
        payoff_table: PayoffTable = PAYOFF_TABLE,
    ) -> None:
        self._pool = pool
        self._registry = registry
        self._payoff_table = payoff_table

    def play_one(self, pairing: Pairing, game_number: int = 0) -> GameResult:
        """Play one game for pairing and apply it to the pool.

        Raises:
            InvalidPairing: If either agent is not in the pool or both are the same
        """
        agent1_id, agent2_id = pairing.agent1_index, pairing.agent2_index
        self._pool.check_pair(agent1_id, agent2_id)

        strategy1 = self._registry.get(self._pool.strategy_of(agent1_id))
        strategy2 = self._registry.get(self._pool.strategy_of(agent2_id))

        # Both moves are chosen before either history is touched.
        move1 = strategy1.decide(self._pool.history_between(agent1_id, agent2_id))
        move2 = strategy2.decide(self._pool.history_between(agent2_id, agent1_id))
        payoff1, payoff2 = resolve(move1, move2, self._payoff_table)

        self._pool.record_game(agent1_id, agent2_id, move1, move2, payoff1, payoff2)

        result = GameResult(
            agent1_id=agent1_id,
            agent2_id=agent2_id,
            move1=move1,
            move2=move2,
            payoff1=payoff1,
            payoff2=payoff2,
            pairing_index=pairing.index,
            game_number=game_number,
        )
        logger.debug(
            f"Game {game_number}: agent {agent1_id} ({strategy1.strategy_id}) vs "
            f"agent {agent2_id} ({strategy2.strategy_id}) -> {result.outcome_code} "
            f"({payoff1}, {payoff2})"
        )
        return result
