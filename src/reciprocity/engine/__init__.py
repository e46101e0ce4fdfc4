"""Tournament engine for Reciprocity.

This module contains the population tournament core:
- pool: Agent pool built from a two-strategy split
- scheduler: Pairing schedule with wraparound
- game: Single-game execution and GameResult
- statistics: Snapshot aggregation
- simulation: SimulationController lifecycle and notifications

Usage:
    from reciprocity.engine import SimulationController

    controller = SimulationController({
        "strategies": ["tit-for-tat", "always-defect"],
        "proportion": 0.5,
        "population_size": 10,
        "total_games": 200,
        "games_per_pairing": 5,
        "seed": 42,
    })
    controller.initialize()
    while not controller.is_complete:
        controller.run_game()
    print(controller.get_statistics().leader)
"""

from reciprocity.engine.game import GameEngine, GameResult
from reciprocity.engine.pool import AgentPool, round_half_up
from reciprocity.engine.scheduler import Pairing, PairingScheduler, pairing_count
from reciprocity.engine.simulation import (
    CallbackObserver,
    SimulationController,
    SimulationObserver,
    SimulationPhase,
)
from reciprocity.engine.statistics import (
    PairingProgress,
    StatisticsAggregator,
    StatisticsSnapshot,
    StrategyStats,
)

__all__ = [
    # Controller
    "SimulationController",
    "SimulationPhase",
    "SimulationObserver",
    "CallbackObserver",
    # Components
    "AgentPool",
    "PairingScheduler",
    "Pairing",
    "GameEngine",
    "GameResult",
    "StatisticsAggregator",
    # Snapshots
    "StatisticsSnapshot",
    "StrategyStats",
    "PairingProgress",
    # Helpers
    "pairing_count",
    "round_half_up",
]
