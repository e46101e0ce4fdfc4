"""Simulation controller for Reciprocity.

The controller owns every piece of mutable state in a run (agent pool,
pairing scheduler, counters) and exposes a small step-driven API:

    controller = SimulationController(config)
    controller.initialize()
    while not controller.is_complete:
        controller.run_game()
    snapshot = controller.get_statistics()

Lifecycle (SimulationPhase):
    UNINITIALIZED --initialize()--> READY --run_game()--> RUNNING
    RUNNING --target reached or stop()--> COMPLETE

run_game() plays exactly one game and returns synchronously. Pacing between
steps (timers, animation) is the caller's concern. Every game's score,
history and scheduler updates are applied before run_game() returns or any
observer is notified, so a snapshot never sees a half-applied game.

Notifications per game, in order:
1. on_game_complete(result)
2. on_progress_update(snapshot), every progress_interval games and on the last game
3. on_simulation_complete(final_snapshot), exactly once when the run completes
"""

from __future__ import annotations

import logging
import random
from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Iterable, Optional, Union

from pydantic import ValidationError

from reciprocity.engine.game import GameEngine, GameResult
from reciprocity.engine.pool import AgentPool
from reciprocity.engine.scheduler import Pairing, PairingScheduler
from reciprocity.engine.statistics import StatisticsAggregator, StatisticsSnapshot
from reciprocity.errors import InvalidConfiguration, SimulationStateError
from reciprocity.models.agent import AgentView
from reciprocity.models.config import SimulationConfig
from reciprocity.strategies.builtin import build_default_registry
from reciprocity.strategies.registry import StrategyRegistry

logger = logging.getLogger(__name__)


class SimulationPhase(Enum):
    """Lifecycle phase of a controller."""

    UNINITIALIZED = "uninitialized"
    READY = "ready"
    RUNNING = "running"
    COMPLETE = "complete"


class SimulationObserver:
    """Receives notifications from a SimulationController.

    All hooks are no-ops by default; override the ones you need.
    """

    def on_game_complete(self, result: GameResult) -> None:
        pass

    def on_progress_update(self, snapshot: StatisticsSnapshot) -> None:
        pass

    def on_simulation_complete(self, snapshot: StatisticsSnapshot) -> None:
        pass


@dataclass
class CallbackObserver(SimulationObserver):
    """Observer that forwards notifications to plain callables."""

    game_complete: Optional[Callable[[GameResult], Any]] = None
    progress_update: Optional[Callable[[StatisticsSnapshot], Any]] = None
    simulation_complete: Optional[Callable[[StatisticsSnapshot], Any]] = None

    def on_game_complete(self, result: GameResult) -> None:
        if self.game_complete is not None:
            self.game_complete(result)

    def on_progress_update(self, snapshot: StatisticsSnapshot) -> None:
        if self.progress_update is not None:
            self.progress_update(snapshot)

    def on_simulation_complete(self, snapshot: StatisticsSnapshot) -> None:
        if self.simulation_complete is not None:
            self.simulation_complete(snapshot)


class SimulationController:
    """Runs one population tournament, one game per step.

    Args:
        config: SimulationConfig, or a mapping validated into one at initialize()
        registry: Strategy registry to resolve ids against. When omitted a
            fresh built-in registry is created per run, with the Random
            strategy drawing from the run's seeded random source.
        observers: Observers to notify; more can be added later
    """

    def __init__(
        self,
        config: Union[SimulationConfig, Mapping[str, Any]],
        registry: Optional[StrategyRegistry] = None,
        observers: Iterable[SimulationObserver] = (),
    ) -> None:
        self._raw_config = config
        self._registry_override = registry
        self._observers: list[SimulationObserver] = list(observers)

        self._phase = SimulationPhase.UNINITIALIZED
        self._config: Optional[SimulationConfig] = None
        self._registry: Optional[StrategyRegistry] = None
        self._pool: Optional[AgentPool] = None
        self._scheduler: Optional[PairingScheduler] = None
        self._engine: Optional[GameEngine] = None
        self._aggregator: Optional[StatisticsAggregator] = None
        self._games_played = 0
        self._last_result: Optional[GameResult] = None
        self._stopped_early = False

    # -------------------------------------------------------------------------
    # Observers
    # -------------------------------------------------------------------------

    def add_observer(self, observer: SimulationObserver) -> None:
        self._observers.append(observer)

    def remove_observer(self, observer: SimulationObserver) -> None:
        self._observers.remove(observer)

    # -------------------------------------------------------------------------
    # Lifecycle
    # -------------------------------------------------------------------------

    def initialize(self) -> None:
        """Build the agent pool and pairing schedule from the configuration.

        Calling initialize() again discards the current run and starts a
        fresh one from the same configuration; with a fixed seed the new run
        replays the old one exactly.

        Raises:
            InvalidConfiguration: If the configuration fails validation
            UnknownStrategy: If a configured strategy id is not registered
        """
        config = self._validate_config()
        rng = random.Random(config.seed)
        registry = self._registry_override if self._registry_override is not None else build_default_registry(rng)

        strategies = [registry.get(strategy_id) for strategy_id in config.strategies]
        pool = AgentPool.build(
            config.population_size,
            config.strategy_a,
            config.strategy_b,
            config.proportion,
        )
        scheduler = PairingScheduler.build(
            config.population_size,
            config.games_per_pairing,
            rng=rng,
            shuffle=config.shuffle_pairings,
        )

        self._config = config
        self._registry = registry
        self._pool = pool
        self._scheduler = scheduler
        self._engine = GameEngine(pool, registry)
        self._aggregator = StatisticsAggregator({s.strategy_id: s.name for s in strategies})
        self._games_played = 0
        self._last_result = None
        self._stopped_early = False
        self._phase = SimulationPhase.READY

        logger.info(
            f"Initialized run: {config.population_size} agents "
            f"({config.strategy_a} vs {config.strategy_b}, proportion={config.proportion}), "
            f"{len(scheduler)} pairings, {config.total_games} games, "
            f"{config.games_per_pairing} per pairing, seed={config.seed}"
        )

    def run_game(self) -> Optional[GameResult]:
        """Play exactly one game.

        Returns:
            The GameResult, or None if the run is already complete

        Raises:
            SimulationStateError: If initialize() has not been called
        """
        if self._phase is SimulationPhase.UNINITIALIZED:
            raise SimulationStateError("run_game() called before initialize()")
        if self._phase is SimulationPhase.COMPLETE:
            return None

        self._phase = SimulationPhase.RUNNING
        config = self._config

        game_number = self._games_played + 1
        result = self._engine.play_one(self._scheduler.current_pairing(), game_number=game_number)
        self._scheduler.advance_game()
        self._aggregator.record(result)
        self._games_played = game_number
        self._last_result = result

        finished = self._games_played >= config.total_games
        if finished:
            self._phase = SimulationPhase.COMPLETE

        try:
            for observer in list(self._observers):
                observer.on_game_complete(result)

            if finished or self._games_played % config.progress_interval == 0:
                snapshot = self.get_statistics()
                for observer in list(self._observers):
                    observer.on_progress_update(snapshot)
        finally:
            # The terminal event fires even when an observer above raised.
            if finished:
                logger.info(f"Run complete after {self._games_played} games")
                self._notify_complete()
        return result

    def stop(self) -> None:
        """Terminate the run early.

        Moves a READY or RUNNING run to COMPLETE and sends the terminal
        notification. Does nothing if the run is already complete.

        Raises:
            SimulationStateError: If initialize() has not been called
        """
        if self._phase is SimulationPhase.UNINITIALIZED:
            raise SimulationStateError("stop() called before initialize()")
        if self._phase is SimulationPhase.COMPLETE:
            return

        self._phase = SimulationPhase.COMPLETE
        self._stopped_early = True
        logger.info(f"Run stopped after {self._games_played} of {self._config.total_games} games")
        self._notify_complete()

    def run_to_completion(self, max_games: Optional[int] = None) -> StatisticsSnapshot:
        """Step until the run completes, or until max_games more games are played.

        Initializes the run first if needed. Returns the latest snapshot.
        """
        if self._phase is SimulationPhase.UNINITIALIZED:
            self.initialize()

        played = 0
        while not self.is_complete and (max_games is None or played < max_games):
            self.run_game()
            played += 1
        return self.get_statistics()

    # -------------------------------------------------------------------------
    # Read access
    # -------------------------------------------------------------------------

    def get_statistics(self) -> StatisticsSnapshot:
        """Snapshot of the latest committed game. Callable in any phase."""
        if self._phase is SimulationPhase.UNINITIALIZED:
            return StatisticsSnapshot.empty()
        return self._aggregator.snapshot(
            self._pool,
            self._scheduler,
            games_played=self._games_played,
            total_games=self._config.total_games,
            is_complete=self.is_complete,
        )

    @property
    def phase(self) -> SimulationPhase:
        return self._phase

    @property
    def is_complete(self) -> bool:
        return self._phase is SimulationPhase.COMPLETE

    @property
    def stopped_early(self) -> bool:
        return self._stopped_early

    @property
    def games_played(self) -> int:
        return self._games_played

    @property
    def total_games(self) -> int:
        return self._config.total_games if self._config is not None else 0

    @property
    def config(self) -> Optional[SimulationConfig]:
        """Validated configuration (None before initialize())."""
        return self._config

    @property
    def last_result(self) -> Optional[GameResult]:
        return self._last_result

    @property
    def population_size(self) -> int:
        return len(self._pool) if self._pool is not None else 0

    def agent(self, agent_id: int) -> AgentView:
        """Read-only view of one agent."""
        self._require_initialized()
        return self._pool.get(agent_id)

    def schedule(self) -> list[Pairing]:
        """Copies of every pairing, in schedule order."""
        self._require_initialized()
        return self._scheduler.pairings()

    def strategy_name(self, strategy_id: str) -> str:
        self._require_initialized()
        return self._registry.get(strategy_id).name

    # -------------------------------------------------------------------------
    # Internals
    # -------------------------------------------------------------------------

    def _validate_config(self) -> SimulationConfig:
        if isinstance(self._raw_config, SimulationConfig):
            return self._raw_config
        if not isinstance(self._raw_config, Mapping):
            raise InvalidConfiguration(
                f"config must be a SimulationConfig or mapping, got {type(self._raw_config).__name__}"
            )
        try:
            return SimulationConfig.model_validate(dict(self._raw_config))
        except ValidationError as e:
            raise InvalidConfiguration(f"Invalid simulation configuration: {e}") from e
        except ValueError as e:
            # Raised by the environment-backed field defaults.
            raise InvalidConfiguration(str(e)) from e

    def _require_initialized(self) -> None:
        if self._phase is SimulationPhase.UNINITIALIZED:
            raise SimulationStateError("Simulation has not been initialized")

    def _notify_complete(self) -> None:
        snapshot = self.get_statistics()
        for observer in list(self._observers):
            observer.on_simulation_complete(snapshot)
