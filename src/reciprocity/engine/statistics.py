"""Statistics aggregation for Reciprocity.

Snapshots are rebuilt by a single pass over the agent pool each time they are
requested (O(population size)). Every snapshot is materialized from fresh
values and never aliases engine state, so it stays valid after further games.

Score histograms bucket by exact integer score. Binning for display belongs to
the presentation layer.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Sequence

from reciprocity.engine.game import GameResult
from reciprocity.engine.pool import AgentPool
from reciprocity.engine.scheduler import PairingScheduler
from reciprocity.models.moves import Move


@dataclass(frozen=True)
class StrategyStats:
    """Aggregate scores for all agents playing one strategy.

    A strategy with no agents reports zeros rather than failing.
    """

    strategy_id: str
    name: str
    count: int = 0
    total_score: int = 0
    average_score: float = 0.0
    min_score: int = 0
    max_score: int = 0

    def to_dict(self) -> dict:
        return {
            "strategy_id": self.strategy_id,
            "name": self.name,
            "count": self.count,
            "total_score": self.total_score,
            "average_score": round(self.average_score, 3),
            "min_score": self.min_score,
            "max_score": self.max_score,
        }


@dataclass(frozen=True)
class PairingProgress:
    """Progress through the active pairing, for presentation layers."""

    index: int
    agent1_id: int
    agent2_id: int
    games_played: int
    total_games: int

    def to_dict(self) -> dict:
        return {
            "index": self.index,
            "agent1_id": self.agent1_id,
            "agent2_id": self.agent2_id,
            "games_played": self.games_played,
            "total_games": self.total_games,
        }


@dataclass(frozen=True)
class StatisticsSnapshot:
    """Point-in-time readout of a run.

    Attributes:
        games_played: Games committed so far
        total_games: Target game count for the run
        progress: games_played / total_games, in [0, 1]
        is_complete: Whether the run has finished (target reached or stopped)
        strategy_stats: Strategy id -> aggregate scores, in configuration order
        score_distributions: Strategy id -> {exact score: agent count}
        current_pairing: Active pairing progress (None before initialize)
        total_payoff_awarded: Sum of both payoffs over every game played
        cooperation_rate: Share of all moves that were cooperation
        passes_completed: Full passes over the pairing schedule
    """

    games_played: int
    total_games: int
    progress: float
    is_complete: bool
    strategy_stats: dict[str, StrategyStats] = field(default_factory=dict)
    score_distributions: dict[str, dict[int, int]] = field(default_factory=dict)
    current_pairing: Optional[PairingProgress] = None
    total_payoff_awarded: int = 0
    cooperation_rate: float = 0.0
    passes_completed: int = 0

    @classmethod
    def empty(cls, total_games: int = 0) -> StatisticsSnapshot:
        """Snapshot of a run that has not been initialized."""
        return cls(games_played=0, total_games=total_games, progress=0.0, is_complete=False)

    @property
    def progress_percent(self) -> float:
        return self.progress * 100.0

    @property
    def population_size(self) -> int:
        return sum(stats.count for stats in self.strategy_stats.values())

    @property
    def leader(self) -> Optional[str]:
        """Strategy id with the highest average score.

        None before any game has been played or when the top averages tie.
        """
        if self.games_played == 0 or not self.strategy_stats:
            return None
        ranked = sorted(self.strategy_stats.values(), key=lambda s: s.average_score, reverse=True)
        if len(ranked) > 1 and ranked[0].average_score == ranked[1].average_score:
            return None
        return ranked[0].strategy_id

    def to_dict(self) -> dict:
        """Convert to dictionary for JSON serialization."""
        return {
            "games_played": self.games_played,
            "total_games": self.total_games,
            "progress": round(self.progress, 4),
            "is_complete": self.is_complete,
            "strategy_stats": {sid: stats.to_dict() for sid, stats in self.strategy_stats.items()},
            "score_distributions": {
                sid: {str(score): count for score, count in dist.items()}
                for sid, dist in self.score_distributions.items()
            },
            "current_pairing": self.current_pairing.to_dict() if self.current_pairing else None,
            "total_payoff_awarded": self.total_payoff_awarded,
            "cooperation_rate": round(self.cooperation_rate, 4),
            "passes_completed": self.passes_completed,
            "leader": self.leader,
        }


class StatisticsAggregator:
    """Builds StatisticsSnapshots and tallies game results.

    Args:
        strategy_names: Strategy id -> display name, in the order the
            strategies should appear in snapshots
    """

    def __init__(self, strategy_names: dict[str, str]) -> None:
        self._strategy_names = dict(strategy_names)
        self._total_payoff = 0
        self._cooperations = 0
        self._moves = 0

    def record(self, result: GameResult) -> None:
        """Fold one game result into the running tallies."""
        self._total_payoff += result.total_payoff
        self._cooperations += sum(1 for m in (result.move1, result.move2) if m is Move.COOPERATE)
        self._moves += 2

    def reset(self) -> None:
        self._total_payoff = 0
        self._cooperations = 0
        self._moves = 0

    @property
    def total_payoff_awarded(self) -> int:
        return self._total_payoff

    @property
    def cooperation_rate(self) -> float:
        return self._cooperations / self._moves if self._moves else 0.0

    def snapshot(
        self,
        pool: AgentPool,
        scheduler: Optional[PairingScheduler],
        games_played: int,
        total_games: int,
        is_complete: bool = False,
    ) -> StatisticsSnapshot:
        """Materialize a snapshot from the current pool and scheduler state."""
        scores_by_strategy: dict[str, list[int]] = {sid: [] for sid in self._strategy_names}
        for strategy_id, score in pool.scores():
            scores_by_strategy.setdefault(strategy_id, []).append(score)

        strategy_stats = {
            sid: _summarize(sid, self._strategy_names.get(sid, sid), scores)
            for sid, scores in scores_by_strategy.items()
        }
        score_distributions = {sid: _histogram(scores) for sid, scores in scores_by_strategy.items()}

        current_pairing = None
        passes_completed = 0
        if scheduler is not None:
            pairing = scheduler.current_pairing()
            current_pairing = PairingProgress(
                index=pairing.index,
                agent1_id=pairing.agent1_index,
                agent2_id=pairing.agent2_index,
                games_played=pairing.games_played,
                total_games=pairing.games_per_pairing,
            )
            passes_completed = scheduler.passes_completed

        return StatisticsSnapshot(
            games_played=games_played,
            total_games=total_games,
            progress=games_played / total_games if total_games else 0.0,
            is_complete=is_complete,
            strategy_stats=strategy_stats,
            score_distributions=score_distributions,
            current_pairing=current_pairing,
            total_payoff_awarded=self._total_payoff,
            cooperation_rate=self.cooperation_rate,
            passes_completed=passes_completed,
        )


def _summarize(strategy_id: str, name: str, scores: Sequence[int]) -> StrategyStats:
    if not scores:
        return StrategyStats(strategy_id=strategy_id, name=name)
    total = sum(scores)
    return StrategyStats(
        strategy_id=strategy_id,
        name=name,
        count=len(scores),
        total_score=total,
        average_score=total / len(scores),
        min_score=min(scores),
        max_score=max(scores),
    )


def _histogram(scores: Sequence[int]) -> dict[int, int]:
    histogram: dict[int, int] = {}
    for score in sorted(scores):
        histogram[score] = histogram.get(score, 0) + 1
    return histogram
