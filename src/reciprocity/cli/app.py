"""Command-line runner for Reciprocity.

Runs one population tournament to completion and prints a summary table, or
the final snapshot as JSON.

Usage:
    reciprocity tit-for-tat always-defect --population 20 --games 500 --seed 42
    reciprocity grudger detective --proportion 0.3 --json
    reciprocity --list-strategies
"""

from __future__ import annotations

import argparse
import json
import logging
import sys
import time
from typing import Optional, Sequence

from reciprocity.config import (
    get_default_seed,
    get_games_per_pairing,
    get_log_level,
    get_population_size,
    get_total_games,
)
from reciprocity.engine.simulation import CallbackObserver, SimulationController
from reciprocity.engine.statistics import StatisticsSnapshot
from reciprocity.errors import ReciprocityError
from reciprocity.models.payoffs import PAYOFF_TABLE
from reciprocity.parameters import DEFAULT_PROPORTION
from reciprocity.strategies.builtin import build_default_registry
from reciprocity.strategies.registry import StrategyRegistry

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="reciprocity",
        description="Run an iterated Prisoner's Dilemma tournament between two strategy populations",
    )
    parser.add_argument("strategy_a", nargs="?", help="Strategy id for the first population")
    parser.add_argument("strategy_b", nargs="?", help="Strategy id for the second population")
    parser.add_argument("--proportion", type=float, default=DEFAULT_PROPORTION,
                        help=f"Share of agents playing strategy_a (default: {DEFAULT_PROPORTION})")
    parser.add_argument("--population", type=int, default=None,
                        help="Population size (default: RECIPROCITY_POPULATION_SIZE or built-in)")
    parser.add_argument("--games", type=int, default=None,
                        help="Total games to play (default: RECIPROCITY_TOTAL_GAMES or built-in)")
    parser.add_argument("--games-per-pairing", type=int, default=None,
                        help="Games per matchup before moving on (default: RECIPROCITY_GAMES_PER_PAIRING or built-in)")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for reproducibility (default: RECIPROCITY_SEED)")
    parser.add_argument("--no-shuffle", action="store_true",
                        help="Play pairings in index order instead of a seeded shuffle")
    parser.add_argument("--progress-every", type=int, default=0,
                        help="Log a progress line every N games (0 disables)")
    parser.add_argument("--json", action="store_true", help="Print the final snapshot as JSON")
    parser.add_argument("--list-strategies", action="store_true", help="List available strategies and exit")
    parser.add_argument("--log-level", default=None,
                        help="Logging level (default: RECIPROCITY_LOG_LEVEL or WARNING)")
    return parser


def print_strategies(registry: StrategyRegistry) -> None:
    print(f"{'Id':<20} {'Name':<20} Description")
    print("-" * 80)
    for strategy in registry.list_strategies():
        print(f"{strategy.strategy_id:<20} {strategy.name:<20} {strategy.description}")


def print_summary(snapshot: StatisticsSnapshot, duration_seconds: float, stopped_early: bool = False) -> None:
    """Print a human-readable summary of a finished run."""
    print("\n" + "=" * 80)
    print("TOURNAMENT RESULTS")
    print("=" * 80)
    print(f"Games played: {snapshot.games_played} / {snapshot.total_games} ({snapshot.progress_percent:.1f}%)")
    print(f"Schedule passes completed: {snapshot.passes_completed}")
    print(f"Duration: {duration_seconds:.2f} seconds")
    if stopped_early:
        print("Run was stopped before reaching its target")

    print("\n" + "-" * 80)
    print(f"{'Strategy':<20} {'Agents':>8} {'Total':>10} {'Average':>10} {'Min':>8} {'Max':>8}")
    print("-" * 80)
    ranked = sorted(snapshot.strategy_stats.values(), key=lambda s: s.average_score, reverse=True)
    for stats in ranked:
        print(
            f"{stats.name:<20} "
            f"{stats.count:>8} "
            f"{stats.total_score:>10} "
            f"{stats.average_score:>10.2f} "
            f"{stats.min_score:>8} "
            f"{stats.max_score:>8}"
        )

    print("\n" + "-" * 80)
    print("AGGREGATE STATISTICS")
    print("-" * 80)
    print(f"  total_payoff_awarded: {snapshot.total_payoff_awarded}")
    print(f"  cooperation_rate: {snapshot.cooperation_rate * 100:.1f}%")
    if snapshot.games_played:
        per_game = snapshot.total_payoff_awarded / snapshot.games_played
        print(f"  payoff_per_game: {per_game:.2f} "
              f"(all-cooperate {2 * PAYOFF_TABLE.mutual_cooperation}, "
              f"all-defect {2 * PAYOFF_TABLE.mutual_defection})")

    print("-" * 80)
    leader = snapshot.leader
    if leader is not None:
        winner = snapshot.strategy_stats[leader]
        print(f"WINNER: {winner.name} ({winner.average_score:.2f} points average)")
    else:
        print("NO WINNER (averages tied or no games played)")
    print("=" * 80)


def main(argv: Optional[Sequence[str]] = None) -> int:
    """Run the CLI. Returns a process exit code."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        log_level = get_log_level() if args.log_level is None else logging.getLevelName(args.log_level.upper())
        if not isinstance(log_level, int):
            raise ValueError(f"Unknown log level: {args.log_level}")
    except ValueError as e:
        parser.error(str(e))
    logging.basicConfig(
        level=log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )

    if args.list_strategies:
        print_strategies(build_default_registry())
        return 0

    if not args.strategy_a or not args.strategy_b:
        parser.error("two strategy ids are required (see --list-strategies)")

    try:
        config = {
            "strategies": [args.strategy_a, args.strategy_b],
            "proportion": args.proportion,
            "population_size": args.population if args.population is not None else get_population_size(),
            "total_games": args.games if args.games is not None else get_total_games(),
            "games_per_pairing": (
                args.games_per_pairing if args.games_per_pairing is not None else get_games_per_pairing()
            ),
            "seed": args.seed if args.seed is not None else get_default_seed(),
            "shuffle_pairings": not args.no_shuffle,
        }
    except ValueError as e:
        parser.error(str(e))
    if args.progress_every > 0:
        config["progress_interval"] = args.progress_every

    controller = SimulationController(config)
    if args.progress_every > 0:
        controller.add_observer(CallbackObserver(
            progress_update=lambda s: logger.info(
                f"Progress: {s.games_played}/{s.total_games} games ({s.progress_percent:.0f}%)"
            ),
        ))

    start = time.time()
    try:
        controller.initialize()
        while not controller.is_complete:
            controller.run_game()
    except KeyboardInterrupt:
        if controller.config is None:
            return 130
        controller.stop()
    except ReciprocityError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 2
    duration = time.time() - start

    snapshot = controller.get_statistics()
    if args.json:
        print(json.dumps(snapshot.to_dict(), indent=2))
    else:
        print_summary(snapshot, duration, stopped_early=controller.stopped_early)
    return 0


if __name__ == "__main__":
    sys.exit(main())
