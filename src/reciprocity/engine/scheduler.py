"""Pairing scheduler for Reciprocity.

The schedule holds every unordered pair of agent indices exactly once, in an
order fixed when the schedule is built. The scheduler walks it sequentially:
each pairing is played games_per_pairing times before moving to the next.

Wraparound:
    When the last pairing is exhausted the scheduler restarts from the first
    entry and resets the per-pairing counters. Agent histories are NOT reset,
    so strategies keep their memory of an opponent across passes. Wrapping
    is normal operation whenever total_games exceeds one full pass
    (C(n, 2) * games_per_pairing games).
"""

from __future__ import annotations

import logging
import random
from dataclasses import dataclass, replace
from itertools import combinations
from typing import Optional

from reciprocity.errors import InvalidConfiguration

logger = logging.getLogger(__name__)


@dataclass
class Pairing:
    """A scheduled matchup between two distinct agents.

    Attributes:
        index: Position in the schedule
        agent1_index: Lower agent index of the pair
        agent2_index: Higher agent index of the pair
        games_per_pairing: Games to play before the scheduler moves on
        games_played: Games played in the current pass (0..games_per_pairing)
    """

    index: int
    agent1_index: int
    agent2_index: int
    games_per_pairing: int
    games_played: int = 0

    @property
    def exhausted(self) -> bool:
        return self.games_played >= self.games_per_pairing

    @property
    def agents(self) -> tuple[int, int]:
        return self.agent1_index, self.agent2_index


def pairing_count(population_size: int) -> int:
    """Number of unordered pairs, n(n-1)/2."""
    return population_size * (population_size - 1) // 2


class PairingScheduler:
    """Generates and steps through the matchup plan for one run.

    Usage:
        scheduler = PairingScheduler.build(10, games_per_pairing=3, rng=random.Random(7))
        pairing = scheduler.current_pairing()
        ...play a game...
        scheduler.advance_game()
    """

    def __init__(self, pairings: list[Pairing], games_per_pairing: int) -> None:
        if not pairings:
            raise InvalidConfiguration("A schedule needs at least one pairing")
        self._pairings = pairings
        self._games_per_pairing = games_per_pairing
        self._position = 0
        self._passes_completed = 0
        self._games_advanced = 0

    @classmethod
    def build(
        cls,
        population_size: int,
        games_per_pairing: int,
        rng: Optional[random.Random] = None,
        shuffle: bool = True,
    ) -> PairingScheduler:
        """Build the schedule for a population.

        Args:
            population_size: Number of agents (>= 2)
            games_per_pairing: Games per matchup (>= 1)
            rng: Random source for the shuffle; required for reproducibility
            shuffle: Shuffle the pair order once; otherwise lexicographic

        Raises:
            InvalidConfiguration: If population_size < 2 or games_per_pairing < 1
        """
        if population_size < 2:
            raise InvalidConfiguration(f"population_size must be at least 2, got {population_size}")
        if games_per_pairing < 1:
            raise InvalidConfiguration(f"games_per_pairing must be at least 1, got {games_per_pairing}")

        pairs = list(combinations(range(population_size), 2))
        if shuffle:
            (rng if rng is not None else random.Random()).shuffle(pairs)

        pairings = [
            Pairing(index=i, agent1_index=a, agent2_index=b, games_per_pairing=games_per_pairing)
            for i, (a, b) in enumerate(pairs)
        ]
        logger.debug(
            f"Built schedule of {len(pairings)} pairings x {games_per_pairing} games "
            f"(shuffled={shuffle})"
        )
        return cls(pairings, games_per_pairing)

    def __len__(self) -> int:
        return len(self._pairings)

    @property
    def games_per_pairing(self) -> int:
        return self._games_per_pairing

    @property
    def position(self) -> int:
        """Schedule index of the active pairing."""
        return self._position

    @property
    def passes_completed(self) -> int:
        """How many times the schedule has wrapped back to the start."""
        return self._passes_completed

    @property
    def games_per_pass(self) -> int:
        return len(self._pairings) * self._games_per_pairing

    @property
    def games_advanced(self) -> int:
        return self._games_advanced

    def current_pairing(self) -> Pairing:
        """Copy of the active pairing, including its in-progress counter."""
        return replace(self._pairings[self._position])

    def pairings(self) -> list[Pairing]:
        """Copies of every pairing in schedule order."""
        return [replace(p) for p in self._pairings]

    def advance_game(self) -> Pairing:
        """Count one game against the active pairing.

        Moves to the next pairing once the active one is exhausted, wrapping
        to the first entry after the last. Returns a copy of the pairing the
        game was counted against.
        """
        pairing = self._pairings[self._position]
        pairing.games_played += 1
        self._games_advanced += 1
        played = replace(pairing)

        if pairing.exhausted:
            self._position += 1
            if self._position == len(self._pairings):
                self._wrap()
        return played

    def _wrap(self) -> None:
        self._position = 0
        self._passes_completed += 1
        for pairing in self._pairings:
            pairing.games_played = 0
        logger.info(f"Pairing schedule wrapped (pass {self._passes_completed} complete)")
