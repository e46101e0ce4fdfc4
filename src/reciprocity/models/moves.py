"""Move and history primitives for Reciprocity.

Strategies see the game only through a sequence of HistoryEntry records
scoped to a single opponent, oldest first.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Sequence


class Move(Enum):
    """A single Prisoner's Dilemma choice."""

    COOPERATE = "cooperate"
    DEFECT = "defect"

    @property
    def short_code(self) -> str:
        """One-letter code used in outcome keys ("C" or "D")."""
        return "C" if self is Move.COOPERATE else "D"

    def flipped(self) -> Move:
        """Return the other move."""
        return Move.DEFECT if self is Move.COOPERATE else Move.COOPERATE


@dataclass(frozen=True)
class HistoryEntry:
    """One game from one agent's point of view.

    Attributes:
        own_move: Move played by the agent holding this history
        opponent_move: Move played by the opponent in the same game
    """

    own_move: Move
    opponent_move: Move

    @property
    def outcome_code(self) -> str:
        """Outcome key from this agent's side, e.g. "CD"."""
        return self.own_move.short_code + self.opponent_move.short_code


History = Sequence[HistoryEntry]
