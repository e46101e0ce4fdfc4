"""Payoff table for the iterated Prisoner's Dilemma.

The table is fixed for every run. Outcomes are indexed by (row_move, col_move):
- cc: Both cooperate (R, R)
- cd: Row cooperates, col defects (S, T)
- dc: Row defects, col cooperates (T, S)
- dd: Both defect (P, P)
"""

from dataclasses import dataclass

from reciprocity.models.moves import Move
from reciprocity.parameters import MAX_CELL_TOTAL, PUNISHMENT, REWARD, SUCKER, TEMPTATION


@dataclass(frozen=True)
class OutcomePayoffs:
    """Payoffs for a single outcome cell."""

    payoff_a: int
    payoff_b: int

    @property
    def total(self) -> int:
        return self.payoff_a + self.payoff_b


@dataclass(frozen=True)
class PayoffTable:
    """Complete 2x2 payoff table.

    Validated on construction: the table must be symmetric under swapping
    roles, no cell may exceed MAX_CELL_TOTAL, and the values must keep the
    Prisoner's Dilemma ordering T > R > P > S.
    """

    cc: OutcomePayoffs
    cd: OutcomePayoffs
    dc: OutcomePayoffs
    dd: OutcomePayoffs

    def __post_init__(self) -> None:
        """Validate table constraints."""
        if self.cc.payoff_a != self.cc.payoff_b or self.dd.payoff_a != self.dd.payoff_b:
            raise ValueError("Mutual outcomes must pay both players equally")
        if (self.cd.payoff_a, self.cd.payoff_b) != (self.dc.payoff_b, self.dc.payoff_a):
            raise ValueError("CD and DC outcomes must mirror each other")
        for cell in (self.cc, self.cd, self.dc, self.dd):
            if cell.total > MAX_CELL_TOTAL:
                raise ValueError(f"Cell total {cell.total} exceeds {MAX_CELL_TOTAL}")
        t, r, p, s = self.dc.payoff_a, self.cc.payoff_a, self.dd.payoff_a, self.cd.payoff_a
        if not t > r > p > s:
            raise ValueError(f"Payoffs must satisfy T > R > P > S, got T={t} R={r} P={p} S={s}")

    def get_outcome(self, move_a: Move, move_b: Move) -> OutcomePayoffs:
        """Get the outcome cell for a pair of moves."""
        if move_a is Move.COOPERATE:
            return self.cc if move_b is Move.COOPERATE else self.cd
        return self.dc if move_b is Move.COOPERATE else self.dd

    @property
    def mutual_cooperation(self) -> int:
        """Per-player score for mutual cooperation (baseline reference)."""
        return self.cc.payoff_a

    @property
    def mutual_defection(self) -> int:
        """Per-player score for mutual defection (baseline reference)."""
        return self.dd.payoff_a


PAYOFF_TABLE = PayoffTable(
    cc=OutcomePayoffs(REWARD, REWARD),
    cd=OutcomePayoffs(SUCKER, TEMPTATION),
    dc=OutcomePayoffs(TEMPTATION, SUCKER),
    dd=OutcomePayoffs(PUNISHMENT, PUNISHMENT),
)


def resolve(move_a: Move, move_b: Move, table: PayoffTable = PAYOFF_TABLE) -> tuple[int, int]:
    """Resolve one game into (score_a, score_b)."""
    outcome = table.get_outcome(move_a, move_b)
    return outcome.payoff_a, outcome.payoff_b
