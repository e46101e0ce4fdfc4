"""Built-in strategies for Reciprocity.

Each strategy takes the history against one opponent (oldest first, empty on
the first game) and returns a Move. None of them keep state outside their
argument; Random draws from an injected random.Random so seeded runs replay
exactly.

Strategies:
1. Always Cooperate - constant cooperation
2. Always Defect - constant defection
3. Tit for Tat - cooperate first, then mirror opponent's last move
4. Random - 50/50 coin flip
5. Grudger - cooperate until betrayed once, then defect forever
6. Detective - probing opener, then exploit or reciprocate
7. Pavlov - win-stay, lose-shift
"""

from __future__ import annotations

import random
from typing import Optional

from reciprocity.models.moves import History, Move
from reciprocity.models.payoffs import resolve
from reciprocity.parameters import (
    DETECTIVE_OPENER,
    RANDOM_COOPERATION_PROBABILITY,
    REWARD,
)
from reciprocity.strategies.registry import DecisionFunction, StrategyRegistry

_DETECTIVE_OPENER = tuple(Move(m) for m in DETECTIVE_OPENER)


def always_cooperate(history: History) -> Move:
    """Always Cooperate: cooperate regardless of the opponent."""
    return Move.COOPERATE


def always_defect(history: History) -> Move:
    """Always Defect: defect regardless of the opponent."""
    return Move.DEFECT


def tit_for_tat(history: History) -> Move:
    """Tit for Tat: cooperate first, then do what the opponent did last time."""
    if not history:
        return Move.COOPERATE
    return history[-1].opponent_move


def grudger(history: History) -> Move:
    """Grudger: cooperate until the opponent defects once, then defect forever."""
    if any(entry.opponent_move is Move.DEFECT for entry in history):
        return Move.DEFECT
    return Move.COOPERATE


def detective(history: History) -> Move:
    """Detective: play the fixed opener, then decide how to treat the opponent.

    If the opponent never defected during the opener it is treated as
    exploitable and Detective defects from then on. Otherwise Detective plays
    Tit for Tat.
    """
    turn = len(history)
    if turn < len(_DETECTIVE_OPENER):
        return _DETECTIVE_OPENER[turn]

    opener = history[: len(_DETECTIVE_OPENER)]
    if any(entry.opponent_move is Move.DEFECT for entry in opener):
        return tit_for_tat(history)
    return Move.DEFECT


def pavlov(history: History) -> Move:
    """Pavlov: win-stay, lose-shift.

    Cooperate first. Afterwards repeat the previous own move if it earned at
    least the mutual-cooperation reward (CC or DC), otherwise switch (CD or DD).
    """
    if not history:
        return Move.COOPERATE
    last = history[-1]
    payoff, _ = resolve(last.own_move, last.opponent_move)
    if payoff >= REWARD:
        return last.own_move
    return last.own_move.flipped()


def make_random_strategy(
    rng: random.Random,
    cooperation_probability: float = RANDOM_COOPERATION_PROBABILITY,
) -> DecisionFunction:
    """Build a Random decision function bound to rng."""
    if not 0.0 <= cooperation_probability <= 1.0:
        raise ValueError(f"cooperation_probability must be in [0, 1], got {cooperation_probability}")

    def random_move(history: History) -> Move:
        return Move.COOPERATE if rng.random() < cooperation_probability else Move.DEFECT

    return random_move


def register_builtin_strategies(registry: StrategyRegistry, rng: random.Random) -> StrategyRegistry:
    """Register every built-in strategy on registry."""
    registry.register(
        "always-cooperate",
        "Always Cooperate",
        "Always cooperates regardless of what the opponent does.",
        always_cooperate,
    )
    registry.register(
        "always-defect",
        "Always Defect",
        "Always defects regardless of what the opponent does.",
        always_defect,
    )
    registry.register(
        "tit-for-tat",
        "Tit for Tat",
        "Starts by cooperating, then mimics the opponent's previous move.",
        tit_for_tat,
    )
    registry.register(
        "random",
        "Random",
        "Randomly chooses to cooperate or defect.",
        make_random_strategy(rng),
    )
    registry.register(
        "grudger",
        "Grudger",
        "Cooperates until the opponent defects once, then defects forever.",
        grudger,
    )
    registry.register(
        "detective",
        "Detective",
        "Opens with cooperate, defect, cooperate, cooperate. If the opponent never "
        "retaliated it defects from then on, otherwise it plays Tit for Tat.",
        detective,
    )
    registry.register(
        "pavlov",
        "Pavlov",
        "Repeats its last move after a good outcome and switches after a bad one.",
        pavlov,
    )
    return registry


def build_default_registry(rng: Optional[random.Random] = None) -> StrategyRegistry:
    """Create a fresh registry holding every built-in strategy.

    Args:
        rng: Random source for the Random strategy. An unseeded
            random.Random is used when omitted.
    """
    return register_builtin_strategies(StrategyRegistry(), rng if rng is not None else random.Random())
