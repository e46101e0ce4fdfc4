"""Tournament parameters for Reciprocity.

This module is the single source of truth for tunable tournament constants.

Parameter Categories:
- Payoffs: The fixed Prisoner's Dilemma table values
- Strategy tuning: Constants consulted by built-in strategies
- Run defaults: Sizes used when a caller does not specify them

Usage:
    from reciprocity.parameters import REWARD, TEMPTATION
"""

# =============================================================================
# PAYOFF PARAMETERS
# =============================================================================

TEMPTATION = 5
"""Payoff for defecting against a cooperator (DC outcome, T).

Ordering T > R > P > S and 2R > T + S make this a Prisoner's Dilemma:
defection dominates a single game, mutual cooperation wins repeated play.
"""

REWARD = 3
"""Payoff to each player on mutual cooperation (CC outcome, R).

Also the Pavlov "win" threshold: a payoff of at least REWARD keeps the
previous move.
"""

PUNISHMENT = 1
"""Payoff to each player on mutual defection (DD outcome, P)."""

SUCKER = 0
"""Payoff for cooperating against a defector (CD outcome, S)."""

MAX_CELL_TOTAL = 10
"""Upper bound on the joint payoff of any single outcome cell."""


# =============================================================================
# STRATEGY TUNING
# =============================================================================

DETECTIVE_OPENER = ("cooperate", "defect", "cooperate", "cooperate")
"""Fixed opening sequence played by Detective against each new opponent.

After the opener Detective checks whether the opponent defected at any point
during it. If not, the opponent is exploitable and Detective defects forever;
if so, Detective falls back to Tit for Tat.
"""

RANDOM_COOPERATION_PROBABILITY = 0.5
"""Probability that the Random strategy cooperates on any given game."""


# =============================================================================
# RUN DEFAULTS
# =============================================================================

DEFAULT_POPULATION_SIZE = 20
"""Agents in a run when the caller does not choose a size."""

DEFAULT_TOTAL_GAMES = 500
"""Global stop condition when the caller does not choose one."""

DEFAULT_GAMES_PER_PAIRING = 10
"""Games per matchup before the scheduler advances to the next pairing."""

DEFAULT_PROPORTION = 0.5
"""Share of the population assigned to the first strategy."""
