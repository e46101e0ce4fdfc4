"""Reciprocity tournament models.

This module exports the core data structures for the tournament.
"""

from .agent import Agent, AgentView
from .config import SimulationConfig
from .moves import History, HistoryEntry, Move
from .payoffs import PAYOFF_TABLE, OutcomePayoffs, PayoffTable, resolve

__all__ = [
    # Moves
    "Move",
    "HistoryEntry",
    "History",
    # Payoffs
    "OutcomePayoffs",
    "PayoffTable",
    "PAYOFF_TABLE",
    "resolve",
    # Agents
    "Agent",
    "AgentView",
    # Configuration
    "SimulationConfig",
]
