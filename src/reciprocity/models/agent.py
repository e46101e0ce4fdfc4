"""Agent model for Reciprocity.

An Agent is one participant in the tournament, bound to a single strategy for
its lifetime. Its history is kept per opponent: strategies such as Grudger or
Tit for Tat react to what *this* opponent did, never to global behavior.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from reciprocity.models.moves import HistoryEntry, Move


@dataclass
class Agent:
    """A tournament participant.

    Attributes:
        agent_id: Unique id, equal to the agent's index in its pool
        strategy_id: Registry key of the strategy this agent plays
        score: Cumulative payoff received
        games_played: Number of games this agent has taken part in
        histories: Opponent id -> ordered, append-only history against them
    """

    agent_id: int
    strategy_id: str
    score: int = 0
    games_played: int = 0
    histories: dict[int, list[HistoryEntry]] = field(default_factory=dict)

    def history_against(self, opponent_id: int) -> tuple[HistoryEntry, ...]:
        """Return an immutable copy of the history against one opponent."""
        return tuple(self.histories.get(opponent_id, ()))

    def record(self, opponent_id: int, own_move: Move, opponent_move: Move, payoff: int) -> None:
        """Append one game to the history against opponent_id and add its payoff."""
        self.histories.setdefault(opponent_id, []).append(HistoryEntry(own_move, opponent_move))
        self.score += payoff
        self.games_played += 1

    @property
    def opponents_met(self) -> int:
        return len(self.histories)


@dataclass(frozen=True)
class AgentView:
    """Read-only copy of an agent's public state."""

    agent_id: int
    strategy_id: str
    score: int
    games_played: int
    opponents_met: int

    @classmethod
    def of(cls, agent: Agent) -> AgentView:
        return cls(
            agent_id=agent.agent_id,
            strategy_id=agent.strategy_id,
            score=agent.score,
            games_played=agent.games_played,
            opponents_met=agent.opponents_met,
        )
