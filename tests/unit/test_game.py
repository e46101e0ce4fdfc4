"""Unit tests for reciprocity.engine.game.

Tests cover:
- GameEngine.play_one: moves, payoffs, score and history updates
- History scoping: strategies only see their own pairing's history
- InvalidPairing on bad agent references
- GameResult helpers and serialization
"""

import pytest

from reciprocity.engine.game import GameEngine, GameResult
from reciprocity.engine.pool import AgentPool
from reciprocity.engine.scheduler import Pairing
from reciprocity.errors import InvalidPairing
from reciprocity.models.moves import HistoryEntry, Move

C = Move.COOPERATE
D = Move.DEFECT


def make_pairing(a: int, b: int, index: int = 0) -> Pairing:
    return Pairing(index=index, agent1_index=a, agent2_index=b, games_per_pairing=10)


@pytest.fixture
def tft_vs_alld(registry):
    """Two-agent pool: agent 0 plays Tit for Tat, agent 1 Always Defect."""
    pool = AgentPool.build(2, "tit-for-tat", "always-defect", 0.5)
    return pool, GameEngine(pool, registry)


class TestPlayOne:
    """Tests for GameEngine.play_one."""

    def test_first_game(self, tft_vs_alld):
        pool, engine = tft_vs_alld
        result = engine.play_one(make_pairing(0, 1), game_number=1)

        assert result == GameResult(
            agent1_id=0, agent2_id=1,
            move1=C, move2=D,
            payoff1=0, payoff2=5,
            pairing_index=0, game_number=1,
        )
        assert pool.score_of(0) == 0
        assert pool.score_of(1) == 5

    def test_histories_recorded_from_each_side(self, tft_vs_alld):
        pool, engine = tft_vs_alld
        engine.play_one(make_pairing(0, 1))
        assert pool.history_between(0, 1) == (HistoryEntry(C, D),)
        assert pool.history_between(1, 0) == (HistoryEntry(D, C),)

    def test_tit_for_tat_retaliates_after_first_game(self, tft_vs_alld):
        _, engine = tft_vs_alld
        results = [engine.play_one(make_pairing(0, 1)) for _ in range(6)]
        assert results[0].move1 is C
        assert all(r.move1 is D for r in results[1:])
        assert all((r.payoff1, r.payoff2) == (1, 1) for r in results[1:])

    def test_retaliation_is_scoped_to_the_defector(self, registry):
        """A betrayed Tit for Tat still opens with cooperation against a new opponent."""
        pool = AgentPool.build(3, "tit-for-tat", "always-defect", 0.34)
        assert [pool.strategy_of(i) for i in pool.ids()] == ["tit-for-tat", "always-defect", "always-defect"]
        engine = GameEngine(pool, registry)

        engine.play_one(make_pairing(0, 1))
        engine.play_one(make_pairing(0, 1))
        against_new = engine.play_one(make_pairing(0, 2))

        assert against_new.move1 is C
        assert pool.history_between(0, 1)[-1].own_move is D

    def test_score_equals_sum_of_payoffs(self, registry):
        pool = AgentPool.build(4, "pavlov", "grudger", 0.5)
        engine = GameEngine(pool, registry)
        received = {i: 0 for i in pool.ids()}
        for a, b in [(0, 1), (0, 2), (1, 3), (2, 3), (0, 3), (0, 1)]:
            r = engine.play_one(make_pairing(a, b))
            received[r.agent1_id] += r.payoff1
            received[r.agent2_id] += r.payoff2
        for agent_id, total in received.items():
            assert pool.score_of(agent_id) == total

    @pytest.mark.parametrize("a,b", [(0, 2), (5, 1), (-1, 0)])
    def test_unknown_agent_raises_invalid_pairing(self, tft_vs_alld, a, b):
        _, engine = tft_vs_alld
        with pytest.raises(InvalidPairing):
            engine.play_one(make_pairing(a, b))

    def test_self_pairing_raises_invalid_pairing(self, tft_vs_alld):
        _, engine = tft_vs_alld
        with pytest.raises(InvalidPairing):
            engine.play_one(make_pairing(1, 1))


class TestGameResult:
    """Tests for GameResult helpers."""

    def test_outcome_code_and_total(self):
        result = GameResult(agent1_id=3, agent2_id=4, move1=D, move2=C, payoff1=5, payoff2=0)
        assert result.outcome_code == "DC"
        assert result.total_payoff == 5

    def test_to_dict(self):
        result = GameResult(
            agent1_id=3, agent2_id=4, move1=C, move2=C, payoff1=3, payoff2=3,
            pairing_index=7, game_number=12,
        )
        assert result.to_dict() == {
            "agent1_id": 3,
            "agent2_id": 4,
            "move1": "cooperate",
            "move2": "cooperate",
            "payoff1": 3,
            "payoff2": 3,
            "pairing_index": 7,
            "game_number": 12,
        }
