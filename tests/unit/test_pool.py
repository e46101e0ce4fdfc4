"""Unit tests for reciprocity.engine.pool.

Tests cover:
- AgentPool.build: strategy split, id assignment, validation
- round_half_up rounding of the split
- Read access returns copies, not live agents
- record_game: scores, per-opponent histories, pair validation
"""

import pytest

from reciprocity.engine.pool import AgentPool, round_half_up
from reciprocity.errors import InvalidConfiguration, InvalidPairing
from reciprocity.models.moves import HistoryEntry, Move

C = Move.COOPERATE
D = Move.DEFECT


class TestBuild:
    """Tests for AgentPool.build."""

    @pytest.mark.parametrize(
        "size,proportion",
        [(10, 0.5), (10, 0.0), (10, 1.0), (7, 0.3), (2, 0.5), (25, 0.25), (100, 0.37)],
    )
    def test_split_matches_rounded_proportion(self, size, proportion):
        pool = AgentPool.build(size, "a", "b", proportion)
        counts = pool.count_by_strategy()
        expected_a = round_half_up(size * proportion)
        assert counts.get("a", 0) == expected_a
        assert counts.get("a", 0) + counts.get("b", 0) == size

    def test_first_strategy_takes_lowest_ids(self):
        pool = AgentPool.build(5, "a", "b", 0.4)
        assert [pool.strategy_of(i) for i in pool.ids()] == ["a", "a", "b", "b", "b"]

    def test_sequential_ids_and_zero_scores(self):
        pool = AgentPool.build(4, "a", "b", 0.5)
        for i in pool.ids():
            view = pool.get(i)
            assert view.agent_id == i
            assert view.score == 0
            assert view.games_played == 0
            assert view.opponents_met == 0

    @pytest.mark.parametrize("size", [0, 1, -3])
    def test_population_too_small(self, size):
        with pytest.raises(InvalidConfiguration, match="at least 2"):
            AgentPool.build(size, "a", "b", 0.5)

    @pytest.mark.parametrize("proportion", [-0.1, 1.01, 2.0])
    def test_proportion_out_of_range(self, proportion):
        with pytest.raises(InvalidConfiguration, match="proportion"):
            AgentPool.build(10, "a", "b", proportion)

    def test_non_integer_population_rejected(self):
        with pytest.raises(InvalidConfiguration):
            AgentPool.build(10.0, "a", "b", 0.5)

    def test_invalid_configuration_is_value_error(self):
        with pytest.raises(ValueError):
            AgentPool.build(1, "a", "b", 0.5)


class TestRoundHalfUp:
    """Tests for round_half_up."""

    @pytest.mark.parametrize("value,expected", [(2.5, 3), (3.5, 4), (2.4, 2), (0.0, 0), (7.0, 7)])
    def test_rounding(self, value, expected):
        assert round_half_up(value) == expected


class TestRecordGame:
    """Tests for AgentPool.record_game."""

    def test_scores_and_histories(self):
        pool = AgentPool.build(3, "a", "b", 0.5)
        pool.record_game(0, 2, C, D, 0, 5)

        assert pool.score_of(0) == 0
        assert pool.score_of(2) == 5
        assert pool.history_between(0, 2) == (HistoryEntry(C, D),)
        assert pool.history_between(2, 0) == (HistoryEntry(D, C),)

    def test_histories_are_scoped_per_opponent(self):
        pool = AgentPool.build(3, "a", "b", 0.5)
        pool.record_game(0, 1, C, D, 0, 5)
        pool.record_game(0, 2, C, C, 3, 3)

        assert pool.history_between(0, 1) == (HistoryEntry(C, D),)
        assert pool.history_between(0, 2) == (HistoryEntry(C, C),)
        assert pool.history_between(1, 2) == ()
        assert pool.get(0).opponents_met == 2
        assert pool.get(0).games_played == 2

    def test_history_appends_in_order(self):
        pool = AgentPool.build(2, "a", "b", 0.5)
        pool.record_game(0, 1, C, C, 3, 3)
        pool.record_game(0, 1, D, C, 5, 0)
        assert pool.history_between(0, 1) == (HistoryEntry(C, C), HistoryEntry(D, C))
        assert pool.total_score() == 11

    def test_unknown_agent_rejected_without_mutation(self):
        pool = AgentPool.build(2, "a", "b", 0.5)
        with pytest.raises(InvalidPairing):
            pool.record_game(0, 5, C, C, 3, 3)
        assert pool.score_of(0) == 0
        assert pool.history_between(0, 5) == ()

    def test_self_pairing_rejected(self):
        pool = AgentPool.build(2, "a", "b", 0.5)
        with pytest.raises(InvalidPairing, match="itself"):
            pool.record_game(1, 1, C, C, 3, 3)


class TestReadAccess:
    """Tests that read access never exposes live agents."""

    def test_view_is_a_snapshot(self):
        pool = AgentPool.build(2, "a", "b", 0.5)
        view = pool.get(0)
        pool.record_game(0, 1, D, C, 5, 0)
        assert view.score == 0
        assert pool.get(0).score == 5

    def test_view_is_frozen(self):
        pool = AgentPool.build(2, "a", "b", 0.5)
        with pytest.raises(AttributeError):
            pool.get(0).score = 100

    def test_get_unknown_agent(self):
        pool = AgentPool.build(2, "a", "b", 0.5)
        with pytest.raises(KeyError):
            pool.get(2)

    def test_membership(self):
        pool = AgentPool.build(3, "a", "b", 0.5)
        assert 0 in pool
        assert 2 in pool
        assert 3 not in pool
        assert -1 not in pool
        assert True not in pool
