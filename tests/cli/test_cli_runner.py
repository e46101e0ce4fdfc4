"""Tests for the command-line runner.

Tests cover:
- --list-strategies output
- Summary table and winner line
- --json snapshot output
- Error exits for unknown strategies, bad configuration and missing arguments
- Environment fallbacks for run settings
"""

import json

import pytest

from reciprocity.cli.app import build_parser, main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in (
        "RECIPROCITY_SEED",
        "RECIPROCITY_POPULATION_SIZE",
        "RECIPROCITY_TOTAL_GAMES",
        "RECIPROCITY_GAMES_PER_PAIRING",
        "RECIPROCITY_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)


class TestParser:
    """Tests for build_parser."""

    def test_defaults(self):
        args = build_parser().parse_args(["tit-for-tat", "always-defect"])
        assert (args.strategy_a, args.strategy_b) == ("tit-for-tat", "always-defect")
        assert args.proportion == 0.5
        assert args.population is None
        assert args.no_shuffle is False
        assert args.json is False

    def test_options(self):
        args = build_parser().parse_args([
            "grudger", "pavlov", "--population", "8", "--games", "30",
            "--games-per-pairing", "2", "--seed", "5", "--no-shuffle",
        ])
        assert (args.population, args.games, args.games_per_pairing, args.seed) == (8, 30, 2, 5)
        assert args.no_shuffle is True


class TestMain:
    """Tests for main()."""

    def test_list_strategies(self, capsys):
        assert main(["--list-strategies"]) == 0
        out = capsys.readouterr().out
        for strategy_id in ("always-cooperate", "always-defect", "tit-for-tat", "random",
                            "grudger", "detective", "pavlov"):
            assert strategy_id in out

    def test_summary(self, capsys):
        code = main(["always-defect", "always-cooperate", "--population", "4",
                     "--games", "12", "--games-per-pairing", "2", "--seed", "1"])
        assert code == 0
        out = capsys.readouterr().out
        assert "TOURNAMENT RESULTS" in out
        assert "Games played: 12 / 12 (100.0%)" in out
        assert "WINNER: Always Defect" in out

    def test_tied_run_has_no_winner(self, capsys):
        assert main(["always-cooperate", "tit-for-tat", "--population", "4", "--games", "6",
                     "--games-per-pairing", "1"]) == 0
        assert "NO WINNER" in capsys.readouterr().out

    def test_json(self, capsys):
        code = main(["tit-for-tat", "always-defect", "--population", "6", "--games", "40",
                     "--games-per-pairing", "3", "--seed", "9", "--json"])
        assert code == 0
        data = json.loads(capsys.readouterr().out)
        assert data["games_played"] == 40
        assert data["is_complete"] is True
        assert set(data["strategy_stats"]) == {"tit-for-tat", "always-defect"}
        assert sum(s["count"] for s in data["strategy_stats"].values()) == 6
        assert data["total_payoff_awarded"] == sum(
            s["total_score"] for s in data["strategy_stats"].values()
        )

    def test_json_is_reproducible_with_seed(self, capsys):
        argv = ["random", "pavlov", "--population", "5", "--games", "25", "--seed", "77", "--json"]
        main(argv)
        first = capsys.readouterr().out
        main(argv)
        assert capsys.readouterr().out == first

    def test_environment_fallbacks(self, capsys, monkeypatch):
        monkeypatch.setenv("RECIPROCITY_POPULATION_SIZE", "3")
        monkeypatch.setenv("RECIPROCITY_TOTAL_GAMES", "7")
        assert main(["grudger", "detective", "--json"]) == 0
        data = json.loads(capsys.readouterr().out)
        assert data["total_games"] == 7
        assert sum(s["count"] for s in data["strategy_stats"].values()) == 3

    def test_unknown_strategy(self, capsys):
        assert main(["tit-for-tat", "nonexistent"]) == 2
        assert "Unknown strategy" in capsys.readouterr().err

    def test_invalid_configuration(self, capsys):
        assert main(["tit-for-tat", "always-defect", "--population", "1"]) == 2
        assert "Error:" in capsys.readouterr().err

    def test_malformed_environment_default(self, monkeypatch, capsys):
        monkeypatch.setenv("RECIPROCITY_TOTAL_GAMES", "lots")
        with pytest.raises(SystemExit) as exc_info:
            main(["tit-for-tat", "always-defect"])
        assert exc_info.value.code == 2
        assert "RECIPROCITY_TOTAL_GAMES" in capsys.readouterr().err

    def test_missing_strategies(self):
        with pytest.raises(SystemExit) as exc_info:
            main(["tit-for-tat"])
        assert exc_info.value.code == 2

    def test_bad_log_level(self):
        with pytest.raises(SystemExit):
            main(["--log-level", "chatty", "--list-strategies"])
