"""Tests for scenario/result files (equity/io.py), config and logging setup."""

import json
import logging

import pytest
import yaml

from config.settings import Config, MonteCarloConfig, load_config, save_config
from equity.io import load_scenario, result_to_dict, save_result, save_scenario
from equity.outs import analyze_outs
from poker.errors import InvalidCardError
from tests.helpers.card_utils import make_cards_from_strings
from ui.describe import describe_outs_result
from utils.logging import setup_logging


class TestScenarioFiles:
    def test_load_yaml(self, tmp_path, scenario_dict):
        path = tmp_path / "scenario.yaml"
        path.write_text(yaml.dump(scenario_dict))
        board, players = load_scenario(path)
        assert board == make_cards_from_strings(["Td", "3d", "6h"])
        assert [p.id for p in players] == ["player1", "player2"]
        assert players[1].cards == tuple(make_cards_from_strings(["Jh", "2d"]))

    def test_load_json_with_compact_cards(self, tmp_path):
        path = tmp_path / "scenario.json"
        path.write_text(json.dumps({"board": ["Td", "3d", "6h"], "players": [{"id": "a", "cards": ["As", "Ah"]}]}))
        board, players = load_scenario(path)
        assert len(board) == 3
        assert players[0].id == "a"

    def test_round_trip(self, tmp_path, sample_board, sample_players):
        path = tmp_path / "nested" / "scenario.yaml"
        save_scenario(sample_board, sample_players, path)
        board, players = load_scenario(path)
        assert board == sample_board
        assert players == sample_players

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_scenario(tmp_path / "nope.yaml")

    def test_not_a_mapping(self, tmp_path):
        path = tmp_path / "list.yaml"
        path.write_text("- Td\n- 3d\n")
        with pytest.raises(ValueError):
            load_scenario(path)

    def test_bad_card(self, tmp_path):
        path = tmp_path / "bad.yaml"
        path.write_text(yaml.dump({"board": [{"rank": "1", "suit": "diamond"}], "players": []}))
        with pytest.raises(InvalidCardError):
            load_scenario(path)


class TestResultFiles:
    @pytest.fixture(scope="class")
    def result(self):
        board = make_cards_from_strings(["Td", "3d", "6h"])
        players = [("player1", ["Ts", "3h"]), ("player2", ["Jh", "2d"])]
        return analyze_outs(board, players)

    def test_save_result(self, tmp_path, result):
        path = save_result(result, tmp_path / "out" / "results.json", describe_outs_result(result))
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["totalCombinations"] == 990
        p2 = data["playerResults"][1]
        assert p2["runnerRunnerWinCount"] == 83
        assert p2["runnerRunnerDescription"].endswith("Every 2X♦(Flush)")
        assert p2["regularOutsDescription"] == "No regular outs available"

    def test_result_to_dict_plain_mapping(self, result):
        data = result_to_dict(result, {"player1": {"note": "leader"}})
        assert data["playerResults"][0]["note"] == "leader"
        assert "note" not in data["playerResults"][1]

    def test_result_to_dict_without_descriptions(self, result):
        assert result_to_dict(result) == result.to_dict()


class TestConfig:
    def test_defaults(self):
        config = Config()
        assert config.monte_carlo.iterations == 10_000
        assert config.enumeration.workers == 1
        assert config.output.log_level == "WARNING"

    def test_round_trip(self, tmp_path):
        config = Config(monte_carlo=MonteCarloConfig(iterations=500, seed=3))
        config.output.describe = False
        path = tmp_path / "config.yaml"
        save_config(config, path)
        loaded = load_config(path)
        assert loaded == config

    def test_partial_file(self, tmp_path):
        path = tmp_path / "config.yaml"
        path.write_text("enumeration:\n  workers: 4\n")
        config = load_config(path)
        assert config.enumeration.workers == 4
        assert config.monte_carlo.iterations == 10_000

    def test_missing_file(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_config(tmp_path / "missing.yaml")


class TestLogging:
    def test_file_handler(self, tmp_path):
        log_file = tmp_path / "logs" / "run.log"
        root = setup_logging("INFO", log_file)
        logging.getLogger("equity.test").info("hello")
        for handler in root.handlers:
            handler.flush()
        assert "hello" in log_file.read_text()
        setup_logging("WARNING")

    def test_replaces_own_handlers(self):
        setup_logging("DEBUG")
        root = setup_logging("DEBUG")
        ours = [h for h in root.handlers if getattr(h, "_poker_outs", False)]
        assert len(ours) == 1
        setup_logging("WARNING")

    def test_unknown_level(self):
        with pytest.raises(ValueError):
            setup_logging("LOUD")
