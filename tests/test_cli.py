"""Tests for the poker-outs command line (main.py)."""

import json

import pytest
import yaml
from typer.testing import CliRunner

from main import app, parse_cards, parse_player
from poker.errors import InvalidCardError
from tests.helpers.card_utils import make_cards_from_strings

runner = CliRunner()

SAMPLE_ARGS = [
    "--board", "Td 3d 6h",
    "--player", "player1=Ts,3h",
    "--player", "player2=Jh,2d",
    "--no-progress",
]


class TestParsing:
    @pytest.mark.parametrize("text", ["Td 3d 6h", "Td,3d,6h", " Td, 3d  6h "])
    def test_parse_cards(self, text):
        assert parse_cards(text) == make_cards_from_strings(["Td", "3d", "6h"])

    def test_parse_player(self):
        player = parse_player("hero=As,Kd", 0)
        assert player.id == "hero"
        assert player.cards == tuple(make_cards_from_strings(["As", "Kd"]))

    def test_parse_player_without_id(self):
        assert parse_player("As Kd", 3).id == "3"

    def test_parse_player_bad_card(self):
        with pytest.raises(InvalidCardError):
            parse_player("hero=As,Zz", 0)


class TestOutsCommand:
    def test_outs(self):
        result = runner.invoke(app, ["outs", *SAMPLE_ARGS])
        assert result.exit_code == 0, result.output
        assert "player1" in result.output
        assert "player2" in result.output

    def test_outs_writes_results(self, tmp_path):
        path = tmp_path / "results.json"
        result = runner.invoke(app, ["outs", *SAMPLE_ARGS, "--output", str(path)])
        assert result.exit_code == 0, result.output
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["totalCombinations"] == 990
        assert data["playerResults"][0]["runnerRunnerDescription"] == (
            "Current winner - no runner-runner outs needed"
        )

    def test_no_describe(self, tmp_path):
        path = tmp_path / "results.json"
        result = runner.invoke(app, ["outs", *SAMPLE_ARGS, "--no-describe", "--output", str(path)])
        assert result.exit_code == 0, result.output
        data = json.loads(path.read_text(encoding="utf-8"))
        assert "runnerRunnerDescription" not in data["playerResults"][0]

    def test_show_outs(self):
        result = runner.invoke(app, ["outs", *SAMPLE_ARGS, "--show-outs"])
        assert result.exit_code == 0, result.output
        assert "Flush" in result.output

    def test_scenario_file(self, tmp_path, scenario_dict):
        scenario = tmp_path / "scenario.yaml"
        scenario.write_text(yaml.dump(scenario_dict))
        output = tmp_path / "results.json"
        result = runner.invoke(
            app, ["outs", "--scenario", str(scenario), "--no-progress", "--output", str(output)]
        )
        assert result.exit_code == 0, result.output
        assert json.loads(output.read_text(encoding="utf-8"))["tieCount"] == 0

    def test_empty_board_runs_preflop(self):
        result = runner.invoke(
            app,
            [
                "outs",
                "--player", "a=As,Ah",
                "--player", "b=7c,2d",
                "--iterations", "100",
                "--seed", "1",
                "--no-progress",
            ],
        )
        assert result.exit_code == 0, result.output
        assert "preflop" in result.output.lower()

    def test_invalid_card(self):
        result = runner.invoke(app, ["outs", "--board", "Td 3d 1h", "--player", "a=As,Ah", "--no-progress"])
        assert result.exit_code == 1
        assert "Error" in result.output

    def test_duplicate_card(self):
        result = runner.invoke(
            app, ["outs", "--board", "Td 3d 6h", "--player", "a=Td,Ah", "--player", "b=Ks,Kh", "--no-progress"]
        )
        assert result.exit_code == 1
        assert "Duplicate" in result.output

    def test_duplicate_player_id(self):
        result = runner.invoke(
            app, ["outs", "--board", "Td 3d 6h", "--player", "a=As,Ah", "--player", "a=Ks,Kh", "--no-progress"]
        )
        assert result.exit_code == 1
        assert "Duplicate player ids" in result.output

    def test_player_id_is_not_markup(self):
        args = ["--board", "Td 3d 6h", "--player", "[red]x=Ts,3h", "--player", "y=Jh,2d"]
        result = runner.invoke(app, ["outs", *args, "--no-describe", "--no-progress"])
        assert result.exit_code == 0, result.output
        assert "[red]x" in result.output

    def test_bad_board_length(self):
        result = runner.invoke(
            app, ["outs", "--board", "Td 3d", "--player", "a=As,Ah", "--player", "b=Ks,Kh", "--no-progress"]
        )
        assert result.exit_code == 1

    def test_missing_config(self, tmp_path):
        result = runner.invoke(app, ["outs", *SAMPLE_ARGS, "--config", str(tmp_path / "none.yaml")])
        assert result.exit_code == 1

    def test_bad_log_level(self):
        result = runner.invoke(app, ["outs", *SAMPLE_ARGS, "--log-level", "LOUD"])
        assert result.exit_code == 1


class TestOtherCommands:
    def test_runner_runner(self, tmp_path):
        path = tmp_path / "rr.json"
        result = runner.invoke(app, ["runner-runner", *SAMPLE_ARGS, "--output", str(path)])
        assert result.exit_code == 0, result.output
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["totalCombinations"] == 990
        p2 = data["playerResults"][1]
        assert p2["winCount"] == 83
        assert p2["runnerRunnerDescription"] == (
            "Every 2+J, 6+J(Two Pair), Every 2+2, J+J(Three of a Kind), "
            "Every 4+5(Straight), Every 2X♦(Flush)"
        )
        assert "regularOutsDescription" not in p2

    def test_runner_runner_player_id_is_not_markup(self):
        args = ["--board", "Td 3d 6h", "--player", "[bold]p1=Ts,3h", "--player", "p2=Jh,2d"]
        result = runner.invoke(app, ["runner-runner", *args, "--no-progress"])
        assert result.exit_code == 0, result.output
        assert "[bold]p1: Current winner" in result.output

    def test_runner_runner_needs_board(self):
        result = runner.invoke(
            app, ["runner-runner", "--player", "a=As,Ah", "--player", "b=Ks,Kh", "--no-progress"]
        )
        assert result.exit_code == 1

    def test_preflop(self, tmp_path):
        path = tmp_path / "preflop.json"
        args = [
            "preflop",
            "--player", "a=As,Ah",
            "--player", "b=7c,2d",
            "--iterations", "300",
            "--seed", "11",
            "--no-progress",
            "--output", str(path),
        ]
        first = runner.invoke(app, args)
        assert first.exit_code == 0, first.output
        data = json.loads(path.read_text(encoding="utf-8"))
        assert data["monteCarloIterations"] == 300

        second = runner.invoke(app, args)
        assert second.exit_code == 0, second.output
        assert json.loads(path.read_text(encoding="utf-8")) == data

    def test_preflop_needs_two_players(self):
        result = runner.invoke(app, ["preflop", "--player", "a=As,Ah", "--no-progress"])
        assert result.exit_code == 1

    def test_info(self, tmp_path):
        config = tmp_path / "config.yaml"
        config.write_text("monte_carlo:\n  iterations: 1234\n")
        result = runner.invoke(app, ["info", "--config", str(config)])
        assert result.exit_code == 0, result.output
        assert "Configuration" in result.output
        assert "1,234" in result.output
