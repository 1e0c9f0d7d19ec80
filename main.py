"""Texas Hold'em outs and equity analyzer."""

import re
from pathlib import Path
from random import Random
from typing import List, Optional

import typer
from rich.console import Console
from rich.markup import escape
from rich.table import Table

from config.settings import Config, load_config
from equity.io import load_scenario, save_result
from equity.monte_carlo import analyze_pre_flop
from equity.outs import analyze_outs, analyze_runner_runner_outs
from equity.players import Player, to_player
from equity.results import OutsResult
from poker.cards import Card
from poker.errors import PokerError
from ui.describe import describe_outs_result
from ui.display import print_outs_result, print_preflop_result, print_runner_runner_result
from utils.logging import setup_logging

app = typer.Typer(
    name="poker-outs",
    help="Texas Hold'em outs enumeration and pre-flop equity estimation.",
)
console = Console()


def parse_cards(text: str) -> list[Card]:
    """Parse 'Td 3d 6h' or 'Td,3d,6h' into cards."""
    return [Card.from_string(token) for token in re.split(r"[\s,]+", text.strip()) if token]


def parse_player(text: str, index: int) -> Player:
    """Parse 'id=Ts,3h' (or just 'Ts,3h') into a player."""
    player_id, sep, cards = text.partition("=")
    if not sep:
        player_id, cards = "", text
    return to_player({"id": player_id.strip(), "cards": parse_cards(cards)}, index)


def _load_config(config_path: Optional[Path]) -> Config:
    if config_path is None:
        return Config()
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _setup_logging(config: Config, log_level: Optional[str], log_file: Optional[Path]) -> None:
    if log_level is not None:
        config.output.log_level = log_level
    if log_file is not None:
        config.output.log_file = str(log_file)
    try:
        setup_logging(config.output.log_level, config.output.log_file)
    except ValueError as e:
        console.print(f"[red]{e}[/red]")
        raise typer.Exit(1)


def _inputs(
    board: str,
    players: Optional[List[str]],
    scenario: Optional[Path],
) -> tuple[list[Card], list[Player]]:
    if scenario is not None:
        scenario_board, scenario_players = load_scenario(scenario)
    else:
        scenario_board, scenario_players = [], []

    board_cards = parse_cards(board) if board else scenario_board
    roster = [parse_player(p, i) for i, p in enumerate(players)] if players else scenario_players
    return board_cards, roster


@app.command()
def outs(
    board: str = typer.Option("", "--board", "-b", help="Board cards, e.g. 'Td 3d 6h'"),
    player: Optional[List[str]] = typer.Option(None, "--player", "-p", help="Player as id=card,card (repeatable)"),
    scenario: Optional[Path] = typer.Option(None, "--scenario", "-s", help="YAML/JSON scenario file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write results JSON to this path"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Worker processes"),
    iterations: Optional[int] = typer.Option(None, "--iterations", "-n", help="Monte Carlo iterations (empty board)"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed (empty board)"),
    describe: bool = typer.Option(True, "--describe/--no-describe", help="Summarize outs in words"),
    show_outs: bool = typer.Option(False, "--show-outs", help="List every out card"),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show progress bars"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write logs to this file"),
) -> None:
    """Enumerate every turn/river out on a flop or turn board."""
    config = _load_config(config_path)
    _setup_logging(config, log_level, log_file)

    mc = config.monte_carlo
    out_cfg = config.output
    seed = seed if seed is not None else mc.seed

    try:
        board_cards, roster = _inputs(board, player, scenario)
        result = analyze_outs(
            board_cards,
            roster,
            workers=workers or config.enumeration.workers,
            show_progress=progress and out_cfg.show_progress,
            iterations=iterations or mc.iterations,
            rng=Random(seed),
        )
    except (PokerError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    descriptions = None
    if isinstance(result, OutsResult):
        if describe and out_cfg.describe:
            descriptions = describe_outs_result(result)
        print_outs_result(
            console,
            result,
            descriptions,
            show_outs=show_outs or out_cfg.show_outs,
        )
    else:
        print_preflop_result(console, result)

    path = output or out_cfg.results_path
    if path:
        save_result(result, path, descriptions)
        console.print(f"[green]Results saved to {path}[/green]")


@app.command(name="runner-runner")
def runner_runner(
    board: str = typer.Option("", "--board", "-b", help="Board cards, e.g. 'Td 3d 6h'"),
    player: Optional[List[str]] = typer.Option(None, "--player", "-p", help="Player as id=card,card (repeatable)"),
    scenario: Optional[Path] = typer.Option(None, "--scenario", "-s", help="YAML/JSON scenario file"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write results JSON to this path"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Worker processes"),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show progress bars"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write logs to this file"),
) -> None:
    """Show only the turn+river (runner-runner) outs."""
    config = _load_config(config_path)
    _setup_logging(config, log_level, log_file)

    try:
        board_cards, roster = _inputs(board, player, scenario)
        result = analyze_runner_runner_outs(
            board_cards,
            roster,
            workers=workers or config.enumeration.workers,
            show_progress=progress and config.output.show_progress,
        )
    except (PokerError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    print_runner_runner_result(console, result)

    descriptions = {
        player_id: {"runnerRunnerDescription": d.runner_runner}
        for player_id, d in describe_outs_result(result.source).items()
    }
    for p in result.player_results:
        description = descriptions[p.player_id]["runnerRunnerDescription"]
        console.print(f"[cyan]{escape(p.player_id)}[/cyan]: {escape(description)}")

    path = output or config.output.results_path
    if path:
        save_result(result, path, descriptions)
        console.print(f"[green]Results saved to {path}[/green]")


@app.command()
def preflop(
    player: Optional[List[str]] = typer.Option(None, "--player", "-p", help="Player as id=card,card (repeatable)"),
    scenario: Optional[Path] = typer.Option(None, "--scenario", "-s", help="YAML/JSON scenario file"),
    iterations: Optional[int] = typer.Option(None, "--iterations", "-n", help="Monte Carlo iterations"),
    seed: Optional[int] = typer.Option(None, "--seed", help="Random seed"),
    workers: Optional[int] = typer.Option(None, "--workers", "-w", help="Worker processes"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write results JSON to this path"),
    progress: bool = typer.Option(True, "--progress/--no-progress", help="Show progress bar"),
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
    log_level: Optional[str] = typer.Option(None, "--log-level", help="Logging level"),
    log_file: Optional[Path] = typer.Option(None, "--log-file", help="Write logs to this file"),
) -> None:
    """Estimate pre-flop win probabilities by Monte Carlo simulation."""
    config = _load_config(config_path)
    _setup_logging(config, log_level, log_file)
    mc = config.monte_carlo

    try:
        board_cards, roster = _inputs("", player, scenario)
        result = analyze_pre_flop(
            roster,
            iterations or mc.iterations,
            Random(seed if seed is not None else mc.seed),
            board=board_cards,
            workers=workers or mc.workers,
            show_progress=progress and config.output.show_progress,
        )
    except (PokerError, ValueError, FileNotFoundError) as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        raise typer.Exit(1)

    print_preflop_result(console, result)

    path = output or config.output.results_path
    if path:
        save_result(result, path)
        console.print(f"[green]Results saved to {path}[/green]")


@app.command()
def info(
    config_path: Optional[Path] = typer.Option(None, "--config", "-c", help="YAML config file"),
) -> None:
    """Show the effective configuration."""
    config = _load_config(config_path)

    console.print("\n[bold blue]Configuration[/bold blue]")
    console.print("=" * 50)

    table = Table()
    table.add_column("Category", style="cyan")
    table.add_column("Setting", style="white")
    table.add_column("Value", style="green")

    table.add_row("Enumeration", "Workers", str(config.enumeration.workers))

    table.add_row("Monte Carlo", "Iterations", f"{config.monte_carlo.iterations:,}")
    table.add_row("Monte Carlo", "Seed", str(config.monte_carlo.seed))
    table.add_row("Monte Carlo", "Workers", str(config.monte_carlo.workers))

    table.add_row("Output", "Progress bars", str(config.output.show_progress))
    table.add_row("Output", "Describe outs", str(config.output.describe))
    table.add_row("Output", "Show outs", str(config.output.show_outs))
    table.add_row("Output", "Results path", str(config.output.results_path))
    table.add_row("Output", "Log level", config.output.log_level)
    table.add_row("Output", "Log file", str(config.output.log_file))

    console.print(table)


def main() -> None:
    """Entry point."""
    app()


if __name__ == "__main__":
    main()
