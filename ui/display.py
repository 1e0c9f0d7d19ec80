"""Terminal rendering of analysis results."""

from typing import Mapping, Sequence

from rich.console import Console
from rich.markup import escape
from rich.panel import Panel
from rich.table import Table
from rich.text import Text

from equity.results import Out, OutsResult, PreFlopResult, RunnerRunnerResult
from poker.cards import Card, Suit
from ui.describe import OutsDescription


SUIT_COLORS = {
    Suit.HEARTS: "red",
    Suit.DIAMONDS: "red",
    Suit.CLUBS: "white",
    Suit.SPADES: "white",
}


def render_card(card: Card) -> str:
    """Render a single card with color (red for hearts/diamonds)."""
    color = SUIT_COLORS[card.suit]
    return f"[{color}][{card}][/{color}]"


def render_cards(cards: Sequence[Card]) -> str:
    return " ".join(render_card(c) for c in cards)


def render_community_cards(cards: Sequence[Card]) -> str:
    """Render community cards with placeholders for undealt cards."""
    rendered = []
    for i in range(5):
        if i < len(cards):
            rendered.append(render_card(cards[i]))
        else:
            rendered.append("[dim][ - ][/dim]")
    return " ".join(rendered)


def render_stage_header(stage: str, board: Sequence[Card] = ()) -> Panel:
    """Render the board stage header."""
    text = Text.from_markup(
        f"[bold yellow]{stage.upper()}[/bold yellow]  {render_community_cards(board)}",
        justify="center",
    )
    return Panel(text, border_style="blue")


def render_out(out: Out) -> str:
    return f"{render_cards(out.cards)} [dim]{out.category}[/dim]"


def outs_table(
    result: OutsResult,
    descriptions: Mapping[str, OutsDescription] | None = None,
) -> Table:
    """Per-player win counts and percentages for a flop/turn analysis."""
    table = Table(title=f"Outs ({result.board_stage})")
    table.add_column("Player", style="cyan")
    table.add_column("Hole", style="white")
    table.add_column("Regular", justify="right")
    table.add_column("Regular %", justify="right", style="green")
    table.add_column("Runner-runner", justify="right")
    table.add_column("Runner-runner %", justify="right", style="green")
    if descriptions:
        table.add_column("Outs", style="white", overflow="fold")

    for p in result.player_results:
        name = escape(p.player_id)
        if p.player_id == result.leader_id:
            name = f"[bold]{name}[/bold] (leader)"
        row = [
            name,
            render_cards(p.cards),
            f"{p.regular_win_count}/{result.total_turn_combinations}",
            f"{p.regular_win_percentage:.2f}%",
            f"{p.runner_runner_win_count}/{result.total_combinations}",
            f"{p.runner_runner_win_percentage:.2f}%",
        ]
        if descriptions:
            description = descriptions.get(p.player_id)
            row.append(
                ""
                if description is None
                else f"{escape(description.regular)}\n[dim]{escape(description.runner_runner)}[/dim]"
            )
        table.add_row(*row)

    return table


def print_outs_result(
    console: Console,
    result: OutsResult,
    descriptions: Mapping[str, OutsDescription] | None = None,
    show_outs: bool = False,
) -> None:
    console.print(render_stage_header(str(result.board_stage), result.board))
    console.print(outs_table(result, descriptions))
    console.print(
        f"Ties: [yellow]{result.tie_count}[/yellow] of {result.total_combinations} "
        f"({result.tie_percentage:.2f}%)"
    )

    if show_outs:
        for p in result.player_results:
            if not p.regular_outs and not p.runner_runner_outs:
                continue
            console.print(f"\n[bold cyan]{escape(p.player_id)}[/bold cyan]")
            for out in p.regular_outs:
                console.print(f"  {render_out(out)}")
            for out in p.runner_runner_outs:
                console.print(f"  {render_out(out)}")


def print_runner_runner_result(console: Console, result: RunnerRunnerResult) -> None:
    table = Table(title="Runner-runner outs")
    table.add_column("Player", style="cyan")
    table.add_column("Wins", justify="right")
    table.add_column("Win %", justify="right", style="green")
    table.add_column("Outs", justify="right")

    for p in result.player_results:
        table.add_row(
            escape(p.player_id),
            f"{p.win_count}/{result.total_combinations}",
            f"{p.win_percentage:.2f}%",
            str(len(p.runner_runner_outs)),
        )

    console.print(table)
    console.print(f"Ties: [yellow]{result.tie_count}[/yellow] ({result.tie_percentage:.2f}%)")


def preflop_table(result: PreFlopResult) -> Table:
    table = Table(title=f"Pre-flop equity ({result.total_simulations:,} boards)")
    table.add_column("Player", style="cyan")
    table.add_column("Hole", style="white")
    table.add_column("Wins", justify="right")
    table.add_column("Win %", justify="right", style="green")
    table.add_column("95% CI", justify="right", style="dim")
    table.add_column("Equity %", justify="right", style="bold green")

    for p in result.player_results:
        low, high = p.confidence_interval
        table.add_row(
            escape(p.player_id),
            render_cards(p.cards),
            f"{p.win_count:,}",
            f"{p.win_percentage:.2f}%",
            f"{low:.2f}-{high:.2f}%",
            f"{p.equity_percentage:.2f}%",
        )

    return table


def print_preflop_result(console: Console, result: PreFlopResult) -> None:
    console.print(render_stage_header(str(result.board_stage)))
    console.print(preflop_table(result))
    console.print(f"Ties: [yellow]{result.tie_count:,}[/yellow] ({result.tie_percentage:.2f}%)")
