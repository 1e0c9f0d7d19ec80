"""Exhaustive outs enumeration for flop and turn boards.

Every remaining card (and, on the flop, every unordered pair of remaining
cards) is dealt out, every player's best hand is evaluated, and the unique
winner of each runout is credited with the win and the out. Runouts never
depend on each other, so the runout list can be split into contiguous
chunks and tallied in separate processes.
"""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from itertools import combinations
from random import Random
from typing import Any, Iterable, Sequence

from tqdm import tqdm

from equity.metrics import percentage
from equity.monte_carlo import DEFAULT_ITERATIONS, analyze_pre_flop
from equity.players import PlayerLike, to_board, to_players, used_cards
from equity.results import (
    BoardStage,
    Out,
    OutsPlayerResult,
    OutsResult,
    PreFlopResult,
    RunnerRunnerResult,
)
from poker.cards import Card, remaining
from poker.errors import EmptyDeckError, InvalidBoardLengthError
from poker.hand_evaluator import HandEvaluator

logger = logging.getLogger(__name__)

ALLOWED_BOARD_LENGTHS = (0, 3, 4)
STAGES = {3: BoardStage.FLOP, 4: BoardStage.TURN}

Runout = tuple[Card, ...]


@dataclass
class RunoutTally:
    """Wins, outs and ties over a slice of runouts, indexed by player."""

    wins: list[int]
    outs: list[list[Out]]
    ties: int = 0

    @classmethod
    def empty(cls, num_players: int) -> "RunoutTally":
        return cls(wins=[0] * num_players, outs=[[] for _ in range(num_players)])

    def merge(self, other: "RunoutTally") -> None:
        """Fold another tally in. Out lists keep runout order when merged in chunk order."""
        for i, (wins, outs) in enumerate(zip(other.wins, other.outs)):
            self.wins[i] += wins
            self.outs[i].extend(outs)
        self.ties += other.ties


def tally_runouts(
    board: Sequence[Card],
    hole_cards: Sequence[tuple[Card, Card]],
    runouts: Iterable[Runout],
) -> RunoutTally:
    """Deal each runout onto the board and credit its unique winner."""
    tally = RunoutTally.empty(len(hole_cards))
    for runout in runouts:
        full_board = [*board, *runout]
        hands = [HandEvaluator.evaluate(cards, full_board) for cards in hole_cards]
        winners = HandEvaluator.winners(hands)
        if len(winners) == 1:
            winner = winners[0]
            tally.wins[winner] += 1
            tally.outs[winner].append(Out(cards=tuple(runout), hand=hands[winner]))
        else:
            tally.ties += 1
    return tally


def _tally_chunk(args: tuple[list[Card], list[tuple[Card, Card]], list[Runout]]) -> RunoutTally:
    board, hole_cards, runouts = args
    return tally_runouts(board, hole_cards, runouts)


def partition(items: Sequence[Any], parts: int) -> list[Sequence[Any]]:
    """Split items into at most ``parts`` contiguous, non-empty chunks."""
    if not items:
        return []
    size = -(-len(items) // max(1, parts))
    return [items[i : i + size] for i in range(0, len(items), size)]


def run_enumeration(
    board: Sequence[Card],
    hole_cards: Sequence[tuple[Card, Card]],
    runouts: Sequence[Runout],
    workers: int = 1,
    show_progress: bool = False,
    desc: str = "Enumerating",
) -> RunoutTally:
    """Tally all runouts, sequentially or across a process pool."""
    if workers <= 1 or len(runouts) < 2:
        iterator: Iterable[Runout] = runouts
        if show_progress:
            iterator = tqdm(runouts, desc=desc, unit="runouts")
        return tally_runouts(board, hole_cards, iterator)

    chunks = partition(runouts, workers)
    logger.debug("%s: %d runouts in %d chunks", desc, len(runouts), len(chunks))
    total = RunoutTally.empty(len(hole_cards))
    jobs = [(list(board), list(hole_cards), list(chunk)) for chunk in chunks]
    with ProcessPoolExecutor(max_workers=workers) as ex:
        for part in ex.map(_tally_chunk, jobs):
            total.merge(part)
    return total


def analyze_outs(
    board: Sequence[Any],
    players: Sequence[PlayerLike],
    *,
    workers: int = 1,
    show_progress: bool = False,
    iterations: int = DEFAULT_ITERATIONS,
    rng: Random | None = None,
) -> OutsResult | PreFlopResult:
    """Classify every out for each player on a flop or turn board.

    An empty board has no outs to enumerate; it is handed to
    ``analyze_pre_flop`` with ``iterations`` and ``rng``.

    Raises:
        InvalidBoardLengthError: board is not 0, 3 or 4 cards.
        InvalidCardError: malformed cards or hole-card counts.
        DuplicateCardError: a card is used twice.
        EmptyDeckError: too few cards left to deal the runouts.
    """
    board_cards = to_board(board)
    if len(board_cards) not in ALLOWED_BOARD_LENGTHS:
        raise InvalidBoardLengthError(len(board_cards), ALLOWED_BOARD_LENGTHS)

    if not board_cards:
        logger.info("Empty board, running Monte Carlo pre-flop analysis")
        return analyze_pre_flop(
            players, iterations, rng, workers=workers, show_progress=show_progress
        )

    roster = to_players(players)
    if not roster:
        raise ValueError("At least one player is required")

    deck = remaining(used_cards(board_cards, roster))
    stage = STAGES[len(board_cards)]
    width = 2 if stage is BoardStage.FLOP else 1
    if len(deck) < width:
        raise EmptyDeckError(width, len(deck))

    logger.info(
        "Analyzing %s outs for %d players (%d cards remaining)",
        stage, len(roster), len(deck),
    )

    hole_cards = [p.cards for p in roster]
    result = OutsResult(
        board_stage=stage,
        board=tuple(board_cards),
        player_results=[OutsPlayerResult(player_id=p.id, cards=p.cards) for p in roster],
    )

    single_runouts = [(card,) for card in deck]
    result.total_turn_combinations = len(single_runouts)
    regular = run_enumeration(
        board_cards,
        hole_cards,
        single_runouts,
        workers=workers,
        show_progress=show_progress,
        desc="Turn outs" if stage is BoardStage.FLOP else "River outs",
    )
    result.regular_tie_count = regular.ties
    for player_result, wins, outs in zip(result.player_results, regular.wins, regular.outs):
        player_result.regular_win_count = wins
        player_result.regular_outs = outs
        player_result.regular_win_percentage = percentage(wins, result.total_turn_combinations)

    if stage is BoardStage.FLOP:
        pair_runouts = list(combinations(deck, 2))
        result.total_combinations = len(pair_runouts)
        runner_runner = run_enumeration(
            board_cards,
            hole_cards,
            pair_runouts,
            workers=workers,
            show_progress=show_progress,
            desc="Runner-runner outs",
        )
        result.tie_count = runner_runner.ties
        for player_result, wins, outs in zip(
            result.player_results, runner_runner.wins, runner_runner.outs
        ):
            player_result.runner_runner_win_count = wins
            player_result.runner_runner_outs = outs
            player_result.runner_runner_win_percentage = percentage(
                wins, result.total_combinations
            )
    else:
        result.total_combinations = result.total_turn_combinations
        result.tie_count = regular.ties

    result.tie_percentage = percentage(result.tie_count, result.total_combinations)

    # First player wins ties for the lead
    leader = max(result.player_results, key=lambda p: p.regular_win_percentage)
    leader.regular_outs = []
    leader.runner_runner_outs = []
    result.leader_id = leader.player_id

    logger.info(
        "%s analysis done: %d turn runouts, %d total runouts, %d ties, leader %s",
        stage,
        result.total_turn_combinations,
        result.total_combinations,
        result.tie_count,
        leader.player_id,
    )
    for p in result.player_results:
        logger.debug(
            "%s: regular %d (%.2f%%), runner-runner %d (%.2f%%)",
            p.player_id,
            p.regular_win_count,
            p.regular_win_percentage,
            p.runner_runner_win_count,
            p.runner_runner_win_percentage,
        )
    return result


def analyze_runner_runner_outs(
    board: Sequence[Any],
    players: Sequence[PlayerLike],
    *,
    workers: int = 1,
    show_progress: bool = False,
) -> RunnerRunnerResult:
    """Runner-runner view of ``analyze_outs`` for a flop or turn board."""
    board_cards = to_board(board)
    if len(board_cards) not in STAGES:
        raise InvalidBoardLengthError(len(board_cards), tuple(STAGES))
    result = analyze_outs(board_cards, players, workers=workers, show_progress=show_progress)
    assert isinstance(result, OutsResult)
    return RunnerRunnerResult.from_outs(result)
