"""Monte Carlo equity estimation before any community cards are dealt."""

import logging
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass
from random import Random
from typing import Any, Iterable, Sequence

from tqdm import tqdm

from equity.metrics import compute_confidence_interval, percentage
from equity.players import PlayerLike, to_board, to_players, used_cards
from equity.results import PreFlopPlayerResult, PreFlopResult
from poker.cards import Card, Deck
from poker.errors import EmptyDeckError, InvalidBoardLengthError
from poker.hand_evaluator import HandEvaluator

logger = logging.getLogger(__name__)

DEFAULT_ITERATIONS = 10_000
BOARD_SIZE = 5


@dataclass
class SampleTally:
    """Per-player wins and tie shares over a batch of sampled boards."""

    wins: list[int]
    ties: list[int]
    shares: list[float]
    tie_count: int = 0
    trials: int = 0

    @classmethod
    def empty(cls, num_players: int) -> "SampleTally":
        return cls(
            wins=[0] * num_players,
            ties=[0] * num_players,
            shares=[0.0] * num_players,
        )

    def merge(self, other: "SampleTally") -> None:
        for i in range(len(self.wins)):
            self.wins[i] += other.wins[i]
            self.ties[i] += other.ties[i]
            self.shares[i] += other.shares[i]
        self.tie_count += other.tie_count
        self.trials += other.trials


def simulate(
    hole_cards: Sequence[tuple[Card, Card]],
    used: Sequence[Card],
    iterations: int,
    rng: Random,
    show_progress: bool = False,
) -> SampleTally:
    """Deal ``iterations`` random boards and tally each showdown."""
    deck = Deck(exclude=used, rng=rng)
    tally = SampleTally.empty(len(hole_cards))

    iterator: Iterable[int] = range(iterations)
    if show_progress:
        iterator = tqdm(iterator, desc="Monte Carlo", unit="boards")

    for _ in iterator:
        deck.reset()
        deck.shuffle()
        board = deck.deal(BOARD_SIZE)

        hands = [HandEvaluator.evaluate(cards, board) for cards in hole_cards]
        winners = HandEvaluator.winners(hands)
        if len(winners) == 1:
            tally.wins[winners[0]] += 1
        else:
            tally.tie_count += 1
            share = 1 / len(winners)
            for i in winners:
                tally.ties[i] += 1
                tally.shares[i] += share
        tally.trials += 1

    return tally


def _simulate_chunk(
    args: tuple[list[tuple[Card, Card]], list[Card], int, int],
) -> SampleTally:
    hole_cards, used, iterations, seed = args
    return simulate(hole_cards, used, iterations, Random(seed))


def analyze_pre_flop(
    players: Sequence[PlayerLike],
    iterations: int = DEFAULT_ITERATIONS,
    rng: Random | None = None,
    *,
    board: Sequence[Any] = (),
    workers: int = 1,
    show_progress: bool = False,
) -> PreFlopResult:
    """Estimate each player's pre-flop equity by sampling full boards.

    Args:
        players: At least two players with two hole cards each
        iterations: Number of random boards to deal
        rng: Random source; a fresh unseeded one when omitted
        board: Must be empty; present so callers get a clear error
        workers: Processes to split iterations across (each gets a seed from ``rng``)
        show_progress: Show a tqdm progress bar (sequential runs only)

    Returns:
        PreFlopResult with win counts, percentages and tie-adjusted equity
    """
    board_cards = to_board(board)
    if board_cards:
        raise InvalidBoardLengthError(len(board_cards), (0,))
    if iterations < 1:
        raise ValueError(f"iterations must be positive, got {iterations}")

    roster = to_players(players)
    if len(roster) < 2:
        raise ValueError(f"Pre-flop analysis needs at least 2 players, got {len(roster)}")

    used = used_cards([], roster)
    available = 52 - len(used)
    if available < BOARD_SIZE:
        raise EmptyDeckError(BOARD_SIZE, available)

    rng = rng if rng is not None else Random()
    hole_cards = [p.cards for p in roster]

    logger.info(
        "Running %d Monte Carlo iterations for %d players (workers=%d)",
        iterations, len(roster), workers,
    )

    if workers <= 1:
        tally = simulate(hole_cards, used, iterations, rng, show_progress=show_progress)
    else:
        chunk = -(-iterations // workers)
        sizes = [min(chunk, iterations - start) for start in range(0, iterations, chunk)]
        jobs = [(hole_cards, used, size, rng.randrange(2**32)) for size in sizes]
        tally = SampleTally.empty(len(roster))
        with ProcessPoolExecutor(max_workers=workers) as ex:
            for part in ex.map(_simulate_chunk, jobs):
                tally.merge(part)

    result = PreFlopResult(
        monte_carlo_iterations=iterations,
        total_simulations=tally.trials,
        tie_count=tally.tie_count,
        tie_percentage=percentage(tally.tie_count, tally.trials),
    )
    for i, player in enumerate(roster):
        low, high = compute_confidence_interval(tally.wins[i] / tally.trials, tally.trials)
        result.player_results.append(
            PreFlopPlayerResult(
                player_id=player.id,
                cards=player.cards,
                win_count=tally.wins[i],
                win_percentage=percentage(tally.wins[i], tally.trials),
                tie_count=tally.ties[i],
                tie_share=tally.shares[i],
                equity_percentage=percentage(tally.wins[i] + tally.shares[i], tally.trials),
                confidence_interval=(low * 100, high * 100),
            )
        )

    logger.info(
        "Pre-flop done: %d simulations, %d ties (%.2f%%)",
        result.total_simulations, result.tie_count, result.tie_percentage,
    )
    return result
