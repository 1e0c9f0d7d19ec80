"""Plain-text summaries of a player's outs, grouped by hand category.

Works only on the structured cards and hand categories carried by each
``Out``; nothing here evaluates hands.
"""

from collections import Counter
from dataclasses import dataclass
from typing import Iterable, Sequence

from equity.results import BoardStage, Out, OutsResult
from poker.cards import Card, Rank, Suit
from poker.hand_evaluator import HandRank

NO_REGULAR_OUTS = "No regular outs available"
NO_RUNNER_RUNNER_OUTS = "No runner-runner outs available"
ALL_COVERED = "No runner-runner outs available (all covered by regular outs)"
NO_RUNNER_RUNNER_ON_TURN = "No runner-runner outs available on turn"
LEADER_REGULAR = "Current winner - no regular outs needed"
LEADER_RUNNER_RUNNER = "Current winner - no runner-runner outs needed"

Combo = tuple[Card, Card]


@dataclass(frozen=True)
class OutsDescription:
    regular: str
    runner_runner: str

    def to_dict(self) -> dict[str, str]:
        return {
            "regularOutsDescription": self.regular,
            "runnerRunnerDescription": self.runner_runner,
        }


def group_outs_by_category(outs: Iterable[Out]) -> dict[HandRank, list[Out]]:
    """Group outs by the category they make, lowest category first."""
    grouped: dict[HandRank, list[Out]] = {}
    for out in outs:
        grouped.setdefault(out.category, []).append(out)
    return dict(sorted(grouped.items()))


def _rank_counts(cards: Iterable[Card]) -> Counter:
    return Counter(c.rank for c in cards)


def _held_rank(counts: Counter, at_least: int) -> Rank | None:
    for rank in sorted(counts):
        if counts[rank] >= at_least:
            return rank
    return None


def _unique(items: Iterable) -> list:
    return list(dict.fromkeys(items))


def unique_cards(outs: Iterable[Out]) -> list[Card]:
    return _unique(out.turn for out in outs)


def unique_combinations(outs: Iterable[Out]) -> list[Combo]:
    """Distinct turn/river pairs, lower rank first."""
    combos = []
    for out in outs:
        turn, river = out.cards
        combos.append((turn, river) if turn.value < river.value else (river, turn))
    return _unique(combos)


def _joined(items: Iterable[object]) -> str:
    return ", ".join(str(i) for i in items)


def _ranks_of(combo: Combo) -> str:
    return f"{combo[0].rank}+{combo[1].rank}"


def _cards_of(combo: Combo) -> str:
    return f"{combo[0]}+{combo[1]}"


# Single-card outs


def describe_regular_group(
    category: HandRank,
    outs: Sequence[Out],
    player_cards: Sequence[Card],
    board: Sequence[Card],
) -> str | None:
    cards = unique_cards(outs)
    if not cards:
        return None
    counts = _rank_counts([*player_cards, *board])
    ranks = _unique(c.rank for c in cards)

    if category in (HandRank.ROYAL_FLUSH, HandRank.STRAIGHT_FLUSH):
        return f"Any {_joined(cards)}({category})"

    if category is HandRank.FOUR_OF_A_KIND:
        held = _held_rank(counts, 3)
        if held is not None:
            return f"Any {held}({category})"
        return f"Any {_joined(ranks)}({category})"

    if category is HandRank.THREE_OF_A_KIND:
        held = _held_rank(counts, 2)
        if held is not None:
            return f"Any {held}({category})"
        return f"Any {_joined(ranks)}({category})"

    if category is HandRank.FLUSH:
        suits = _unique(c.suit for c in cards)
        return ", ".join(f"Any {suit}({category})" for suit in suits)

    if category in (HandRank.FULL_HOUSE, HandRank.STRAIGHT, HandRank.TWO_PAIR, HandRank.PAIR):
        return f"Any {_joined(ranks)}({category})"

    return f"{len(cards)} cards for ranking {int(category)}"


def describe_regular_outs(
    outs: Sequence[Out],
    player_cards: Sequence[Card],
    board: Sequence[Card],
    all_player_cards: Sequence[Sequence[Card]] | None = None,
) -> str:
    """Summarize single-card outs, e.g. ``Any 7, 2(Straight), Any ♦(Flush)``."""
    if not outs:
        return NO_REGULAR_OUTS

    descriptions = []
    for category, group in group_outs_by_category(outs).items():
        description = describe_regular_group(category, group, player_cards, board)
        if description:
            descriptions.append(description)
    return ", ".join(descriptions)


# Turn + river outs


def drop_covered_combinations(
    runner_runner_outs: Sequence[Out], regular_outs: Sequence[Out]
) -> list[Out]:
    """Remove turn/river outs that use a card already winning on its own."""
    if not regular_outs:
        return list(runner_runner_outs)
    covered = {out.turn for out in regular_outs}
    return [out for out in runner_runner_outs if not covered.intersection(out.cards)]


def _pairs_and_singles(combos: Sequence[Combo], category: HandRank) -> str:
    pairs = _unique(a.rank for a, b in combos if a.rank == b.rank)
    singles = _unique(_ranks_of(c) for c in combos if c[0].rank != c[1].rank)
    descriptions = []
    if pairs:
        descriptions.append(f"Every {_joined(f'{r}+{r}' for r in pairs)}({category})")
    if singles:
        descriptions.append(f"Every {_joined(singles)}({category})")
    return ", ".join(descriptions)


def _pairs_or_all(combos: Sequence[Combo], category: HandRank) -> str:
    pairs = _unique(a.rank for a, b in combos if a.rank == b.rank)
    if pairs:
        return f"Every {_joined(f'{r}+{r}' for r in pairs)}({category})"
    return f"Every {_joined(_unique(_ranks_of(c) for c in combos))}({category})"


def flush_exceptions(
    suit: Suit,
    player_cards: Sequence[Card],
    board: Sequence[Card],
    all_player_cards: Sequence[Sequence[Card]] | None = None,
) -> list[Card]:
    """Live cards of ``suit`` whose rank is already held twice across the table.

    Those cards pair up with the table and can hand someone a full house,
    so a two-card flush made with them is not a clean win.
    """
    if all_player_cards:
        table = [*board, *(c for cards in all_player_cards for c in cards)]
    else:
        table = [*player_cards, *board]
    used = set(table)
    counts = _rank_counts(table)
    return [
        Card(rank=rank, suit=suit)
        for rank in Rank
        if Card(rank=rank, suit=suit) not in used and counts[rank] >= 2
    ]


def describe_runner_runner_group(
    category: HandRank,
    combos: Sequence[Combo],
    player_cards: Sequence[Card],
    board: Sequence[Card],
    all_player_cards: Sequence[Sequence[Card]] | None = None,
) -> str | None:
    if not combos:
        return None
    counts = _rank_counts([*player_cards, *board])

    if category in (HandRank.ROYAL_FLUSH, HandRank.STRAIGHT_FLUSH):
        if len(combos) == 1:
            return f"{_cards_of(combos[0])}({category})"
        return f"Every {_joined(_cards_of(c) for c in combos)}({category})"

    if category is HandRank.FOUR_OF_A_KIND:
        held = _held_rank(counts, 3)
        if held is not None:
            return f"{held}+Any Card({category})"
        return _pairs_or_all(combos, category)

    if category is HandRank.THREE_OF_A_KIND:
        held = _held_rank(counts, 2)
        if held is not None:
            return f"{held}+Any Card({category})"
        return _pairs_or_all(combos, category)

    if category in (HandRank.FULL_HOUSE, HandRank.TWO_PAIR):
        return _pairs_and_singles(combos, category)

    if category is HandRank.FLUSH:
        suits = _unique(a.suit for a, b in combos if a.suit == b.suit)
        if not suits:
            return f"Every {_joined(_unique(_cards_of(c) for c in combos))}({category})"
        descriptions = []
        for suit in suits:
            exceptions = flush_exceptions(suit, player_cards, board, all_player_cards)
            text = f"Every 2X{suit}({category})"
            if exceptions:
                text += f"(except {_joined(f'{c.suit}{c.rank}' for c in exceptions)})"
            descriptions.append(text)
        return ", ".join(descriptions)

    if category is HandRank.STRAIGHT:
        return f"Every {_joined(_unique(_ranks_of(c) for c in combos))}({category})"

    if category is HandRank.PAIR:
        return _pairs_or_all(combos, category)

    return f"{len(combos)} combinations for ranking {int(category)}"


def describe_runner_runner_outs(
    outs: Sequence[Out],
    player_cards: Sequence[Card],
    board: Sequence[Card],
    all_player_cards: Sequence[Sequence[Card]] | None = None,
    regular_outs: Sequence[Out] = (),
) -> str:
    """Summarize turn+river outs, e.g. ``Every 2+2, J+J(Three of a Kind)``."""
    if not outs:
        return NO_RUNNER_RUNNER_OUTS

    filtered = drop_covered_combinations(outs, regular_outs)
    if not filtered:
        return ALL_COVERED

    descriptions = []
    for category, group in group_outs_by_category(filtered).items():
        description = describe_runner_runner_group(
            category,
            unique_combinations(group),
            player_cards,
            board,
            all_player_cards,
        )
        if description:
            descriptions.append(description)
    return ", ".join(descriptions)


def describe_outs_result(result: OutsResult) -> dict[str, OutsDescription]:
    """Descriptions for every player of an outs analysis, keyed by player id."""
    all_cards = result.all_player_cards
    descriptions: dict[str, OutsDescription] = {}
    for player in result.player_results:
        if player.player_id == result.leader_id:
            descriptions[player.player_id] = OutsDescription(LEADER_REGULAR, LEADER_RUNNER_RUNNER)
            continue

        regular = describe_regular_outs(player.regular_outs, player.cards, result.board, all_cards)
        if result.board_stage is BoardStage.TURN:
            runner_runner = NO_RUNNER_RUNNER_ON_TURN
        else:
            runner_runner = describe_runner_runner_outs(
                player.runner_runner_outs,
                player.cards,
                result.board,
                all_cards,
                player.regular_outs,
            )
        descriptions[player.player_id] = OutsDescription(regular, runner_runner)
    return descriptions
