"""Tests for out descriptions (ui/describe.py)."""

import pytest

from equity.outs import analyze_outs
from equity.results import Out
from poker.cards import Card, Rank, Suit
from poker.hand_evaluator import HandEvaluator, HandRank
from tests.helpers.card_utils import make_cards_from_strings, make_player
from ui.describe import (
    ALL_COVERED,
    LEADER_REGULAR,
    LEADER_RUNNER_RUNNER,
    NO_REGULAR_OUTS,
    NO_RUNNER_RUNNER_ON_TURN,
    NO_RUNNER_RUNNER_OUTS,
    describe_outs_result,
    describe_regular_outs,
    describe_runner_runner_outs,
    drop_covered_combinations,
    flush_exceptions,
    group_outs_by_category,
    unique_combinations,
)


def make_out(hole: str, board: str, runout: str) -> Out:
    """Out for ``runout`` with the hand ``hole`` makes on board + runout."""
    runout_cards = make_cards_from_strings(runout.split())
    hand = HandEvaluator.evaluate(
        make_cards_from_strings(hole.split()),
        make_cards_from_strings(board.split()) + runout_cards,
    )
    return Out(cards=tuple(runout_cards), hand=hand)


@pytest.fixture(scope="module")
def flop_descriptions():
    board = make_cards_from_strings(["Td", "3d", "6h"])
    players = [make_player("player1", "Ts 3h"), make_player("player2", "Jh 2d")]
    return describe_outs_result(analyze_outs(board, players))


class TestDescribeOutsResult:
    def test_leader(self, flop_descriptions):
        leader = flop_descriptions["player1"]
        assert leader.regular == LEADER_REGULAR
        assert leader.runner_runner == LEADER_RUNNER_RUNNER

    def test_trailing_player(self, flop_descriptions):
        trailing = flop_descriptions["player2"]
        assert trailing.regular == NO_REGULAR_OUTS
        assert trailing.runner_runner == (
            "Every 2+J, 6+J(Two Pair), Every 2+2, J+J(Three of a Kind), "
            "Every 4+5(Straight), Every 2X♦(Flush)"
        )

    def test_to_dict(self, flop_descriptions):
        assert flop_descriptions["player1"].to_dict() == {
            "regularOutsDescription": LEADER_REGULAR,
            "runnerRunnerDescription": LEADER_RUNNER_RUNNER,
        }

    def test_turn(self, turn_board, sample_players):
        descriptions = describe_outs_result(analyze_outs(turn_board, sample_players))
        trailing = descriptions["player2"]
        assert trailing.regular == "Any J(Two Pair), Any 2(Three of a Kind)"
        assert trailing.runner_runner == NO_RUNNER_RUNNER_ON_TURN


class TestRegularOuts:
    def test_empty(self):
        assert describe_regular_outs([], [], []) == NO_REGULAR_OUTS

    def test_flush_by_suit(self):
        board = "Td 3d 6h"
        hole = "Ad 2d"
        outs = [make_out(hole, board, "5d"), make_out(hole, board, "Kd")]
        text = describe_regular_outs(
            outs, make_cards_from_strings(hole.split()), make_cards_from_strings(board.split())
        )
        assert text == "Any ♦(Flush)"

    def test_categories_ascending(self):
        board = "9c 4s 4h"
        hole = "6c 8c"
        outs = [make_out(hole, board, "7c 5c"), make_out(hole, board, "8h 8d")]
        grouped = group_outs_by_category(outs)
        assert list(grouped) == [HandRank.FULL_HOUSE, HandRank.STRAIGHT_FLUSH]


class TestRunnerRunnerOuts:
    def test_empty(self):
        assert describe_runner_runner_outs([], [], []) == NO_RUNNER_RUNNER_OUTS

    def test_all_covered(self):
        board = "Td 3d 6h"
        hole = "Jh 2d"
        regular = [make_out(hole, board, "Jc")]
        runner = [make_out(hole, board, "Jc 2h")]
        text = describe_runner_runner_outs(
            runner,
            make_cards_from_strings(hole.split()),
            make_cards_from_strings(board.split()),
            regular_outs=regular,
        )
        assert text == ALL_COVERED

    def test_drop_covered(self):
        board = "Td 3d 6h"
        hole = "Jh 2d"
        regular = [make_out(hole, board, "Jc")]
        keep = make_out(hole, board, "Js 2h")
        drop = make_out(hole, board, "Jc 2h")
        assert drop_covered_combinations([keep, drop], regular) == [keep]
        assert drop_covered_combinations([keep, drop], []) == [keep, drop]

    def test_unique_combinations_lower_rank_first(self):
        board = "Td 3d 6h"
        hole = "Jh 2d"
        outs = [make_out(hole, board, "Js 2h"), make_out(hole, board, "2c Jc")]
        combos = unique_combinations(outs)
        assert [(a.rank, b.rank) for a, b in combos] == [(Rank.TWO, Rank.JACK)] * 2

    def test_two_pair_singles(self):
        board = "9c 4s 4h"
        hole = "Qc 9d"
        outs = [make_out(hole, board, "Kd 7s")]
        text = describe_runner_runner_outs(
            outs, make_cards_from_strings(hole.split()), make_cards_from_strings(board.split())
        )
        assert text == "Every 7+K(Two Pair)"

    def test_three_of_a_kind_shortcut(self):
        board = "Td 3d 6h"
        hole = "6s 2c"
        outs = [make_out(hole, board, "6c Ks")]
        text = describe_runner_runner_outs(
            outs, make_cards_from_strings(hole.split()), make_cards_from_strings(board.split())
        )
        assert text == "6+Any Card(Three of a Kind)"


class TestFlushExceptions:
    def test_live_paired_ranks_listed(self):
        board = make_cards_from_strings(["9c", "4s", "4h"])
        player = make_cards_from_strings(["6c", "8c"])
        others = make_cards_from_strings(["Qc", "9d"])
        exceptions = flush_exceptions(Suit.CLUBS, player, board, [player, others])
        assert exceptions == [Card(rank=Rank.FOUR, suit=Suit.CLUBS)]

    def test_without_table(self):
        board = make_cards_from_strings(["Td", "3d", "6h"])
        player = make_cards_from_strings(["Th", "3s"])
        exceptions = flush_exceptions(Suit.DIAMONDS, player, board)
        assert exceptions == []
