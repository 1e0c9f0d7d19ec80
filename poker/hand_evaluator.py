"""Hand evaluation for Texas Hold'em poker."""

from collections import Counter
from dataclasses import dataclass
from enum import IntEnum
from itertools import combinations
from typing import Sequence

from poker.cards import Card, Rank


class HandRank(IntEnum):
    """Poker hand categories from lowest to highest."""

    HIGH_CARD = 1
    PAIR = 2
    TWO_PAIR = 3
    THREE_OF_A_KIND = 4
    STRAIGHT = 5
    FLUSH = 6
    FULL_HOUSE = 7
    FOUR_OF_A_KIND = 8
    STRAIGHT_FLUSH = 9
    ROYAL_FLUSH = 10

    def __str__(self) -> str:
        names = {
            1: "High Card",
            2: "Pair",
            3: "Two Pair",
            4: "Three of a Kind",
            5: "Straight",
            6: "Flush",
            7: "Full House",
            8: "Four of a Kind",
            9: "Straight Flush",
            10: "Royal Flush",
        }
        return names[self.value]


@dataclass(frozen=True, slots=True, order=True)
class HandStrength:
    """Category plus tiebreak value; ordered by category, then value."""

    category: HandRank
    value: int

    def to_dict(self) -> dict[str, int]:
        return {"ranking": int(self.category), "value": self.value}


# Sentinel below every real hand
_NO_HAND = HandStrength(HandRank.HIGH_CARD, -1)


@dataclass(frozen=True, slots=True)
class EvaluatedHand:
    """Result of evaluating a poker hand."""

    strength: HandStrength
    cards: tuple[Card, ...]  # The 5 cards that make up the hand

    @property
    def category(self) -> HandRank:
        return self.strength.category

    @property
    def value(self) -> int:
        return self.strength.value

    def __lt__(self, other: "EvaluatedHand") -> bool:
        return self.strength < other.strength

    def __le__(self, other: "EvaluatedHand") -> bool:
        return self.strength <= other.strength

    def __gt__(self, other: "EvaluatedHand") -> bool:
        return self.strength > other.strength

    def __ge__(self, other: "EvaluatedHand") -> bool:
        return self.strength >= other.strength

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, EvaluatedHand):
            return NotImplemented
        return self.strength == other.strength

    def __hash__(self) -> int:
        return hash(self.strength)

    def __str__(self) -> str:
        cards_str = " ".join(str(c) for c in self.cards)
        return f"{self.category}: {cards_str}"

    def to_dict(self) -> dict:
        return {
            "cards": [c.to_dict() for c in self.cards],
            "rank": self.strength.to_dict(),
        }


class HandEvaluator:
    """Evaluate poker hands."""

    @staticmethod
    def rank_hand(cards: Sequence[Card]) -> HandStrength:
        """Rank exactly 5 cards.

        Tiebreak values are positional encodings of the ranks that matter
        for the category, so two hands of the same category compare
        correctly by value alone.
        """
        if len(cards) != 5:
            raise ValueError(f"Expected 5 cards, got {len(cards)}")

        ranks = sorted((c.rank.value for c in cards), reverse=True)
        is_flush = len({c.suit for c in cards}) == 1
        is_straight, straight_high = HandEvaluator._check_straight(ranks)

        rank_counts = Counter(ranks)
        quads = [r for r, c in rank_counts.items() if c == 4]
        trips = [r for r, c in rank_counts.items() if c == 3]
        pairs = sorted((r for r, c in rank_counts.items() if c == 2), reverse=True)

        if is_flush and is_straight:
            if ranks[0] == Rank.ACE and ranks[1] == Rank.KING:
                return HandStrength(HandRank.ROYAL_FLUSH, 0)
            return HandStrength(HandRank.STRAIGHT_FLUSH, straight_high)

        if quads:
            kicker = next(r for r in ranks if r != quads[0])
            return HandStrength(HandRank.FOUR_OF_A_KIND, quads[0] * 100 + kicker)

        if trips and pairs:
            return HandStrength(HandRank.FULL_HOUSE, trips[0] * 100 + pairs[0])

        if is_flush:
            return HandStrength(HandRank.FLUSH, _positional(ranks, 10))

        if is_straight:
            return HandStrength(HandRank.STRAIGHT, straight_high)

        if trips:
            k1, k2 = [r for r in ranks if r != trips[0]]
            return HandStrength(HandRank.THREE_OF_A_KIND, trips[0] * 10000 + k1 * 100 + k2)

        if len(pairs) == 2:
            kicker = next(r for r in ranks if r not in pairs)
            return HandStrength(
                HandRank.TWO_PAIR, pairs[0] * 10000 + pairs[1] * 100 + kicker
            )

        if pairs:
            k1, k2, k3 = [r for r in ranks if r != pairs[0]]
            return HandStrength(
                HandRank.PAIR, pairs[0] * 1_000_000 + k1 * 10_000 + k2 * 100 + k3
            )

        return HandStrength(HandRank.HIGH_CARD, _positional(ranks, 100))

    @staticmethod
    def _check_straight(ranks: list[int]) -> tuple[bool, int]:
        """Check if 5 descending ranks form a straight. Returns (is_straight, high_card)."""
        if ranks == [14, 5, 4, 3, 2]:
            return True, 5  # wheel plays 5-high
        for high, low in zip(ranks, ranks[1:]):
            if high - low != 1:
                return False, 0
        return True, ranks[0]

    @staticmethod
    def best_hand(cards: Sequence[Card]) -> EvaluatedHand:
        """Evaluate best 5-card hand from 5 to 7 cards."""
        if not 5 <= len(cards) <= 7:
            raise ValueError(f"Expected 5 to 7 cards, got {len(cards)}")

        best_cards: tuple[Card, ...] = ()
        best = _NO_HAND
        for combo in combinations(cards, 5):
            strength = HandEvaluator.rank_hand(combo)
            if strength > best:
                best = strength
                best_cards = combo

        return EvaluatedHand(strength=best, cards=tuple(best_cards))

    @staticmethod
    def evaluate(hole_cards: Sequence[Card], community: Sequence[Card]) -> EvaluatedHand:
        """Evaluate a player's best hand from hole cards + community cards."""
        if len(hole_cards) != 2:
            raise ValueError(f"Expected 2 hole cards, got {len(hole_cards)}")
        if not 3 <= len(community) <= 5:
            raise ValueError(f"Expected 3 to 5 community cards, got {len(community)}")
        return HandEvaluator.best_hand([*hole_cards, *community])

    @staticmethod
    def compare_hands(
        a: EvaluatedHand | HandStrength, b: EvaluatedHand | HandStrength
    ) -> int:
        """Return 1 if a beats b, -1 if b beats a, 0 on a tie."""
        sa = a.strength if isinstance(a, EvaluatedHand) else a
        sb = b.strength if isinstance(b, EvaluatedHand) else b
        if sa.category != sb.category:
            return 1 if sa.category > sb.category else -1
        if sa.value != sb.value:
            return 1 if sa.value > sb.value else -1
        return 0

    @staticmethod
    def winners(hands: Sequence[EvaluatedHand]) -> list[int]:
        """Compare hands and return indices of winners (handles ties)."""
        if not hands:
            return []

        best_hand = max(hands)
        return [i for i, h in enumerate(hands) if h == best_hand]


def _positional(ranks: Sequence[int], base: int) -> int:
    value = 0
    for r in ranks:
        value = value * base + r
    return value
