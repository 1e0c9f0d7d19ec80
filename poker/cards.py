"""Card, Deck, Suit, and Rank definitions for poker."""

from dataclasses import dataclass
from enum import IntEnum
from random import Random
from typing import Any, Iterable, Mapping

from poker.errors import InvalidRankError, InvalidSuitError


class Suit(IntEnum):
    """Card suits, in canonical deck order."""

    SPADES = 0
    HEARTS = 1
    DIAMONDS = 2
    CLUBS = 3

    def __str__(self) -> str:
        symbols = {0: "♠", 1: "♥", 2: "♦", 3: "♣"}
        return symbols[self.value]

    @property
    def token(self) -> str:
        """Name used in card dictionaries ('spade', 'heart', ...)."""
        return self.name.lower()[:-1]


class Rank(IntEnum):
    """Card ranks (2-14, where 14 is Ace)."""

    TWO = 2
    THREE = 3
    FOUR = 4
    FIVE = 5
    SIX = 6
    SEVEN = 7
    EIGHT = 8
    NINE = 9
    TEN = 10
    JACK = 11
    QUEEN = 12
    KING = 13
    ACE = 14

    def __str__(self) -> str:
        if self.value <= 10:
            return str(self.value)
        return {11: "J", 12: "Q", 13: "K", 14: "A"}[self.value]

    @property
    def token(self) -> str:
        return str(self)


RANK_TOKENS: dict[str, Rank] = {str(r): r for r in Rank}
RANK_TOKENS["T"] = Rank.TEN

SUIT_TOKENS: dict[str, Suit] = {
    "spade": Suit.SPADES,
    "spades": Suit.SPADES,
    "s": Suit.SPADES,
    "♠": Suit.SPADES,
    "heart": Suit.HEARTS,
    "hearts": Suit.HEARTS,
    "h": Suit.HEARTS,
    "♥": Suit.HEARTS,
    "diamond": Suit.DIAMONDS,
    "diamonds": Suit.DIAMONDS,
    "d": Suit.DIAMONDS,
    "♦": Suit.DIAMONDS,
    "club": Suit.CLUBS,
    "clubs": Suit.CLUBS,
    "c": Suit.CLUBS,
    "♣": Suit.CLUBS,
}


def parse_rank(token: str | int | Rank) -> Rank:
    """Convert a rank token ('2'..'10', 'T', 'J', 'Q', 'K', 'A' or 2-14)."""
    if isinstance(token, Rank):
        return token
    if isinstance(token, int) and not isinstance(token, bool):
        if Rank.TWO <= token <= Rank.ACE:
            return Rank(token)
        raise InvalidRankError(f"Invalid rank: {token!r}")
    if isinstance(token, str):
        rank = RANK_TOKENS.get(token.strip().upper())
        if rank is not None:
            return rank
    raise InvalidRankError(f"Invalid rank: {token!r}")


def parse_suit(token: str | Suit) -> Suit:
    """Convert a suit token ('spade', 's', '♠', ...)."""
    if isinstance(token, Suit):
        return token
    if isinstance(token, str):
        suit = SUIT_TOKENS.get(token.strip().lower())
        if suit is not None:
            return suit
    raise InvalidSuitError(f"Invalid suit: {token!r}")


def rank_value(rank: str | int | Rank) -> int:
    """Numeric value 2-14 of a rank token. Raises InvalidRankError."""
    return int(parse_rank(rank))


@dataclass(frozen=True, slots=True)
class Card:
    """A single playing card."""

    rank: Rank
    suit: Suit

    def __str__(self) -> str:
        return f"{self.rank}{self.suit}"

    def __repr__(self) -> str:
        return f"Card({self.rank.name}, {self.suit.name})"

    @property
    def value(self) -> int:
        return int(self.rank)

    def to_index(self) -> int:
        """Convert to 0-51 index.

        Index = suit * 13 + (rank - 2)
        """
        return self.suit * 13 + (self.rank - 2)

    @classmethod
    def from_index(cls, index: int) -> "Card":
        """Create card from 0-51 index."""
        if not 0 <= index < 52:
            raise ValueError(f"Card index out of range: {index}")
        suit = Suit(index // 13)
        rank = Rank((index % 13) + 2)
        return cls(rank=rank, suit=suit)

    @classmethod
    def from_tokens(cls, rank: str | int | Rank, suit: str | Suit) -> "Card":
        """Create card from rank and suit tokens, e.g. ('10', 'diamond')."""
        return cls(rank=parse_rank(rank), suit=parse_suit(suit))

    @classmethod
    def from_string(cls, s: str) -> "Card":
        """Parse card from string like 'As', '10h', 'Td', 'Q♣'."""
        s = s.strip()
        if len(s) < 2:
            raise InvalidRankError(f"Invalid card string: {s!r}")
        return cls.from_tokens(s[:-1], s[-1])

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Card":
        """Create card from a {'rank': ..., 'suit': ...} mapping."""
        try:
            return cls.from_tokens(data["rank"], data["suit"])
        except KeyError as exc:
            raise InvalidRankError(f"Card mapping is missing {exc}") from exc

    def to_dict(self) -> dict[str, str]:
        return {"rank": self.rank.token, "suit": self.suit.token}


def to_card(obj: "Card | str | Mapping[str, Any]") -> Card:
    """Coerce a Card, compact string or card mapping into a Card."""
    if isinstance(obj, Card):
        return obj
    if isinstance(obj, str):
        return Card.from_string(obj)
    if isinstance(obj, Mapping):
        return Card.from_dict(obj)
    raise InvalidRankError(f"Cannot interpret {obj!r} as a card")


_FULL_DECK: tuple[Card, ...] = tuple(Card.from_index(i) for i in range(52))


def full_deck() -> list[Card]:
    """All 52 cards, suit-major (spades, hearts, diamonds, clubs)."""
    return list(_FULL_DECK)


def remaining(used: Iterable[Card]) -> list[Card]:
    """Full deck minus the used cards, in deck order."""
    used_set = set(used)
    return [card for card in _FULL_DECK if card not in used_set]


class Deck:
    """A standard 52-card deck, optionally with some cards taken out.

    Pass ``rng`` to share a random source with the caller; otherwise the
    deck owns a ``Random(seed)``.
    """

    def __init__(
        self,
        seed: int | None = None,
        exclude: Iterable[Card] = (),
        rng: Random | None = None,
    ) -> None:
        self._rng = rng if rng is not None else Random(seed)
        self._exclude = frozenset(exclude)
        self._cards: list[Card] = []
        self.reset()

    def reset(self) -> None:
        """Reset deck to every card not excluded."""
        self._cards = remaining(self._exclude)

    def shuffle(self) -> None:
        """Shuffle the deck."""
        self._rng.shuffle(self._cards)

    def deal(self, n: int = 1) -> list[Card]:
        """Deal n cards from the top of the deck."""
        if n > len(self._cards):
            raise ValueError(f"Cannot deal {n} cards, only {len(self._cards)} remaining")
        dealt = self._cards[:n]
        self._cards = self._cards[n:]
        return dealt

    def remaining(self) -> int:
        """Number of cards remaining in deck."""
        return len(self._cards)

    def __len__(self) -> int:
        return len(self._cards)
