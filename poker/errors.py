"""Errors raised by the card model and the analysis engines."""

from typing import Iterable, TYPE_CHECKING

if TYPE_CHECKING:
    from poker.cards import Card


class PokerError(Exception):
    """Base class for every error reported to callers."""


class InvalidCardError(PokerError, ValueError):
    """A card could not be built from the given rank/suit tokens."""


class InvalidRankError(InvalidCardError):
    """Rank token outside 2-10, J, Q, K, A."""


class InvalidSuitError(InvalidCardError):
    """Suit token outside spade, heart, diamond, club."""


class DuplicateCardError(PokerError):
    """The same card appears more than once across board and hole cards."""

    def __init__(self, cards: Iterable["Card"]) -> None:
        self.cards = tuple(cards)
        listed = ", ".join(str(c) for c in self.cards)
        super().__init__(f"Duplicate cards in input: {listed}")


class InvalidBoardLengthError(PokerError):
    """Board size is not one the requested analysis supports."""

    def __init__(self, length: int, allowed: tuple[int, ...]) -> None:
        self.length = length
        self.allowed = allowed
        allowed_str = ", ".join(str(n) for n in allowed)
        super().__init__(f"Board must have {allowed_str} cards, got {length}")


class EmptyDeckError(PokerError):
    """Not enough cards left in the deck for the requested enumeration."""

    def __init__(self, needed: int, available: int) -> None:
        self.needed = needed
        self.available = available
        super().__init__(f"Need {needed} remaining cards, only {available} available")
