"""Card model and hand evaluation for Texas Hold'em."""

from poker.cards import Card, Deck, Rank, Suit
from poker.errors import (
    DuplicateCardError,
    EmptyDeckError,
    InvalidBoardLengthError,
    InvalidCardError,
    InvalidRankError,
    InvalidSuitError,
    PokerError,
)
from poker.hand_evaluator import EvaluatedHand, HandEvaluator, HandRank, HandStrength

__all__ = [
    "Card",
    "Deck",
    "Rank",
    "Suit",
    "EvaluatedHand",
    "HandEvaluator",
    "HandRank",
    "HandStrength",
    "PokerError",
    "InvalidCardError",
    "InvalidRankError",
    "InvalidSuitError",
    "DuplicateCardError",
    "InvalidBoardLengthError",
    "EmptyDeckError",
]
