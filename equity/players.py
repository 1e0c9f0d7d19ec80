"""Player inputs and card validation shared by the analysis engines."""

from collections import Counter
from dataclasses import dataclass
from typing import Any, Iterable, Mapping, Sequence

from poker.cards import Card, to_card
from poker.errors import DuplicateCardError, InvalidCardError


@dataclass(frozen=True, slots=True)
class Player:
    """A player identity and their two hole cards."""

    id: str
    cards: tuple[Card, Card]

    def __str__(self) -> str:
        return f"{self.id} [{self.cards[0]} {self.cards[1]}]"

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "cards": [c.to_dict() for c in self.cards]}


PlayerLike = Player | Mapping[str, Any] | tuple[Any, Sequence[Any]]


def to_player(obj: PlayerLike, index: int) -> Player:
    """Coerce a Player, ``{"id", "cards"}`` mapping or ``(id, cards)`` pair.

    A missing or empty id falls back to the player's position.
    """
    if isinstance(obj, Player):
        return obj

    if isinstance(obj, Mapping):
        player_id = obj.get("id")
        raw_cards = obj.get("cards", ())
    else:
        player_id, raw_cards = obj

    cards = tuple(to_card(c) for c in raw_cards)
    if len(cards) != 2:
        raise InvalidCardError(
            f"Player {player_id or index} must have exactly 2 hole cards, got {len(cards)}"
        )
    if player_id is None or player_id == "":
        player_id = index
    return Player(id=str(player_id), cards=(cards[0], cards[1]))


def to_players(players: Iterable[PlayerLike]) -> list[Player]:
    """Coerce every player. Raises ValueError when two players share an id."""
    roster = [to_player(p, i) for i, p in enumerate(players)]
    counts = Counter(p.id for p in roster)
    repeated = [player_id for player_id, n in counts.items() if n > 1]
    if repeated:
        raise ValueError(f"Duplicate player ids: {', '.join(repeated)}")
    return roster


def to_board(board: Iterable[Any]) -> list[Card]:
    return [to_card(c) for c in board]


def used_cards(board: Sequence[Card], players: Sequence[Player]) -> list[Card]:
    """Board plus every hole card. Raises DuplicateCardError on repeats."""
    used = [*board, *(c for p in players for c in p.cards)]
    counts = Counter(used)
    duplicates = [card for card, n in counts.items() if n > 1]
    if duplicates:
        raise DuplicateCardError(duplicates)
    return used
