"""Scenario files in, results.json out."""

import json
import logging
from pathlib import Path
from typing import Any, Mapping

import yaml

from equity.players import Player, to_board, to_players
from poker.cards import Card

logger = logging.getLogger(__name__)


def load_scenario(path: str | Path) -> tuple[list[Card], list[Player]]:
    """Load a board and players from a YAML or JSON file.

    Expected shape::

        board: [{rank: "10", suit: diamond}, ...]   # or ["Td", ...]
        players:
          - id: player1
            cards: [{rank: "10", suit: spade}, "3h"]
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Scenario file not found: {path}")

    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, Mapping):
        raise ValueError(f"Scenario file must contain a mapping: {path}")

    board = to_board(data.get("board") or [])
    players = to_players(data.get("players") or [])
    logger.debug("Loaded scenario %s: %d board cards, %d players", path, len(board), len(players))
    return board, players


def save_scenario(board: list[Card], players: list[Player], path: str | Path) -> None:
    """Write a scenario in the same shape ``load_scenario`` reads."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {
        "board": [c.to_dict() for c in board],
        "players": [p.to_dict() for p in players],
    }
    with open(path, "w", encoding="utf-8") as f:
        yaml.dump(data, f, default_flow_style=False, sort_keys=False, allow_unicode=True)


def result_to_dict(result: Any, descriptions: Mapping[str, Any] | None = None) -> dict[str, Any]:
    """``result.to_dict()`` with optional per-player description strings merged in."""
    data = result.to_dict()
    if descriptions:
        for entry in data["playerResults"]:
            description = descriptions.get(entry["playerId"])
            if description is None:
                continue
            if hasattr(description, "to_dict"):
                description = description.to_dict()
            entry.update(description)
    return data


def save_result(
    result: Any,
    path: str | Path,
    descriptions: Mapping[str, Any] | None = None,
) -> Path:
    """Write a result as indented JSON and return the path."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w", encoding="utf-8") as f:
        json.dump(result_to_dict(result, descriptions), f, indent=2, ensure_ascii=False)
    logger.info("Saved results to %s", path)
    return path
