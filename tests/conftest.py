"""Shared pytest fixtures for outs and equity tests."""

from random import Random

import pytest

from tests.helpers.card_utils import make_cards_from_strings, make_player


@pytest.fixture
def rng():
    """Provide a reproducible random source."""
    return Random(42)


@pytest.fixture
def sample_board():
    """T♦ 3♦ 6♥ flop."""
    return make_cards_from_strings(["Td", "3d", "6h"])


@pytest.fixture
def sample_players():
    """Two pair (T♠3♥) against J♥2♦."""
    return [make_player("player1", "Ts 3h"), make_player("player2", "Jh 2d")]


@pytest.fixture
def turn_board():
    return make_cards_from_strings(["Td", "3d", "6h", "2c"])


@pytest.fixture
def flush_draw_board():
    return make_cards_from_strings(["9c", "4s", "4h"])


@pytest.fixture
def flush_draw_players():
    return [make_player("pair", "Qc 9d"), make_player("flush_draw", "6c 8c")]


@pytest.fixture
def scenario_dict():
    """Scenario in the card-dictionary shape used by scenario files."""
    return {
        "board": [
            {"rank": "10", "suit": "diamond"},
            {"rank": "3", "suit": "diamond"},
            {"rank": "6", "suit": "heart"},
        ],
        "players": [
            {
                "id": "player1",
                "cards": [{"rank": "10", "suit": "spade"}, {"rank": "3", "suit": "heart"}],
            },
            {
                "id": "player2",
                "cards": [{"rank": "J", "suit": "heart"}, {"rank": "2", "suit": "diamond"}],
            },
        ],
    }
