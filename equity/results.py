"""Result containers produced by the enumeration and Monte Carlo engines.

``to_dict`` output keeps the camelCase keys of the ``results.json`` files
the analyzer has always written, so downstream consumers can read either.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from poker.cards import Card
from poker.hand_evaluator import EvaluatedHand, HandRank


class BoardStage(str, Enum):
    PREFLOP = "preflop"
    FLOP = "flop"
    TURN = "turn"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class Out:
    """Future card(s) that hand a player the win, and the hand they make."""

    cards: tuple[Card, ...]
    hand: EvaluatedHand

    @property
    def turn(self) -> Card:
        return self.cards[0]

    @property
    def river(self) -> Card | None:
        return self.cards[1] if len(self.cards) > 1 else None

    @property
    def category(self) -> HandRank:
        return self.hand.category

    @property
    def is_runner_runner(self) -> bool:
        return len(self.cards) == 2

    def __str__(self) -> str:
        return "+".join(str(c) for c in self.cards) + f" ({self.hand.category})"

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"turn": self.turn.to_dict()}
        if self.river is not None:
            data["river"] = self.river.to_dict()
        data["hand"] = self.hand.to_dict()
        return data


@dataclass
class OutsPlayerResult:
    """Per-player accumulator for a flop or turn analysis."""

    player_id: str
    cards: tuple[Card, Card]
    regular_outs: list[Out] = field(default_factory=list)
    runner_runner_outs: list[Out] = field(default_factory=list)
    regular_win_count: int = 0
    runner_runner_win_count: int = 0
    regular_win_percentage: float = 0.0
    runner_runner_win_percentage: float = 0.0

    def to_dict(self) -> dict[str, Any]:
        return {
            "playerId": self.player_id,
            "cards": [c.to_dict() for c in self.cards],
            "regularOuts": [o.to_dict() for o in self.regular_outs],
            "runnerRunnerOuts": [o.to_dict() for o in self.runner_runner_outs],
            "regularWinCount": self.regular_win_count,
            "runnerRunnerWinCount": self.runner_runner_win_count,
            "regularWinPercentage": self.regular_win_percentage,
            "runnerRunnerWinPercentage": self.runner_runner_win_percentage,
        }


@dataclass
class OutsResult:
    """Exact outs analysis of a flop or turn board."""

    board_stage: BoardStage
    board: tuple[Card, ...]
    total_combinations: int = 0
    total_turn_combinations: int = 0
    tie_count: int = 0
    tie_percentage: float = 0.0
    regular_tie_count: int = 0
    leader_id: str | None = None
    player_results: list[OutsPlayerResult] = field(default_factory=list)

    def player(self, player_id: str) -> OutsPlayerResult:
        for result in self.player_results:
            if result.player_id == player_id:
                return result
        raise KeyError(player_id)

    @property
    def all_player_cards(self) -> list[tuple[Card, Card]]:
        return [p.cards for p in self.player_results]

    def to_dict(self) -> dict[str, Any]:
        return {
            "boardStage": self.board_stage.value,
            "board": [c.to_dict() for c in self.board],
            "totalCombinations": self.total_combinations,
            "totalTurnCombinations": self.total_turn_combinations,
            "tieCount": self.tie_count,
            "tiePercentage": self.tie_percentage,
            "regularTieCount": self.regular_tie_count,
            "leaderId": self.leader_id,
            "playerResults": [p.to_dict() for p in self.player_results],
        }


@dataclass
class PreFlopPlayerResult:
    """Per-player tallies of a Monte Carlo pre-flop run."""

    player_id: str
    cards: tuple[Card, Card]
    win_count: int = 0
    win_percentage: float = 0.0
    tie_count: int = 0
    tie_share: float = 0.0  # sum of 1/k over k-way ties this player was in
    equity_percentage: float = 0.0
    confidence_interval: tuple[float, float] = (0.0, 100.0)

    def to_dict(self) -> dict[str, Any]:
        return {
            "playerId": self.player_id,
            "cards": [c.to_dict() for c in self.cards],
            "winCount": self.win_count,
            "winPercentage": self.win_percentage,
            "tieCount": self.tie_count,
            "equityPercentage": self.equity_percentage,
            "confidenceInterval": list(self.confidence_interval),
        }


@dataclass
class PreFlopResult:
    """Statistical equities estimated by sampling full boards."""

    monte_carlo_iterations: int
    total_simulations: int = 0
    tie_count: int = 0
    tie_percentage: float = 0.0
    player_results: list[PreFlopPlayerResult] = field(default_factory=list)
    board_stage: BoardStage = BoardStage.PREFLOP

    def player(self, player_id: str) -> PreFlopPlayerResult:
        for result in self.player_results:
            if result.player_id == player_id:
                return result
        raise KeyError(player_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "boardStage": self.board_stage.value,
            "monteCarloIterations": self.monte_carlo_iterations,
            "totalSimulations": self.total_simulations,
            "tieCount": self.tie_count,
            "tiePercentage": self.tie_percentage,
            "playerResults": [p.to_dict() for p in self.player_results],
        }


@dataclass(frozen=True)
class RunnerRunnerPlayerResult:
    player_id: str
    runner_runner_outs: tuple[Out, ...]
    win_count: int
    win_percentage: float

    def to_dict(self) -> dict[str, Any]:
        return {
            "playerId": self.player_id,
            "runnerRunnerOuts": [o.to_dict() for o in self.runner_runner_outs],
            "winCount": self.win_count,
            "winPercentage": self.win_percentage,
        }


@dataclass(frozen=True)
class RunnerRunnerResult:
    """Runner-runner-only view of an outs analysis."""

    total_combinations: int
    tie_count: int
    tie_percentage: float
    player_results: tuple[RunnerRunnerPlayerResult, ...]
    source: OutsResult

    @classmethod
    def from_outs(cls, result: OutsResult) -> "RunnerRunnerResult":
        return cls(
            total_combinations=result.total_combinations,
            tie_count=result.tie_count,
            tie_percentage=result.tie_percentage,
            player_results=tuple(
                RunnerRunnerPlayerResult(
                    player_id=p.player_id,
                    runner_runner_outs=tuple(p.runner_runner_outs),
                    win_count=p.runner_runner_win_count,
                    win_percentage=p.runner_runner_win_percentage,
                )
                for p in result.player_results
            ),
            source=result,
        )

    def player(self, player_id: str) -> RunnerRunnerPlayerResult:
        for result in self.player_results:
            if result.player_id == player_id:
                return result
        raise KeyError(player_id)

    def to_dict(self) -> dict[str, Any]:
        return {
            "totalCombinations": self.total_combinations,
            "tieCount": self.tie_count,
            "tiePercentage": self.tie_percentage,
            "playerResults": [p.to_dict() for p in self.player_results],
        }
