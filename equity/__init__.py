"""Outs enumeration and equity estimation for Texas Hold'em."""

from equity.monte_carlo import DEFAULT_ITERATIONS, analyze_pre_flop
from equity.outs import analyze_outs, analyze_runner_runner_outs
from equity.players import Player
from equity.results import (
    BoardStage,
    Out,
    OutsPlayerResult,
    OutsResult,
    PreFlopPlayerResult,
    PreFlopResult,
    RunnerRunnerResult,
)

__all__ = [
    "DEFAULT_ITERATIONS",
    "BoardStage",
    "Out",
    "OutsPlayerResult",
    "OutsResult",
    "Player",
    "PreFlopPlayerResult",
    "PreFlopResult",
    "RunnerRunnerResult",
    "analyze_outs",
    "analyze_pre_flop",
    "analyze_runner_runner_outs",
]
