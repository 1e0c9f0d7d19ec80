"""Sampling statistics for Monte Carlo equity estimates."""

import math
from typing import Tuple


Z_SCORES = {0.90: 1.645, 0.95: 1.96, 0.99: 2.576}


def percentage(count: int | float, total: int) -> float:
    """count / total as a percentage. Raises ZeroDivisionError on an empty universe."""
    return count / total * 100


def compute_confidence_interval(
    win_rate: float,
    n_samples: int,
    confidence: float = 0.95,
) -> Tuple[float, float]:
    """Compute confidence interval for win rate using Wilson score interval.

    More accurate than normal approximation for win rates near 0 or 1.

    Args:
        win_rate: Observed win rate (0-1)
        n_samples: Number of samples
        confidence: Confidence level (default 95%)

    Returns:
        Tuple of (lower_bound, upper_bound)
    """
    if n_samples == 0:
        return (0.0, 1.0)

    z = Z_SCORES.get(confidence, 1.96)

    n = n_samples
    p = win_rate

    denominator = 1 + z**2 / n
    center = (p + z**2 / (2 * n)) / denominator
    spread = z * math.sqrt((p * (1 - p) + z**2 / (4 * n)) / n) / denominator

    lower = max(0.0, center - spread)
    upper = min(1.0, center + spread)

    return (lower, upper)


def required_iterations(
    win_rate: float,
    margin: float = 0.01,
    confidence: float = 0.95,
) -> int:
    """Monte Carlo iterations needed for a given margin of error.

    Args:
        win_rate: Expected win rate (0-1)
        margin: Desired margin of error (half the CI width, 0-1)
        confidence: Confidence level

    Returns:
        Number of iterations required
    """
    z = Z_SCORES.get(confidence, 1.96)
    p = win_rate
    n = (z**2 * p * (1 - p)) / (margin**2)
    return int(math.ceil(n))
