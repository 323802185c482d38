"""Pure formulas behind the leaderboard metrics."""

import math

from league.models import RoundPerformance, Vote

PODIUM_THRESHOLD = 3


def is_positive_vote(vote: Vote) -> bool:
    """Votes with no points only carry a comment and are not real votes."""
    return vote.points > 0


def mean(values: list[float]) -> float:
    return sum(values) / len(values) if values else 0.0


def standard_deviation(values: list[float]) -> float:
    """Population standard deviation (divides by N); 0 for an empty list."""
    if not values:
        return 0.0
    avg = mean(values)
    variance = sum((v - avg) ** 2 for v in values) / len(values)
    return math.sqrt(variance)


def total_points(performances: list[RoundPerformance]) -> int:
    return sum(p.points_received for p in performances)


def win_rate(performances: list[RoundPerformance]) -> float:
    """Fraction of rounds won, between 0 and 1."""
    if not performances:
        return 0.0
    wins = sum(1 for p in performances if p.position == 1)
    return wins / len(performances)


def podium_rate(performances: list[RoundPerformance]) -> float:
    """Fraction of rounds finished in the top three, between 0 and 1."""
    if not performances:
        return 0.0
    podiums = sum(1 for p in performances if p.position <= PODIUM_THRESHOLD)
    return podiums / len(performances)


def average_position(performances: list[RoundPerformance]) -> float:
    return mean([p.position for p in performances])


def consistency(performances: list[RoundPerformance]) -> float:
    """Standard deviation of finishing positions. Lower = more consistent.

    Returns 0 with fewer than two performances, since a spread needs at
    least two data points.
    """
    if len(performances) < 2:
        return 0.0
    return standard_deviation([p.position for p in performances])
