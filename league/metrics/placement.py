"""Metrics derived from round finishing positions and points."""

from league.metrics import register_metric
from league.metrics.base import RankingMetric
from league.models import LeaderboardEntry


@register_metric
class TotalPointsMetric(RankingMetric):
    """Sum of net points received across all filtered rounds."""

    @property
    def key(self) -> str:
        return "total_points"

    @property
    def name(self) -> str:
        return "Total Points"

    @property
    def description(self) -> str:
        return "Net points received across the selected rounds"

    def value(self, entry: LeaderboardEntry) -> float:
        return entry.total_points


@register_metric
class WinRateMetric(RankingMetric):
    """Fraction of rounds finished in 1st place (ties included)."""

    @property
    def key(self) -> str:
        return "win_rate"

    @property
    def name(self) -> str:
        return "Win Rate"

    def value(self, entry: LeaderboardEntry) -> float:
        return entry.win_rate


@register_metric
class PodiumRateMetric(RankingMetric):
    """Fraction of rounds finished in the top three."""

    @property
    def key(self) -> str:
        return "podium_rate"

    @property
    def name(self) -> str:
        return "Podium Rate"

    def value(self, entry: LeaderboardEntry) -> float:
        return entry.podium_rate


@register_metric
class AveragePositionMetric(RankingMetric):
    """Mean finishing position. Lower is better."""

    ascending = True

    @property
    def key(self) -> str:
        return "average_position"

    @property
    def name(self) -> str:
        return "Average Position"

    def value(self, entry: LeaderboardEntry) -> float:
        return entry.average_position


@register_metric
class ConsistencyMetric(RankingMetric):
    """Standard deviation of finishing positions. Lower is better."""

    ascending = True

    @property
    def key(self) -> str:
        return "consistency"

    @property
    def name(self) -> str:
        return "Consistency"

    @property
    def description(self) -> str:
        return "Spread of finishing positions; 0 with fewer than two rounds"

    def value(self, entry: LeaderboardEntry) -> float:
        return entry.consistency_score
