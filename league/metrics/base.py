"""Abstract base class for ranking metrics."""

from abc import ABC, abstractmethod

from league.models import LeaderboardEntry


class RankingMetric(ABC):
    """Abstract base class for ranking metrics.

    Each metric reads one number from a leaderboard entry and says whether a
    lower or a higher value is better. Metrics are registered via the
    @register_metric decorator in league/metrics/__init__.py.
    """

    #: Whether lower values rank better
    ascending: bool = False

    @property
    @abstractmethod
    def key(self) -> str:
        """Identifier callers use to select this metric."""
        pass

    @property
    @abstractmethod
    def name(self) -> str:
        """Human-readable name of this metric."""
        pass

    @property
    def description(self) -> str:
        """Optional description of what this metric measures."""
        return ""

    @abstractmethod
    def value(self, entry: LeaderboardEntry) -> float:
        """Return this metric's value for a leaderboard entry."""
        pass
