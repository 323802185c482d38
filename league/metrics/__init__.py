"""Metrics a leaderboard can be ranked by."""

from .base import RankingMetric

# Metric registry - metric modules are imported at the bottom to register them
_metrics: dict[str, type[RankingMetric]] = {}


class UnknownMetricError(ValueError):
    """Raised when a ranking metric key is not registered."""
    pass


def register_metric(metric_class: type[RankingMetric]) -> type[RankingMetric]:
    """Decorator to register a metric class under its key."""
    _metrics[metric_class().key] = metric_class
    return metric_class


def get_metric(key: str) -> RankingMetric:
    """Return an instance of the metric registered under `key`."""
    try:
        metric_class = _metrics[key]
    except KeyError:
        raise UnknownMetricError(
            f"Unknown ranking metric {key!r}. "
            f"Choose one of: {', '.join(_metrics)}"
        ) from None
    return metric_class()


def get_all_metrics() -> list[RankingMetric]:
    """Return instances of all registered metrics."""
    return [metric_class() for metric_class in _metrics.values()]


from . import placement  # noqa: E402,F401
from . import votes  # noqa: E402,F401
