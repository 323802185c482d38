"""Standard competition ranking ("1224" ranking) with gaps after ties."""

from collections.abc import Callable, Iterable
from dataclasses import replace
from typing import TypeVar

from league.metrics import get_metric
from league.metrics.base import RankingMetric
from league.models import LeaderboardEntry, Placement

T = TypeVar("T")


def group_tied(
    items: Iterable[T], key: Callable[[T], float], ascending: bool = False
) -> list[list[T]]:
    """Sort items by key and group runs of equal values.

    The sort is stable, so tied items keep their input order within a group.
    Returns groups ordered from best to worst.
    """
    ordered = sorted(items, key=key, reverse=not ascending)

    groups: list[list[T]] = []
    previous = None
    for item in ordered:
        value = key(item)
        if groups and value == previous:
            groups[-1].append(item)
        else:
            groups.append([item])
        previous = value

    return groups


def rank_values(
    values: dict[str, float], ascending: bool = False
) -> list[Placement]:
    """Rank identifiers by their values.

    Tied values share a rank and the next distinct value's rank is its
    1-indexed position in the sorted order, e.g. [10, 10, 8, 5] gives
    [1, 1, 3, 4].
    """
    groups = group_tied(values, key=values.__getitem__, ascending=ascending)
    return Placement.build_ranking(groups)


def assign_ranks(
    entries: list[LeaderboardEntry], metric: str | RankingMetric
) -> list[LeaderboardEntry]:
    """Rank leaderboard entries by the chosen metric.

    Args:
        entries: Unranked entries; they are not modified
        metric: A registered metric key or a RankingMetric instance

    Returns:
        New entries with `rank` set, ordered from best to worst.

    Raises:
        UnknownMetricError: If the metric key is not registered
    """
    if isinstance(metric, str):
        metric = get_metric(metric)

    by_id = {entry.competitor_id: entry for entry in entries}
    values = {entry.competitor_id: metric.value(entry) for entry in entries}

    return [
        replace(by_id[placement.name], rank=placement.rank)
        for placement in rank_values(values, ascending=metric.ascending)
    ]
