"""Leaderboard filters and the round-level narrowing they drive."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Protocol, Self, TypeVar

from league.models import Round, parse_timestamp

DEFAULT_METRIC = "total_points"


class _RoundScoped(Protocol):
    round_id: str


R = TypeVar("R", bound=_RoundScoped)


def _id_list(data: dict[str, Any], key: str) -> list[str]:
    """Read an optional list of identifiers, rejecting bare strings."""
    value = data.get(key)
    if not value:
        return []
    if not isinstance(value, (list, tuple)):
        raise ValueError(f"{key} must be a list, got {type(value).__name__}")
    return [str(item) for item in value]


@dataclass
class TimeFilter:
    """Which rounds to include.

    Attributes:
        start: Inclusive lower bound on round creation time (None = no limit)
        end: Inclusive upper bound on round creation time (None = no limit)
        round_ids: If non-empty, only these rounds; combined with the
            date bounds, a round has to satisfy both
    """
    start: datetime | None = None
    end: datetime | None = None
    round_ids: list[str] | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        start = data.get("start", data.get("from"))
        end = data.get("end", data.get("to"))
        round_ids = _id_list(data, "round_ids")
        return cls(
            start=parse_timestamp(start) if start else None,
            end=parse_timestamp(end) if end else None,
            round_ids=round_ids or None,
        )


@dataclass
class CompetitorFilter:
    """Which competitors may appear on the leaderboard.

    Attributes:
        min_participation: Minimum number of placed rounds required
        exclude_ids: Competitors to leave out regardless of results
    """
    min_participation: int = 1
    exclude_ids: list[str] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        return cls(
            min_participation=int(data.get("min_participation", 1)),
            exclude_ids=_id_list(data, "exclude_ids"),
        )


@dataclass
class LeaderboardFilters:
    """Everything a caller can choose when asking for a leaderboard."""
    metric: str = DEFAULT_METRIC
    time: TimeFilter = field(default_factory=TimeFilter)
    competitors: CompetitorFilter = field(default_factory=CompetitorFilter)

    @classmethod
    def from_dict(cls, data: dict[str, Any], default_metric: str = DEFAULT_METRIC) -> Self:
        """Build filters from a JSON-style dictionary.

        Raises:
            ValueError: If a timestamp or number cannot be parsed
        """
        return cls(
            metric=data.get("metric") or default_metric,
            time=TimeFilter.from_dict(data.get("time") or {}),
            competitors=CompetitorFilter.from_dict(data.get("competitors") or {}),
        )


def filter_rounds(rounds: Iterable[Round], time_filter: TimeFilter) -> list[Round]:
    """Return the rounds that satisfy every constraint in the time filter.

    The date bounds are inclusive. A non-empty round id list narrows the
    result further; it never adds rounds outside the date bounds.
    """
    filtered = list(rounds)

    if time_filter.start is not None:
        start = parse_timestamp(time_filter.start)
        filtered = [r for r in filtered if r.created_at >= start]
    if time_filter.end is not None:
        end = parse_timestamp(time_filter.end)
        filtered = [r for r in filtered if r.created_at <= end]

    if time_filter.round_ids:
        allowed = set(time_filter.round_ids)
        filtered = [r for r in filtered if r.id in allowed]

    return filtered


def index_by_round(records: Iterable[R]) -> dict[str, list[R]]:
    """Group votes or submissions by round id, keeping their input order."""
    index: dict[str, list[R]] = {}
    for record in records:
        index.setdefault(record.round_id, []).append(record)
    return index


def restrict_to_rounds(records: Iterable[R], rounds: Iterable[Round]) -> list[R]:
    """Keep only the votes or submissions belonging to the given rounds."""
    round_ids = {r.id for r in rounds}
    return [record for record in records if record.round_id in round_ids]
