"""Orchestrator: filter rounds, score them and rank the competitors."""

import logging
from dataclasses import dataclass, field
from typing import Any

from league.entries import build_entries
from league.filters import (
    LeaderboardFilters, filter_rounds, index_by_round, restrict_to_rounds,
)
from league.metrics import get_metric
from league.models import LeaderboardEntry, LeaderboardStatistics, LeagueData
from league.performance import aggregate_performances
from league.providers import DataProvider
from league.ranking import assign_ranks
from league.stats import summarize

logger = logging.getLogger(__name__)

ERROR_SEPARATOR = "; "


@dataclass
class LeaderboardResult:
    """Ranked entries plus statistics for one set of filters.

    Attributes:
        entries: Entries ordered from best to worst rank
        statistics: Figures for the filtered working set
        is_loading: Always False; computation finishes before returning
        error: Joined provider error messages, or None on success
    """
    entries: list[LeaderboardEntry] = field(default_factory=list)
    statistics: LeaderboardStatistics = field(default_factory=LeaderboardStatistics)
    is_loading: bool = False
    error: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Convert to a JSON-serializable dictionary."""
        return {
            "entries": [e.to_dict() for e in self.entries],
            "statistics": self.statistics.to_dict(),
            "is_loading": self.is_loading,
            "error": self.error,
        }


class LeaderboardError(ValueError):
    """Error in the filters a leaderboard was requested with."""
    pass


def compute_leaderboard(data: LeagueData, filters: LeaderboardFilters) -> LeaderboardResult:
    """Compute the leaderboard for an in-memory league snapshot.

    The input is never modified and the same input always produces the
    same output.

    Args:
        data: Competitors, rounds, submissions and votes
        filters: Metric, time filter and competitor filter

    Returns:
        LeaderboardResult with ranked entries and statistics

    Raises:
        LeaderboardError: If the filters are invalid
    """
    if filters.competitors.min_participation < 0:
        raise LeaderboardError(
            f"min_participation must not be negative, "
            f"got {filters.competitors.min_participation}"
        )
    metric = get_metric(filters.metric)

    rounds = filter_rounds(data.rounds, filters.time)
    votes_by_round = index_by_round(data.votes)
    submissions_by_round = index_by_round(data.submissions)

    performances = aggregate_performances(rounds, votes_by_round, submissions_by_round)

    votes = restrict_to_rounds(data.votes, rounds)
    submissions = restrict_to_rounds(data.submissions, rounds)
    entries = build_entries(
        data.competitors, performances, votes, submissions, filters.competitors
    )
    logger.debug(
        "Scored %d of %d rounds: %d competitors placed, %d on the leaderboard",
        len(rounds), len(data.rounds), len(performances), len(entries),
    )

    return LeaderboardResult(
        entries=assign_ranks(entries, metric),
        statistics=summarize(rounds, votes, submissions, entries, data.competitors),
    )


def build_leaderboard(provider: DataProvider, filters: LeaderboardFilters) -> LeaderboardResult:
    """Fetch league records from a provider and compute the leaderboard.

    Every accessor is called even if an earlier one fails, so that all
    failures are reported together. If any fail, nothing is computed and
    the result carries the joined error messages instead.
    """
    data = LeagueData()
    errors = []
    for accessor in ("competitors", "rounds", "votes", "submissions"):
        try:
            setattr(data, accessor, getattr(provider, accessor)())
        except Exception as e:
            logger.warning("Failed to load %s: %s", accessor, e)
            errors.append(str(e) or f"Failed to load {accessor}")

    if errors:
        return LeaderboardResult(error=ERROR_SEPARATOR.join(errors))

    return compute_leaderboard(data, filters)
