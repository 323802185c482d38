"""Metrics derived from individual votes.

Zero-point votes only exist to carry a comment, so neither metric here
counts them.
"""

from league.metrics import register_metric
from league.metrics.base import RankingMetric
from league.models import LeaderboardEntry


@register_metric
class VotesReceivedMetric(RankingMetric):

    @property
    def key(self) -> str:
        return "votes_received"

    @property
    def name(self) -> str:
        return "Votes Received"

    @property
    def description(self) -> str:
        return "Number of positive votes received"

    def value(self, entry: LeaderboardEntry) -> float:
        return entry.votes_received


@register_metric
class AverageVoteCastMetric(RankingMetric):

    @property
    def key(self) -> str:
        return "avg_vote_cast"

    @property
    def name(self) -> str:
        return "Average Vote Cast"

    @property
    def description(self) -> str:
        return "Mean points per positive vote the competitor handed out"

    def value(self, entry: LeaderboardEntry) -> float:
        return entry.avg_vote_cast
