"""Per-round point totals and finishing positions."""

from dataclasses import dataclass, field
from typing import Any

from league.models import Placement, Submission, Vote
from league.ranking import rank_values


@dataclass
class RoundResult:
    """Outcome of one round.

    Attributes:
        points: competitor_id -> net points counted for the round
        placements: Finishing order from 1st to last, ties sharing a rank
    """
    points: dict[str, int] = field(default_factory=dict)
    placements: list[Placement] = field(default_factory=list)

    @property
    def positions(self) -> dict[str, int]:
        """competitor_id -> finishing position (1 = winner)."""
        return {p.name: p.rank for p in self.placements}

    @property
    def num_competitors(self) -> int:
        return len(self.placements)

    def to_dict(self) -> dict[str, Any]:
        return {
            "points": self.points,
            "placements": [p.to_dict() for p in self.placements],
        }


def submitters_by_uri(submissions: list[Submission]) -> dict[str, str]:
    """Map each submitted track URI to the competitor who submitted it."""
    return {s.spotify_uri: s.submitter_id for s in submissions}


def voters_in_round(votes: list[Vote]) -> set[str]:
    """Competitors who cast at least one vote, of any value."""
    return {v.voter_id for v in votes}


def counts_toward_total(vote: Vote, submitter_voted: bool) -> bool:
    """Whether a vote counts toward its submission's round total.

    A submitter who did not vote in the round only collects downvotes;
    everything else they were given is discarded.
    """
    return submitter_voted or vote.points < 0


def counted_votes(
    votes: list[Vote], submissions: list[Submission]
) -> list[tuple[str, Vote]]:
    """Pair each vote that counts toward a round total with its submitter.

    Votes for tracks that nobody submitted in this round are dropped.
    """
    submitters = submitters_by_uri(submissions)
    voters = voters_in_round(votes)

    counted = []
    for vote in votes:
        submitter = submitters.get(vote.spotify_uri)
        if submitter is None:
            continue
        if counts_toward_total(vote, submitter in voters):
            counted.append((submitter, vote))
    return counted


def calculate_round_points(
    votes: list[Vote], submissions: list[Submission]
) -> dict[str, int]:
    """Compute each submitter's net points for one round.

    Votes for tracks that nobody submitted in this round are ignored. A
    competitor is in the result as soon as one vote for them is counted,
    even if their net total ends up at zero.

    Args:
        votes: All votes cast in the round
        submissions: All submissions made in the round

    Returns:
        competitor_id -> net points, in order of first counted vote
    """
    points: dict[str, int] = {}
    for submitter, vote in counted_votes(votes, submissions):
        points[submitter] = points.get(submitter, 0) + vote.points

    return points


def calculate_round_positions(
    votes: list[Vote], submissions: list[Submission]
) -> RoundResult:
    """Compute point totals and tie-aware finishing positions for one round.

    Positions use standard competition ranking: tied competitors share a
    position and the following positions are skipped, so points
    [10, 10, 8, 5] finish [1, 1, 3, 4].
    """
    points = calculate_round_points(votes, submissions)
    return RoundResult(points=points, placements=rank_values(points))
