"""Shared test helpers."""

from datetime import datetime, timedelta, timezone
from typing import Any

from league.models import Competitor, LeaderboardEntry, LeagueData, Round, Submission, Vote

BASE_TIME = datetime(2024, 1, 1, 12, 0, tzinfo=timezone.utc)


def track_uri(round_id: str, submitter: str) -> str:
    """The track URI make_league gives a competitor's submission in a round."""
    return f"spotify:track:{round_id}-{submitter}"


def make_league(
    rounds_table: dict[str, dict[str, Any]],
    competitors: list[str] | None = None,
) -> LeagueData:
    """Build LeagueData from a compact description of each round.

    Args:
        rounds_table: {round_id: {"submitters": [competitor_id, ...],
                                  "votes": [(voter, submitter, points), ...]}}
            Round N (in dict order) is created N days after BASE_TIME and its
            votes are cast one minute apart after that.
        competitors: Competitor IDs in order (default: everyone mentioned,
            in order of first appearance). Names are the IDs in lower case.

    Returns:
        LeagueData with rounds, submissions and votes populated.
    """
    rounds, submissions, votes = [], [], []
    seen: list[str] = []

    def mention(competitor_id: str):
        if competitor_id not in seen:
            seen.append(competitor_id)

    for day, (round_id, spec) in enumerate(rounds_table.items()):
        created = BASE_TIME + timedelta(days=day)
        rounds.append(Round(id=round_id, name=f"Round {round_id}", created_at=created))

        for submitter in spec.get("submitters", []):
            mention(submitter)
            submissions.append(Submission(
                spotify_uri=track_uri(round_id, submitter),
                round_id=round_id,
                submitter_id=submitter,
                title=f"Song by {submitter} ({round_id})",
                artists=(f"Artist {submitter}",),
            ))

        for minute, vote in enumerate(spec.get("votes", []), start=1):
            voter, submitter, points = vote[:3]
            comment = vote[3] if len(vote) > 3 else ""
            mention(voter)
            votes.append(Vote(
                round_id=round_id,
                voter_id=voter,
                spotify_uri=track_uri(round_id, submitter),
                points=points,
                created_at=created + timedelta(minutes=minute),
                comment=comment,
            ))

    ids = competitors if competitors is not None else seen
    return LeagueData(
        competitors=[Competitor(id=c, name=c.lower()) for c in ids],
        rounds=rounds,
        submissions=submissions,
        votes=votes,
        name="Test League",
    )


def entry_ranks(entries: list[LeaderboardEntry]) -> list[tuple[str, int]]:
    """Return [(competitor_id, rank), ...] in entry order."""
    return [(e.competitor_id, e.rank) for e in entries]
