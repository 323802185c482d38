"""Build unranked leaderboard entries from performances and votes."""

from league import calculations
from league.calculations import PODIUM_THRESHOLD, is_positive_vote
from league.filters import CompetitorFilter
from league.models import Competitor, LeaderboardEntry, RoundPerformance, Submission, Vote


def build_entry(
    competitor: Competitor,
    performances: list[RoundPerformance],
    votes_received: list[Vote],
    votes_cast: list[Vote],
) -> LeaderboardEntry:
    """Compute every figure on one competitor's leaderboard row.

    Args:
        competitor: The competitor the row is for
        performances: Their placed rounds within the filtered round set
        votes_received: Votes addressed to their submissions in those rounds
        votes_cast: Votes they cast in those rounds

    Returns:
        An entry with rank 0.
    """
    positive_received = [v for v in votes_received if is_positive_vote(v)]
    negative_received = [v for v in votes_received if v.points < 0]
    positive_cast = [v for v in votes_cast if is_positive_vote(v)]
    non_zero_cast = [v for v in votes_cast if v.points != 0]
    round_points = [p.points_received for p in performances]

    return LeaderboardEntry(
        competitor_id=competitor.id,
        competitor_name=competitor.name,
        total_points=calculations.total_points(performances),
        win_rate=calculations.win_rate(performances),
        podium_rate=calculations.podium_rate(performances),
        average_position=calculations.average_position(performances),
        consistency_score=calculations.consistency(performances),
        votes_received=len(positive_received),
        avg_vote_cast=calculations.mean([v.points for v in positive_cast]),
        rounds_participated=len(performances),
        positive_points=sum(v.points for v in positive_received),
        negative_points=sum(v.points for v in negative_received),
        first_place_count=sum(1 for p in performances if p.position == 1),
        podium_count=sum(1 for p in performances if p.position <= PODIUM_THRESHOLD),
        votes_cast=len(votes_cast),
        avg_non_zero_vote=calculations.mean([v.points for v in non_zero_cast]),
        comments_given=sum(1 for v in votes_cast if v.has_comment),
        comments_received=sum(1 for v in votes_received if v.has_comment),
        downvotes_earned=len(negative_received),
        max_points=max(round_points, default=0),
        min_points=min(round_points, default=0),
        performances=list(performances),
    )


def build_entries(
    competitors: list[Competitor],
    performances: dict[str, list[RoundPerformance]],
    votes: list[Vote],
    submissions: list[Submission],
    competitor_filter: CompetitorFilter,
) -> list[LeaderboardEntry]:
    """Build an unranked entry for every competitor that passes the filter.

    `votes` and `submissions` must already be restricted to the filtered
    rounds. Competitors without any placed round never get an entry, even
    with a minimum participation of 0. A competitor listed twice gets one
    entry, under the first listing.

    Returns:
        Entries in competitor order, each with rank 0.
    """
    excluded = set(competitor_filter.exclude_ids)
    required = max(competitor_filter.min_participation, 1)

    # A track URI is only unique within its round
    tracks_by_submitter: dict[str, set[tuple[str, str]]] = {}
    for submission in submissions:
        tracks_by_submitter.setdefault(submission.submitter_id, set()).add(
            (submission.round_id, submission.spotify_uri)
        )

    votes_by_voter: dict[str, list[Vote]] = {}
    for vote in votes:
        votes_by_voter.setdefault(vote.voter_id, []).append(vote)

    entries = []
    seen: set[str] = set()
    for competitor in competitors:
        if competitor.id in seen:
            continue
        seen.add(competitor.id)
        competitor_performances = performances.get(competitor.id, [])
        if len(competitor_performances) < required:
            continue
        if competitor.id in excluded:
            continue

        own_tracks = tracks_by_submitter.get(competitor.id, set())
        received = [v for v in votes if (v.round_id, v.spotify_uri) in own_tracks]

        entries.append(build_entry(
            competitor,
            competitor_performances,
            votes_received=received,
            votes_cast=votes_by_voter.get(competitor.id, []),
        ))

    return entries
