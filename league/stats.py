"""League-wide statistics for the filtered working set."""

import math
from collections import Counter
from datetime import datetime
from typing import Any

from league.calculations import is_positive_vote, mean, standard_deviation
from league.filters import index_by_round
from league.models import (
    Competitor, LeaderboardEntry, LeaderboardStatistics, Round, RoundPerformance,
    RoundStatistics, Submission, Vote,
)
from league.scoring import counted_votes

SECONDS_PER_DAY = 24 * 60 * 60


def vote_date_range(votes: list[Vote]) -> tuple[datetime, datetime] | None:
    """Earliest and latest vote timestamps, or None without votes."""
    if not votes:
        return None
    dates = [v.created_at for v in votes]
    return min(dates), max(dates)


def performances_by_round(
    entries: list[LeaderboardEntry],
) -> dict[str, list[RoundPerformance]]:
    grouped: dict[str, list[RoundPerformance]] = {}
    for entry in entries:
        for perf in entry.performances:
            grouped.setdefault(perf.round_id, []).append(perf)
    return grouped


def count_unique_winners(entries: list[LeaderboardEntry]) -> int:
    return sum(1 for e in entries if any(p.position == 1 for p in e.performances))


def find_closest_round(
    grouped: dict[str, list[RoundPerformance]],
) -> dict[str, Any] | None:
    """Find the round with the smallest margin between its top two finishers.

    Rounds with fewer than two finishers are skipped. The first round wins
    when margins are equal.
    """
    closest = None
    for round_id, perfs in grouped.items():
        if len(perfs) < 2:
            continue
        top_two = sorted((p.points_received for p in perfs), reverse=True)[:2]
        margin = top_two[0] - top_two[1]
        if closest is None or margin < closest["margin"]:
            closest = {
                "round_id": round_id,
                "round_name": perfs[0].round_name,
                "margin": margin,
            }
    return closest


def average_points_spread(grouped: dict[str, list[RoundPerformance]]) -> float:
    """Mean over rounds of the gap between the best and worst round totals."""
    spreads = []
    for perfs in grouped.values():
        points = [p.points_received for p in perfs]
        spreads.append(max(points) - min(points))
    return mean(spreads)


def _song_summary(submission: Submission, **extra: Any) -> dict[str, Any]:
    return {
        "title": submission.title,
        "artists": ", ".join(submission.artists),
        "submitter_id": submission.submitter_id,
        "round_id": submission.round_id,
        **extra,
    }


def _votes_by_song(votes: list[Vote]) -> dict[tuple[str, str], list[int]]:
    grouped: dict[tuple[str, str], list[int]] = {}
    for vote in votes:
        grouped.setdefault((vote.round_id, vote.spotify_uri), []).append(vote.points)
    return grouped


def find_scored_songs(
    votes: list[Vote], submissions: list[Submission]
) -> tuple[dict[str, Any] | None, dict[str, Any] | None]:
    """Return the highest and lowest scored songs by summed vote points.

    Every vote counts here, including those a non-voting submitter would
    have lost in the round totals.
    """
    points = _votes_by_song(votes)
    scored = [
        (sum(points[(s.round_id, s.spotify_uri)]), s)
        for s in submissions
        if (s.round_id, s.spotify_uri) in points
    ]
    if not scored:
        return None, None

    highest = max(scored, key=lambda item: item[0])
    lowest = min(scored, key=lambda item: item[0])
    return (
        _song_summary(highest[1], points=highest[0]),
        _song_summary(lowest[1], points=lowest[0]),
    )


def find_polarization(
    votes: list[Vote], submissions: list[Submission]
) -> tuple[float, dict[str, Any] | None]:
    """Average and maximum spread of the points each song received.

    Songs whose votes all agree (a spread of 0) are left out of both.
    """
    points = _votes_by_song(votes)
    polarized = []
    for submission in submissions:
        song_points = points.get((submission.round_id, submission.spotify_uri))
        if not song_points:
            continue
        score = standard_deviation(song_points)
        if score > 0:
            polarized.append((score, submission))

    if not polarized:
        return 0.0, None

    score, submission = max(polarized, key=lambda item: item[0])
    average = mean([item[0] for item in polarized])
    return average, _song_summary(submission, score=score)


def find_most_submitted_artist(submissions: list[Submission]) -> dict[str, Any] | None:
    counts = Counter(artist for s in submissions for artist in s.artists if artist)
    if not counts:
        return None
    artist, count = counts.most_common(1)[0]
    return {"artist": artist, "count": count}


def find_most_unique_voters_song(
    votes: list[Vote], submissions: list[Submission]
) -> dict[str, Any] | None:
    """The song that the most different competitors gave points to.

    Only votes with positive points count. The earliest submission wins
    ties.
    """
    voters: dict[tuple[str, str], set[str]] = {}
    for vote in votes:
        if is_positive_vote(vote):
            voters.setdefault((vote.round_id, vote.spotify_uri), set()).add(vote.voter_id)

    best = None
    for submission in submissions:
        count = len(voters.get((submission.round_id, submission.spotify_uri), ()))
        if count and (best is None or count > best[0]):
            best = (count, submission)

    if best is None:
        return None
    return _song_summary(best[1], voters=best[0])


def submission_points(votes: list[Vote], submissions: list[Submission]) -> dict[str, int]:
    """Counted points per track URI for one round, using the round scoring rules."""
    points: dict[str, int] = {}
    for _, vote in counted_votes(votes, submissions):
        points[vote.spotify_uri] = points.get(vote.spotify_uri, 0) + vote.points
    return points


def summarize_round(
    round_: Round, votes: list[Vote], submissions: list[Submission]
) -> RoundStatistics:
    """Compute the figures for one round.

    Args:
        round_: The round
        votes: Votes cast in it
        submissions: Submissions made in it

    Returns:
        RoundStatistics. The winning submission is the first one with the
        highest counted total, so a submitter who did not vote cannot win
        on points they were given.
    """
    points = submission_points(votes, submissions)
    scores = [(points.get(s.spotify_uri, 0), s) for s in submissions]
    dates = [s.created_at for s in submissions if s.created_at is not None]
    dates += [v.created_at for v in votes]

    winner = max(scores, key=lambda item: item[0], default=None)

    return RoundStatistics(
        round_id=round_.id,
        round_name=round_.name,
        competitor_count=len({s.submitter_id for s in submissions}),
        submission_count=len(submissions),
        vote_count=len(votes),
        comment_count=sum(1 for v in votes if v.has_comment),
        start_date=min(dates, default=None),
        end_date=max(dates, default=None),
        winning_submission=_song_summary(winner[1], points=winner[0]) if winner else None,
        max_points=max((score for score, _ in scores), default=0),
        min_points=min((score for score, _ in scores), default=0),
    )


def league_length_in_days(rounds: list[Round], round_stats: list[RoundStatistics]) -> int:
    """Whole days from the first activity to the last, rounded up.

    A round without any submission or vote contributes its creation time.
    """
    dates = []
    for round_, stats in zip(rounds, round_stats):
        dates.append(stats.start_date or round_.created_at)
        dates.append(stats.end_date or round_.created_at)
    if not dates:
        return 0
    return math.ceil((max(dates) - min(dates)).total_seconds() / SECONDS_PER_DAY)


def average_participation(round_stats: list[RoundStatistics], competitor_count: int) -> float:
    """Mean share of competitors who submitted, over rounds with submissions."""
    shares = [
        stats.submission_count / (competitor_count or 1)
        for stats in round_stats
        if stats.submission_count
    ]
    return mean(shares)


def summarize(
    rounds: list[Round],
    votes: list[Vote],
    submissions: list[Submission],
    entries: list[LeaderboardEntry],
    competitors: list[Competitor] | None = None,
) -> LeaderboardStatistics:
    """Compute statistics for the filtered rounds.

    Args:
        rounds: The filtered rounds
        votes: Votes restricted to those rounds
        submissions: Submissions restricted to those rounds
        entries: Leaderboard entries that survived competitor filtering
        competitors: The whole competitor list, for participation shares.
            Defaults to everyone who submitted in the filtered rounds.

    Returns:
        LeaderboardStatistics. Vote totals are raw counts that include
        zero-point votes, unlike the per-competitor metrics.
    """
    grouped = performances_by_round(entries)
    comments = sum(1 for v in votes if v.has_comment)
    highest, lowest = find_scored_songs(votes, submissions)
    avg_polarization, most_polarizing = find_polarization(votes, submissions)

    votes_by_round = index_by_round(votes)
    submissions_by_round = index_by_round(submissions)
    round_stats = [
        summarize_round(r, votes_by_round.get(r.id, []), submissions_by_round.get(r.id, []))
        for r in rounds
    ]
    if competitors is None:
        competitor_count = len({s.submitter_id for s in submissions})
    else:
        competitor_count = len({c.id for c in competitors})

    return LeaderboardStatistics(
        total_rounds=len(rounds),
        total_competitors=len(entries),
        total_votes=len(votes),
        date_range=vote_date_range(votes),
        total_submissions=len(submissions),
        unique_winners=count_unique_winners(entries),
        closest_round=find_closest_round(grouped),
        avg_points_spread=average_points_spread(grouped),
        avg_competitors_per_round=mean([len(perfs) for perfs in grouped.values()]),
        total_comments=comments,
        total_downvotes=sum(1 for v in votes if v.points < 0),
        comment_rate=comments / len(votes) if votes else 0.0,
        total_tracks=len({s.spotify_uri for s in submissions}),
        unique_artists=len({a for s in submissions for a in s.artists if a}),
        most_submitted_artist=find_most_submitted_artist(submissions),
        highest_scored_song=highest,
        lowest_scored_song=lowest,
        avg_polarization=avg_polarization,
        most_polarizing_track=most_polarizing,
        length_in_days=league_length_in_days(rounds, round_stats),
        avg_participation=average_participation(round_stats, competitor_count),
        most_unique_voters_song=find_most_unique_voters_song(votes, submissions),
        rounds=round_stats,
    )
