"""Core data models for league records and leaderboard results."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Self


def parse_timestamp(value: str | datetime) -> datetime:
    """Parse an ISO 8601 timestamp into a timezone-aware datetime.

    Naive timestamps are assumed to be UTC so that they can be compared with
    the aware timestamps found in league exports.
    """
    if isinstance(value, datetime):
        parsed = value
    else:
        parsed = datetime.fromisoformat(value.strip())
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed


def _isoformat(value: datetime | None) -> str | None:
    return value.isoformat() if value is not None else None


@dataclass(frozen=True)
class Competitor:
    """A league participant.

    Attributes:
        id: Stable identifier used by submissions and votes
        name: Display name
    """
    id: str
    name: str

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}


@dataclass(frozen=True)
class Round:
    """One scored cycle of submissions and voting.

    Attributes:
        id: Round identifier
        name: Display name (usually the round's theme)
        created_at: When the round was created; time filters apply to this
        description: Optional theme description
        playlist_url: Optional playlist link
    """
    id: str
    name: str
    created_at: datetime
    description: str = ""
    playlist_url: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "name": self.name,
            "created_at": _isoformat(self.created_at),
            "description": self.description,
            "playlist_url": self.playlist_url,
        }


@dataclass(frozen=True)
class Submission:
    """A track entered by one competitor in one round.

    The track URI is unique within a round. `total_points` is whatever the
    export carried; the leaderboard recomputes points from votes instead.
    """
    spotify_uri: str
    round_id: str
    submitter_id: str
    title: str = ""
    album: str = ""
    artists: tuple[str, ...] = ()
    created_at: datetime | None = None
    comment: str = ""
    visible_to_voters: bool = True
    total_points: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "spotify_uri": self.spotify_uri,
            "round_id": self.round_id,
            "submitter_id": self.submitter_id,
            "title": self.title,
            "album": self.album,
            "artists": list(self.artists),
            "created_at": _isoformat(self.created_at),
            "comment": self.comment,
            "visible_to_voters": self.visible_to_voters,
            "total_points": self.total_points,
        }


@dataclass(frozen=True)
class Vote:
    """Points one competitor assigned to one submission in a round.

    Points are signed. Zero-point votes exist only to carry a comment.
    """
    round_id: str
    voter_id: str
    spotify_uri: str
    points: int
    created_at: datetime
    comment: str = ""

    @property
    def has_comment(self) -> bool:
        return bool(self.comment and self.comment.strip())

    def to_dict(self) -> dict[str, Any]:
        return {
            "round_id": self.round_id,
            "voter_id": self.voter_id,
            "spotify_uri": self.spotify_uri,
            "points": self.points,
            "created_at": _isoformat(self.created_at),
            "comment": self.comment,
        }


@dataclass
class LeagueData:
    """A consistent snapshot of one league (or several merged leagues).

    Attributes:
        competitors: Everyone who has taken part
        rounds: All rounds, in export order
        submissions: All submissions across all rounds
        votes: All votes across all rounds
        name: Optional league/profile name
    """
    competitors: list[Competitor] = field(default_factory=list)
    rounds: list[Round] = field(default_factory=list)
    submissions: list[Submission] = field(default_factory=list)
    votes: list[Vote] = field(default_factory=list)
    name: str = ""

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "competitors": [c.to_dict() for c in self.competitors],
            "rounds": [r.to_dict() for r in self.rounds],
            "submissions": [s.to_dict() for s in self.submissions],
            "votes": [v.to_dict() for v in self.votes],
        }


@dataclass
class Placement:
    """A competitor's finishing position.

    Attributes:
        name: Competitor identifier
        rank: 1-indexed position (tied competitors share the same rank)
        tied: Whether this competitor is tied with others at this rank
    """
    name: str
    rank: int
    tied: bool

    def to_dict(self) -> dict[str, Any]:
        return {"name": self.name, "rank": self.rank, "tied": self.tied}

    @classmethod
    def build_ranking(
        cls, ordered: list[str | list[str]]
    ) -> list[Self]:
        """Build a list of Placements from an ordered list.

        Args:
            ordered: Competitors in order from 1st to last place.
                Each element is either a single name (str) or a list of
                names (list[str]) for tied competitors.

        Returns:
            List of Placement objects with gapped ranks and tied flags.
        """
        placements = []
        rank = 1
        for entry in ordered:
            if isinstance(entry, list):
                for name in entry:
                    placements.append(cls(name=name, rank=rank, tied=len(entry) > 1))
                rank += len(entry)
            else:
                placements.append(cls(name=entry, rank=rank, tied=False))
                rank += 1

        return placements


@dataclass
class RoundPerformance:
    """How one competitor finished in one round."""
    round_id: str
    round_name: str
    round_date: datetime
    points_received: int
    position: int  # 1 = 1st place
    total_competitors: int

    def to_dict(self) -> dict[str, Any]:
        return {
            "round_id": self.round_id,
            "round_name": self.round_name,
            "round_date": _isoformat(self.round_date),
            "points_received": self.points_received,
            "position": self.position,
            "total_competitors": self.total_competitors,
        }


@dataclass
class LeaderboardEntry:
    """One competitor's row on the leaderboard.

    The seven rankable metrics come first. The remaining counters are
    informational and never affect rank. `rank` is 0 until ranks are
    assigned.
    """
    competitor_id: str
    competitor_name: str
    total_points: int = 0
    win_rate: float = 0.0
    podium_rate: float = 0.0
    average_position: float = 0.0
    consistency_score: float = 0.0  # lower = more consistent
    votes_received: int = 0
    avg_vote_cast: float = 0.0
    rounds_participated: int = 0
    positive_points: int = 0
    negative_points: int = 0
    first_place_count: int = 0
    podium_count: int = 0
    votes_cast: int = 0
    avg_non_zero_vote: float = 0.0
    comments_given: int = 0
    comments_received: int = 0
    downvotes_earned: int = 0
    max_points: int = 0
    min_points: int = 0
    performances: list[RoundPerformance] = field(default_factory=list)
    rank: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "rank": self.rank,
            "competitor_id": self.competitor_id,
            "competitor_name": self.competitor_name,
            "total_points": self.total_points,
            "win_rate": self.win_rate,
            "podium_rate": self.podium_rate,
            "average_position": self.average_position,
            "consistency_score": self.consistency_score,
            "votes_received": self.votes_received,
            "avg_vote_cast": self.avg_vote_cast,
            "rounds_participated": self.rounds_participated,
            "positive_points": self.positive_points,
            "negative_points": self.negative_points,
            "first_place_count": self.first_place_count,
            "podium_count": self.podium_count,
            "votes_cast": self.votes_cast,
            "avg_non_zero_vote": self.avg_non_zero_vote,
            "comments_given": self.comments_given,
            "comments_received": self.comments_received,
            "downvotes_earned": self.downvotes_earned,
            "max_points": self.max_points,
            "min_points": self.min_points,
            "performances": [p.to_dict() for p in self.performances],
        }


@dataclass
class RoundStatistics:
    """Figures for a single round.

    Attributes:
        round_id: Round identifier
        round_name: Display name
        competitor_count: Distinct submitters
        submission_count: Submissions made
        vote_count: Votes cast, of any value
        comment_count: Votes carrying a comment
        start_date: First submission or vote, or None without either
        end_date: Last submission or vote, or None without either
        winning_submission: Best-scoring submission, or None without submissions
        max_points: Highest submission total
        min_points: Lowest submission total
    """
    round_id: str
    round_name: str
    competitor_count: int = 0
    submission_count: int = 0
    vote_count: int = 0
    comment_count: int = 0
    start_date: datetime | None = None
    end_date: datetime | None = None
    winning_submission: dict[str, Any] | None = None
    max_points: int = 0
    min_points: int = 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "round_id": self.round_id,
            "round_name": self.round_name,
            "competitor_count": self.competitor_count,
            "submission_count": self.submission_count,
            "vote_count": self.vote_count,
            "comment_count": self.comment_count,
            "start_date": _isoformat(self.start_date),
            "end_date": _isoformat(self.end_date),
            "winning_submission": self.winning_submission,
            "max_points": self.max_points,
            "min_points": self.min_points,
        }


@dataclass
class LeaderboardStatistics:
    """League-wide figures for the filtered working set.

    Attributes:
        total_rounds: Number of rounds left after filtering
        total_competitors: Number of entries on the leaderboard
        total_votes: Raw count of votes in the filtered rounds (any points)
        date_range: Earliest and latest vote timestamps, or None without votes
        length_in_days: Days from the first activity to the last, rounded up
        avg_participation: Mean share of competitors submitting per round
        rounds: Per-round figures, in round order
    """
    total_rounds: int = 0
    total_competitors: int = 0
    total_votes: int = 0
    date_range: tuple[datetime, datetime] | None = None
    total_submissions: int = 0
    unique_winners: int = 0
    closest_round: dict[str, Any] | None = None
    avg_points_spread: float = 0.0
    avg_competitors_per_round: float = 0.0
    total_comments: int = 0
    total_downvotes: int = 0
    comment_rate: float = 0.0
    total_tracks: int = 0
    unique_artists: int = 0
    most_submitted_artist: dict[str, Any] | None = None
    highest_scored_song: dict[str, Any] | None = None
    lowest_scored_song: dict[str, Any] | None = None
    avg_polarization: float = 0.0
    most_polarizing_track: dict[str, Any] | None = None
    length_in_days: int = 0
    avg_participation: float = 0.0
    most_unique_voters_song: dict[str, Any] | None = None
    rounds: list[RoundStatistics] = field(default_factory=list)

    def to_dict(self) -> dict[str, Any]:
        date_range = None
        if self.date_range is not None:
            earliest, latest = self.date_range
            date_range = {"earliest": _isoformat(earliest), "latest": _isoformat(latest)}
        return {
            "total_rounds": self.total_rounds,
            "total_competitors": self.total_competitors,
            "total_votes": self.total_votes,
            "date_range": date_range,
            "total_submissions": self.total_submissions,
            "unique_winners": self.unique_winners,
            "closest_round": self.closest_round,
            "avg_points_spread": self.avg_points_spread,
            "avg_competitors_per_round": self.avg_competitors_per_round,
            "total_comments": self.total_comments,
            "total_downvotes": self.total_downvotes,
            "comment_rate": self.comment_rate,
            "total_tracks": self.total_tracks,
            "unique_artists": self.unique_artists,
            "most_submitted_artist": self.most_submitted_artist,
            "highest_scored_song": self.highest_scored_song,
            "lowest_scored_song": self.lowest_scored_song,
            "avg_polarization": self.avg_polarization,
            "most_polarizing_track": self.most_polarizing_track,
            "length_in_days": self.length_in_days,
            "avg_participation": self.avg_participation,
            "most_unique_voters_song": self.most_unique_voters_song,
            "rounds": [r.to_dict() for r in self.rounds],
        }
