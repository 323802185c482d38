"""Tests for core data models."""

from datetime import datetime, timedelta, timezone

import pytest
from league.models import (
    LeaderboardStatistics, LeagueData, Placement, Vote, parse_timestamp,
)


class TestBuildRanking:
    def test_no_ties(self):
        result = Placement.build_ranking(["A", "B", "C"])
        assert [(p.name, p.rank, p.tied) for p in result] == [
            ("A", 1, False),
            ("B", 2, False),
            ("C", 3, False),
        ]

    def test_tie_at_start_skips_next_rank(self):
        result = Placement.build_ranking([["A", "B"], "C", "D"])
        assert [(p.name, p.rank, p.tied) for p in result] == [
            ("A", 1, True),
            ("B", 1, True),
            ("C", 3, False),
            ("D", 4, False),
        ]

    def test_three_way_tie(self):
        result = Placement.build_ranking(["A", ["B", "C", "D"], "E"])
        assert [(p.name, p.rank) for p in result] == [
            ("A", 1), ("B", 2), ("C", 2), ("D", 2), ("E", 5),
        ]

    def test_single_element_group_is_not_tied(self):
        result = Placement.build_ranking([["A"], ["B"]])
        assert [(p.name, p.rank, p.tied) for p in result] == [
            ("A", 1, False),
            ("B", 2, False),
        ]

    def test_empty(self):
        assert Placement.build_ranking([]) == []

    def test_to_dict(self):
        result = Placement.build_ranking(["A", ["B", "C"]])
        assert [p.to_dict() for p in result] == [
            {"name": "A", "rank": 1, "tied": False},
            {"name": "B", "rank": 2, "tied": True},
            {"name": "C", "rank": 2, "tied": True},
        ]


class TestParseTimestamp:
    def test_zulu_suffix(self):
        parsed = parse_timestamp("2024-03-01T10:15:00Z")
        assert parsed == datetime(2024, 3, 1, 10, 15, tzinfo=timezone.utc)

    def test_offset_is_kept(self):
        parsed = parse_timestamp("2024-03-01T10:15:00+02:00")
        assert parsed.utcoffset() == timedelta(hours=2)

    def test_naive_is_utc(self):
        parsed = parse_timestamp("2024-03-01")
        assert parsed.tzinfo == timezone.utc

    def test_datetime_passthrough(self):
        value = datetime(2024, 3, 1, tzinfo=timezone.utc)
        assert parse_timestamp(value) is value

    def test_garbage_raises(self):
        with pytest.raises(ValueError):
            parse_timestamp("last tuesday")


class TestVote:
    def make_vote(self, comment):
        return Vote(
            round_id="R1", voter_id="A", spotify_uri="spotify:track:x", points=0,
            created_at=datetime(2024, 1, 1, tzinfo=timezone.utc), comment=comment,
        )

    def test_has_comment(self):
        assert self.make_vote("great pick").has_comment

    def test_whitespace_is_not_a_comment(self):
        assert not self.make_vote("   ").has_comment


class TestSerialization:
    def test_statistics_date_range(self):
        earliest = datetime(2024, 1, 1, tzinfo=timezone.utc)
        latest = datetime(2024, 2, 1, tzinfo=timezone.utc)
        stats = LeaderboardStatistics(date_range=(earliest, latest))
        assert stats.to_dict()["date_range"] == {
            "earliest": "2024-01-01T00:00:00+00:00",
            "latest": "2024-02-01T00:00:00+00:00",
        }

    def test_statistics_without_votes(self):
        assert LeaderboardStatistics().to_dict()["date_range"] is None

    def test_empty_league(self):
        assert LeagueData().to_dict() == {
            "name": "",
            "competitors": [],
            "rounds": [],
            "submissions": [],
            "votes": [],
        }
