"""Tests for data providers."""

from unittest.mock import MagicMock

import pytest
from league.filters import LeaderboardFilters
from league.leaderboard import build_leaderboard
from league.providers import MultiProfileProvider, ProviderError, StaticProvider

from tests.conftest import entry_ranks, make_league


@pytest.fixture
def spring():
    return make_league({
        "S1": {"submitters": ["A", "B"], "votes": [("A", "B", 2), ("B", "A", 5)]},
    })


@pytest.fixture
def autumn():
    return make_league({
        "F1": {"submitters": ["B", "D"], "votes": [("B", "D", 1), ("D", "B", 4)]},
    })


class TestStaticProvider:
    def test_returns_copies(self, spring):
        provider = StaticProvider(spring)
        rounds = provider.rounds()
        rounds.clear()
        assert len(provider.rounds()) == 1

    def test_accessors(self, spring):
        provider = StaticProvider(spring)
        assert [c.id for c in provider.competitors()] == ["A", "B"]
        assert len(provider.votes()) == 2
        assert len(provider.submissions()) == 2


class TestMultiProfileProvider:
    def test_records_are_concatenated(self, spring, autumn):
        provider = MultiProfileProvider([StaticProvider(spring), StaticProvider(autumn)])
        assert [r.id for r in provider.rounds()] == ["S1", "F1"]
        assert len(provider.votes()) == 4
        assert len(provider.submissions()) == 4

    def test_competitors_are_deduplicated(self, spring, autumn):
        provider = MultiProfileProvider([StaticProvider(spring), StaticProvider(autumn)])
        assert [c.id for c in provider.competitors()] == ["A", "B", "D"]

    def test_leaderboard_across_profiles(self, spring, autumn):
        provider = MultiProfileProvider([StaticProvider(spring), StaticProvider(autumn)])
        result = build_leaderboard(provider, LeaderboardFilters())
        # A: 5 ; B: 2 + 4 = 6 ; D: 1
        assert entry_ranks(result.entries) == [("B", 1), ("A", 2), ("D", 3)]
        assert result.statistics.total_rounds == 2

    def test_child_failure_propagates(self, spring):
        broken = MagicMock()
        broken.votes.side_effect = ProviderError("profile 2 is corrupt")
        provider = MultiProfileProvider([StaticProvider(spring), broken])

        with pytest.raises(ProviderError, match="corrupt"):
            provider.votes()

        result = build_leaderboard(provider, LeaderboardFilters())
        assert result.error == "profile 2 is corrupt"

    def test_needs_providers(self):
        with pytest.raises(ProviderError):
            MultiProfileProvider([])
