"""Data providers that hand league records to the leaderboard."""

import logging
from abc import ABC, abstractmethod

from league.models import Competitor, LeagueData, Round, Submission, Vote

logger = logging.getLogger(__name__)


class ProviderError(Exception):
    """Raised by a data provider that cannot produce its records."""
    pass


class DataProvider(ABC):
    """Abstract source of league records.

    Each accessor returns a fully materialized, already validated list.
    Any exception an accessor raises is reported as a provider failure by
    the leaderboard; providers never need to retry on its behalf.
    """

    @abstractmethod
    def competitors(self) -> list[Competitor]:
        pass

    @abstractmethod
    def rounds(self) -> list[Round]:
        pass

    @abstractmethod
    def votes(self) -> list[Vote]:
        pass

    @abstractmethod
    def submissions(self) -> list[Submission]:
        pass


class StaticProvider(DataProvider):
    """Serves records from an in-memory LeagueData snapshot."""

    def __init__(self, data: LeagueData):
        self.data = data

    def competitors(self) -> list[Competitor]:
        return list(self.data.competitors)

    def rounds(self) -> list[Round]:
        return list(self.data.rounds)

    def votes(self) -> list[Vote]:
        return list(self.data.votes)

    def submissions(self) -> list[Submission]:
        return list(self.data.submissions)


class MultiProfileProvider(DataProvider):
    """Aggregated view over several leagues.

    Each accessor concatenates its children's records in provider order.
    Competitors appearing in more than one league are listed once, under
    the first name seen.
    """

    def __init__(self, providers: list[DataProvider]):
        if not providers:
            raise ProviderError("MultiProfileProvider needs at least one provider")
        self.providers = providers

    def competitors(self) -> list[Competitor]:
        seen: dict[str, Competitor] = {}
        for provider in self.providers:
            for competitor in provider.competitors():
                seen.setdefault(competitor.id, competitor)
        logger.debug("Merged %d competitors from %d profiles", len(seen), len(self.providers))
        return list(seen.values())

    def rounds(self) -> list[Round]:
        return [r for provider in self.providers for r in provider.rounds()]

    def votes(self) -> list[Vote]:
        return [v for provider in self.providers for v in provider.votes()]

    def submissions(self) -> list[Submission]:
        return [s for provider in self.providers for s in provider.submissions()]
