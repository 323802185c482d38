"""Abstract base class for league export loaders."""

from abc import ABC, abstractmethod

from league.models import LeagueData


class LoaderError(ValueError):
    """Raised when an export cannot be turned into league data."""
    pass


class ExportLoader(ABC):
    """Abstract base class for loading league exports.

    Each loader handles one export format. Loaders are registered via the
    @register_loader decorator in league/loaders/__init__.py.
    """

    @abstractmethod
    def can_load(self, source: str) -> bool:
        """Check if this loader can handle the given source.

        Args:
            source: URL or filename to check

        Returns:
            True if this loader can handle the source, False otherwise
        """
        pass

    def can_load_content(self, content: bytes, filename: str) -> bool:
        """Check if this loader can handle the given file content.

        Used when the filename or URL gives nothing away. Subclasses should
        override this to look for tell-tale signs of their format.
        """
        return False

    @abstractmethod
    def load(self, source: str, content: bytes) -> LeagueData:
        """Load the content into LeagueData.

        Args:
            source: Original URL or filename (for context)
            content: Raw bytes of the export

        Returns:
            Loaded LeagueData

        Raises:
            LoaderError: If the content cannot be loaded
        """
        pass
