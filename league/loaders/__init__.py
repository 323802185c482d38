"""Loaders for the export formats league data arrives in."""

import logging

from league.models import LeagueData

from .base import ExportLoader, LoaderError

logger = logging.getLogger(__name__)

# Loader registry - loader modules are imported at the bottom to register them
_loaders: list[type[ExportLoader]] = []


def register_loader(loader_class: type[ExportLoader]) -> type[ExportLoader]:
    """Decorator to register a loader class."""
    _loaders.append(loader_class)
    return loader_class


def get_all_loaders() -> list[type[ExportLoader]]:
    """Return all registered loader classes."""
    return _loaders.copy()


def detect_loader(source: str) -> ExportLoader | None:
    """Return a loader instance whose format matches the source name."""
    for loader_class in _loaders:
        loader = loader_class()
        if loader.can_load(source):
            return loader
    return None


def detect_loader_by_content(content: bytes, filename: str) -> ExportLoader | None:
    """Return a loader instance that recognises the content itself."""
    for loader_class in _loaders:
        loader = loader_class()
        if loader.can_load_content(content, filename):
            return loader
    return None


def get_supported_formats() -> str:
    """Return a user-friendly description of supported export formats."""
    lines = ["We currently support:"]
    for loader_class in _loaders:
        description = getattr(loader_class, "FORMAT_DESCRIPTION", None)
        if description:
            lines.append(f"  - {description}")
    return "\n".join(lines)


def load_export(source: str, content: bytes) -> LeagueData:
    """Load an export, picking the loader by name first and content second.

    Raises:
        LoaderError: If no loader fits or the chosen loader fails
    """
    loader = detect_loader(source) or detect_loader_by_content(content, source)
    if loader is None:
        raise LoaderError(
            f"We couldn't determine the export format of {source!r}.\n\n"
            f"{get_supported_formats()}"
        )

    try:
        data = loader.load(source, content)
    except LoaderError:
        raise
    except Exception as e:
        raise LoaderError(f"Failed to load export: {e}") from e

    logger.info(
        "Loaded %s with %s: %d competitors, %d rounds, %d submissions, %d votes",
        source, type(loader).__name__, len(data.competitors), len(data.rounds),
        len(data.submissions), len(data.votes),
    )
    return data


from . import json_snapshot  # noqa: E402,F401
from . import zip_export  # noqa: E402,F401
