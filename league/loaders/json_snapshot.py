"""Loader for JSON snapshots written by LeagueData.to_dict()."""

import json
import logging
from typing import Any

from league.loaders import register_loader
from league.loaders.base import ExportLoader, LoaderError
from league.models import Competitor, LeagueData, Round, Submission, Vote, parse_timestamp

logger = logging.getLogger(__name__)

SNAPSHOT_KEYS = ("competitors", "rounds", "submissions", "votes")


@register_loader
class JsonSnapshotLoader(ExportLoader):
    """Loader for league snapshots saved as JSON.

    The document is an object with "competitors", "rounds", "submissions"
    and "votes" lists (and an optional "name"), using the same field names
    as the to_dict() methods of the models.
    """

    FORMAT_DESCRIPTION = "League snapshot JSON (as returned by LeagueData.to_dict())"

    def can_load(self, source: str) -> bool:
        path = source.split("?", 1)[0]
        return path.lower().endswith(".json")

    def can_load_content(self, content: bytes, filename: str) -> bool:
        """Tell-tale sign: a JSON object mentioning all four record lists."""
        head = content.lstrip()[:1]
        if head != b"{":
            return False
        text = content.decode("utf-8", errors="replace")
        return all(f'"{key}"' in text for key in SNAPSHOT_KEYS)

    def load(self, source: str, content: bytes) -> LeagueData:
        try:
            document = json.loads(content.decode("utf-8-sig"))
        except (json.JSONDecodeError, UnicodeDecodeError) as e:
            raise LoaderError(f"Invalid JSON: {e}") from e

        if not isinstance(document, dict):
            raise LoaderError("Expected a JSON object at the top level")
        missing = [key for key in SNAPSHOT_KEYS if not isinstance(document.get(key), list)]
        if missing:
            raise LoaderError(f"The snapshot is missing: {', '.join(missing)}")

        return LeagueData(
            competitors=self._convert("competitors", document["competitors"], self._competitor),
            rounds=self._convert("rounds", document["rounds"], self._round),
            submissions=self._convert("submissions", document["submissions"], self._submission),
            votes=self._convert("votes", document["votes"], self._vote),
            name=document.get("name") or "",
        )

    @staticmethod
    def _convert(kind: str, items: list[Any], convert) -> list:
        records = []
        for index, item in enumerate(items):
            try:
                records.append(convert(item))
            except (KeyError, TypeError, ValueError, AttributeError) as e:
                logger.warning("Skipping %s[%d]: %s", kind, index, e)
        return records

    @staticmethod
    def _competitor(item: dict[str, Any]) -> Competitor:
        return Competitor(id=str(item["id"]), name=str(item["name"]))

    @staticmethod
    def _round(item: dict[str, Any]) -> Round:
        return Round(
            id=str(item["id"]),
            name=str(item["name"]),
            created_at=parse_timestamp(item["created_at"]),
            description=item.get("description") or "",
            playlist_url=item.get("playlist_url") or "",
        )

    @staticmethod
    def _submission(item: dict[str, Any]) -> Submission:
        created = item.get("created_at")
        return Submission(
            spotify_uri=str(item["spotify_uri"]),
            round_id=str(item["round_id"]),
            submitter_id=str(item["submitter_id"]),
            title=item.get("title") or "",
            album=item.get("album") or "",
            artists=tuple(item.get("artists") or ()),
            created_at=parse_timestamp(created) if created else None,
            comment=item.get("comment") or "",
            visible_to_voters=bool(item.get("visible_to_voters", True)),
            total_points=int(item.get("total_points") or 0),
        )

    @staticmethod
    def _vote(item: dict[str, Any]) -> Vote:
        return Vote(
            round_id=str(item["round_id"]),
            voter_id=str(item["voter_id"]),
            spotify_uri=str(item["spotify_uri"]),
            points=int(item["points"]),
            created_at=parse_timestamp(item["created_at"]),
            comment=item.get("comment") or "",
        )
