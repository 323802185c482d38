"""Loader for Music League export ZIP files."""

import csv
import io
import json
import logging
import zipfile
from pathlib import PurePosixPath

from league.loaders import register_loader
from league.loaders.base import ExportLoader, LoaderError
from league.models import Competitor, LeagueData, Round, Submission, Vote, parse_timestamp

logger = logging.getLogger(__name__)

ZIP_MAGIC = b"PK\x03\x04"


def _split_artists(value: str) -> tuple[str, ...]:
    return tuple(a.strip() for a in value.split(",") if a.strip())


def _row_to_competitor(row: dict[str, str]) -> Competitor:
    return Competitor(id=row["ID"].strip(), name=row["Name"].strip())


def _row_to_round(row: dict[str, str]) -> Round:
    return Round(
        id=row["ID"].strip(),
        name=row["Name"].strip(),
        created_at=parse_timestamp(row["Created"]),
        description=(row.get("Description") or "").strip(),
        playlist_url=(row.get("Playlist URL") or "").strip(),
    )


def _row_to_submission(row: dict[str, str]) -> Submission:
    created = (row.get("Created") or "").strip()
    return Submission(
        spotify_uri=row["Spotify URI"].strip(),
        round_id=row["Round ID"].strip(),
        submitter_id=row["Submitter ID"].strip(),
        title=(row.get("Title") or "").strip(),
        album=(row.get("Album") or "").strip(),
        artists=_split_artists(row.get("Artist(s)") or ""),
        created_at=parse_timestamp(created) if created else None,
        comment=row.get("Comment") or "",
        visible_to_voters=(row.get("Visible To Voters") or "Yes").strip().lower() != "no",
    )


def _row_to_vote(row: dict[str, str]) -> Vote:
    return Vote(
        round_id=row["Round ID"].strip(),
        voter_id=row["Voter ID"].strip(),
        spotify_uri=row["Spotify URI"].strip(),
        points=int(row["Points Assigned"]),
        created_at=parse_timestamp(row["Created"]),
        comment=row.get("Comment") or "",
    )


@register_loader
class ZipExportLoader(ExportLoader):
    """Loader for the ZIP archive Music League exports a league as.

    The archive holds four CSV files, possibly inside a single folder:

        competitors.csv   ID, Name
        rounds.csv        ID, Created, Name, Description, Playlist URL
        submissions.csv   Spotify URI, Title, Album, Artist(s), Submitter ID,
                          Created, Comment, Round ID, Visible To Voters
        votes.csv         Spotify URI, Voter ID, Created, Points Assigned,
                          Comment, Round ID

    and optionally a metadata.json with a "profileName". Files are recognised
    by their columns, so renamed files still load; the filename is only used
    when the columns are inconclusive.
    """

    FORMAT_DESCRIPTION = "Music League export ZIP (competitors, rounds, submissions, votes CSVs)"

    # Columns that only appear in one file type, checked in this order.
    # Competitors is the fallback since its columns appear everywhere.
    SIGNATURE_COLUMNS = {
        "rounds": {"Playlist URL"},
        "submissions": {"Visible To Voters", "Submitter ID"},
        "votes": {"Points Assigned", "Voter ID"},
    }
    REQUIRED_COLUMNS = {
        "competitors": {"ID", "Name"},
        "rounds": {"ID", "Created", "Name"},
        "submissions": {"Spotify URI", "Submitter ID", "Round ID"},
        "votes": {"Spotify URI", "Voter ID", "Created", "Points Assigned", "Round ID"},
    }
    ROW_CONVERTERS = {
        "competitors": _row_to_competitor,
        "rounds": _row_to_round,
        "submissions": _row_to_submission,
        "votes": _row_to_vote,
    }

    def can_load(self, source: str) -> bool:
        path = source.split("?", 1)[0]
        return path.lower().endswith(".zip")

    def can_load_content(self, content: bytes, filename: str) -> bool:
        return content.startswith(ZIP_MAGIC)

    @classmethod
    def detect_file_type(cls, columns: list[str], filename: str) -> str | None:
        """Work out which export file a CSV is from its header."""
        present = {c.strip() for c in columns}
        for file_type, signature in cls.SIGNATURE_COLUMNS.items():
            if signature & present:
                return file_type
        if {"ID", "Name"} <= present and "Created" not in present and len(present) <= 3:
            return "competitors"

        stem = PurePosixPath(filename).stem.lower()
        if stem in cls.ROW_CONVERTERS:
            return stem
        return None

    def load(self, source: str, content: bytes) -> LeagueData:
        try:
            archive = zipfile.ZipFile(io.BytesIO(content))
        except zipfile.BadZipFile as e:
            raise LoaderError(f"Not a valid ZIP file: {e}") from e

        tables: dict[str, list[dict[str, str]]] = {}
        name = PurePosixPath(source.split("?", 1)[0]).stem

        with archive:
            for member in archive.namelist():
                path = PurePosixPath(member)
                if member.endswith("/") or path.name.startswith(".") or "__MACOSX" in path.parts:
                    continue

                if path.name == "metadata.json":
                    name = self._read_profile_name(archive.read(member)) or name
                    continue
                if path.suffix.lower() != ".csv":
                    continue

                text = archive.read(member).decode("utf-8-sig", errors="replace")
                reader = csv.DictReader(io.StringIO(text))
                file_type = self.detect_file_type(reader.fieldnames or [], path.name)
                if file_type is None:
                    raise LoaderError(
                        f"Cannot determine file type for {member}. "
                        f"Make sure the CSV has the correct column headers."
                    )
                if file_type in tables:
                    raise LoaderError(f"More than one {file_type} file in the archive")

                missing = self.REQUIRED_COLUMNS[file_type] - set(reader.fieldnames or [])
                if missing:
                    raise LoaderError(
                        f"{member} is missing columns: {', '.join(sorted(missing))}"
                    )
                tables[file_type] = list(reader)

        missing_files = [t for t in self.ROW_CONVERTERS if t not in tables]
        if missing_files:
            raise LoaderError(
                f"The export is missing: {', '.join(f + '.csv' for f in missing_files)}"
            )

        return LeagueData(
            competitors=self._unique_competitors(
                self._convert_rows("competitors", tables["competitors"])
            ),
            rounds=self._convert_rows("rounds", tables["rounds"]),
            submissions=self._convert_rows("submissions", tables["submissions"]),
            votes=self._convert_rows("votes", tables["votes"]),
            name=name,
        )

    def _convert_rows(self, file_type: str, rows: list[dict[str, str]]) -> list:
        """Convert CSV rows to records, skipping rows that cannot be read."""
        convert = self.ROW_CONVERTERS[file_type]
        records = []
        for line, row in enumerate(rows, start=2):
            if not any((value or "").strip() for value in row.values() if isinstance(value, str)):
                continue
            try:
                records.append(convert(row))
            except (KeyError, ValueError, AttributeError) as e:
                logger.warning("Skipping %s row %d: %s", file_type, line, e)
        return records

    @staticmethod
    def _unique_competitors(competitors: list[Competitor]) -> list[Competitor]:
        """Drop repeated competitor rows, keeping the first one for each ID."""
        unique: dict[str, Competitor] = {}
        for competitor in competitors:
            if competitor.id in unique:
                logger.warning("Skipping duplicate competitor %s", competitor.id)
                continue
            unique[competitor.id] = competitor
        return list(unique.values())

    @staticmethod
    def _read_profile_name(raw: bytes) -> str | None:
        try:
            metadata = json.loads(raw.decode("utf-8-sig"))
        except (json.JSONDecodeError, UnicodeDecodeError):
            logger.warning("Ignoring unreadable metadata.json")
            return None
        if not isinstance(metadata, dict):
            return None
        return metadata.get("profileName") or metadata.get("leagueName")
