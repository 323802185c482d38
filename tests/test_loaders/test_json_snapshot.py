"""Tests for the JSON snapshot loader."""

import json

import pytest
from league.loaders.base import LoaderError
from league.loaders.json_snapshot import JsonSnapshotLoader
from league.loaders.zip_export import ZipExportLoader

from tests.conftest import make_league


class TestJsonSnapshotLoader:
    def setup_method(self):
        self.loader = JsonSnapshotLoader()
        self.league = make_league({
            "R1": {"submitters": ["A", "B"],
                   "votes": [("A", "B", 3, "nice"), ("B", "A", -1)]},
        })

    def snapshot(self, **overrides) -> bytes:
        document = {**self.league.to_dict(), **overrides}
        return json.dumps(document).encode("utf-8")

    def test_can_load(self):
        assert self.loader.can_load("backup.json")
        assert not self.loader.can_load("backup.zip")

    def test_can_load_content(self):
        assert self.loader.can_load_content(self.snapshot(), "upload")

    def test_cannot_load_other_json(self):
        assert not self.loader.can_load_content(b'{"hello": "world"}', "upload")

    def test_round_trip(self):
        data = self.loader.load("backup.json", self.snapshot())
        assert data == self.league

    def test_bad_records_are_skipped(self):
        votes = self.league.to_dict()["votes"] + [
            {"round_id": "R1", "voter_id": "A", "spotify_uri": "x", "points": "many",
             "created_at": "2024-01-01T00:00:00Z"},
            {"round_id": "R1"},
        ]
        data = self.loader.load("backup.json", self.snapshot(votes=votes))
        assert len(data.votes) == 2

    def test_missing_list(self):
        document = self.league.to_dict()
        del document["submissions"]
        with pytest.raises(LoaderError, match="missing: submissions"):
            self.loader.load("backup.json", json.dumps(document).encode())

    def test_not_an_object(self):
        with pytest.raises(LoaderError, match="JSON object"):
            self.loader.load("backup.json", b"[1, 2, 3]")

    def test_invalid_json(self):
        with pytest.raises(LoaderError, match="Invalid JSON"):
            self.loader.load("backup.json", b"{nope")


class TestCrossLoaderRejection:
    def test_zip_loader_rejects_snapshot(self):
        assert not ZipExportLoader().can_load_content(b'{"competitors": []}', "x")

    def test_snapshot_loader_rejects_zip(self):
        assert not JsonSnapshotLoader().can_load_content(b"PK\x03\x04....", "x")
