"""Tests for loader detection and load_export."""

import json

import pytest
from league.loaders import (
    detect_loader, detect_loader_by_content, get_all_loaders, get_supported_formats,
    load_export,
)
from league.loaders.base import LoaderError
from league.loaders.json_snapshot import JsonSnapshotLoader
from league.loaders.zip_export import ZipExportLoader

from tests.conftest import make_league


class TestDetectLoader:
    def test_registered(self):
        assert set(get_all_loaders()) == {JsonSnapshotLoader, ZipExportLoader}

    def test_by_name(self):
        assert isinstance(detect_loader("export.zip"), ZipExportLoader)
        assert isinstance(detect_loader("https://example.com/backup.json"), JsonSnapshotLoader)
        assert detect_loader("export.tar.gz") is None

    def test_by_content(self, export_zip):
        assert isinstance(detect_loader_by_content(export_zip, "upload"), ZipExportLoader)
        assert detect_loader_by_content(b"hello", "upload") is None

    def test_supported_formats(self):
        text = get_supported_formats()
        assert "ZIP" in text
        assert "JSON" in text


class TestLoadExport:
    def test_zip_without_extension(self, export_zip):
        data = load_export("upload", export_zip)
        assert len(data.rounds) == 2

    def test_json_snapshot(self):
        league = make_league({"R1": {"submitters": ["A"]}})
        data = load_export("backup.json", json.dumps(league.to_dict()).encode())
        assert data.rounds == league.rounds

    def test_unknown_format(self):
        with pytest.raises(LoaderError, match="couldn't determine the export format"):
            load_export("notes.txt", b"just some text")

    def test_loader_error_is_not_rewrapped(self):
        with pytest.raises(LoaderError, match="^Not a valid ZIP"):
            load_export("export.zip", b"garbage")

    def test_unexpected_error_becomes_loader_error(self, monkeypatch):
        def explode(self, source, content):
            raise RuntimeError("kaboom")

        monkeypatch.setattr(ZipExportLoader, "load", explode)
        with pytest.raises(LoaderError, match="Failed to load export: kaboom"):
            load_export("export.zip", b"")
