"""Shared fixtures for loader tests."""

import io
import json
import zipfile

import pytest

COMPETITORS_CSV = """ID,Name
c1,Alice
c2,Bob
c3,Carol
"""

ROUNDS_CSV = """ID,Created,Name,Description,Playlist URL
r1,2024-01-01T12:00:00Z,Guilty Pleasures,Songs you secretly love,https://open.spotify.com/playlist/1
r2,2024-01-08T12:00:00Z,Covers,"Covers, better than the original",https://open.spotify.com/playlist/2
"""

SUBMISSIONS_CSV = """Spotify URI,Title,Album,Artist(s),Submitter ID,Created,Comment,Round ID,Visible To Voters
spotify:track:a1,Toxic,In the Zone,Britney Spears,c1,2024-01-02T09:00:00Z,,r1,Yes
spotify:track:b1,Barbie Girl,Aquarium,"Aqua, René Dif",c2,2024-01-02T10:00:00Z,sorry,r1,Yes
spotify:track:c1,Mmmbop,Middle of Nowhere,Hanson,c3,2024-01-02T11:00:00Z,,r1,No
spotify:track:a2,Hurt,American IV,Johnny Cash,c1,2024-01-09T09:00:00Z,,r2,Yes
spotify:track:b2,Jolene,Jolene,The White Stripes,c2,2024-01-09T10:00:00Z,,r2,Yes
"""

VOTES_CSV = """Spotify URI,Voter ID,Created,Points Assigned,Comment,Round ID
spotify:track:b1,c1,2024-01-03T09:00:00Z,3,,r1
spotify:track:c1,c1,2024-01-03T09:00:00Z,1,,r1
spotify:track:a1,c2,2024-01-03T10:00:00Z,4,Bob loved this,r1
spotify:track:c1,c2,2024-01-03T10:00:00Z,0,Not my thing,r1
spotify:track:b2,c1,2024-01-10T09:00:00Z,2,,r2
spotify:track:a2,c2,2024-01-10T10:00:00Z,5,,r2
"""

EXPORT_FILES = {
    "competitors.csv": COMPETITORS_CSV,
    "rounds.csv": ROUNDS_CSV,
    "submissions.csv": SUBMISSIONS_CSV,
    "votes.csv": VOTES_CSV,
}


def make_zip(files: dict[str, str | bytes]) -> bytes:
    """Build an in-memory ZIP archive from {member name: content}."""
    buffer = io.BytesIO()
    with zipfile.ZipFile(buffer, "w") as archive:
        for name, content in files.items():
            archive.writestr(name, content)
    return buffer.getvalue()


@pytest.fixture
def export_files():
    return dict(EXPORT_FILES)


@pytest.fixture
def export_zip():
    return make_zip(EXPORT_FILES)


@pytest.fixture
def nested_export_zip():
    """The same export zipped inside a folder, as macOS does, with metadata."""
    files = {f"my-league/{name}": content for name, content in EXPORT_FILES.items()}
    files["my-league/metadata.json"] = json.dumps({
        "profileName": "Office League",
        "exportDate": "2024-02-01T00:00:00Z",
        "version": "1.0",
    })
    files["__MACOSX/my-league/._votes.csv"] = b"\x00\x05\x16\x07"
    return make_zip(files)
