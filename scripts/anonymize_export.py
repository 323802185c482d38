"""Anonymize a Music League export ZIP.

Reads the competitors file to discover every participant's name, generates
fake replacements using faker with a fixed seed, and writes a copy of the
archive in which names are replaced everywhere (including vote and
submission comments). Competitor IDs are replaced with fresh random hex IDs
so the fixture cannot be traced back to the real league.

Usage:
    python scripts/anonymize_export.py path/to/export.zip
    python scripts/anonymize_export.py path/to/export.zip -o output.zip
"""

import argparse
import csv
import io
import sys
import zipfile
from pathlib import Path, PurePosixPath

from faker import Faker

sys.path.insert(0, str(Path(__file__).parent.parent))

from league.loaders.zip_export import ZipExportLoader

FIXTURES_DIR = Path(__file__).parent.parent / "tests" / "test_loaders" / "fixtures"
DEFAULT_OUTPUT = FIXTURES_DIR / "league-export.zip"

SEED = 20251019


def read_tables(archive: zipfile.ZipFile) -> dict[str, tuple[str, str]]:
    """Return file_type -> (member name, CSV text) for each export CSV."""
    tables = {}
    for member in archive.namelist():
        if not member.lower().endswith(".csv") or "__MACOSX" in member:
            continue
        text = archive.read(member).decode("utf-8-sig")
        columns = next(csv.reader(io.StringIO(text)), [])
        file_type = ZipExportLoader.detect_file_type(columns, PurePosixPath(member).name)
        if file_type:
            tables[file_type] = (member, text)
    return tables


def discover_competitors(competitors_csv: str) -> dict[str, str]:
    """Return competitor ID -> name from the competitors CSV."""
    reader = csv.DictReader(io.StringIO(competitors_csv))
    return {row["ID"]: row["Name"] for row in reader if row.get("ID")}


def generate_replacements(competitors: dict[str, str], seed: int) -> dict[str, str]:
    """Generate a mapping of real names and IDs to fake ones.

    Display names get fake first names (Music League names are usually
    short), IDs get random 32-character hex strings.
    """
    fake = Faker(["en_US", "en_GB", "de_DE", "fr_FR"])
    Faker.seed(seed)

    real_names = {name.lower() for name in competitors.values()}
    used_fakes: set[str] = set()
    mapping: dict[str, str] = {}

    for competitor_id, name in sorted(competitors.items()):
        fake_name = fake.first_name()
        while fake_name.lower() in real_names or fake_name.lower() in used_fakes:
            fake_name = fake.first_name()
        used_fakes.add(fake_name.lower())

        mapping[name] = fake_name
        mapping[competitor_id] = fake.hexify("^" * 32)

    return mapping


def apply_replacements(text: str, mapping: dict[str, str]) -> str:
    """Apply all replacements to a CSV text.

    Replaces longer strings first to avoid partial matches.
    """
    for original in sorted(mapping, key=len, reverse=True):
        text = text.replace(original, mapping[original])
    return text


def main():
    parser = argparse.ArgumentParser(
        description="Anonymize a Music League export ZIP")
    parser.add_argument("input", help="Path to the input ZIP file")
    parser.add_argument("-o", "--output", default=str(DEFAULT_OUTPUT),
                        help=f"Output path (default: {DEFAULT_OUTPUT})")
    args = parser.parse_args()

    with zipfile.ZipFile(args.input) as archive:
        tables = read_tables(archive)

    if "competitors" not in tables:
        print("ERROR: no competitors CSV found in the archive")
        sys.exit(1)

    competitors = discover_competitors(tables["competitors"][1])
    print(f"Found {len(competitors)} competitors")

    mapping = generate_replacements(competitors, SEED)
    for competitor_id, name in sorted(competitors.items()):
        print(f"  {name} -> {mapping[name]}")

    output_path = Path(args.output)
    output_path.parent.mkdir(parents=True, exist_ok=True)

    remaining = set()
    with zipfile.ZipFile(output_path, "w", zipfile.ZIP_DEFLATED) as out:
        for file_type, (member, text) in sorted(tables.items()):
            result = apply_replacements(text, mapping)
            remaining.update(name for name in competitors.values() if name in result)
            out.writestr(f"{file_type}.csv", result)

    # Verify no original names remain
    if remaining:
        print(f"WARNING: {len(remaining)} names still found: {sorted(remaining)}")
    else:
        print("All names successfully replaced.")

    print(f"Written to {output_path}")


if __name__ == "__main__":
    main()
