"""Vercel serverless function for computing league leaderboards."""

import json
import logging
import sys
from pathlib import Path
from urllib.parse import urlparse

import httpx

# Add the project root to the path so we can import the league package
sys.path.insert(0, str(Path(__file__).parent.parent))

from league.config import Config
from league.filters import LeaderboardFilters
from league.leaderboard import LeaderboardError, compute_leaderboard
from league.loaders import LoaderError, load_export
from league.metrics import UnknownMetricError

Config.validate()
logging.basicConfig(level=Config.LOG_LEVEL)
logger = logging.getLogger(__name__)


class ExportTooLargeError(LoaderError):
    """The export is bigger than LEAGUE_MAX_EXPORT_BYTES."""
    pass


def handler(request):
    """Handle incoming requests to compute a leaderboard.

    Accepts:
    - POST with JSON body: {"url": "https://...", "filters": {...}}
    - POST with multipart form: export upload in the 'file' field, with
      optional 'filename' and 'filters' (JSON string) fields

    Returns JSON with the ranked entries and league statistics.
    """
    # Handle CORS preflight
    if request.method == "OPTIONS":
        return create_response(
            "",
            status=204,
            headers={
                "Access-Control-Allow-Origin": "*",
                "Access-Control-Allow-Methods": "POST, OPTIONS",
                "Access-Control-Allow-Headers": "Content-Type",
            },
        )

    if request.method != "POST":
        return create_response(
            {"error": "Method not allowed. Use POST."},
            status=405,
        )

    try:
        content_type = request.headers.get("content-type", "")

        if "application/json" in content_type:
            # JSON body with URL
            data = json.loads(request.body.decode("utf-8"))
            url = data.get("url")

            if not url:
                return create_response(
                    {"error": "Missing 'url' in request body"},
                    status=400,
                )

            source, content = fetch_url(url)
            raw_filters = data.get("filters") or {}

        elif "multipart/form-data" in content_type:
            # File upload
            file_data = request.files.get("file")
            if not file_data:
                return create_response(
                    {"error": "Missing 'file' in form data"},
                    status=400,
                )

            source = request.form.get("filename", file_data.filename or "upload")
            content = file_data.read()
            raw_filters = json.loads(request.form.get("filters") or "{}")

        else:
            return create_response(
                {"error": f"Unsupported content type: {content_type}"},
                status=400,
            )

        check_export_size(len(content))
        filters = parse_filters(raw_filters)
        league_data = load_export(source, content)
        result = compute_leaderboard(league_data, filters)

        return create_response(result.to_dict())

    except ExportTooLargeError as e:
        return create_response(
            {"error": str(e)},
            status=413,
        )
    except (LoaderError, LeaderboardError, UnknownMetricError) as e:
        return create_response(
            {"error": str(e)},
            status=400,
        )
    except json.JSONDecodeError as e:
        return create_response(
            {"error": f"Invalid JSON: {e}"},
            status=400,
        )
    except Exception as e:
        logger.exception("Unhandled error computing leaderboard")
        return create_response(
            {"error": f"Internal error: {e}"},
            status=500,
        )


def parse_filters(raw: dict) -> LeaderboardFilters:
    """Build leaderboard filters from request JSON, using configured defaults."""
    if not isinstance(raw, dict):
        raise LeaderboardError("'filters' must be a JSON object")
    competitors = raw.get("competitors") or {}
    if not isinstance(competitors, dict):
        raise LeaderboardError("'competitors' must be a JSON object")
    try:
        if "min_participation" not in competitors:
            competitors = {**competitors, "min_participation": Config.MIN_PARTICIPATION}
        return LeaderboardFilters.from_dict(
            {**raw, "competitors": competitors}, default_metric=Config.DEFAULT_METRIC
        )
    except (AttributeError, TypeError, ValueError) as e:
        raise LeaderboardError(f"Invalid filters: {e}") from e


def check_export_size(size: int):
    """Raise ExportTooLargeError if an export exceeds the configured limit."""
    if size > Config.MAX_EXPORT_BYTES:
        raise ExportTooLargeError(f"Export is larger than {Config.MAX_EXPORT_BYTES} bytes")


def fetch_url(url: str) -> tuple[str, bytes]:
    """Fetch an export from a URL.

    The body is streamed and the download stops as soon as it passes
    LEAGUE_MAX_EXPORT_BYTES.

    Returns (source_identifier, content_bytes).
    """
    # Validate URL
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https"):
        raise LoaderError(f"Invalid URL scheme: {parsed.scheme}")

    try:
        with httpx.Client(follow_redirects=True, timeout=Config.FETCH_TIMEOUT) as client:
            with client.stream("GET", url) as response:
                response.raise_for_status()
                content = bytearray()
                for chunk in response.iter_bytes():
                    content.extend(chunk)
                    check_export_size(len(content))
                return url, bytes(content)
    except httpx.HTTPStatusError as e:
        raise LoaderError(f"HTTP error fetching URL: {e.response.status_code}")
    except httpx.RequestError as e:
        raise LoaderError(f"Error fetching URL: {e}")


def create_response(body, status: int = 200, headers: dict = None):
    """Create a response object for Vercel."""
    response_headers = {
        "Content-Type": "application/json",
        "Access-Control-Allow-Origin": "*",
    }
    if headers:
        response_headers.update(headers)

    if isinstance(body, dict):
        body = json.dumps(body)

    # Return in format expected by Vercel Python runtime
    return {
        "statusCode": status,
        "headers": response_headers,
        "body": body,
    }
