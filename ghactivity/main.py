"""
Command-line entry point: fetch a user's GitHub activity and print a report.

Usage:
    python -m ghactivity --username octocat --period week
    python -m ghactivity -u octocat --start 2025-03-01 --end 2025-04-01 -o report.md
"""

import argparse
import asyncio
import logging
import re
import sys
from datetime import UTC, datetime, timedelta
from pathlib import Path

from ghactivity.config import Settings, settings
from ghactivity.services import filter_activity, format_json, get_formatter
from ghactivity.services.github import (
    ActivityQuery,
    DecodeError,
    FetchCancelledError,
    GitHubAPIError,
    IntegrityError,
    ProtocolError,
    TransportError,
    close_github_client,
    fetch_activity,
)

logger = logging.getLogger(__name__)

USERNAME_PATTERN = re.compile(r"^[a-zA-Z0-9](?:[a-zA-Z0-9-]*[a-zA-Z0-9])?$")
MAX_USERNAME_LENGTH = 39

PERIODS: dict[str, timedelta] = {
    "day": timedelta(days=1),
    "week": timedelta(weeks=1),
    "month": timedelta(days=30),
}

OUTPUT_FORMATS = ("plain", "markdown", "json")

EXTENSION_FORMATS: dict[str, str] = {
    ".md": "markdown",
    ".markdown": "markdown",
    ".txt": "plain",
    ".json": "json",
}


def setup_logging(debug: bool = False) -> None:
    """Configure application logging."""
    # Format: timestamp - level - logger name - message
    log_format = "%(asctime)s | %(levelname)-7s | %(name)s | %(message)s"
    date_format = "%H:%M:%S"

    # Logs go to stderr so stdout carries only the report
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format=log_format,
        datefmt=date_format,
        stream=sys.stderr,
        force=True,
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("hpack").setLevel(logging.WARNING)


def github_username(value: str) -> str:
    """argparse type: GitHub login (letters, digits, inner hyphens; max 39 chars)."""
    if not value:
        raise argparse.ArgumentTypeError("Username cannot be empty")
    if len(value) > MAX_USERNAME_LENGTH:
        raise argparse.ArgumentTypeError(
            f"Username cannot be longer than {MAX_USERNAME_LENGTH} characters"
        )
    if not USERNAME_PATTERN.match(value):
        raise argparse.ArgumentTypeError(
            "Username contains invalid characters. Allowed: letters, digits, and "
            "hyphens (but not at the beginning or end)"
        )
    return value


def period(value: str) -> timedelta:
    """argparse type: "day", "week" or "month"."""
    try:
        return PERIODS[value.lower()]
    except KeyError:
        raise argparse.ArgumentTypeError(
            f"Invalid period: {value}. Use 'day', 'week', or 'month'"
        ) from None


def timestamp(value: str) -> datetime:
    """argparse type: ISO date or datetime. Naive values are taken as UTC."""
    try:
        parsed = datetime.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Invalid date: {value}") from None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="ghactivity",
        description="Fetch and report a user's GitHub activity over a time period.",
    )
    p.add_argument(
        "-u", "--username", required=True, type=github_username, help="GitHub username."
    )
    p.add_argument(
        "-p",
        "--period",
        type=period,
        help="Time period ending now: day, week or month (default: week).",
    )
    p.add_argument("--start", type=timestamp, help="Start of the range (ISO date/datetime).")
    p.add_argument("--end", type=timestamp, help="End of the range (default: now).")
    p.add_argument("--repo", help="Only keep commit contributions to this owner/name repository.")
    p.add_argument("--org", help="Only keep commit contributions to this organization's repos.")
    p.add_argument(
        "-f",
        "--format",
        choices=OUTPUT_FORMATS,
        default="plain",
        help="Output format (default: plain).",
    )
    p.add_argument(
        "-o",
        "--output",
        type=Path,
        help="Write the report to this file; format is inferred from the extension.",
    )
    p.add_argument("--debug", action="store_true", help="Enable debug logging.")
    return p


def parse_args(argv: list[str] | None = None) -> argparse.Namespace:
    parser = build_parser()
    args = parser.parse_args(argv)
    if args.period is not None and args.start is not None:
        parser.error("--period cannot be combined with --start")
    try:
        args.start, args.end = resolve_date_range(args.period, args.start, args.end)
    except ValueError as e:
        parser.error(str(e))
    return args


def resolve_date_range(
    period_length: timedelta | None,
    start: datetime | None,
    end: datetime | None,
    now: datetime | None = None,
) -> tuple[datetime, datetime]:
    """
    Turn CLI options into a [start, end) range.

    Raises:
        ValueError: If start is not before end
    """
    end = end or now or datetime.now(UTC)
    if start is None:
        start = end - (period_length or PERIODS["week"])
    if start >= end:
        raise ValueError(f"Start date {start.isoformat()} must be before end date {end.isoformat()}")
    return start, end


def infer_output_format(output: Path | None, default: str) -> str:
    """Pick the output format from the file extension, falling back to `default`."""
    if output is None:
        return default
    return EXTENSION_FORMATS.get(output.suffix.lower(), default)


def format_error(error: BaseException) -> str:
    """Format an error message for the user."""
    if isinstance(error, TransportError):
        if error.status_code is not None:
            return f"HTTP error: {error}"
        return f"Network error: {error}"
    if isinstance(error, DecodeError):
        return f"Data parsing error: {error}"
    if isinstance(error, ProtocolError):
        return f"GitHub API error: {error}"
    if isinstance(error, IntegrityError):
        return f"Missing data: {error}"
    return str(error)


async def run(args: argparse.Namespace, config: Settings) -> str:
    """Fetch, filter and render activity; returns the report text."""
    query = ActivityQuery(username=args.username, start=args.start, end=args.end)
    logger.info(f"Fetching activity from {query.start} to {query.end}")

    try:
        activity = await fetch_activity(query, config)
    finally:
        await close_github_client()
    logger.info("Activity fetched successfully")

    filtered = filter_activity(activity, repo=args.repo, org=args.org)

    output_format = infer_output_format(args.output, args.format)
    if output_format == "json":
        return format_json(filtered)
    return get_formatter(output_format).format(filtered, query.start, query.end, query.username)


def main(argv: list[str] | None = None) -> int:
    args = parse_args(argv)
    setup_logging(debug=args.debug or settings.debug)
    logger.info(f"Starting GitHub activity fetch for user: {args.username}")

    if not settings.has_token:
        print("Error: GITHUB_TOKEN environment variable is required", file=sys.stderr)
        return 1

    try:
        report = asyncio.run(run(args, settings))
    except (GitHubAPIError, FetchCancelledError) as e:
        print(f"Error: {format_error(e)}", file=sys.stderr)
        return 1

    if args.output is not None:
        try:
            args.output.write_text(report, encoding="utf-8")
        except OSError as e:
            print(f"Error: Failed to write report to {args.output}: {e}", file=sys.stderr)
            return 1
        print(f"Report saved to {args.output}")
    else:
        print(report, end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
