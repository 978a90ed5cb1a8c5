"""Unit tests for the command-line entry point."""

from __future__ import annotations

import argparse
import json
from datetime import UTC, datetime, timedelta
from pathlib import Path
from unittest.mock import AsyncMock, patch

import pytest

from ghactivity.config import Settings
from ghactivity.main import (
    format_error,
    github_username,
    infer_output_format,
    main,
    parse_args,
    resolve_date_range,
)
from ghactivity.services.github.exceptions import (
    DecodeError,
    FetchCancelledError,
    IntegrityError,
    ProtocolError,
    TransportError,
)
from ghactivity.services.github.types import ActivityData
from tests.helpers.graphql_factories import make_activity_payload

NOW = datetime(2025, 3, 17, 12, 0, tzinfo=UTC)


class TestGithubUsername:
    """Tests for username validation."""

    @pytest.mark.parametrize("name", ["octocat", "a", "my-user-1", "A" * 39])
    def test_accepts_valid(self, name):
        assert github_username(name) == name

    @pytest.mark.parametrize(
        ("name", "message"),
        [
            ("", "empty"),
            ("a" * 40, "longer than 39"),
            ("-leading", "invalid characters"),
            ("trailing-", "invalid characters"),
            ("under_score", "invalid characters"),
        ],
    )
    def test_rejects_invalid(self, name, message):
        with pytest.raises(argparse.ArgumentTypeError, match=message):
            github_username(name)


class TestDateRange:
    """Tests for period/start/end resolution."""

    def test_defaults_to_one_week_ending_now(self):
        start, end = resolve_date_range(None, None, None, now=NOW)
        assert end == NOW
        assert end - start == timedelta(weeks=1)

    def test_period_month_is_thirty_days(self):
        start, end = resolve_date_range(timedelta(days=30), None, None, now=NOW)
        assert end - start == timedelta(days=30)

    def test_explicit_range(self):
        start = datetime(2025, 1, 1, tzinfo=UTC)
        end = datetime(2025, 2, 1, tzinfo=UTC)
        assert resolve_date_range(None, start, end) == (start, end)

    def test_start_not_before_end_is_rejected(self):
        with pytest.raises(ValueError, match="must be before"):
            resolve_date_range(None, NOW, NOW)

    def test_parse_args_treats_naive_dates_as_utc(self):
        args = parse_args(["-u", "octocat", "--start", "2025-03-01", "--end", "2025-04-01"])
        assert args.start == datetime(2025, 3, 1, tzinfo=UTC)
        assert args.end == datetime(2025, 4, 1, tzinfo=UTC)

    def test_parse_args_rejects_period_with_start(self):
        with pytest.raises(SystemExit):
            parse_args(["-u", "octocat", "-p", "day", "--start", "2025-03-01"])

    def test_parse_args_rejects_bad_period(self):
        with pytest.raises(SystemExit):
            parse_args(["-u", "octocat", "-p", "year"])


class TestInferOutputFormat:
    @pytest.mark.parametrize(
        ("path", "expected"),
        [
            ("report.md", "markdown"),
            ("report.MARKDOWN", "markdown"),
            ("report.txt", "plain"),
            ("report.json", "json"),
            ("report.html", "plain"),
            ("report", "plain"),
        ],
    )
    def test_extension_wins_over_default(self, path, expected):
        assert infer_output_format(Path(path), "plain") == expected

    def test_no_output_uses_default(self):
        assert infer_output_format(None, "markdown") == "markdown"


class TestFormatError:
    """Tests for user-facing error wording."""

    def test_network(self):
        assert format_error(TransportError("refused")).startswith("Network error")

    def test_http_status(self):
        assert format_error(TransportError("bad token", 401)).startswith("HTTP error")

    def test_decode(self):
        assert format_error(DecodeError("bad json")).startswith("Data parsing error")

    def test_protocol_includes_phase(self):
        error = ProtocolError("GraphQL errors: boom", phase="pull_request_reviews")
        assert format_error(error) == "GitHub API error: [pull_request_reviews] GraphQL errors: boom"

    def test_integrity(self):
        assert format_error(IntegrityError("No data")).startswith("Missing data")

    def test_cancelled(self):
        assert "cancelled during issues" in format_error(FetchCancelledError("issues"))


class TestMain:
    """Tests for the end-to-end CLI flow with the fetch mocked out."""

    @pytest.fixture
    def activity(self) -> ActivityData:
        return ActivityData.model_validate(make_activity_payload(total_commit_contributions=4))

    @patch("ghactivity.main.settings", Settings(github_token=""))
    def test_missing_token_exits_non_zero(self, capsys):
        assert main(["-u", "octocat"]) == 1
        assert "GITHUB_TOKEN" in capsys.readouterr().err

    @patch("ghactivity.main.close_github_client", new_callable=AsyncMock)
    @patch("ghactivity.main.fetch_activity", new_callable=AsyncMock)
    @patch("ghactivity.main.settings", Settings(github_token="ghp_x"))
    def test_prints_plain_report(self, mock_fetch, mock_close, activity, capsys):
        mock_fetch.return_value = activity

        assert main(["-u", "octocat", "-p", "day"]) == 0

        out = capsys.readouterr().out
        assert "User: octocat" in out
        assert "Total Commit Contributions: 4" in out
        mock_close.assert_awaited_once()

    @patch("ghactivity.main.close_github_client", new_callable=AsyncMock)
    @patch("ghactivity.main.fetch_activity", new_callable=AsyncMock)
    @patch("ghactivity.main.settings", Settings(github_token="ghp_x"))
    def test_writes_json_inferred_from_extension(
        self, mock_fetch, mock_close, activity, tmp_path, capsys
    ):
        mock_fetch.return_value = activity
        output = tmp_path / "report.json"

        assert main(["-u", "octocat", "-o", str(output)]) == 0

        data = json.loads(output.read_text(encoding="utf-8"))
        assert data["user"]["contributionsCollection"]["totalCommitContributions"] == 4
        assert "Report saved to" in capsys.readouterr().out

    @patch("ghactivity.main.close_github_client", new_callable=AsyncMock)
    @patch("ghactivity.main.fetch_activity", new_callable=AsyncMock)
    @patch("ghactivity.main.settings", Settings(github_token="ghp_x"))
    def test_applies_org_filter(self, mock_fetch, mock_close, activity, capsys):
        mock_fetch.return_value = activity

        assert main(["-u", "octocat", "--org", "other", "-f", "markdown"]) == 0

        assert "org1/repo1" not in capsys.readouterr().out

    @patch("ghactivity.main.close_github_client", new_callable=AsyncMock)
    @patch("ghactivity.main.fetch_activity", new_callable=AsyncMock)
    @patch("ghactivity.main.settings", Settings(github_token="ghp_x"))
    def test_fetch_error_exits_non_zero_and_closes_client(self, mock_fetch, mock_close, capsys):
        mock_fetch.side_effect = ProtocolError("GraphQL errors: nope", phase="summary")

        assert main(["-u", "octocat"]) == 1

        assert "Error: GitHub API error: [summary]" in capsys.readouterr().err
        mock_close.assert_awaited_once()
