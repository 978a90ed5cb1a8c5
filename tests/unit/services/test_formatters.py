"""Unit tests for plain text, Markdown and JSON report formatters."""

import json
from datetime import UTC, datetime

import pytest

from ghactivity.services.formatters import (
    MarkdownFormatter,
    PlainTextFormatter,
    format_json,
    get_formatter,
)
from ghactivity.services.github.types import ActivityData
from tests.helpers.graphql_factories import (
    make_activity_payload,
    make_connection,
    make_issue_node,
    make_pr_node,
    make_review_node,
)

START = datetime(2025, 3, 10, tzinfo=UTC)
END = datetime(2025, 3, 17, tzinfo=UTC)


@pytest.fixture
def activity() -> ActivityData:
    payload = make_activity_payload(
        issues=make_connection([make_issue_node(1, title="Issue One")]),
        prs=make_connection(
            [
                make_pr_node(
                    101,
                    title="PR One",
                    state="MERGED",
                    merged=True,
                    mergedAt="2025-03-12T00:00:00Z",
                    closedAt="2025-03-12T00:00:00Z",
                )
            ]
        ),
        reviews=make_connection([make_review_node(201)]),
        total_commit_contributions=10,
        total_issue_contributions=5,
        total_pull_request_contributions=3,
        total_pull_request_review_contributions=2,
    )
    return ActivityData.model_validate(payload)


class TestPlainTextFormatter:
    """Tests for the plain text report."""

    def test_contains_summary_and_sections(self, activity):
        output = PlainTextFormatter().format(activity, START, END, "octocat")

        assert "User: octocat" in output
        assert "Time Period: 2025-03-10T00:00:00+00:00 to 2025-03-17T00:00:00+00:00" in output
        assert "Total Commit Contributions: 10" in output
        assert "Total Pull Request Review Contributions: 2" in output
        assert "    2025-03-11: 1 contributions (weekday 2)" in output
        assert "- org1/repo1: 10 commits" in output
        assert "- Issue #1: Issue One" in output
        assert "  Closed: None" in output
        assert "- PR #101: PR One" in output
        assert "  Merged: true" in output
        assert "- PR Review for PR #201: Reviewed PR 201" in output

    def test_no_user(self):
        output = PlainTextFormatter().format(ActivityData(user=None), START, END, "octocat")
        assert output == "No user data available.\n"


class TestMarkdownFormatter:
    """Tests for the Markdown report."""

    def test_contains_headers_and_tables(self, activity):
        output = MarkdownFormatter().format(activity, START, END, "octocat")

        assert output.startswith("# GitHub Activity Report for octocat\n")
        assert "- **Total Commit Contributions:** 10" in output
        assert "| org1/repo1             |      10 |" in output
        assert "| Issue # | Title | URL | Created At | State | Closed At |" in output
        assert "| 101 | PR One |" in output
        assert "| true | 2025-03-12T00:00:00Z | 2025-03-12T00:00:00Z |" in output
        assert "| 201 | Reviewed PR 201 |" in output

    def test_missing_timestamps_render_as_na(self, activity):
        output = MarkdownFormatter().format(activity, START, END, "octocat")

        issue_row = next(line for line in output.splitlines() if line.startswith("| 1 |"))
        assert issue_row.endswith("| OPEN | N/A |")

    def test_no_user(self):
        output = MarkdownFormatter().format(ActivityData(user=None), START, END, "octocat")
        assert output == "No user data available.\n"


class TestFormatJson:
    """Tests for the JSON dump."""

    def test_uses_graphql_field_names(self, activity):
        data = json.loads(format_json(activity))

        cc = data["user"]["contributionsCollection"]
        assert cc["totalCommitContributions"] == 10
        assert cc["issueContributions"]["nodes"][0]["issue"]["number"] == 1
        assert cc["pullRequestContributions"]["pageInfo"] == {
            "endCursor": None,
            "hasNextPage": False,
        }

    def test_round_trips_through_model(self, activity):
        restored = ActivityData.model_validate_json(format_json(activity))
        assert restored.model_dump() == activity.model_dump()


class TestGetFormatter:
    def test_known_names(self):
        assert isinstance(get_formatter("plain"), PlainTextFormatter)
        assert isinstance(get_formatter("markdown"), MarkdownFormatter)

    def test_unknown_name(self):
        with pytest.raises(ValueError, match="Unknown output format"):
            get_formatter("html")
