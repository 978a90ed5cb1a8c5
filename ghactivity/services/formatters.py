"""
Report formatters for fetched activity.

Plain text and Markdown share one interface; JSON is a straight dump of the
aggregate in the GraphQL field naming.
"""

from datetime import datetime
from typing import Protocol

from ghactivity.services.github.types import ActivityData

NO_USER_DATA = "No user data available.\n"


class ActivityFormatter(Protocol):
    def format(
        self,
        activity: ActivityData,
        start: datetime,
        end: datetime,
        username: str,
    ) -> str: ...


def _or_na(value: str | None) -> str:
    return value if value is not None else "N/A"


def _or_none(value: str | None) -> str:
    return value if value is not None else "None"


class PlainTextFormatter:
    """Plain text report, one labelled field per line."""

    def format(
        self,
        activity: ActivityData,
        start: datetime,
        end: datetime,
        username: str,
    ) -> str:
        if activity.user is None:
            return NO_USER_DATA

        cc = activity.user.contributions_collection
        lines: list[str] = [
            f"User: {username}",
            f"Time Period: {start.isoformat()} to {end.isoformat()}",
            f"Total Commit Contributions: {cc.total_commit_contributions}",
            f"Total Issue Contributions: {cc.total_issue_contributions}",
            f"Total Pull Request Contributions: {cc.total_pull_request_contributions}",
            f"Total Pull Request Review Contributions: {cc.total_pull_request_review_contributions}",
            "",
            "Contribution Calendar:",
            f"  Total Contributions: {cc.contribution_calendar.total_contributions}",
        ]
        for week in cc.contribution_calendar.weeks:
            for day in week.contribution_days:
                lines.append(
                    f"    {day.date}: {day.contribution_count} contributions (weekday {day.weekday})"
                )
        lines.append("")

        lines.append("Repository Contributions:")
        for repo_contrib in cc.commit_contributions_by_repository:
            lines.append(
                f"- {repo_contrib.repository.name_with_owner}: "
                f"{repo_contrib.contributions.total_count} commits"
            )
        lines.append("")

        lines.append("Issue Contributions:")
        for node in cc.issue_contributions.nodes or []:
            issue = node.issue
            lines.extend(
                [
                    f"- Issue #{issue.number}: {issue.title}",
                    f"  URL: {issue.url}",
                    f"  Created: {issue.created_at}",
                    f"  State: {issue.state}",
                    f"  Closed: {_or_none(issue.closed_at)}",
                ]
            )
        lines.append("")

        lines.append("Pull Request Contributions:")
        for node in cc.pull_request_contributions.nodes or []:
            pr = node.pull_request
            lines.extend(
                [
                    f"- PR #{pr.number}: {pr.title}",
                    f"  URL: {pr.url}",
                    f"  Created: {pr.created_at}",
                    f"  State: {pr.state}",
                    f"  Merged: {str(pr.merged).lower()}",
                    f"  Merged At: {_or_none(pr.merged_at)}",
                    f"  Closed: {_or_none(pr.closed_at)}",
                ]
            )
        lines.append("")

        lines.append("Pull Request Review Contributions:")
        for node in cc.pull_request_review_contributions.nodes or []:
            reviewed = node.pull_request_review.pull_request
            lines.extend(
                [
                    f"- PR Review for PR #{reviewed.number}: {reviewed.title}",
                    f"  URL: {reviewed.url}",
                    f"  Occurred At: {node.occurred_at}",
                ]
            )

        return "\n".join(lines) + "\n"


class MarkdownFormatter:
    """Markdown report with a summary list and one table per activity kind."""

    def format(
        self,
        activity: ActivityData,
        start: datetime,
        end: datetime,
        username: str,
    ) -> str:
        if activity.user is None:
            return NO_USER_DATA

        cc = activity.user.contributions_collection
        lines: list[str] = [
            f"# GitHub Activity Report for {username}",
            "",
            f"**Time Period:** {start.isoformat()} to {end.isoformat()}",
            "",
            "## Summary",
            "",
            f"- **Total Commit Contributions:** {cc.total_commit_contributions}",
            f"- **Total Issue Contributions:** {cc.total_issue_contributions}",
            f"- **Total Pull Request Contributions:** {cc.total_pull_request_contributions}",
            f"- **Total Pull Request Review Contributions:** "
            f"{cc.total_pull_request_review_contributions}",
            "",
            "## Contribution Calendar",
            "",
            f"**Total Contributions:** {cc.contribution_calendar.total_contributions}",
            "",
        ]
        for week in cc.contribution_calendar.weeks:
            for day in week.contribution_days:
                lines.append(
                    f"* {day.date}: {day.contribution_count} contributions (weekday {day.weekday})"
                )
        lines.append("")

        lines.extend(
            [
                "## Repository Contributions",
                "",
                "| Repository             | Commits |",
                "|------------------------|---------|",
            ]
        )
        for repo_contrib in cc.commit_contributions_by_repository:
            lines.append(
                f"| {repo_contrib.repository.name_with_owner:<22} | "
                f"{repo_contrib.contributions.total_count:>7} |"
            )
        lines.append("")

        lines.extend(
            [
                "## Issue Contributions",
                "",
                "| Issue # | Title | URL | Created At | State | Closed At |",
                "|---------|-------|-----|------------|-------|-----------|",
            ]
        )
        for node in cc.issue_contributions.nodes or []:
            issue = node.issue
            lines.append(
                f"| {issue.number} | {issue.title} | {issue.url} | {issue.created_at} "
                f"| {issue.state} | {_or_na(issue.closed_at)} |"
            )
        lines.append("")

        lines.extend(
            [
                "## Pull Request Contributions",
                "",
                "| PR # | Title | URL | Created At | State | Merged | Merged At | Closed At |",
                "|------|-------|-----|------------|-------|--------|-----------|-----------|",
            ]
        )
        for node in cc.pull_request_contributions.nodes or []:
            pr = node.pull_request
            lines.append(
                f"| {pr.number} | {pr.title} | {pr.url} | {pr.created_at} | {pr.state} "
                f"| {str(pr.merged).lower()} | {_or_na(pr.merged_at)} | {_or_na(pr.closed_at)} |"
            )
        lines.append("")

        lines.extend(
            [
                "## Pull Request Review Contributions",
                "",
                "| PR # | Title | URL | Occurred At |",
                "|------|-------|-----|-------------|",
            ]
        )
        for node in cc.pull_request_review_contributions.nodes or []:
            reviewed = node.pull_request_review.pull_request
            lines.append(
                f"| {reviewed.number} | {reviewed.title} | {reviewed.url} | {node.occurred_at} |"
            )

        return "\n".join(lines) + "\n"


def format_json(activity: ActivityData) -> str:
    """Pretty-printed JSON using the GraphQL camelCase field names."""
    return activity.model_dump_json(by_alias=True, indent=2)


FORMATTERS: dict[str, ActivityFormatter] = {
    "plain": PlainTextFormatter(),
    "markdown": MarkdownFormatter(),
}


def get_formatter(name: str) -> ActivityFormatter:
    """Look up the text formatter for an output format name ("plain" or "markdown")."""
    try:
        return FORMATTERS[name]
    except KeyError:
        raise ValueError(f"Unknown output format: {name}") from None
