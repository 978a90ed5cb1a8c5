"""Data types for GitHub GraphQL activity responses."""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from ghactivity.services.github.exceptions import (
    DecodeError,
    IntegrityError,
    ProtocolError,
)


@dataclass(frozen=True)
class ActivityQuery:
    """Who and when to fetch activity for. The interval is [start, end)."""

    username: str
    start: datetime
    end: datetime


@dataclass
class GraphQLResponse:
    """Decoded GraphQL envelope: `{"data": ..., "errors": [...]}`."""

    data: dict[str, Any] | None
    errors: list[dict[str, Any]] | None

    @property
    def error_messages(self) -> list[str]:
        return [
            str(e.get("message", e)) if isinstance(e, dict) else str(e)
            for e in self.errors or []
        ]

    def raise_for_errors(self, phase: str | None = None) -> None:
        """Raise ProtocolError if the reply carries a non-empty errors list."""
        if self.errors:
            messages = self.error_messages
            raise ProtocolError(
                f"GraphQL errors: {'; '.join(messages)}",
                messages=messages,
                phase=phase,
            )

    def require_data(self, phase: str | None = None) -> dict[str, Any]:
        """Return `data`, raising IntegrityError when the server sent none."""
        self.raise_for_errors(phase)
        if self.data is None:
            raise IntegrityError("No data received in response", phase=phase)
        return self.data


# ─────────────────────────────────────────────────────────────
# Response models (camelCase on the wire, snake_case in Python)
# ─────────────────────────────────────────────────────────────


class CamelModel(BaseModel):
    """Base model that reads and writes GraphQL camelCase field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class PageInfo(CamelModel):
    end_cursor: str | None = None
    has_next_page: bool = False


NodeT = TypeVar("NodeT")


class Connection(CamelModel, Generic[NodeT]):
    """Paginated list. `nodes` may be absent, which is not the same as empty."""

    total_count: int = 0
    page_info: PageInfo = PageInfo()
    nodes: list[NodeT] | None = None


class Repository(CamelModel):
    name_with_owner: str
    updated_at: str | None = None


class Issue(CamelModel):
    number: int
    title: str
    url: str
    created_at: str
    state: str
    closed_at: str | None = None
    repository: Repository | None = None


class IssueContributionNode(CamelModel):
    issue: Issue


class PullRequest(CamelModel):
    number: int
    title: str
    url: str
    created_at: str
    state: str
    merged: bool = False
    merged_at: str | None = None
    closed_at: str | None = None
    repository: Repository | None = None


class PullRequestContributionNode(CamelModel):
    pull_request: PullRequest


class ReviewedPullRequest(CamelModel):
    number: int
    title: str
    url: str
    repository: Repository | None = None


class PullRequestReview(CamelModel):
    pull_request: ReviewedPullRequest


class PullRequestReviewContributionNode(CamelModel):
    occurred_at: str
    pull_request_review: PullRequestReview


class ContributionDay(CamelModel):
    date: str
    contribution_count: int
    weekday: int


class ContributionWeek(CamelModel):
    contribution_days: list[ContributionDay] = []


class ContributionCalendar(CamelModel):
    total_contributions: int = 0
    weeks: list[ContributionWeek] = []


class CommitContributionCount(CamelModel):
    total_count: int


class RepositoryCommitContributions(CamelModel):
    repository: Repository
    contributions: CommitContributionCount


class ContributionsCollection(CamelModel):
    total_commit_contributions: int = 0
    total_issue_contributions: int = 0
    total_pull_request_contributions: int = 0
    total_pull_request_review_contributions: int = 0
    contribution_calendar: ContributionCalendar = ContributionCalendar()
    commit_contributions_by_repository: list[RepositoryCommitContributions] = []
    issue_contributions: Connection[IssueContributionNode] = Connection[IssueContributionNode]()
    pull_request_contributions: Connection[PullRequestContributionNode] = Connection[
        PullRequestContributionNode
    ]()
    pull_request_review_contributions: Connection[PullRequestReviewContributionNode] = Connection[
        PullRequestReviewContributionNode
    ]()


class ActivityUser(CamelModel):
    contributions_collection: ContributionsCollection


class ActivityData(CamelModel):
    """Aggregate result of one fetch: the `data` object of the UserActivity query."""

    user: ActivityUser | None = None


def parse_activity_data(data: dict[str, Any], phase: str | None = None) -> ActivityData:
    """
    Validate a raw `data` object into ActivityData.

    Raises:
        DecodeError: If the payload does not match the query's shape
        IntegrityError: If the user is missing from an otherwise valid reply
    """
    try:
        activity = ActivityData.model_validate(data)
    except ValidationError as e:
        raise DecodeError(f"Unexpected response shape: {e}", phase=phase) from e
    if activity.user is None:
        raise IntegrityError("No user data in response", phase=phase)
    return activity
