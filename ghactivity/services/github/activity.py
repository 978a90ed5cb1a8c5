"""
User activity orchestration.

Fetches the non-paginated summary once, then drains the issue, pull request
and pull request review connections concurrently and merges the complete
node lists back into the summary.
"""

import asyncio
import logging
from typing import Any

from ghactivity.config import Settings, settings as default_settings
from ghactivity.services.github.constants import (
    DEFAULT_PAGE_SIZE,
    PHASE_ISSUES,
    PHASE_PULL_REQUEST_REVIEWS,
    PHASE_PULL_REQUESTS,
    PHASE_SUMMARY,
)
from ghactivity.services.github.exceptions import FetchCancelledError, GitHubAPIError
from ghactivity.services.github.pagination import PageFetcher
from ghactivity.services.github.queries import build_variables
from ghactivity.services.github.transport import GraphQLTransport
from ghactivity.services.github.types import (
    ActivityData,
    ActivityQuery,
    IssueContributionNode,
    PageInfo,
    PullRequestContributionNode,
    PullRequestReviewContributionNode,
    parse_activity_data,
)

logger = logging.getLogger(__name__)


class ActivityFetcher:
    """
    Fetches a user's complete contribution activity for a date range.

    The summary request supplies every scalar total, the contribution
    calendar and the per-repository commit counts. Those are never refetched;
    the three paginated drains only replace the connection node lists.
    """

    def __init__(self, transport: GraphQLTransport, page_size: int = DEFAULT_PAGE_SIZE):
        if page_size < 1:
            raise ValueError("page_size must be at least 1")
        self.transport = transport
        self.page_size = page_size
        self.pages = PageFetcher(transport)

    async def fetch_activity(
        self,
        query: ActivityQuery,
        cancel_event: asyncio.Event | None = None,
    ) -> ActivityData:
        """
        Fetch summary data and every page of each paginated connection.

        Args:
            query: Username and [start, end) interval
            cancel_event: Optional signal; once set, no further requests are made

        Returns:
            ActivityData with fully populated node lists

        Raises:
            GitHubAPIError: Classified failure, `phase` names where it happened
            FetchCancelledError: If `cancel_event` was set
        """
        logger.info(
            f"Fetching activity for {query.username} from {query.start.isoformat()} "
            f"to {query.end.isoformat()}"
        )
        activity = await self._fetch_summary(query, cancel_event)

        issues, prs, pr_reviews = await self._drain_connections(query, cancel_event)

        # Overwrite first-page node lists with the fully drained ones
        collection = activity.user.contributions_collection
        collection.issue_contributions.nodes = issues
        collection.pull_request_contributions.nodes = prs
        collection.pull_request_review_contributions.nodes = pr_reviews

        logger.info("All pagination complete; returning merged data")
        return activity

    async def _fetch_summary(
        self,
        query: ActivityQuery,
        cancel_event: asyncio.Event | None,
    ) -> ActivityData:
        """Issue the one-shot summary request with no cursors."""
        if cancel_event is not None and cancel_event.is_set():
            raise FetchCancelledError(PHASE_SUMMARY)

        try:
            response = await self.transport.send(build_variables(query, self.page_size))
            if response.errors:
                logger.error(f"GraphQL errors in summary request: {response.error_messages}")
            data = response.require_data(PHASE_SUMMARY)
            return parse_activity_data(data, PHASE_SUMMARY)
        except GitHubAPIError as e:
            if e.phase is None:
                e.phase = PHASE_SUMMARY
            raise

    async def _drain_connections(
        self,
        query: ActivityQuery,
        cancel_event: asyncio.Event | None,
    ) -> tuple[
        list[IssueContributionNode],
        list[PullRequestContributionNode],
        list[PullRequestReviewContributionNode],
    ]:
        """
        Run the three drains concurrently.

        All three run to completion (or failure) before anything is reported.
        If any failed, the first failure in issues, pull requests, reviews
        order is raised and the other results are discarded.
        """
        page_size = self.page_size

        def issue_variables(cursor: str | None) -> dict[str, Any]:
            return build_variables(query, page_size, issues_after=cursor)

        def pr_variables(cursor: str | None) -> dict[str, Any]:
            return build_variables(query, page_size, prs_after=cursor)

        def pr_review_variables(cursor: str | None) -> dict[str, Any]:
            return build_variables(query, page_size, pr_reviews_after=cursor)

        def select_issues(data: dict[str, Any]) -> tuple[list[IssueContributionNode] | None, PageInfo]:
            conn = parse_activity_data(data, PHASE_ISSUES).user.contributions_collection.issue_contributions
            return conn.nodes, conn.page_info

        def select_prs(
            data: dict[str, Any],
        ) -> tuple[list[PullRequestContributionNode] | None, PageInfo]:
            conn = parse_activity_data(
                data, PHASE_PULL_REQUESTS
            ).user.contributions_collection.pull_request_contributions
            return conn.nodes, conn.page_info

        def select_pr_reviews(
            data: dict[str, Any],
        ) -> tuple[list[PullRequestReviewContributionNode] | None, PageInfo]:
            conn = parse_activity_data(
                data, PHASE_PULL_REQUEST_REVIEWS
            ).user.contributions_collection.pull_request_review_contributions
            return conn.nodes, conn.page_info

        results = await asyncio.gather(
            self.pages.drain(
                issue_variables, select_issues, phase=PHASE_ISSUES, cancel_event=cancel_event
            ),
            self.pages.drain(
                pr_variables, select_prs, phase=PHASE_PULL_REQUESTS, cancel_event=cancel_event
            ),
            self.pages.drain(
                pr_review_variables,
                select_pr_reviews,
                phase=PHASE_PULL_REQUEST_REVIEWS,
                cancel_event=cancel_event,
            ),
            return_exceptions=True,
        )

        for result in results:
            if isinstance(result, BaseException):
                logger.error(f"Activity fetch failed: {result}")
                raise result

        issues, prs, pr_reviews = results
        return issues, prs, pr_reviews


async def fetch_activity(
    query: ActivityQuery,
    config: Settings | None = None,
    cancel_event: asyncio.Event | None = None,
) -> ActivityData:
    """
    Fetch activity using endpoint, token and page size from settings.

    Args:
        query: Username and [start, end) interval
        config: Settings to use (defaults to the module-level settings)
        cancel_event: Optional cancellation signal

    Returns:
        Merged ActivityData
    """
    config = config or default_settings
    transport = GraphQLTransport(
        token=config.github_token,
        url=config.github_graphql_url,
        timeout=config.request_timeout,
    )
    fetcher = ActivityFetcher(transport, page_size=config.page_size)
    return await fetcher.fetch_activity(query, cancel_event=cancel_event)
