"""
Cursor pagination over a single GraphQL connection.

`PageFetcher.drain` is the one loop every paginated activity kind goes
through; callers plug in how to build variables for a cursor and how to pick
the connection out of a page.
"""

import asyncio
import logging
from collections.abc import Callable
from typing import Any, TypeVar

from ghactivity.services.github.exceptions import (
    FetchCancelledError,
    GitHubAPIError,
    ProtocolError,
)
from ghactivity.services.github.transport import GraphQLTransport
from ghactivity.services.github.types import PageInfo

logger = logging.getLogger(__name__)

T = TypeVar("T")

BuildVariables = Callable[[str | None], dict[str, Any]]


class PageFetcher:
    """Drains paginated connections through a shared transport."""

    def __init__(self, transport: GraphQLTransport):
        self.transport = transport

    async def drain(
        self,
        build_variables: BuildVariables,
        select_page: Callable[[dict[str, Any]], tuple[list[T] | None, PageInfo]],
        *,
        phase: str,
        cancel_event: asyncio.Event | None = None,
    ) -> list[T]:
        """
        Fetch every page of one connection and return all nodes in order.

        Requests are strictly sequential: page N+1 is only requested once
        page N's endCursor is known. Any failure discards what has been
        accumulated so far.

        Args:
            build_variables: Maps the current cursor (None for the first
                page) to request variables
            select_page: Extracts (nodes, page_info) from a page's `data`
            phase: Name of the connection, attached to errors and logs
            cancel_event: When set, no further page is requested

        Returns:
            All nodes across all pages, in page-arrival order

        Raises:
            GitHubAPIError: Any transport, decode, protocol or integrity
                failure, with `phase` set
            FetchCancelledError: If `cancel_event` was set
        """
        all_nodes: list[T] = []
        cursor: str | None = None
        page_number = 0

        while True:
            if cancel_event is not None and cancel_event.is_set():
                logger.info(f"Pagination for {phase} cancelled after {page_number} page(s)")
                raise FetchCancelledError(phase)

            page_number += 1
            try:
                response = await self.transport.send(build_variables(cursor))
                if response.errors:
                    logger.error(f"GraphQL pagination errors for {phase}: {response.error_messages}")
                data = response.require_data(phase)
                nodes, page_info = select_page(data)
            except GitHubAPIError as e:
                if e.phase is None:
                    e.phase = phase
                raise

            if nodes is not None:
                logger.debug(f"Fetched {len(nodes)} {phase} node(s) on page {page_number}")
                all_nodes.extend(nodes)
            else:
                logger.debug(f"No {phase} nodes on page {page_number}")

            if not page_info.has_next_page:
                break
            if page_info.end_cursor is None:
                raise ProtocolError(
                    "Server reported hasNextPage without an endCursor",
                    phase=phase,
                )
            cursor = page_info.end_cursor

        logger.info(f"Pagination for {phase} complete: {len(all_nodes)} node(s) in {page_number} page(s)")
        return all_nodes
