"""
Shared HTTP client for GitHub GraphQL calls.

Provides a singleton AsyncClient with connection pooling so the summary
request and the three concurrent pagination loops reuse connections.
"""

import logging

import httpx

logger = logging.getLogger(__name__)

CONNECT_TIMEOUT = 5.0

# Module-level singleton client
_client: httpx.AsyncClient | None = None


def request_timeout(seconds: float) -> httpx.Timeout:
    """Per-request timeout; connecting is always capped at CONNECT_TIMEOUT."""
    return httpx.Timeout(seconds, connect=min(seconds, CONNECT_TIMEOUT))


def get_github_client() -> httpx.AsyncClient:
    """
    Get or create the shared HTTP client for GitHub API calls.

    Auth headers and timeouts are passed per-request, not stored on the
    client, so one client serves transports with different tokens and
    timeouts.

    Returns:
        Shared httpx.AsyncClient configured for GitHub API
    """
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=request_timeout(30.0),
            limits=httpx.Limits(max_connections=10, max_keepalive_connections=5),
            http2=True,
        )
        logger.debug("Created new GitHub HTTP client with connection pooling")
    return _client


async def close_github_client() -> None:
    """
    Close the shared HTTP client.

    Call once the report has been produced.
    """
    global _client
    if _client is not None and not _client.is_closed:
        await _client.aclose()
        _client = None
        logger.debug("Closed GitHub HTTP client")
