"""
GraphQL transport for the GitHub API.

One `send` is one POST round trip. Failures are classified so callers can
tell a network problem from an unreadable body, and both from a readable
reply that reports GraphQL errors or carries no data.
"""

import logging
from typing import Any

import httpx

from ghactivity.services.github.constants import GITHUB_GRAPHQL_URL, USER_AGENT
from ghactivity.services.github.exceptions import DecodeError, TransportError
from ghactivity.services.github.http_client import get_github_client, request_timeout
from ghactivity.services.github.queries import USER_ACTIVITY_QUERY
from ghactivity.services.github.types import GraphQLResponse

logger = logging.getLogger(__name__)


def handle_error_response(response: httpx.Response) -> None:
    """
    Raise TransportError for a non-2xx HTTP status.

    GitHub answers GraphQL problems with 200 and an `errors` list; anything
    else (bad token, proxy failure, abuse detection) arrives as an HTTP error.
    """
    if response.is_success:
        return

    message: str | None = None
    try:
        body = response.json()
        if isinstance(body, dict):
            message = body.get("message")
    except ValueError:
        pass  # Non-JSON error page; the status code says enough

    if response.status_code == 401:
        raise TransportError(
            f"Invalid or expired GitHub token ({message or 'unauthorized'})", 401
        )
    raise TransportError(
        f"GitHub API error: {response.status_code}" + (f" ({message})" if message else ""),
        response.status_code,
    )


class GraphQLTransport:
    """
    Sends the UserActivity query to a fixed GraphQL endpoint.

    The endpoint and token are injected; nothing is read from the environment
    here. The transport keeps no mutable state, so one instance can serve
    several concurrent pagination loops.
    """

    def __init__(
        self,
        token: str,
        url: str = GITHUB_GRAPHQL_URL,
        timeout: float = 30.0,
        query: str = USER_ACTIVITY_QUERY,
    ):
        self.url = url
        self.timeout = timeout
        self.query = query
        self._headers = {
            "Authorization": f"Bearer {token}",
            "User-Agent": USER_AGENT,
        }

    async def send(self, variables: dict[str, Any]) -> GraphQLResponse:
        """
        POST the query with `variables` and decode the envelope.

        Raises:
            TransportError: Connection failure, timeout, or non-2xx status
            DecodeError: Body cannot be decompressed or is not a JSON object
        """
        client = get_github_client()
        logger.debug(f"GraphQL request variables: {variables}")

        try:
            response = await client.post(
                self.url,
                headers=self._headers,
                json={"query": self.query, "variables": variables},
                timeout=request_timeout(self.timeout),
            )
        except httpx.DecodingError as e:
            raise DecodeError(f"Failed to decode response body: {e}") from e
        except httpx.TimeoutException as e:
            raise TransportError(f"Network timeout error: {e}") from e
        except httpx.TransportError as e:
            raise TransportError(f"Network connection error: {e}") from e
        except httpx.RequestError as e:
            raise TransportError(f"Request failed: {e}") from e

        handle_error_response(response)

        try:
            body = response.json()
        except ValueError as e:
            raise DecodeError(f"Failed to parse response body as JSON: {e}") from e

        if not isinstance(body, dict):
            raise DecodeError(f"Expected a JSON object, got {type(body).__name__}")

        errors = body.get("errors")
        if errors is not None and not isinstance(errors, list):
            raise DecodeError("Malformed 'errors' field in response")
        data = body.get("data")
        if data is not None and not isinstance(data, dict):
            raise DecodeError("Malformed 'data' field in response")

        return GraphQLResponse(data=data, errors=errors)
