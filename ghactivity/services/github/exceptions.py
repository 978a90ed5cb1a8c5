"""Exceptions for GitHub activity fetching."""


class GitHubAPIError(Exception):
    """Error from GitHub API.

    `phase` names the request group that failed: "summary", "issues",
    "pull_requests" or "pull_request_reviews". It is filled in by the
    pagination layer when the error passes through it.
    """

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        phase: str | None = None,
    ):
        self.message = message
        self.status_code = status_code
        self.phase = phase
        super().__init__(message)

    def __str__(self) -> str:
        if self.phase:
            return f"[{self.phase}] {self.message}"
        return self.message


class TransportError(GitHubAPIError):
    """Network-layer failure: connection, timeout, or non-2xx HTTP status."""


class DecodeError(GitHubAPIError):
    """Response body was not a decodable GraphQL envelope."""


class ProtocolError(GitHubAPIError):
    """Well-formed GraphQL reply that carries errors.

    Also raised for a page that claims `hasNextPage` without an `endCursor`,
    since following it would loop on the first page forever.
    """

    def __init__(
        self,
        message: str,
        messages: list[str] | None = None,
        phase: str | None = None,
    ):
        self.messages = messages or []
        super().__init__(message, phase=phase)


class IntegrityError(GitHubAPIError):
    """Well-formed reply with no errors but no data either."""


class FetchCancelledError(Exception):
    """Fetch stopped because the caller signalled cancellation."""

    def __init__(self, phase: str | None = None):
        self.phase = phase
        message = f"Activity fetch cancelled during {phase}" if phase else "Activity fetch cancelled"
        super().__init__(message)
