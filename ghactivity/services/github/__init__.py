"""
GitHub activity package.

Re-exports all public types and classes.
Usage: `from ghactivity.services.github import ActivityFetcher, ActivityQuery`

Module structure:
- activity.py: ActivityFetcher orchestrator (summary + concurrent drains + merge)
- pagination.py: Generic cursor pagination over one connection
- transport.py: GraphQL POST and response classification
- queries.py: GraphQL document and variable builder
- http_client.py: Shared httpx client lifecycle
- types.py: Query, envelope and response models
- exceptions.py: Error classification
- constants.py: API constants and phase names
"""

from ghactivity.services.github.activity import ActivityFetcher, fetch_activity
from ghactivity.services.github.exceptions import (
    DecodeError,
    FetchCancelledError,
    GitHubAPIError,
    IntegrityError,
    ProtocolError,
    TransportError,
)
from ghactivity.services.github.http_client import close_github_client
from ghactivity.services.github.pagination import PageFetcher
from ghactivity.services.github.transport import GraphQLTransport
from ghactivity.services.github.types import (
    ActivityData,
    ActivityQuery,
    ContributionsCollection,
    GraphQLResponse,
    PageInfo,
)

__all__ = [
    # Orchestrator (main entry point)
    "ActivityFetcher",
    "fetch_activity",
    # Building blocks
    "PageFetcher",
    "GraphQLTransport",
    # HTTP client lifecycle
    "close_github_client",
    # Exceptions
    "GitHubAPIError",
    "TransportError",
    "DecodeError",
    "ProtocolError",
    "IntegrityError",
    "FetchCancelledError",
    # Types
    "ActivityData",
    "ActivityQuery",
    "ContributionsCollection",
    "GraphQLResponse",
    "PageInfo",
]
