"""Constants for GitHub activity fetching."""

GITHUB_GRAPHQL_URL = "https://api.github.com/graphql"

USER_AGENT = "ghactivity"

# Nodes requested per page for each paginated connection
DEFAULT_PAGE_SIZE = 10

# GitHub caps commitContributionsByRepository at 100 entries; it has no cursor
MAX_COMMIT_REPOSITORIES = 100

# Phase names, used in logs and attached to errors
PHASE_SUMMARY = "summary"
PHASE_ISSUES = "issues"
PHASE_PULL_REQUESTS = "pull_requests"
PHASE_PULL_REQUEST_REVIEWS = "pull_request_reviews"
