"""GraphQL document and variable construction for the user activity query."""

from datetime import datetime
from typing import Any

from ghactivity.services.github.constants import MAX_COMMIT_REPOSITORIES
from ghactivity.services.github.types import ActivityQuery

USER_ACTIVITY_QUERY = f"""
query UserActivity(
  $username: String!
  $from: DateTime!
  $to: DateTime!
  $issuesFirst: Int!
  $issuesAfter: String
  $prsFirst: Int!
  $prsAfter: String
  $prReviewsFirst: Int!
  $prReviewsAfter: String
) {{
  user(login: $username) {{
    contributionsCollection(from: $from, to: $to) {{
      totalCommitContributions
      totalIssueContributions
      totalPullRequestContributions
      totalPullRequestReviewContributions
      contributionCalendar {{
        totalContributions
        weeks {{
          contributionDays {{
            date
            contributionCount
            weekday
          }}
        }}
      }}
      commitContributionsByRepository(maxRepositories: {MAX_COMMIT_REPOSITORIES}) {{
        repository {{
          nameWithOwner
          updatedAt
        }}
        contributions {{
          totalCount
        }}
      }}
      issueContributions(first: $issuesFirst, after: $issuesAfter) {{
        totalCount
        pageInfo {{
          endCursor
          hasNextPage
        }}
        nodes {{
          issue {{
            number
            title
            url
            createdAt
            state
            closedAt
            repository {{
              nameWithOwner
              updatedAt
            }}
          }}
        }}
      }}
      pullRequestContributions(first: $prsFirst, after: $prsAfter) {{
        totalCount
        pageInfo {{
          endCursor
          hasNextPage
        }}
        nodes {{
          pullRequest {{
            number
            title
            url
            createdAt
            state
            merged
            mergedAt
            closedAt
            repository {{
              nameWithOwner
              updatedAt
            }}
          }}
        }}
      }}
      pullRequestReviewContributions(first: $prReviewsFirst, after: $prReviewsAfter) {{
        totalCount
        pageInfo {{
          endCursor
          hasNextPage
        }}
        nodes {{
          occurredAt
          pullRequestReview {{
            pullRequest {{
              number
              title
              url
              repository {{
                nameWithOwner
                updatedAt
              }}
            }}
          }}
        }}
      }}
    }}
  }}
}}
"""


def to_rfc3339(value: datetime) -> str:
    """Format a timezone-aware datetime the way GitHub's DateTime scalar expects."""
    return value.isoformat()


def build_variables(
    query: ActivityQuery,
    page_size: int,
    *,
    issues_after: str | None = None,
    prs_after: str | None = None,
    pr_reviews_after: str | None = None,
) -> dict[str, Any]:
    """
    Build the variables for one UserActivity request.

    All three (first, after) pairs are always sent. Connections that are not
    being paginated in this request get the page size and a null cursor, so
    every request has the same shape.
    """
    return {
        "username": query.username,
        "from": to_rfc3339(query.start),
        "to": to_rfc3339(query.end),
        "issuesFirst": page_size,
        "issuesAfter": issues_after,
        "prsFirst": page_size,
        "prsAfter": prs_after,
        "prReviewsFirst": page_size,
        "prReviewsAfter": pr_reviews_after,
    }
