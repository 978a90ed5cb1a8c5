"""Post-fetch filtering of activity by repository and organization."""

from ghactivity.services.github.types import ActivityData


def filter_activity(
    activity: ActivityData,
    repo: str | None = None,
    org: str | None = None,
) -> ActivityData:
    """
    Keep only commit contributions from the selected repository or organization.

    Args:
        activity: Merged activity to filter (left unchanged)
        repo: Exact "owner/name" to keep
        org: Owner whose repositories ("org/...") are kept

    Returns:
        A copy of `activity` with a filtered commitContributionsByRepository list.
        Both filters apply together when both are given.
    """
    filtered = activity.model_copy(deep=True)
    if filtered.user is None:
        return filtered

    collection = filtered.user.contributions_collection
    repos = collection.commit_contributions_by_repository

    if repo is not None:
        repos = [r for r in repos if r.repository.name_with_owner == repo]
    if org is not None:
        prefix = f"{org}/"
        repos = [r for r in repos if r.repository.name_with_owner.startswith(prefix)]

    collection.commit_contributions_by_repository = repos
    return filtered
