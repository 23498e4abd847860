"""Repository listing and windowed pull request counts."""

from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone

from orgbadges.github.exceptions import UnexpectedResponseError
from orgbadges.stats.fetcher import GraphQLExecutor, fetch_all_nodes, iter_pages
from orgbadges.stats.models import AggregateCounts, PullRequest

logger = logging.getLogger("orgbadges.stats")

REPOSITORY_COUNT_QUERY = """
query($organization: String!) {
  organization(login: $organization) {
    repositories {
      totalCount
    }
  }
}
"""

REPOSITORIES_QUERY = """
query($organization: String!, $after: String) {
  organization(login: $organization) {
    repositories(first: 100, after: $after) {
      nodes {
        name
      }
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}
"""

PULL_REQUESTS_QUERY = """
query($organization: String!, $repository: String!, $after: String) {
  repository(owner: $organization, name: $repository) {
    pullRequests(first: 100, after: $after) {
      nodes {
        createdAt
        mergedAt
        state
      }
      pageInfo {
        endCursor
        hasNextPage
      }
    }
  }
}
"""


def compute_cutoff(days: int, now: datetime | None = None) -> date:
    """UTC date `days` days before `now` (inclusive lower bound of the window)."""
    if now is None:
        now = datetime.now(timezone.utc)
    elif now.tzinfo is None:
        now = now.replace(tzinfo=timezone.utc)
    return (now.astimezone(timezone.utc) - timedelta(days=days)).date()


def get_repository_count(client: GraphQLExecutor, organization: str) -> int:
    """Total number of repositories in the organization."""
    data = client.execute(REPOSITORY_COUNT_QUERY, {"organization": organization})
    org = data.get("organization")
    if not org:
        raise UnexpectedResponseError(f"Organization {organization} not found")
    count = int(org["repositories"]["totalCount"])
    logger.info("Total repositories in %s: %d", organization, count)
    return count


def list_repositories(client: GraphQLExecutor, organization: str) -> list[str]:
    """Names of all repositories in the organization, in API order."""
    nodes = fetch_all_nodes(
        client,
        REPOSITORIES_QUERY,
        {"organization": organization},
        ("organization", "repositories"),
    )
    names = [node["name"] for node in nodes]
    logger.info("Found %d repositories in %s", len(names), organization)
    return names


def count_pull_requests(
    client: GraphQLExecutor,
    organization: str,
    repository: str,
    cutoff: date,
) -> AggregateCounts:
    """Count pull requests opened and merged on or after the cutoff.

    Opened counts every PR created in the window whatever its current state
    (open, merged or closed without merging). Merged counts PRs in state
    MERGED whose merge date is in the window, so a PR opened before the
    cutoff and merged after it only counts as merged.

    Args:
        client: GraphQL transport
        organization: Repository owner
        repository: Repository name
        cutoff: First UTC date inside the window

    Returns:
        Counts for this repository
    """
    counts = AggregateCounts()
    for nodes in iter_pages(
        client,
        PULL_REQUESTS_QUERY,
        {"organization": organization, "repository": repository},
        ("repository", "pullRequests"),
    ):
        pull_requests = [PullRequest.from_node(node) for node in nodes]
        counts += AggregateCounts(
            total_created=sum(1 for pr in pull_requests if pr.created_since(cutoff)),
            total_merged=sum(1 for pr in pull_requests if pr.merged_since(cutoff)),
        )

    logger.debug(
        "%s/%s: %d opened, %d merged since %s",
        organization,
        repository,
        counts.total_created,
        counts.total_merged,
        cutoff.isoformat(),
    )
    return counts
