"""Organization statistics - repository listing and pull request counts."""

from orgbadges.stats.aggregator import (
    compute_cutoff,
    count_pull_requests,
    get_repository_count,
    list_repositories,
)
from orgbadges.stats.fetcher import fetch_all_nodes, iter_pages
from orgbadges.stats.models import AggregateCounts, PullRequest, PullRequestState
from orgbadges.stats.orchestrator import DEFAULT_BATCH_SIZE, aggregate_organization, batched

__all__ = [
    "DEFAULT_BATCH_SIZE",
    "AggregateCounts",
    "PullRequest",
    "PullRequestState",
    "aggregate_organization",
    "batched",
    "compute_cutoff",
    "count_pull_requests",
    "fetch_all_nodes",
    "get_repository_count",
    "iter_pages",
    "list_repositories",
]
