"""Batch orchestration of per-repository pull request counts."""

from __future__ import annotations

import logging
from collections.abc import Callable, Iterator, Sequence
from concurrent.futures import ThreadPoolExecutor, as_completed
from datetime import date
from typing import TypeVar

from orgbadges.stats.aggregator import count_pull_requests
from orgbadges.stats.fetcher import GraphQLExecutor
from orgbadges.stats.models import AggregateCounts

logger = logging.getLogger("orgbadges.stats")

DEFAULT_BATCH_SIZE = 10

T = TypeVar("T")

RepositoryAggregator = Callable[[GraphQLExecutor, str, str, date], AggregateCounts]


def batched(items: Sequence[T], batch_size: int) -> Iterator[list[T]]:
    """Split items into consecutive groups of at most batch_size."""
    if batch_size < 1:
        raise ValueError(f"batch_size must be at least 1, got {batch_size}")
    for start in range(0, len(items), batch_size):
        yield list(items[start : start + batch_size])


def aggregate_organization(
    client: GraphQLExecutor,
    organization: str,
    repositories: Sequence[str],
    cutoff: date,
    batch_size: int = DEFAULT_BATCH_SIZE,
    aggregate: RepositoryAggregator = count_pull_requests,
) -> AggregateCounts:
    """Sum pull request counts over all repositories of an organization.

    Repositories are processed in consecutive batches. Every repository of a
    batch is counted concurrently and the whole batch completes before the
    next one starts. The first error raised by any repository aborts the run;
    no partial total is returned.

    Args:
        client: GraphQL transport, shared by the worker threads
        organization: Repository owner
        repositories: Repository names
        cutoff: First UTC date inside the window
        batch_size: Maximum number of concurrent requests
        aggregate: Per-repository counter

    Returns:
        Element-wise sum of the per-repository counts

    Raises:
        ValueError: If batch_size is less than 1
    """
    batches = list(batched(repositories, batch_size))
    total = AggregateCounts()

    for index, batch in enumerate(batches, start=1):
        logger.debug("Batch %d/%d: %s", index, len(batches), ", ".join(batch))
        batch_counts: list[AggregateCounts] = []

        with ThreadPoolExecutor(max_workers=len(batch)) as executor:
            future_to_repo = {
                executor.submit(aggregate, client, organization, repo, cutoff): repo
                for repo in batch
            }
            for future in as_completed(future_to_repo):
                repo = future_to_repo[future]
                try:
                    batch_counts.append(future.result())
                except Exception:
                    logger.error("Failed to count pull requests for %s/%s", organization, repo)
                    raise

        total = sum(batch_counts, total)

    logger.info(
        "Pull requests in %s since %s: %d opened, %d merged",
        organization,
        cutoff.isoformat(),
        total.total_created,
        total.total_merged,
    )
    return total
