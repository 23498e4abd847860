"""Unit tests for batch orchestration."""

import threading
from datetime import date
from unittest.mock import MagicMock

import pytest

from orgbadges.github import TransportError
from orgbadges.stats import AggregateCounts, aggregate_organization, batched

CUTOFF = date(2024, 1, 1)

COUNTS = {
    "repo-a": AggregateCounts(3, 1),
    "repo-b": AggregateCounts(5, 2),
    "repo-c": AggregateCounts(0, 4),
}


class RecordingAggregator:
    """Per-repository counter that records calls and completion order."""

    def __init__(self, counts: dict[str, AggregateCounts], fail_on: str | None = None) -> None:
        self.counts = counts
        self.fail_on = fail_on
        self.calls: list[str] = []
        self.finished: list[str] = []
        self.seen_finished: dict[str, set[str]] = {}
        self._lock = threading.Lock()

    def __call__(self, client, organization: str, repository: str, cutoff: date):
        with self._lock:
            self.calls.append(repository)
            self.seen_finished[repository] = set(self.finished)
        if repository == self.fail_on:
            raise TransportError(f"failed for {repository}")
        with self._lock:
            self.finished.append(repository)
        return self.counts[repository]


@pytest.mark.unit
class TestBatched:
    """Tests for batched."""

    def test_splits_into_consecutive_groups(self) -> None:
        """Groups of at most batch_size, in order."""
        assert list(batched(["a", "b", "c"], 2)) == [["a", "b"], ["c"]]

    def test_exact_multiple(self) -> None:
        """No empty trailing group."""
        assert list(batched(["a", "b", "c", "d"], 2)) == [["a", "b"], ["c", "d"]]

    def test_empty(self) -> None:
        """Empty input gives no groups."""
        assert list(batched([], 10)) == []

    def test_invalid_batch_size(self) -> None:
        """batch_size below 1 is rejected."""
        with pytest.raises(ValueError):
            list(batched(["a"], 0))


@pytest.mark.unit
class TestAggregateOrganization:
    """Tests for aggregate_organization."""

    def test_sums_all_repositories(self) -> None:
        """Total is the element-wise sum."""
        aggregator = RecordingAggregator(COUNTS)

        total = aggregate_organization(
            MagicMock(), "org", list(COUNTS), CUTOFF, aggregate=aggregator
        )

        assert total == AggregateCounts(total_created=8, total_merged=7)

    def test_batches_run_sequentially(self) -> None:
        """batch_size=2 over 3 repos: 3 calls, second batch after the first."""
        aggregator = RecordingAggregator(COUNTS)

        total = aggregate_organization(
            MagicMock(),
            "org",
            ["repo-a", "repo-b", "repo-c"],
            CUTOFF,
            batch_size=2,
            aggregate=aggregator,
        )

        assert len(aggregator.calls) == 3
        assert set(aggregator.calls[:2]) == {"repo-a", "repo-b"}
        assert aggregator.calls[2] == "repo-c"
        assert aggregator.seen_finished["repo-c"] == {"repo-a", "repo-b"}
        assert total == AggregateCounts(8, 7)

    def test_batches_run_concurrently(self) -> None:
        """Repositories within a batch are counted at the same time."""
        barrier = threading.Barrier(2, timeout=5)

        def aggregate(client, organization, repository, cutoff):
            # Both calls must be in flight to pass the barrier
            barrier.wait()
            return AggregateCounts(1, 1)

        total = aggregate_organization(
            MagicMock(), "org", ["a", "b"], CUTOFF, batch_size=2, aggregate=aggregate
        )

        assert total == AggregateCounts(2, 2)

    def test_order_independent(self) -> None:
        """Repository order does not change the total."""
        forward = aggregate_organization(
            MagicMock(), "org", ["repo-a", "repo-b"], CUTOFF, aggregate=RecordingAggregator(COUNTS)
        )
        backward = aggregate_organization(
            MagicMock(), "org", ["repo-b", "repo-a"], CUTOFF, aggregate=RecordingAggregator(COUNTS)
        )

        assert forward == backward

    def test_grouping_does_not_change_total(self) -> None:
        """Same total for every batch size."""
        totals = {
            size: aggregate_organization(
                MagicMock(),
                "org",
                list(COUNTS),
                CUTOFF,
                batch_size=size,
                aggregate=RecordingAggregator(COUNTS),
            )
            for size in (1, 2, 3, 10)
        }

        assert set(totals.values()) == {AggregateCounts(8, 7)}

    def test_no_repositories(self) -> None:
        """Empty organization totals zero."""
        aggregator = RecordingAggregator(COUNTS)

        total = aggregate_organization(MagicMock(), "org", [], CUTOFF, aggregate=aggregator)

        assert total == AggregateCounts()
        assert aggregator.calls == []

    def test_failure_aborts_without_partial_result(self) -> None:
        """Any failing repository makes the whole run fail."""
        aggregator = RecordingAggregator(COUNTS, fail_on="repo-b")

        with pytest.raises(TransportError) as exc_info:
            aggregate_organization(
                MagicMock(),
                "org",
                ["repo-a", "repo-b", "repo-c"],
                CUTOFF,
                batch_size=2,
                aggregate=aggregator,
            )

        assert "repo-b" in str(exc_info.value)
        # Later batches never start
        assert "repo-c" not in aggregator.calls

    def test_passes_client_and_cutoff(self) -> None:
        """Aggregator receives the shared client, organization and cutoff."""
        client = MagicMock()
        aggregate = MagicMock(return_value=AggregateCounts(1, 0))

        aggregate_organization(client, "org", ["repo-a"], CUTOFF, aggregate=aggregate)

        aggregate.assert_called_once_with(client, "org", "repo-a", CUTOFF)

    def test_invalid_batch_size(self) -> None:
        """batch_size below 1 raises ValueError."""
        with pytest.raises(ValueError):
            aggregate_organization(MagicMock(), "org", ["a"], CUTOFF, batch_size=0)
