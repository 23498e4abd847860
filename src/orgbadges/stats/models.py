"""Data models for organization statistics."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime, timezone
from enum import Enum
from typing import Any


def parse_timestamp(value: str) -> datetime:
    """Parse a GitHub ISO 8601 timestamp into an aware UTC datetime."""
    parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed.astimezone(timezone.utc)


class PullRequestState(str, Enum):
    """Pull request lifecycle state, as reported by GraphQL."""

    OPEN = "OPEN"
    MERGED = "MERGED"
    CLOSED = "CLOSED"


@dataclass
class PullRequest:
    """The fields of a pull request needed for windowed counts."""

    created_at: datetime
    merged_at: datetime | None
    state: PullRequestState

    @classmethod
    def from_node(cls, node: dict[str, Any]) -> PullRequest:
        merged_at = node.get("mergedAt")
        return cls(
            created_at=parse_timestamp(node["createdAt"]),
            merged_at=parse_timestamp(merged_at) if merged_at else None,
            state=PullRequestState(node["state"]),
        )

    def created_since(self, cutoff: date) -> bool:
        """Whether the PR was opened on or after the cutoff date (UTC)."""
        return self.created_at.date() >= cutoff

    def merged_since(self, cutoff: date) -> bool:
        """Whether the PR is merged and was merged on or after the cutoff date (UTC)."""
        return (
            self.state == PullRequestState.MERGED
            and self.merged_at is not None
            and self.merged_at.date() >= cutoff
        )


@dataclass(frozen=True)
class AggregateCounts:
    """Pull request counts for one repository or a whole organization.

    Attributes:
        total_created: PRs opened on or after the cutoff, in any state.
        total_merged: PRs merged on or after the cutoff.
    """

    total_created: int = 0
    total_merged: int = 0

    def __add__(self, other: object) -> AggregateCounts:
        if not isinstance(other, AggregateCounts):
            return NotImplemented
        return AggregateCounts(
            total_created=self.total_created + other.total_created,
            total_merged=self.total_merged + other.total_merged,
        )

    def __radd__(self, other: object) -> AggregateCounts:
        # sum() starts from 0
        if other == 0:
            return self
        return self.__add__(other)
