"""Data models for the README patcher."""

from dataclasses import dataclass
from enum import Enum


class PatchStatus(str, Enum):
    """Outcome of a README patch."""

    UPDATED = "updated"
    UNCHANGED = "unchanged"  # content between markers already current
    SKIPPED = "skipped"  # markers not found


@dataclass(frozen=True)
class PatchResult:
    """Result of patching a README.

    Attributes:
        status: What happened.
        sha: Blob SHA of the new revision, when a write was made.
    """

    status: PatchStatus
    sha: str | None = None
