"""README patcher - replaces the region between two markers."""

from orgbadges.readme.exceptions import ReadmeError, ReadmeNotFoundError
from orgbadges.readme.models import PatchResult, PatchStatus
from orgbadges.readme.patcher import (
    DEFAULT_END_MARKER,
    DEFAULT_START_MARKER,
    ReadmePatcher,
    replace_between_markers,
)

__all__ = [
    "DEFAULT_END_MARKER",
    "DEFAULT_START_MARKER",
    "PatchResult",
    "PatchStatus",
    "ReadmeError",
    "ReadmeNotFoundError",
    "ReadmePatcher",
    "replace_between_markers",
]
