"""ReadmePatcher - Splices generated content into a README between markers."""

from __future__ import annotations

import logging
from typing import Protocol

from orgbadges.github.models import RepositoryFile
from orgbadges.readme.exceptions import ReadmeNotFoundError
from orgbadges.readme.models import PatchResult, PatchStatus

logger = logging.getLogger("orgbadges.readme")

DEFAULT_START_MARKER = "<!-- ORG-BADGES:START -->"
DEFAULT_END_MARKER = "<!-- ORG-BADGES:END -->"


class FileStore(Protocol):
    """Storage with a revision token per file (the GitHub contents API)."""

    def get_file(self, path: str) -> RepositoryFile | None: ...

    def put_file(
        self, path: str, content: bytes | str, message: str, sha: str | None = None
    ) -> str: ...


def replace_between_markers(
    text: str,
    start_marker: str,
    end_marker: str,
    replacement: str,
) -> str | None:
    """Replace the text strictly between two markers.

    The first start marker and the first end marker after it delimit the
    region; both markers are kept.

    Args:
        text: Document text
        start_marker: Opening marker
        end_marker: Closing marker
        replacement: New content for the region

    Returns:
        The patched text, or None if the markers are not both present
    """
    start = text.find(start_marker)
    if start == -1:
        return None
    inner_start = start + len(start_marker)
    end = text.find(end_marker, inner_start)
    if end == -1:
        return None
    return text[:inner_start] + replacement + text[end:]


class ReadmePatcher:
    """Updates the marked region of a README stored in a repository."""

    def __init__(
        self,
        store: FileStore,
        start_marker: str = DEFAULT_START_MARKER,
        end_marker: str = DEFAULT_END_MARKER,
    ) -> None:
        self.store = store
        self.start_marker = start_marker
        self.end_marker = end_marker

    def patch(self, path: str, replacement: str, message: str) -> PatchResult:
        """Replace the marked region of a README and commit it if it changed.

        The write carries the SHA of the revision that was read, so a README
        changed concurrently is rejected rather than overwritten.

        Args:
            path: README path inside the repository
            replacement: New content between the markers
            message: Commit message

        Returns:
            UPDATED with the new SHA, UNCHANGED, or SKIPPED when the markers
            are missing

        Raises:
            ReadmeNotFoundError: If the README does not exist
        """
        current = self.store.get_file(path)
        if current is None:
            raise ReadmeNotFoundError(f"README {path} not found")

        patched = replace_between_markers(
            current.text, self.start_marker, self.end_marker, replacement
        )
        if patched is None:
            logger.warning(
                "Markers %s ... %s not found in %s, skipping",
                self.start_marker,
                self.end_marker,
                path,
            )
            return PatchResult(status=PatchStatus.SKIPPED)

        if patched == current.text:
            logger.info("%s already up to date", path)
            return PatchResult(status=PatchStatus.UNCHANGED)

        sha = self.store.put_file(path, patched, message, sha=current.sha)
        logger.info("Updated %s", path)
        return PatchResult(status=PatchStatus.UPDATED, sha=sha)
