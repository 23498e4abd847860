"""ContentsClient - Reads and writes files through the GitHub contents API."""

from __future__ import annotations

import base64
import logging
from typing import Any

import httpx

from orgbadges.github.exceptions import TransportError, UnexpectedResponseError
from orgbadges.github.models import RepositoryFile
from orgbadges.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("orgbadges.github")

DEFAULT_API_URL = "https://api.github.com"


class ContentsClient:
    """Creates and updates files in a repository with authenticated commits.

    Every update carries the blob SHA of the revision it replaces, so a file
    changed by someone else in the meantime is rejected by the API (409)
    instead of being overwritten.
    """

    def __init__(
        self,
        repository: str,
        token: str,
        base_url: str = DEFAULT_API_URL,
        branch: str | None = None,
    ) -> None:
        """Initialize the contents client.

        Args:
            repository: GitHub repo in "owner/repo" format
            token: GitHub token with contents write permission
            base_url: GitHub REST API base URL (for testing/enterprise)
            branch: Branch to read from and commit to (default branch if unset)
        """
        self.repository = repository
        self.token = token
        self.base_url = base_url.rstrip("/")
        self.branch = branch
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for GitHub API."""
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Accept": "application/vnd.github+json",
                    "X-GitHub-Api-Version": "2022-11-28",
                },
                timeout=30.0,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> ContentsClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def _url(self, path: str) -> str:
        return f"/repos/{self.repository}/contents/{path.lstrip('/')}"

    def get_file(self, path: str) -> RepositoryFile | None:
        """Read a file from the repository.

        Args:
            path: File path inside the repository

        Returns:
            The file with its current SHA, or None if it does not exist

        Raises:
            TransportError: If the request fails with anything but 404
            UnexpectedResponseError: If the path is not a regular file
        """
        params = {"ref": self.branch} if self.branch else None
        try:
            response = self.client.get(self._url(path), params=params)
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to read {path}: {e}") from e

        if response.status_code == 404:
            logger.debug("%s not found in %s", path, self.repository)
            return None
        if response.status_code != 200:
            body = sanitize_for_log(truncate_output(response.text))
            logger.error("Failed to read %s: %s", path, body)
            raise TransportError(f"Failed to read {path}: {response.status_code} - {body}")

        data = response.json()
        if not isinstance(data, dict) or data.get("type") != "file":
            raise UnexpectedResponseError(f"{path} in {self.repository} is not a file")

        return RepositoryFile(
            path=data["path"],
            content=base64.b64decode(data.get("content", "")),
            sha=data["sha"],
        )

    def put_file(
        self,
        path: str,
        content: bytes | str,
        message: str,
        sha: str | None = None,
    ) -> str:
        """Create or update a file with a commit.

        Args:
            path: File path inside the repository
            content: New file content
            message: Commit message
            sha: SHA of the revision being replaced (required for updates)

        Returns:
            The SHA of the new blob

        Raises:
            TransportError: If the write is rejected (including SHA conflicts)
        """
        if isinstance(content, str):
            content = content.encode("utf-8")

        payload: dict[str, Any] = {
            "message": message,
            "content": base64.b64encode(content).decode("ascii"),
        }
        if sha is not None:
            payload["sha"] = sha
        if self.branch:
            payload["branch"] = self.branch

        logger.info("Committing %s to %s", path, self.repository)
        try:
            response = self.client.put(self._url(path), json=payload)
        except httpx.HTTPError as e:
            raise TransportError(f"Failed to write {path}: {e}") from e

        if response.status_code not in (200, 201):
            body = sanitize_for_log(truncate_output(response.text))
            logger.error("Failed to write %s: %s", path, body)
            raise TransportError(f"Failed to write {path}: {response.status_code} - {body}")

        new_sha: str = response.json()["content"]["sha"]
        logger.info("Committed %s (%s)", path, new_sha[:7])
        return new_sha

    def sync_file(self, path: str, content: bytes | str, message: str) -> bool:
        """Write a file only when its content differs from the repository copy.

        Returns:
            True if a commit was made, False if the content was already current
        """
        if isinstance(content, str):
            content = content.encode("utf-8")

        current = self.get_file(path)
        if current is not None and current.content == content:
            logger.info("%s is up to date", path)
            return False

        self.put_file(path, content, message, sha=current.sha if current else None)
        return True
