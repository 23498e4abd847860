"""Data models for the GitHub transport clients."""

from dataclasses import dataclass


@dataclass(frozen=True)
class RepositoryFile:
    """A file read through the repository contents API.

    Attributes:
        path: Path of the file inside the repository.
        content: Decoded file content.
        sha: Blob SHA of the revision that was read. Sent back on update so a
             concurrent change makes the write fail instead of being lost.
    """

    path: str
    content: bytes
    sha: str

    @property
    def text(self) -> str:
        return self.content.decode("utf-8")
