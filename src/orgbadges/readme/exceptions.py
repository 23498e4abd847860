"""Custom exceptions for the README patcher."""


class ReadmeError(Exception):
    """Base exception for README patcher errors."""


class ReadmeNotFoundError(ReadmeError):
    """The README file does not exist in the repository."""
