"""Custom exceptions for the GitHub transport clients."""


class GitHubError(Exception):
    """Base exception for GitHub API errors."""


class TransportError(GitHubError):
    """A GraphQL or REST request failed (network, auth, rate limit, conflict)."""


class GraphQLError(TransportError):
    """The GraphQL endpoint answered with an `errors` payload."""


class UnexpectedResponseError(GitHubError):
    """The response did not have the expected shape."""
