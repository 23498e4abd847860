"""GitHub transport - GraphQL queries and repository contents API."""

from orgbadges.github.client import GraphQLClient
from orgbadges.github.contents import ContentsClient
from orgbadges.github.exceptions import (
    GitHubError,
    GraphQLError,
    TransportError,
    UnexpectedResponseError,
)
from orgbadges.github.models import RepositoryFile

__all__ = [
    "ContentsClient",
    "GitHubError",
    "GraphQLClient",
    "GraphQLError",
    "RepositoryFile",
    "TransportError",
    "UnexpectedResponseError",
]
