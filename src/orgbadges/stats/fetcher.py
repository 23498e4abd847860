"""Cursor pagination over GraphQL connections."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Sequence
from typing import Any, Protocol

from orgbadges.github.exceptions import UnexpectedResponseError

logger = logging.getLogger("orgbadges.stats")


class GraphQLExecutor(Protocol):
    """Anything that can run a GraphQL query and return its `data`."""

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]: ...


def _connection(data: dict[str, Any], connection_path: Sequence[str]) -> dict[str, Any]:
    node: Any = data
    for key in connection_path:
        if not isinstance(node, dict) or node.get(key) is None:
            raise UnexpectedResponseError(
                f"Response has no '{'.'.join(connection_path)}' (missing '{key}')"
            )
        node = node[key]
    return dict(node)


def iter_pages(
    client: GraphQLExecutor,
    query: str,
    variables: dict[str, Any],
    connection_path: Sequence[str],
) -> Iterator[list[dict[str, Any]]]:
    """Walk a GraphQL connection page by page.

    The query must declare an `$after: String` variable and select
    `nodes` and `pageInfo { endCursor hasNextPage }` on the connection.

    Args:
        client: GraphQL transport
        query: Query selecting the connection
        variables: Query variables other than the cursor
        connection_path: Keys leading from `data` to the connection,
            e.g. ("organization", "repositories")

    Yields:
        The nodes of each page, in the order received

    Raises:
        UnexpectedResponseError: If the connection is missing from a response,
            or a page reports a next page without a cursor
    """
    cursor: str | None = None
    page = 0
    while True:
        data = client.execute(query, {**variables, "after": cursor})
        connection = _connection(data, connection_path)
        page += 1
        nodes = list(connection.get("nodes") or [])
        logger.debug("%s page %d: %d nodes", "/".join(connection_path), page, len(nodes))
        yield nodes

        page_info = connection.get("pageInfo") or {}
        if not page_info.get("hasNextPage"):
            break
        cursor = page_info.get("endCursor")
        if not cursor:
            raise UnexpectedResponseError(
                f"'{'.'.join(connection_path)}' has a next page but no endCursor"
            )


def fetch_all_nodes(
    client: GraphQLExecutor,
    query: str,
    variables: dict[str, Any],
    connection_path: Sequence[str],
) -> list[dict[str, Any]]:
    """Collect every node of a GraphQL connection across all pages."""
    nodes: list[dict[str, Any]] = []
    for page in iter_pages(client, query, variables, connection_path):
        nodes.extend(page)
    return nodes
