"""GraphQLClient - Executes queries against the GitHub GraphQL API."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from orgbadges.github.exceptions import GraphQLError, TransportError
from orgbadges.logging import sanitize_for_log, truncate_output

logger = logging.getLogger("orgbadges.github")

DEFAULT_GRAPHQL_URL = "https://api.github.com/graphql"


class GraphQLClient:
    """Thin client for the GitHub GraphQL API.

    Requests are not retried: any failure is raised as TransportError and
    left to the caller.
    """

    def __init__(
        self,
        token: str,
        url: str = DEFAULT_GRAPHQL_URL,
        timeout: float = 30.0,
    ) -> None:
        """Initialize the GraphQL client.

        Args:
            token: GitHub token (PAT, App token or the Actions GITHUB_TOKEN)
            url: GraphQL endpoint (override for GitHub Enterprise Server)
            timeout: Per-request timeout in seconds
        """
        self.token = token
        self.url = url
        self.timeout = timeout
        self._client: httpx.Client | None = None

    @property
    def client(self) -> httpx.Client:
        """Get or create HTTP client for GraphQL API."""
        if self._client is None:
            self._client = httpx.Client(
                headers={
                    "Authorization": f"Bearer {self.token}",
                    "Content-Type": "application/json",
                },
                timeout=self.timeout,
            )
        return self._client

    def close(self) -> None:
        """Close the HTTP client."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> GraphQLClient:
        return self

    def __exit__(self, *exc_info: object) -> None:
        self.close()

    def execute(self, query: str, variables: dict[str, Any] | None = None) -> dict[str, Any]:
        """Execute a GraphQL query.

        Args:
            query: GraphQL query string
            variables: Query variables

        Returns:
            The `data` member of the response

        Raises:
            TransportError: If the request fails or returns a non-200 status
            GraphQLError: If the response carries GraphQL errors
        """
        payload: dict[str, Any] = {"query": query}
        if variables:
            payload["variables"] = variables

        try:
            response = self.client.post(self.url, json=payload)
        except httpx.HTTPError as e:
            logger.error("GraphQL request failed: %s", sanitize_for_log(str(e)))
            raise TransportError(f"GraphQL request failed: {e}") from e

        if response.status_code != 200:
            body = sanitize_for_log(truncate_output(response.text))
            logger.error("GraphQL request returned %d: %s", response.status_code, body)
            raise TransportError(f"GraphQL request failed: {response.status_code} - {body}")

        data: dict[str, Any] = response.json()
        if data.get("errors"):
            messages = "; ".join(e.get("message", "") for e in data["errors"])
            logger.error("GraphQL errors: %s", messages)
            raise GraphQLError(f"GraphQL errors: {messages}")

        return dict(data["data"])
