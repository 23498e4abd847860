"""Shared pytest fixtures and configuration."""

import logging
from unittest.mock import MagicMock

import pytest


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


def graphql_page(connection_path: tuple[str, ...], nodes: list, has_next: bool, cursor=None) -> dict:
    """Build the `data` of one page of a GraphQL connection."""
    connection = {
        "nodes": nodes,
        "pageInfo": {"endCursor": cursor, "hasNextPage": has_next},
    }
    data: dict = connection
    for key in reversed(connection_path):
        data = {key: data}
    return data


def pr_node(created_at: str, merged_at: str | None = None, state: str = "OPEN") -> dict:
    """A pull request node as returned by GraphQL."""
    return {"createdAt": created_at, "mergedAt": merged_at, "state": state}


@pytest.fixture
def graphql() -> MagicMock:
    """A mock GraphQL transport (anything with `execute`)."""
    return MagicMock()


@pytest.fixture(autouse=True)
def reset_orgbadges_logger():
    """Drop handlers added by setup_logging so tests don't share streams."""
    yield
    logger = logging.getLogger("orgbadges")
    for handler in list(logger.handlers):
        logger.removeHandler(handler)
        handler.close()
    logger.setLevel(logging.NOTSET)
