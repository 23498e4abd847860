"""CLI entry point for org-badges.

Runs locally with flags, or as a GitHub Action where the inputs arrive as
INPUT_* environment variables and the result is written to GITHUB_OUTPUT.
"""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path

import click

from orgbadges import __version__
from orgbadges.badges import BadgeFormat
from orgbadges.config import Config, ConfigError
from orgbadges.github import ContentsClient, GitHubError, GraphQLClient
from orgbadges.logging import sanitize_for_log, setup_logging
from orgbadges.readme import ReadmeError
from orgbadges.runner import run

logger = logging.getLogger("orgbadges.cli")


def set_output(name: str, value: str, output_file: str | None = None) -> bool:
    """Write a step output for GitHub Actions.

    Args:
        name: Output name
        value: Single-line output value
        output_file: Path of the runner's output file (GITHUB_OUTPUT if unset)

    Returns:
        False when not running under Actions (no output file)
    """
    if output_file is None:
        output_file = os.environ.get("GITHUB_OUTPUT")
    if not output_file:
        return False
    with Path(output_file).open("a", encoding="utf-8") as f:
        f.write(f"{name}={value}\n")
    return True


@click.command()
@click.version_option(__version__)
@click.option("--organization", help="GitHub organization to query")
@click.option("--token", help="PAT or GitHub App token (default: GITHUB_TOKEN)")
@click.option("--days", type=int, help="Window in days for pull request stats (default: 30)")
@click.option("--graphql-url", help="GitHub GraphQL endpoint")
@click.option("--api-url", help="GitHub REST API base URL, used for commits")
@click.option("--color", help="Badge value colour (default: blue)")
@click.option("--label-color", help="Badge label colour (default: 555)")
@click.option(
    "--badge-format",
    type=click.Choice([f.value for f in BadgeFormat], case_sensitive=False),
    help="url, file or data-uri (default: file when committing, else data-uri)",
)
@click.option("--badge-dir", help="Directory for SVG badge files (default: badges)")
@click.option(
    "--commit-badges/--no-commit-badges",
    default=None,
    help="Commit SVG badge files to the repository",
)
@click.option("--repository", help="owner/repo to commit to (default: <org>/.github)")
@click.option("--readme-path", help="README to update (default: profile/README.md)")
@click.option(
    "--update-readme/--no-update-readme",
    default=None,
    help="Replace the README region between the markers with the badges",
)
@click.option("--start-marker", help="README start marker")
@click.option("--end-marker", help="README end marker")
@click.option("--commit-message", help="Commit message for badge files and README updates")
@click.option("--batch-size", type=int, help="Repositories queried concurrently (default: 10)")
@click.option("-v", "--verbose", is_flag=True, help="Enable debug logging")
def main(verbose: bool, **options: object) -> None:
    """Generate README badges with stats for a GitHub organization."""
    setup_logging("DEBUG" if verbose else None)

    try:
        config = Config.from_inputs(options)
    except ConfigError as e:
        logger.error("Configuration error: %s", e)
        sys.exit(1)

    graphql = GraphQLClient(config.token, url=config.graphql_url)
    contents = None
    if config.writes_to_repository:
        contents = ContentsClient(config.repository, config.token, base_url=config.api_url)

    try:
        result = run(config, graphql, contents)
    except (ConfigError, GitHubError, ReadmeError) as e:
        logger.error("Failed to generate badges: %s", sanitize_for_log(str(e)))
        sys.exit(1)
    except Exception:
        logger.exception("Unexpected error while generating badges")
        sys.exit(1)
    finally:
        graphql.close()
        if contents is not None:
            contents.close()

    logger.info("Badge markdown: %s", result.markdown)
    set_output("badges", result.markdown)
    click.echo(result.markdown)


if __name__ == "__main__":
    main()
