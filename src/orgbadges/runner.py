"""Runner - Collects organization stats and publishes them as badges."""

from __future__ import annotations

import logging
import posixpath
from dataclasses import dataclass, replace
from datetime import datetime

from orgbadges.badges import Badge, BadgeRenderer, RenderedBadge, render_markdown
from orgbadges.config import Config, ConfigError
from orgbadges.github.contents import ContentsClient
from orgbadges.readme import PatchStatus, ReadmePatcher
from orgbadges.stats import (
    AggregateCounts,
    aggregate_organization,
    compute_cutoff,
    get_repository_count,
    list_repositories,
)
from orgbadges.stats.fetcher import GraphQLExecutor

logger = logging.getLogger("orgbadges.runner")


@dataclass
class RunResult:
    """Outcome of a run.

    Attributes:
        markdown: Space-separated markdown images, the action output.
        badges: Rendered badges in output order.
        repository_count: Total repositories in the organization.
        counts: Pull request counts over the window.
        committed: Badge files committed in this run.
        readme_status: README patch outcome, None when not requested.
    """

    markdown: str
    badges: list[RenderedBadge]
    repository_count: int
    counts: AggregateCounts
    committed: list[str]
    readme_status: PatchStatus | None = None


def build_badges(config: Config, repository_count: int, counts: AggregateCounts) -> list[Badge]:
    """The badges published for an organization, in output order."""
    colors = {"color": config.color, "label_color": config.label_color}
    return [
        Badge("Total repositories", repository_count, **colors),
        Badge(f"PRs opened in last {config.days} days", counts.total_created, **colors),
        Badge(f"PRs merged in last {config.days} days", counts.total_merged, **colors),
    ]


def relative_to_readme(rendered: list[RenderedBadge], readme_path: str) -> list[RenderedBadge]:
    """Point badge files at their location as seen from the README.

    GitHub resolves relative image links from the README's directory, while
    badge files are referenced from the repository root. URLs, data URIs and
    absolute paths are left alone.
    """
    readme_dir = posixpath.dirname(readme_path.lstrip("/")) or "."
    relocated = []
    for badge in rendered:
        if badge.path is None or badge.path.is_absolute():
            relocated.append(badge)
            continue
        reference = posixpath.relpath(badge.path.as_posix(), readme_dir)
        relocated.append(replace(badge, reference=reference))
    return relocated


def collect_stats(
    config: Config,
    graphql: GraphQLExecutor,
    now: datetime | None = None,
) -> tuple[int, AggregateCounts]:
    """Repository count and windowed pull request counts for the organization."""
    cutoff = compute_cutoff(config.days, now=now)
    logger.info(
        "Counting pull requests in %s since %s (%d days)",
        config.organization,
        cutoff.isoformat(),
        config.days,
    )
    repositories = list_repositories(graphql, config.organization)
    repository_count = get_repository_count(graphql, config.organization)
    counts = aggregate_organization(
        graphql,
        config.organization,
        repositories,
        cutoff,
        batch_size=config.batch_size,
    )
    return repository_count, counts


def run(
    config: Config,
    graphql: GraphQLExecutor,
    contents: ContentsClient | None = None,
    now: datetime | None = None,
) -> RunResult:
    """Generate the badges and apply the configured side effects.

    Args:
        config: Run configuration
        graphql: GraphQL transport
        contents: Contents API client for the target repository, required
            when commit_badges or update_readme is set
        now: Reference time for the window (current time if unset)

    Returns:
        The run result; `markdown` is the action output

    Raises:
        ConfigError: If repository writes are enabled without a contents client
    """
    if config.writes_to_repository and contents is None:
        raise ConfigError("A contents client is required to commit badges or update the README")

    repository_count, counts = collect_stats(config, graphql, now=now)

    renderer = BadgeRenderer(config.badge_format, config.badge_dir)
    rendered = renderer.render_all(build_badges(config, repository_count, counts))
    markdown = render_markdown(rendered)

    committed: list[str] = []
    if config.commit_badges and contents is not None:
        for badge in rendered:
            if badge.svg is None or badge.path is None:
                continue
            if contents.sync_file(badge.path.as_posix(), badge.svg, config.commit_message):
                committed.append(badge.path.as_posix())
        logger.info("Committed %d badge file(s) to %s", len(committed), config.repository)

    readme_status: PatchStatus | None = None
    if config.update_readme and contents is not None:
        patcher = ReadmePatcher(contents, config.start_marker, config.end_marker)
        readme_markdown = render_markdown(relative_to_readme(rendered, config.readme_path))
        result = patcher.patch(
            config.readme_path, f"\n{readme_markdown}\n", config.commit_message
        )
        readme_status = result.status
        logger.info("README %s: %s", config.readme_path, readme_status.value)

    return RunResult(
        markdown=markdown,
        badges=rendered,
        repository_count=repository_count,
        counts=counts,
        committed=committed,
        readme_status=readme_status,
    )
