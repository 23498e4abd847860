"""Run configuration for org-badges.

Values come from CLI flags first, then from GitHub Actions inputs (exported
by the runner as INPUT_<NAME> environment variables), then from defaults.
The resulting Config is built once at startup and passed explicitly.
"""

from __future__ import annotations

import os
from collections.abc import Mapping
from dataclasses import dataclass, field
from pathlib import PurePosixPath
from typing import Any

from orgbadges.badges.models import BadgeFormat
from orgbadges.github.client import DEFAULT_GRAPHQL_URL
from orgbadges.github.contents import DEFAULT_API_URL
from orgbadges.readme.patcher import DEFAULT_END_MARKER, DEFAULT_START_MARKER
from orgbadges.stats.orchestrator import DEFAULT_BATCH_SIZE


class ConfigError(Exception):
    """Raised when configuration is invalid."""


class MissingConfigurationError(ConfigError):
    """Raised when a required input is absent."""


_TRUE = {"true", "yes", "y", "on", "1"}
_FALSE = {"false", "no", "n", "off", "0"}


def _parse_bool(name: str, value: Any) -> bool:
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ConfigError(f"{name} must be a boolean (true/false), got {value!r}")


def _parse_positive_int(name: str, value: Any) -> int:
    try:
        number = int(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"{name} must be an integer, got {value!r}") from e
    if number < 1:
        raise ConfigError(f"{name} must be at least 1, got {number}")
    return number


@dataclass(frozen=True)
class Config:
    """Everything a run needs, resolved up front."""

    organization: str
    token: str = field(repr=False)
    repository: str
    days: int = 30
    graphql_url: str = DEFAULT_GRAPHQL_URL
    api_url: str = DEFAULT_API_URL
    color: str = "blue"
    label_color: str = "555"
    badge_format: BadgeFormat = BadgeFormat.DATA_URI
    badge_dir: str = "badges"
    commit_badges: bool = False
    readme_path: str = "profile/README.md"
    update_readme: bool = False
    start_marker: str = DEFAULT_START_MARKER
    end_marker: str = DEFAULT_END_MARKER
    batch_size: int = DEFAULT_BATCH_SIZE
    commit_message: str = "Update organization badges"

    @property
    def writes_to_repository(self) -> bool:
        return self.commit_badges or self.update_readme

    @classmethod
    def from_inputs(
        cls,
        cli: Mapping[str, Any] | None = None,
        environ: Mapping[str, str] | None = None,
    ) -> Config:
        """Merge CLI values, action inputs and defaults into a Config.

        Args:
            cli: Values from command-line flags; None means not given.
            environ: Environment to read INPUT_* variables from.
                Defaults to os.environ.

        Returns:
            Validated configuration.

        Raises:
            MissingConfigurationError: If organization or token is missing.
            ConfigError: If a value is invalid.
        """
        cli = cli or {}
        if environ is None:
            environ = os.environ

        def lookup(name: str, *fallback_env: str) -> Any:
            value = cli.get(name)
            if value is not None and value != "":
                return value
            for key in (f"INPUT_{name.upper()}", *fallback_env):
                env_value = environ.get(key, "").strip()
                if env_value:
                    return env_value
            return None

        organization = lookup("organization", "GITHUB_REPOSITORY_OWNER")
        if not organization:
            raise MissingConfigurationError("organization is required")
        token = lookup("token", "GITHUB_TOKEN")
        if not token:
            raise MissingConfigurationError("token is required")

        values: dict[str, Any] = {}
        for name in (
            "graphql_url",
            "api_url",
            "color",
            "label_color",
            "badge_dir",
            "readme_path",
            "start_marker",
            "end_marker",
            "commit_message",
        ):
            value = lookup(name)
            if value is not None:
                values[name] = str(value)

        for name in ("days", "batch_size"):
            value = lookup(name)
            if value is not None:
                values[name] = _parse_positive_int(name, value)

        for name in ("commit_badges", "update_readme"):
            value = lookup(name)
            if value is not None:
                values[name] = _parse_bool(name, value)

        commit_badges = values.get("commit_badges", False)
        badge_format = lookup("badge_format")
        if badge_format is None:
            values["badge_format"] = BadgeFormat.FILE if commit_badges else BadgeFormat.DATA_URI
        else:
            try:
                values["badge_format"] = BadgeFormat(str(badge_format).lower())
            except ValueError as e:
                choices = ", ".join(f.value for f in BadgeFormat)
                raise ConfigError(
                    f"badge_format must be one of {choices}, got {badge_format!r}"
                ) from e
        if commit_badges and values["badge_format"] is not BadgeFormat.FILE:
            raise ConfigError("commit_badges requires badge_format 'file'")
        badge_dir = values.get("badge_dir")
        if commit_badges and badge_dir is not None:
            parts = PurePosixPath(badge_dir.replace("\\", "/"))
            if parts.is_absolute() or ".." in parts.parts:
                raise ConfigError(
                    "badge_dir must be relative to the repository root when committing "
                    f"badges, got {badge_dir!r}"
                )

        repository = lookup("repository", "GITHUB_REPOSITORY") or f"{organization}/.github"

        return cls(
            organization=str(organization),
            token=str(token),
            repository=str(repository),
            **values,
        )
