"""Badges - rendering metrics as shields.io URLs or SVG images."""

from orgbadges.badges.models import Badge, BadgeFormat, RenderedBadge
from orgbadges.badges.renderer import (
    BadgeRenderer,
    badge_filename,
    badge_url,
    render_markdown,
    render_svg,
)

__all__ = [
    "Badge",
    "BadgeFormat",
    "BadgeRenderer",
    "RenderedBadge",
    "badge_filename",
    "badge_url",
    "render_markdown",
    "render_svg",
]
