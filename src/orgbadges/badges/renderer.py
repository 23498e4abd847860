"""BadgeRenderer - Turns label/value pairs into badge images or URLs."""

from __future__ import annotations

import base64
import logging
import re
from collections.abc import Iterable
from pathlib import Path
from urllib.parse import quote

import pybadges

from orgbadges.badges.models import Badge, BadgeFormat, RenderedBadge

logger = logging.getLogger("orgbadges.badges")

SHIELDS_STATIC_URL = "https://img.shields.io/static/v1"

_HEX_COLOR = re.compile(r"[0-9a-fA-F]{3}|[0-9a-fA-F]{6}")
_UNSAFE_FILENAME_CHARS = re.compile(r'[\s/\\:*?"<>|]')


def badge_url(badge: Badge) -> str:
    """shields.io static badge URL with all parameters percent-encoded."""
    params = {
        "label": badge.label,
        "message": badge.message,
        "color": badge.color,
        "labelColor": badge.label_color,
    }
    query = "&".join(f"{key}={quote(value, safe='')}" for key, value in params.items())
    return f"{SHIELDS_STATIC_URL}?{query}"


def _css_color(color: str) -> str:
    # shields.io accepts bare hex codes ("555"), SVG needs the leading '#'
    if _HEX_COLOR.fullmatch(color):
        return f"#{color}"
    return color


def render_svg(badge: Badge) -> str:
    """Render a badge as SVG markup."""
    return pybadges.badge(
        left_text=badge.label,
        right_text=badge.message,
        left_color=_css_color(badge.label_color),
        right_color=_css_color(badge.color),
    )


def badge_filename(label: str) -> str:
    """File name for a badge: lowercase, unsafe characters as dashes.

    >>> badge_filename("Total repositories")
    'total-repositories.svg'
    >>> badge_filename("Test: Label/Name")
    'test--label-name.svg'
    """
    return _UNSAFE_FILENAME_CHARS.sub("-", label.lower()) + ".svg"


def render_markdown(rendered: Iterable[RenderedBadge]) -> str:
    """Markdown images of the badges, separated by spaces."""
    return " ".join(r.markdown for r in rendered)


class BadgeRenderer:
    """Renders badges in one configured format."""

    def __init__(self, badge_format: BadgeFormat, output_dir: str | Path = "badges") -> None:
        """Initialize the renderer.

        Args:
            badge_format: Representation to produce
            output_dir: Directory for SVG files (file format only)
        """
        self.badge_format = BadgeFormat(badge_format)
        self.output_dir = Path(output_dir)

    def render(self, badge: Badge) -> RenderedBadge:
        """Render a single badge."""
        if self.badge_format is BadgeFormat.URL:
            return RenderedBadge(badge=badge, reference=badge_url(badge))

        svg = render_svg(badge)

        if self.badge_format is BadgeFormat.DATA_URI:
            encoded = base64.b64encode(svg.encode("utf-8")).decode("ascii")
            return RenderedBadge(
                badge=badge,
                reference=f"data:image/svg+xml;base64,{encoded}",
                svg=svg,
            )

        path = self.output_dir / badge_filename(badge.label)
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(svg, encoding="utf-8")
        logger.info("Wrote %s", path)
        return RenderedBadge(badge=badge, reference=path.as_posix(), svg=svg, path=path)

    def render_all(self, badges: Iterable[Badge]) -> list[RenderedBadge]:
        """Render badges in order."""
        return [self.render(badge) for badge in badges]
