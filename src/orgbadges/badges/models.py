"""Data models for badges."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from pathlib import Path


class BadgeFormat(str, Enum):
    """How a badge is referenced from markdown."""

    URL = "url"  # shields.io static badge URL
    FILE = "file"  # SVG written to disk, relative path
    DATA_URI = "data-uri"  # SVG embedded as base64


@dataclass(frozen=True)
class Badge:
    """A label/value pair to render as a badge.

    Attributes:
        label: Left-hand text.
        value: Right-hand text (the metric).
        color: Colour of the value side, a name or hex code.
        label_color: Colour of the label side, a name or hex code.
    """

    label: str
    value: str | int
    color: str = "blue"
    label_color: str = "555"

    @property
    def message(self) -> str:
        return str(self.value)


@dataclass(frozen=True)
class RenderedBadge:
    """A badge in its rendered form.

    Attributes:
        badge: The source badge.
        reference: Image target for markdown (URL, relative path or data URI).
        svg: SVG markup, when rendered locally.
        path: File the SVG was written to, for the file format.
    """

    badge: Badge
    reference: str
    svg: str | None = None
    path: Path | None = None

    @property
    def markdown(self) -> str:
        return f"![{self.badge.label}]({self.reference})"
