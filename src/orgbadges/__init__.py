"""org-badges - GitHub organization README badge generator."""

__version__ = "1.1.0"
