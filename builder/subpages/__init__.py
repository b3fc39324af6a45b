"""Subpage discovery and generation."""

from .discovery import discover_links, normalize_href
from .generator import SubpageGenerator

__all__ = ["SubpageGenerator", "discover_links", "normalize_href"]
