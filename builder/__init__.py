"""Playground builder: multi-agent AI site generation service."""

__version__ = "0.1.0"
