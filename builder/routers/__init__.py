"""Routers package."""

from . import agents, health, projects

__all__ = ["agents", "health", "projects"]
