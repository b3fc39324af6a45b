"""Database models package."""

from .api_key_rotation import APIKeyRotation
from .base import Base
from .project import BuildStatus, Project

__all__ = [
    "APIKeyRotation",
    "Base",
    "BuildStatus",
    "Project",
]
