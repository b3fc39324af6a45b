"""Project and credential-rotation storage."""

from .base import CredentialStore, MessageLogMixin, ProjectStore, RotationState
from .sql import SqlCredentialStore, SqlProjectStore

__all__ = [
    "CredentialStore",
    "MessageLogMixin",
    "ProjectStore",
    "RotationState",
    "SqlCredentialStore",
    "SqlProjectStore",
]
