"""In-memory test doubles for stores and providers."""

from .providers import (
    CODE_BY_ROLE,
    FENCED_RESPONSES,
    ScriptedFallbackProvider,
    ScriptedPrimaryProvider,
    role_of,
)
from .stores import OWNER_ID, PROJECT_ID, InMemoryCredentialStore, InMemoryProjectStore

__all__ = [
    "CODE_BY_ROLE",
    "FENCED_RESPONSES",
    "OWNER_ID",
    "PROJECT_ID",
    "InMemoryCredentialStore",
    "InMemoryProjectStore",
    "ScriptedFallbackProvider",
    "ScriptedPrimaryProvider",
    "role_of",
]
