"""Storage interfaces consumed by the build pipeline.

The pipeline treats storage as a simple keyed record store with no
transactions. Concurrent runs against the same project interleave with
last-writer-wins semantics per field.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Any, Protocol

from shared.contracts import AgentMessage


@dataclass(frozen=True)
class RotationState:
    """Persisted round-robin position of one provider's credential pool."""

    service: str
    current_index: int
    last_rotation_time: datetime


class ProjectStore(Protocol):
    """Keyed access to project rows (dicts keyed by column name)."""

    async def get(self, project_id: str) -> dict[str, Any] | None: ...

    async def update(self, project_id: str, fields: dict[str, Any]) -> None: ...

    async def insert_many(self, rows: list[dict[str, Any]]) -> list[str]:
        """Insert rows in one batch and return their ids."""
        ...

    async def list_subpage_routes(self, parent_id: str) -> set[str]: ...

    async def append_message(self, project_id: str, agent: str, message: str) -> None:
        """Append one entry to the project's message log.

        Read-modify-write of the whole log; concurrent appenders can lose entries.
        """
        ...


class CredentialStore(Protocol):
    """Rotation state keyed by provider name."""

    async def get(self, service: str) -> RotationState | None: ...

    async def update(self, service: str, index: int, timestamp: datetime) -> None: ...


class MessageLogMixin:
    """``append_message`` on top of a store's ``get``/``update``."""

    async def append_message(self, project_id: str, agent: str, message: str) -> None:
        project = await self.get(project_id)  # type: ignore[attr-defined]
        if project is None:
            return
        messages = list(project.get("agent_messages") or [])
        messages.append(AgentMessage(agent=agent, message=message).model_dump(mode="json"))
        await self.update(project_id, {"agent_messages": messages})  # type: ignore[attr-defined]
