"""SQLAlchemy-backed stores.

One short session per call and a commit per write; there is no
transaction spanning pipeline steps.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import select, update
from sqlalchemy.dialects.postgresql import Insert, insert
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared.models import APIKeyRotation, Project

from .base import MessageLogMixin, RotationState


def rotation_upsert(service: str, index: int, timestamp: datetime) -> Insert:
    """Write the rotation position, creating the service's row on first use."""
    stmt = insert(APIKeyRotation).values(
        service_name=service,
        current_key_index=index,
        last_rotation_time=timestamp,
    )
    return stmt.on_conflict_do_update(
        index_elements=[APIKeyRotation.service_name],
        set_={
            "current_key_index": stmt.excluded.current_key_index,
            "last_rotation_time": stmt.excluded.last_rotation_time,
        },
    )


class SqlProjectStore(MessageLogMixin):
    """Project rows in the ``projects`` table."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def get(self, project_id: str) -> dict[str, Any] | None:
        async with self._session_maker() as session:
            project = await session.get(Project, project_id)
            return project.as_row() if project else None

    async def update(self, project_id: str, fields: dict[str, Any]) -> None:
        async with self._session_maker() as session:
            await session.execute(
                update(Project).where(Project.id == project_id).values(**fields)
            )
            await session.commit()

    async def insert_many(self, rows: list[dict[str, Any]]) -> list[str]:
        async with self._session_maker() as session:
            projects = [Project(**row) for row in rows]
            session.add_all(projects)
            await session.commit()
            return [project.id for project in projects]

    async def list_subpage_routes(self, parent_id: str) -> set[str]:
        async with self._session_maker() as session:
            result = await session.execute(
                select(Project.subpage_route).where(
                    Project.parent_project_id == parent_id,
                    Project.is_subpage.is_(True),
                )
            )
            return {route for route in result.scalars().all() if route}


class SqlCredentialStore:
    """Rotation rows in the ``api_key_rotation`` table."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def get(self, service: str) -> RotationState | None:
        async with self._session_maker() as session:
            result = await session.execute(
                select(APIKeyRotation).where(APIKeyRotation.service_name == service)
            )
            row = result.scalar_one_or_none()
            if row is None:
                return None
            return RotationState(
                service=row.service_name,
                current_index=row.current_key_index,
                last_rotation_time=row.last_rotation_time,
            )

    async def update(self, service: str, index: int, timestamp: datetime) -> None:
        async with self._session_maker() as session:
            await session.execute(rotation_upsert(service, index, timestamp))
            await session.commit()
