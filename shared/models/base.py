"""Declarative base for the builder's tables.

Stores hand rows out as plain dicts keyed by column name, so nothing above
the store layer holds an ORM instance.
"""

from datetime import datetime
from typing import Any

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from sqlalchemy.sql import func


class Base(DeclarativeBase):
    """Base class for all models. Every table carries its own timestamps."""

    type_annotation_map = {datetime: DateTime(timezone=True)}

    created_at: Mapped[datetime] = mapped_column(server_default=func.now())
    updated_at: Mapped[datetime] = mapped_column(server_default=func.now(), onupdate=func.now())

    def as_row(self) -> dict[str, Any]:
        """Column values keyed by column name."""
        return {attr.key: getattr(self, attr.key) for attr in self.__mapper__.column_attrs}
