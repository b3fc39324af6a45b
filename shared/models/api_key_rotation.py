"""API key rotation state model."""

from datetime import datetime
import uuid

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.sql import func

from .base import Base


class APIKeyRotation(Base):
    """Round-robin position in a provider's credential pool.

    One row per provider ("service"). ``current_key_index`` is 1-based.
    """

    __tablename__ = "api_key_rotation"

    id: Mapped[str] = mapped_column(
        String(36), primary_key=True, default=lambda: str(uuid.uuid4())
    )
    service_name: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    current_key_index: Mapped[int] = mapped_column(Integer, default=1)
    last_rotation_time: Mapped[datetime] = mapped_column(server_default=func.now())
