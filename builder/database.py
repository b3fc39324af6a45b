"""Database connection handling.

Uses service-specific config with fail-fast validation on first use.
"""

from functools import lru_cache

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from builder.config import get_settings


@lru_cache
def get_engine() -> AsyncEngine:
    """Create the process-wide async engine (fails fast if DATABASE_URL is not set)."""
    return create_async_engine(get_settings().database_url, echo=False, pool_pre_ping=True)


@lru_cache
def get_session_maker() -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(get_engine(), expire_on_commit=False)
