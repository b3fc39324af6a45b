"""Round-robin API key rotation backed by a single persisted counter.

Two transitions move the counter: an interval-based rotation checked on
every read and an on-demand rotation after the provider signals quota
exhaustion. There is no lock. Concurrent runs read-then-write the same row,
so a race can rotate twice, but the key handed out is always a configured one.
"""

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

import structlog

from ..stores import CredentialStore
from .pool import Credential, CredentialPool

logger = structlog.get_logger()


def _utcnow() -> datetime:
    return datetime.now(UTC)


def _as_aware(value: datetime) -> datetime:
    return value if value.tzinfo else value.replace(tzinfo=UTC)


class CredentialRotator:
    """Hands out the pool credential the rotation row currently points at."""

    def __init__(
        self,
        store: CredentialStore,
        pool: CredentialPool,
        service: str = "gemini",
        interval: timedelta = timedelta(hours=1),
        clock: Callable[[], datetime] = _utcnow,
    ):
        self.store = store
        self.pool = pool
        self.service = service
        self.interval = interval
        self._clock = clock

    async def current_credential(self) -> Credential:
        """Return the active credential, rotating first if the interval elapsed.

        If the rotation row cannot be read the pool's first credential is
        returned and nothing is persisted.
        """
        try:
            state = await self.store.get(self.service)
        except Exception as e:
            logger.warning(
                "rotation_state_read_failed",
                service=self.service,
                error=str(e),
                error_type=type(e).__name__,
            )
            return self.pool.first()

        if state is None:
            logger.warning("rotation_state_missing", service=self.service)
            return self.pool.first()

        now = self._clock()
        if now - _as_aware(state.last_rotation_time) >= self.interval:
            next_index = self.pool.next_index(state.current_index)
            await self._persist(next_index, now)
            logger.info(
                "credential_rotated",
                service=self.service,
                reason="interval",
                from_index=state.current_index,
                to_index=next_index,
            )
            return self.pool.resolve(next_index)

        return self.pool.resolve(state.current_index)

    async def advance_on_exhaustion(self, current_index: int) -> Credential:
        """Unconditionally move to the next credential after a quota error."""
        next_index = self.pool.next_index(current_index)
        await self._persist(next_index, self._clock())
        logger.info(
            "credential_rotated",
            service=self.service,
            reason="quota_exhausted",
            from_index=current_index,
            to_index=next_index,
        )
        return self.pool.resolve(next_index)

    async def _persist(self, index: int, timestamp: datetime) -> None:
        try:
            await self.store.update(self.service, index, timestamp)
        except Exception as e:
            logger.warning(
                "rotation_state_write_failed",
                service=self.service,
                index=index,
                error=str(e),
                error_type=type(e).__name__,
            )
