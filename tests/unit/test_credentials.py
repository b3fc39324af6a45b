"""Unit tests for the credential pool and rotator."""

from datetime import UTC, datetime, timedelta

import pytest

from builder.credentials import CredentialPool, CredentialRotator
from builder.stores import RotationState
from tests.mocks import InMemoryCredentialStore

NOW = datetime(2026, 3, 1, 12, 0, tzinfo=UTC)


def _store(index: int, rotated_at: datetime) -> InMemoryCredentialStore:
    return InMemoryCredentialStore(
        {"gemini": RotationState(service="gemini", current_index=index, last_rotation_time=rotated_at)}
    )


class TestCredentialPool:
    def test_from_environ_walks_numbered_keys_until_gap(self):
        environ = {
            "GEMINI_API_KEY": "primary",
            "GEMINI_API_KEY_2": "second",
            "GEMINI_API_KEY_3": "third",
            "GEMINI_API_KEY_5": "unreachable",
        }
        pool = CredentialPool.from_environ(environ=environ)

        assert len(pool) == 3
        assert pool.resolve(3).secret == "third"
        assert 5 not in pool

    def test_explicit_primary_wins_over_environ(self):
        pool = CredentialPool.from_environ(primary="from-settings", environ={"GEMINI_API_KEY": "env"})
        assert pool.first().secret == "from-settings"

    def test_out_of_range_index_resolves_to_first(self):
        pool = CredentialPool(["a", "b"])
        assert pool.resolve(7).index == 1
        assert pool.resolve(0).secret == "a"

    def test_next_index_wraps(self):
        pool = CredentialPool(["a", "b", "c"])
        assert [pool.next_index(i) for i in (1, 2, 3)] == [2, 3, 1]

    def test_empty_pool_still_has_first_slot(self):
        pool = CredentialPool([])
        assert len(pool) == 1
        assert pool.first().secret == ""


class TestCredentialRotator:
    @pytest.mark.asyncio
    async def test_returns_stored_credential_within_interval(self):
        store = _store(2, NOW - timedelta(minutes=59))
        rotator = CredentialRotator(store, CredentialPool(["a", "b", "c"]), clock=lambda: NOW)

        credential = await rotator.current_credential()

        assert (credential.secret, credential.index) == ("b", 2)
        assert store.writes == []

    @pytest.mark.asyncio
    async def test_rotates_after_interval(self):
        store = _store(2, NOW - timedelta(hours=1, seconds=1))
        rotator = CredentialRotator(store, CredentialPool(["a", "b", "c"]), clock=lambda: NOW)

        credential = await rotator.current_credential()

        assert credential.index == 3
        assert store.writes == [("gemini", 3, NOW)]

    @pytest.mark.asyncio
    async def test_interval_rotation_wraps_to_first(self):
        store = _store(3, NOW - timedelta(hours=2))
        rotator = CredentialRotator(store, CredentialPool(["a", "b", "c"]), clock=lambda: NOW)

        credential = await rotator.current_credential()

        assert credential.index == 1
        assert store.states["gemini"].current_index == 1

    @pytest.mark.asyncio
    async def test_naive_timestamp_is_treated_as_utc(self):
        naive = (NOW - timedelta(minutes=10)).replace(tzinfo=None)
        rotator = CredentialRotator(_store(2, naive), CredentialPool(["a", "b"]), clock=lambda: NOW)

        assert (await rotator.current_credential()).index == 2

    @pytest.mark.asyncio
    async def test_read_failure_falls_back_to_first_without_persisting(self):
        store = _store(2, NOW)
        store.fail_reads = ConnectionError("database unavailable")
        rotator = CredentialRotator(store, CredentialPool(["a", "b"]), clock=lambda: NOW)

        credential = await rotator.current_credential()

        assert credential.index == 1
        assert store.writes == []

    @pytest.mark.asyncio
    async def test_missing_row_uses_first_credential(self):
        rotator = CredentialRotator(InMemoryCredentialStore(), CredentialPool(["a", "b"]))
        assert (await rotator.current_credential()).secret == "a"

    @pytest.mark.asyncio
    async def test_exhaustion_cycles_through_every_credential_once(self):
        pool = CredentialPool(["a", "b", "c", "d"])
        store = _store(1, NOW)
        rotator = CredentialRotator(store, pool, clock=lambda: NOW)

        seen = []
        index = 1
        for _ in range(len(pool)):
            credential = await rotator.advance_on_exhaustion(index)
            seen.append(credential.index)
            index = credential.index

        assert seen == [2, 3, 4, 1]
        assert sorted(seen) == [1, 2, 3, 4]
        assert [write[1] for write in store.writes] == seen

    @pytest.mark.asyncio
    async def test_write_failure_does_not_block_rotation(self):
        store = _store(1, NOW)
        store.fail_writes = ConnectionError("read-only replica")
        rotator = CredentialRotator(store, CredentialPool(["a", "b"]), clock=lambda: NOW)

        credential = await rotator.advance_on_exhaustion(1)

        assert credential.secret == "b"
