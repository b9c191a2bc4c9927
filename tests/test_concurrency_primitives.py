"""KeyedLocks, the store_operation guard, and timeouts on real service calls."""

import asyncio
import gc
from types import SimpleNamespace

import pytest
from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.enums import PairingDecision, PairingStatus
from app.core.errors import NotFound, Unavailable
from app.core.locks import KeyedLocks
from app.db import guard
from app.db.guard import store_operation
from app.services import conversation, pairing, profiles


class TestKeyedLocks:

    async def test_same_key_serializes(self):
        locks = KeyedLocks()
        active = 0
        peak = 0

        async def worker():
            nonlocal active, peak
            async with locks.hold("pairing-1"):
                active += 1
                peak = max(peak, active)
                await asyncio.sleep(0.01)
                active -= 1

        await asyncio.gather(*(worker() for _ in range(5)))

        assert peak == 1

    async def test_different_keys_do_not_contend(self):
        locks = KeyedLocks()
        inside = asyncio.Event()
        release = asyncio.Event()

        async def holder():
            async with locks.hold("a"):
                inside.set()
                await release.wait()

        task = asyncio.create_task(holder())
        await inside.wait()
        # "b" is free while "a" is held
        await asyncio.wait_for(_enter_and_leave(locks, "b"), timeout=1)
        release.set()
        await task

    async def test_unused_locks_are_dropped(self):
        locks = KeyedLocks()
        async with locks.hold("x"):
            assert len(locks) == 1
        gc.collect()

        assert len(locks) == 0


async def _enter_and_leave(locks, key):
    async with locks.hold(key):
        pass


class TestStoreOperation:

    async def test_passes_result_through(self):
        @store_operation("echo")
        async def echo(value):
            return value

        assert await echo(42) == 42

    async def test_operational_error_becomes_unavailable(self):
        @store_operation("flaky")
        async def flaky():
            raise OperationalError("SELECT 1", {}, ConnectionRefusedError("refused"))

        with pytest.raises(Unavailable) as exc_info:
            await flaky()
        assert "flaky" in exc_info.value.detail

    async def test_timeout_becomes_unavailable(self, monkeypatch):
        monkeypatch.setattr(guard, "get_settings", lambda: SimpleNamespace(store_timeout_seconds=0.01))

        @store_operation("slow")
        async def slow():
            await asyncio.sleep(1)

        with pytest.raises(Unavailable):
            await slow()

    async def test_service_errors_propagate_unchanged(self):
        @store_operation("lookup")
        async def lookup():
            raise NotFound("nope")

        with pytest.raises(NotFound):
            await lookup()


# ============================================================================
# Timeouts on real operations: Unavailable means nothing was applied
# ============================================================================

def short_store_timeout(monkeypatch, seconds=0.2):
    monkeypatch.setattr(guard, "get_settings", lambda: SimpleNamespace(store_timeout_seconds=seconds))


def slow_session_call(monkeypatch, name, delay=0.5):
    original = getattr(AsyncSession, name)

    async def slow(self, *args, **kwargs):
        await asyncio.sleep(delay)
        return await original(self, *args, **kwargs)

    monkeypatch.setattr(AsyncSession, name, slow)


class TestTimedOutOperationsAreNotApplied:

    @pytest.fixture
    async def pending(self, db, morning_runner, morning_runner_twin):
        return await pairing.propose(db, morning_runner.id, morning_runner_twin.id)

    async def test_respond_slow_reload_leaves_pairing_pending(
        self, db, session_maker, monkeypatch, pending, morning_runner_twin
    ):
        short_store_timeout(monkeypatch)
        slow_session_call(monkeypatch, "refresh")

        with pytest.raises(Unavailable):
            await pairing.respond(db, pending.id, morning_runner_twin.id, PairingDecision.ACCEPT)
        await db.rollback()

        async with session_maker() as session:
            assert (await pairing.get_pairing(session, pending.id)).status is PairingStatus.PENDING

    async def test_respond_slow_commit_leaves_pairing_pending(
        self, db, session_maker, monkeypatch, pending, morning_runner_twin
    ):
        short_store_timeout(monkeypatch)
        slow_session_call(monkeypatch, "commit")

        with pytest.raises(Unavailable):
            await pairing.respond(db, pending.id, morning_runner_twin.id, PairingDecision.DECLINE)
        await db.rollback()

        async with session_maker() as session:
            assert (await pairing.get_pairing(session, pending.id)).status is PairingStatus.PENDING

    async def test_respond_result_matches_committed_state(
        self, db, session_maker, monkeypatch, pending, morning_runner_twin
    ):
        short_store_timeout(monkeypatch)

        answered = await pairing.respond(db, pending.id, morning_runner_twin.id, PairingDecision.ACCEPT)

        async with session_maker() as session:
            stored = await pairing.get_pairing(session, pending.id)
        assert answered.status is stored.status is PairingStatus.ACCEPTED
        assert answered.updated_at == stored.updated_at

    async def test_update_profile_slow_reload_keeps_old_values(
        self, db, session_maker, monkeypatch, morning_runner
    ):
        short_store_timeout(monkeypatch)
        slow_session_call(monkeypatch, "refresh")

        with pytest.raises(Unavailable):
            await profiles.update_profile(db, morning_runner.id, {"availability": "night"})
        await db.rollback()

        async with session_maker() as session:
            assert (await profiles.get_profile(session, morning_runner.id)).availability == "morning"

    async def test_post_message_slow_commit_stores_nothing(
        self, db, session_maker, monkeypatch, pending, morning_runner, morning_runner_twin
    ):
        await pairing.respond(db, pending.id, morning_runner_twin.id, PairingDecision.ACCEPT)
        short_store_timeout(monkeypatch)
        slow_session_call(monkeypatch, "commit")

        with pytest.raises(Unavailable):
            await conversation.post_message(db, pending.id, morning_runner.id, "running late")
        await db.rollback()

        async with session_maker() as session:
            assert await conversation.list_messages(session, pending.id, morning_runner.id) == []
