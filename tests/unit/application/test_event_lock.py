"""EventLock and the in-process lock backend."""

import pytest

from event_workflow.application.exceptions import LockUnavailableError
from event_workflow.application.locking import EventLock, InMemoryLockBackend


@pytest.fixture
def backend():
    return InMemoryLockBackend()


async def test_acquire_is_exclusive_per_event(backend):
    lock = EventLock(backend)
    token = await lock.acquire("evt-1")
    assert token is not None
    assert await lock.acquire("evt-1") is None
    assert await lock.acquire("evt-2") is not None


async def test_release_requires_matching_token(backend):
    lock = EventLock(backend)
    token = await lock.acquire("evt-1")

    await lock.release("evt-1", "not-the-token")
    assert await backend.get("lock:event:evt-1") == token

    await lock.release("evt-1", token)
    assert await backend.get("lock:event:evt-1") is None


async def test_hold_releases_on_exit(backend):
    lock = EventLock(backend)
    async with lock.hold("evt-1"):
        assert await backend.get("lock:event:evt-1") is not None
    assert await backend.get("lock:event:evt-1") is None


async def test_hold_releases_when_body_raises(backend):
    lock = EventLock(backend)
    with pytest.raises(RuntimeError):
        async with lock.hold("evt-1"):
            raise RuntimeError("boom")
    assert await backend.get("lock:event:evt-1") is None


async def test_hold_times_out_while_held(backend):
    lock = EventLock(backend, wait_seconds=0.05, poll_interval_seconds=0.01)
    await lock.acquire("evt-1")
    with pytest.raises(LockUnavailableError) as exc_info:
        async with lock.hold("evt-1"):
            pass
    assert exc_info.value.retryable is True


async def test_in_memory_backend_expires_keys(backend):
    clock = [100.0]
    backend._now = lambda: clock[0]

    assert await backend.set_nx_ex("k", "v1", 5)
    assert not await backend.set_nx_ex("k", "v2", 5)
    clock[0] = 106.0
    assert await backend.get("k") is None
    assert await backend.set_nx_ex("k", "v2", 5)
    assert not await backend.delete_if_value("k", "v1")
    assert await backend.delete_if_value("k", "v2")
