"""
Tests for the in-memory session registry.
"""

from datetime import datetime, timedelta

import pytest

from manas_mitra.conversation import SessionLimitError, SessionManager
from manas_mitra.stream import EventStream


@pytest.mark.asyncio
async def test_create_and_get():
    manager = SessionManager(events=EventStream())
    session = await manager.create()

    assert manager.get(session.id) is session
    assert manager.get("missing") is None


@pytest.mark.asyncio
async def test_list_sessions_newest_first():
    manager = SessionManager(events=EventStream())
    first = await manager.create()
    second = await manager.create()
    first.created_at = datetime.now() - timedelta(minutes=5)

    assert manager.list_sessions() == [second, first]


@pytest.mark.asyncio
async def test_expired_session_is_dropped():
    events = EventStream()
    manager = SessionManager(ttl_seconds=60, events=events)
    session = await manager.create()
    await events.publish(session.id, "turn", {"text": "x"})
    session.last_used = datetime.now() - timedelta(seconds=120)

    assert manager.get(session.id) is None
    assert events.history(session.id) == []


@pytest.mark.asyncio
async def test_awaiting_session_never_expires():
    manager = SessionManager(ttl_seconds=60, events=EventStream())
    session = await manager.create()
    session.submit("hello")
    session.last_used = datetime.now() - timedelta(seconds=120)

    assert manager.get(session.id) is session
    assert await manager.cleanup_expired() == 0


@pytest.mark.asyncio
async def test_cleanup_expired_counts_removed():
    manager = SessionManager(ttl_seconds=60, events=EventStream())
    old = await manager.create()
    fresh = await manager.create()
    old.last_used = datetime.now() - timedelta(seconds=120)

    assert await manager.cleanup_expired() == 1
    assert manager.list_sessions() == [fresh]


@pytest.mark.asyncio
async def test_lru_eviction_at_capacity():
    manager = SessionManager(max_sessions=2, events=EventStream())
    oldest = await manager.create()
    newer = await manager.create()
    oldest.last_used = datetime.now() - timedelta(minutes=10)

    third = await manager.create()

    assert manager.get(oldest.id) is None
    assert manager.get(newer.id) is newer
    assert manager.get(third.id) is third


@pytest.mark.asyncio
async def test_lru_eviction_skips_awaiting_sessions():
    manager = SessionManager(max_sessions=2, events=EventStream())
    busy = await manager.create()
    busy.submit("still waiting")
    busy.last_used = datetime.now() - timedelta(minutes=10)
    idle = await manager.create()

    await manager.create()

    assert manager.get(busy.id) is busy
    assert manager.get(idle.id) is None


@pytest.mark.asyncio
async def test_create_refuses_when_every_session_is_awaiting():
    manager = SessionManager(max_sessions=1, events=EventStream())
    busy = await manager.create()
    busy.submit("still waiting")

    with pytest.raises(SessionLimitError):
        await manager.create()

    assert manager.list_sessions() == [busy]


@pytest.mark.asyncio
async def test_get_refreshes_last_used():
    manager = SessionManager(ttl_seconds=60, events=EventStream())
    session = await manager.create()
    session.last_used = datetime.now() - timedelta(seconds=50)

    assert manager.get(session.id) is session
    assert datetime.now() - session.last_used < timedelta(seconds=5)

    # Another 50 s later the session is still within its refreshed TTL
    session.last_used -= timedelta(seconds=50)
    assert manager.get(session.id) is session
