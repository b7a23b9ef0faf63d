"""
Tests for the in-memory session event stream.
"""

import asyncio

import pytest

from manas_mitra.stream import EventStream


async def take(iterator, n):
    items = []
    async for item in iterator:
        items.append(item)
        if len(items) == n:
            break
    return items


@pytest.mark.asyncio
async def test_publish_returns_increasing_ids():
    events = EventStream()

    first = await events.publish("s1", "turn", {"n": 1})
    second = await events.publish("s1", "turn", {"n": 2})

    assert (first, second) == ("1", "2")


@pytest.mark.asyncio
async def test_streams_are_per_session():
    events = EventStream()
    await events.publish("s1", "turn", {"n": 1})
    await events.publish("s2", "turn", {"n": 2})

    assert events.history("s1") == [("1", "turn", {"n": 1})]
    assert events.history("s2") == [("1", "turn", {"n": 2})]


@pytest.mark.asyncio
async def test_subscribe_replays_history():
    events = EventStream()
    await events.publish("s1", "typing", {"active": True})
    await events.publish("s1", "typing", {"active": False})

    items = await take(events.subscribe("s1", last_id="0"), 2)

    assert items == [
        ("1", "typing", {"active": True}),
        ("2", "typing", {"active": False}),
    ]


@pytest.mark.asyncio
async def test_subscribe_resumes_after_last_id():
    events = EventStream()
    for n in range(3):
        await events.publish("s1", "turn", {"n": n})

    items = await take(events.subscribe("s1", last_id="2"), 1)

    assert items == [("3", "turn", {"n": 2})]


@pytest.mark.asyncio
async def test_subscribe_new_only_waits_for_publish():
    events = EventStream()
    await events.publish("s1", "turn", {"old": True})

    reader = asyncio.create_task(take(events.subscribe("s1", last_id="$", block_s=0.05), 1))
    await asyncio.sleep(0.01)
    await events.publish("s1", "turn", {"old": False})

    assert await asyncio.wait_for(reader, timeout=1) == [("2", "turn", {"old": False})]


@pytest.mark.asyncio
async def test_max_len_keeps_latest_events():
    events = EventStream(max_len=2)
    for n in range(5):
        await events.publish("s1", "turn", {"n": n})

    assert [data["n"] for _, _, data in events.history("s1")] == [3, 4]


@pytest.mark.asyncio
async def test_drop_forgets_stream():
    events = EventStream()
    await events.publish("s1", "turn", {})

    events.drop("s1")

    assert events.history("s1") == []
