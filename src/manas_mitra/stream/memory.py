"""In-process event streams, one per conversation session."""

import asyncio
from collections import deque
from dataclasses import dataclass, field
from typing import AsyncIterator

STREAM_MAX_LEN = 1000  # Max events kept per session stream


@dataclass
class _Stream:
    events: deque = field(default_factory=lambda: deque(maxlen=STREAM_MAX_LEN))
    last_id: int = 0
    changed: asyncio.Condition = field(default_factory=asyncio.Condition)


class EventStream:
    """
    Per-session event log with resumable subscriptions.

    - Producer appends events with publish()
    - Consumer reads with subscribe() from any position
    - Consumer can disconnect and reconnect with last_id
    """

    def __init__(self, max_len: int = STREAM_MAX_LEN):
        self.max_len = max_len
        self._streams: dict[str, _Stream] = {}

    def _get(self, session_id: str) -> _Stream:
        stream = self._streams.get(session_id)
        if stream is None:
            stream = _Stream(events=deque(maxlen=self.max_len))
            self._streams[session_id] = stream
        return stream

    async def publish(
        self,
        session_id: str,
        event_type: str,
        data: dict,
    ) -> str:
        """
        Publish an event to a session's stream.

        Returns the event ID.
        """
        stream = self._get(session_id)
        async with stream.changed:
            stream.last_id += 1
            stream.events.append((stream.last_id, event_type, data))
            stream.changed.notify_all()
        return str(stream.last_id)

    def history(self, session_id: str) -> list[tuple[str, str, dict]]:
        """Return the retained events of a session."""
        stream = self._streams.get(session_id)
        if stream is None:
            return []
        return [(str(event_id), event_type, data) for event_id, event_type, data in stream.events]

    async def subscribe(
        self,
        session_id: str,
        last_id: str = "0",
        block_s: float = 5.0,
    ) -> AsyncIterator[tuple[str, str, dict]]:
        """
        Subscribe to a session's event stream.

        Args:
            session_id: Session to subscribe to
            last_id: Start reading after this ID ("0" for all, "$" for new only)
            block_s: How long to block waiting for new events before re-checking

        Yields:
            (event_id, event_type, data) tuples
        """
        stream = self._get(session_id)
        current_id = stream.last_id if last_id == "$" else int(last_id)

        while True:
            pending = [event for event in stream.events if event[0] > current_id]

            if not pending:
                async with stream.changed:
                    try:
                        await asyncio.wait_for(
                            stream.changed.wait_for(lambda: stream.last_id > current_id),
                            timeout=block_s,
                        )
                    except asyncio.TimeoutError:
                        # No new events, check again
                        pass
                continue

            for event_id, event_type, data in pending:
                current_id = event_id
                yield str(event_id), event_type, data

    def drop(self, session_id: str) -> None:
        """Forget a session's stream."""
        self._streams.pop(session_id, None)

    def close(self) -> None:
        self._streams.clear()


# Global instance
event_stream = EventStream()
