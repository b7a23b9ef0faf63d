"""Registry of in-memory conversation sessions."""

import asyncio
from datetime import datetime, timedelta

import structlog

from manas_mitra.logs import hash_id
from manas_mitra.stream import EventStream, event_stream
from .session import ConversationSession

logger = structlog.get_logger()


class SessionLimitError(Exception):
    """Every slot is held by a session that is awaiting a response."""


class SessionManager:
    """
    Holds conversation sessions with TTL and LRU eviction.

    - Sessions live only in memory and are lost on restart
    - 24-hour TTL: sessions idle for longer are dropped
    - Max sessions: LRU eviction when exceeded, never evicting a session
      that is awaiting a response; create() raises SessionLimitError when
      no session can be evicted
    """

    def __init__(
        self,
        ttl_seconds: int = 86400,  # 24 hours
        max_sessions: int = 100,
        events: EventStream = event_stream,
    ):
        self.ttl = timedelta(seconds=ttl_seconds)
        self.max_sessions = max_sessions
        self.events = events
        self._sessions: dict[str, ConversationSession] = {}
        self._lock = asyncio.Lock()

    def _is_expired(self, session: ConversationSession) -> bool:
        """Check if session has expired."""
        return not session.awaiting_response and datetime.now() - session.last_used > self.ttl

    def _remove(self, session_id: str) -> None:
        del self._sessions[session_id]
        self.events.drop(session_id)

    def _evict_lru(self) -> bool:
        """Evict least recently used idle session. False if there is none."""
        idle = [sid for sid, s in self._sessions.items() if not s.awaiting_response]
        if not idle:
            return False
        oldest_id = min(idle, key=lambda k: self._sessions[k].last_used)
        self._remove(oldest_id)
        logger.info("session_evicted", session_id=hash_id(oldest_id))
        return True

    async def create(self) -> ConversationSession:
        """Create a new session with its greeting turn."""
        async with self._lock:
            if len(self._sessions) >= self.max_sessions and not self._evict_lru():
                logger.warning("session_limit_reached", max_sessions=self.max_sessions)
                raise SessionLimitError(
                    f"All {self.max_sessions} sessions are awaiting a response"
                )

            session = ConversationSession(events=self.events)
            self._sessions[session.id] = session
            logger.info("session_created", session_id=hash_id(session.id))
            return session

    def get(self, session_id: str) -> ConversationSession | None:
        """Return a live session, or None if unknown or expired."""
        session = self._sessions.get(session_id)
        if session is None:
            return None
        if self._is_expired(session):
            self._remove(session_id)
            return None
        session.last_used = datetime.now()
        return session

    def list_sessions(self) -> list[ConversationSession]:
        """Live sessions, newest first."""
        sessions = [s for s in self._sessions.values() if not self._is_expired(s)]
        return sorted(sessions, key=lambda s: s.created_at, reverse=True)

    async def cleanup_expired(self) -> int:
        """Remove expired sessions. Returns count removed."""
        async with self._lock:
            expired = [
                sid for sid, session in self._sessions.items()
                if self._is_expired(session)
            ]
            for sid in expired:
                self._remove(sid)
            return len(expired)

    def clear(self) -> None:
        for sid in list(self._sessions):
            self._remove(sid)
