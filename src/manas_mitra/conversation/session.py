"""A single in-memory conversation."""

import asyncio
from datetime import datetime
from typing import Protocol
from uuid import uuid4

import structlog

from manas_mitra.completion.persona import GREETING
from manas_mitra.logs import hash_id
from manas_mitra.stream import EventStream
from .models import (
    CompletionResolved,
    Intent,
    Role,
    SessionStatus,
    Snapshot,
    Submit,
    Turn,
    transition,
)

logger = structlog.get_logger()

FALLBACK_MESSAGE = (
    "I'm having trouble connecting right now, but I'm still here for you. "
    "Please try again in a moment."
)


class CompletionClient(Protocol):
    async def complete(self, prompt: str) -> str: ...


class ConversationSession:
    """
    Append-only transcript that runs one request/response cycle at a time.

    State changes go through `transition()`. Events are published to the
    session's stream when an event stream is attached.
    """

    def __init__(
        self,
        session_id: str | None = None,
        events: EventStream | None = None,
        greeting: str | None = GREETING,
    ):
        self.id = session_id or str(uuid4())
        self.created_at = datetime.now()
        self.last_used = self.created_at
        self._events = events
        turns = (Turn(role=Role.ASSISTANT, text=greeting),) if greeting else ()
        self._snapshot = Snapshot(turns=turns)

    @property
    def snapshot(self) -> Snapshot:
        return self._snapshot

    @property
    def turns(self) -> tuple[Turn, ...]:
        return self._snapshot.turns

    @property
    def status(self) -> SessionStatus:
        return self._snapshot.status

    @property
    def awaiting_response(self) -> bool:
        return self._snapshot.awaiting_response

    def _apply(self, intent: Intent) -> Turn | None:
        """Apply an intent; return the appended turn, or None if ignored."""
        before = self._snapshot
        after = transition(before, intent)
        if after is before:
            return None
        self._snapshot = after
        self.last_used = datetime.now()
        return after.last_turn

    def submit(self, text: str) -> Turn | None:
        """Record a user turn. Ignored for blank text or while awaiting a reply."""
        turn = self._apply(Submit(text))
        if turn is None:
            logger.info(
                "submit_ignored",
                session_id=hash_id(self.id),
                status=self.status.value,
                blank=not text.strip(),
            )
        return turn

    def resolve(self, text: str) -> Turn | None:
        """Record the assistant reply and return to idle."""
        return self._apply(CompletionResolved(text))

    async def respond(self, client: CompletionClient) -> Turn:
        """
        Get a reply for the pending user turn and resolve the session.

        Any exception from the client is replaced with a fallback turn, so
        the session always returns to idle.
        """
        if not self.awaiting_response:
            raise RuntimeError("No user turn is awaiting a response")

        prompt = self._snapshot.last_turn.text
        await self._publish("typing", {"active": True})

        try:
            text = await client.complete(prompt)
        except asyncio.CancelledError:
            await self._finish(FALLBACK_MESSAGE)
            raise
        except Exception as e:
            logger.error(
                "session_completion_failed",
                session_id=hash_id(self.id),
                error=str(e),
                exc_info=True,
            )
            text = FALLBACK_MESSAGE

        return await self._finish(text)

    async def _finish(self, text: str) -> Turn:
        turn = self.resolve(text)
        await self._publish("typing", {"active": False})
        await self._publish("turn", turn.to_dict())
        return turn

    async def exchange(self, text: str, client: CompletionClient) -> tuple[Turn, Turn] | None:
        """Submit user text and wait for the reply. None if the submit was ignored."""
        user_turn = self.submit(text)
        if user_turn is None:
            return None
        await self._publish("turn", user_turn.to_dict())
        assistant_turn = await self.respond(client)
        return user_turn, assistant_turn

    async def _publish(self, event_type: str, data: dict) -> None:
        if self._events is not None:
            await self._events.publish(self.id, event_type, data)
