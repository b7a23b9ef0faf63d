"""Transcript types and the session state machine."""

from dataclasses import dataclass, field, replace
from datetime import datetime
from enum import Enum
from uuid import uuid4


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class SessionStatus(str, Enum):
    IDLE = "idle"
    AWAITING_RESPONSE = "awaiting_response"


@dataclass(frozen=True)
class Turn:
    """One immutable message in a transcript."""
    role: Role
    text: str
    id: str = field(default_factory=lambda: str(uuid4()))
    created_at: datetime = field(default_factory=datetime.now)

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "role": self.role.value,
            "text": self.text,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class Snapshot:
    """Transcript plus status at one point in time."""
    turns: tuple[Turn, ...] = ()
    status: SessionStatus = SessionStatus.IDLE

    @property
    def awaiting_response(self) -> bool:
        return self.status is SessionStatus.AWAITING_RESPONSE

    @property
    def last_turn(self) -> Turn | None:
        return self.turns[-1] if self.turns else None


# --- Intents ---


@dataclass(frozen=True)
class Submit:
    text: str


@dataclass(frozen=True)
class CompletionResolved:
    text: str


Intent = Submit | CompletionResolved


def transition(snapshot: Snapshot, intent: Intent) -> Snapshot:
    """
    Apply an intent to a snapshot and return the next snapshot.

    idle + Submit(non-blank text)          -> awaiting_response, user turn appended
    awaiting_response + CompletionResolved -> idle, assistant turn appended

    Every other combination returns the snapshot unchanged.
    """
    if isinstance(intent, Submit):
        if snapshot.awaiting_response or not intent.text.strip():
            return snapshot
        return replace(
            snapshot,
            turns=snapshot.turns + (Turn(role=Role.USER, text=intent.text),),
            status=SessionStatus.AWAITING_RESPONSE,
        )

    if isinstance(intent, CompletionResolved):
        if not snapshot.awaiting_response:
            return snapshot
        return replace(
            snapshot,
            turns=snapshot.turns + (Turn(role=Role.ASSISTANT, text=intent.text),),
            status=SessionStatus.IDLE,
        )

    raise TypeError(f"Unknown intent: {intent!r}")
