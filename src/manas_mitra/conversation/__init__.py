"""Conversation sessions and their state machine."""

from .manager import SessionLimitError, SessionManager
from .models import (
    CompletionResolved,
    Role,
    SessionStatus,
    Snapshot,
    Submit,
    Turn,
    transition,
)
from .session import FALLBACK_MESSAGE, ConversationSession

__all__ = [
    "SessionLimitError",
    "SessionManager",
    "CompletionResolved",
    "Role",
    "SessionStatus",
    "Snapshot",
    "Submit",
    "Turn",
    "transition",
    "FALLBACK_MESSAGE",
    "ConversationSession",
]
