"""Chat session endpoints."""

from datetime import datetime

import json

import structlog
from fastapi import APIRouter, HTTPException, Depends
from pydantic import BaseModel
from sse_starlette.sse import EventSourceResponse

from manas_mitra.completion import ResilientCompletionClient
from manas_mitra.conversation import (
    ConversationSession,
    SessionLimitError,
    SessionManager,
    Turn,
)
from manas_mitra.logs import hash_id
from .deps import get_completion_client, get_session_manager

logger = structlog.get_logger()

router = APIRouter(prefix="/sessions", tags=["sessions"])


# --- Schemas ---


class TurnResponse(BaseModel):
    id: str
    role: str
    text: str
    created_at: datetime

    @classmethod
    def from_turn(cls, turn: Turn) -> "TurnResponse":
        return cls(id=turn.id, role=turn.role.value, text=turn.text, created_at=turn.created_at)


class SessionResponse(BaseModel):
    id: str
    status: str
    awaiting_response: bool
    created_at: datetime
    last_used: datetime

    @classmethod
    def from_session(cls, session: ConversationSession) -> "SessionResponse":
        return cls(
            id=session.id,
            status=session.status.value,
            awaiting_response=session.awaiting_response,
            created_at=session.created_at,
            last_used=session.last_used,
        )


class SessionDetailResponse(SessionResponse):
    turns: list[TurnResponse]

    @classmethod
    def from_session(cls, session: ConversationSession) -> "SessionDetailResponse":
        base = SessionResponse.from_session(session)
        return cls(
            **base.model_dump(),
            turns=[TurnResponse.from_turn(t) for t in session.turns],
        )


class TurnCreate(BaseModel):
    content: str


class ExchangeResponse(BaseModel):
    user_turn: TurnResponse
    assistant_turn: TurnResponse


def _get_or_404(manager: SessionManager, session_id: str) -> ConversationSession:
    session = manager.get(session_id)
    if not session:
        raise HTTPException(status_code=404, detail="Session not found")
    return session


# --- Routes ---


@router.post("", response_model=SessionDetailResponse)
async def create_session(
    manager: SessionManager = Depends(get_session_manager),
) -> SessionDetailResponse:
    """Create a new session, opened with the companion's greeting."""
    try:
        session = await manager.create()
    except SessionLimitError:
        raise HTTPException(status_code=503, detail="Too many active sessions")
    return SessionDetailResponse.from_session(session)


@router.get("", response_model=list[SessionResponse])
async def list_sessions(
    manager: SessionManager = Depends(get_session_manager),
) -> list[SessionResponse]:
    """List live sessions, newest first."""
    return [SessionResponse.from_session(s) for s in manager.list_sessions()]


@router.get("/{session_id}", response_model=SessionDetailResponse)
async def get_session_detail(
    session_id: str,
    manager: SessionManager = Depends(get_session_manager),
) -> SessionDetailResponse:
    """Get a session with its turns."""
    session = _get_or_404(manager, session_id)
    return SessionDetailResponse.from_session(session)


@router.post("/{session_id}/turns", response_model=ExchangeResponse)
async def create_turn(
    session_id: str,
    data: TurnCreate,
    manager: SessionManager = Depends(get_session_manager),
    client: ResilientCompletionClient = Depends(get_completion_client),
) -> ExchangeResponse:
    """Send a message and wait for the companion's reply."""
    session = _get_or_404(manager, session_id)

    if not data.content.strip():
        raise HTTPException(status_code=400, detail="Message cannot be empty")
    if session.awaiting_response:
        raise HTTPException(status_code=409, detail="Response already pending")

    logger.info(
        "chat_message_received",
        session_id=hash_id(session_id),
        message_length=len(data.content),
    )

    exchange = await session.exchange(data.content, client)
    if exchange is None:
        # Another request got in between the checks above and the submit
        raise HTTPException(status_code=409, detail="Response already pending")

    user_turn, assistant_turn = exchange
    return ExchangeResponse(
        user_turn=TurnResponse.from_turn(user_turn),
        assistant_turn=TurnResponse.from_turn(assistant_turn),
    )


@router.get("/{session_id}/stream")
async def stream_session(
    session_id: str,
    last_id: str = "0",
    manager: SessionManager = Depends(get_session_manager),
) -> EventSourceResponse:
    """
    Stream events for a session via Server-Sent Events.

    Args:
        session_id: Session to stream
        last_id: Resume from this event ID ("0" for all history, "$" for new only)
    """
    _get_or_404(manager, session_id)
    if last_id != "$" and not last_id.isdigit():
        raise HTTPException(status_code=400, detail="last_id must be a number or '$'")

    async def event_generator():
        async for event_id, event_type, data in manager.events.subscribe(
            session_id, last_id=last_id
        ):
            yield {
                "event": event_type,
                "id": event_id,
                "data": json.dumps(data),
            }

    return EventSourceResponse(event_generator())
