"""
Test fixtures for Manas Mitra API tests.
"""

import os
import pytest
from httpx import ASGITransport, AsyncClient

# No real credential or .env values in tests
os.environ["GEMINI_API_KEY"] = ""
os.environ["LOG_FORMAT"] = "console"

from manas_mitra.main import app
from manas_mitra.api.deps import get_completion_client, get_session_manager
from manas_mitra.conversation import SessionManager
from manas_mitra.stream import EventStream


class FakeCompletionClient:
    """Stands in for ResilientCompletionClient; records prompts."""

    def __init__(self, replies=None, error: Exception | None = None):
        self.replies = list(replies or [])
        self.error = error
        self.prompts: list[str] = []

    async def complete(self, prompt: str) -> str:
        self.prompts.append(prompt)
        if self.error is not None:
            raise self.error
        if self.replies:
            return self.replies.pop(0)
        return f"echo: {prompt}"


@pytest.fixture
def fake_client():
    return FakeCompletionClient()


@pytest.fixture
def events():
    return EventStream()


@pytest.fixture
def manager(events):
    return SessionManager(ttl_seconds=3600, max_sessions=10, events=events)


@pytest.fixture
async def client(fake_client, manager):
    """Async HTTP client for testing FastAPI app."""
    app.dependency_overrides[get_completion_client] = lambda: fake_client
    app.dependency_overrides[get_session_manager] = lambda: manager
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()
