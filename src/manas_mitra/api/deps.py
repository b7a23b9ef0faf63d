"""Shared dependencies for the API routes."""

from functools import lru_cache

from manas_mitra.completion import ResilientCompletionClient
from manas_mitra.config import Settings
from manas_mitra.conversation import SessionManager
from manas_mitra.stream import event_stream


@lru_cache
def get_settings() -> Settings:
    return Settings.from_env()


@lru_cache
def get_completion_client() -> ResilientCompletionClient:
    return ResilientCompletionClient(get_settings())


@lru_cache
def get_session_manager() -> SessionManager:
    settings = get_settings()
    return SessionManager(
        ttl_seconds=settings.session_ttl_seconds,
        max_sessions=settings.max_sessions,
        events=event_stream,
    )
