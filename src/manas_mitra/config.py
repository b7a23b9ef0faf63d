"""Runtime settings read from the environment."""

import os
from dataclasses import dataclass, field

DEFAULT_MODEL = "gemini-1.5-flash-latest"
DEFAULT_BASE_URL = "https://generativelanguage.googleapis.com/v1beta"


def _split(value: str) -> tuple[str, ...]:
    return tuple(item.strip() for item in value.split(",") if item.strip())


@dataclass(frozen=True)
class Settings:
    """Settings for the completion client and the server."""

    api_key: str | None = None
    model: str = DEFAULT_MODEL
    base_url: str = DEFAULT_BASE_URL
    max_retries: int = 3
    initial_delay: float = 1.0  # seconds, doubled after each failed attempt
    timeout: float = 30.0
    cors_origins: tuple[str, ...] = field(
        default=("http://localhost:3000", "http://localhost:5173")
    )
    log_level: str = "INFO"
    log_format: str = "json"
    session_ttl_seconds: int = 86400
    max_sessions: int = 100

    @property
    def endpoint(self) -> str:
        return f"{self.base_url.rstrip('/')}/models/{self.model}:generateContent"

    @classmethod
    def from_env(cls) -> "Settings":
        """Build settings from environment variables (call after load_dotenv)."""
        # An empty or whitespace key counts as missing
        api_key = (os.getenv("GEMINI_API_KEY") or "").strip() or None
        return cls(
            api_key=api_key,
            model=os.getenv("GEMINI_MODEL", DEFAULT_MODEL),
            base_url=os.getenv("GEMINI_BASE_URL", DEFAULT_BASE_URL),
            max_retries=int(os.getenv("COMPLETION_MAX_RETRIES", "3")),
            initial_delay=float(os.getenv("COMPLETION_INITIAL_DELAY", "1.0")),
            timeout=float(os.getenv("COMPLETION_TIMEOUT", "30.0")),
            cors_origins=_split(
                os.getenv("CORS_ORIGINS", "http://localhost:3000,http://localhost:5173")
            ),
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
            log_format=os.getenv("LOG_FORMAT", "json").lower(),
            session_ttl_seconds=int(os.getenv("SESSION_TTL_SECONDS", "86400")),
            max_sessions=int(os.getenv("MAX_SESSIONS", "100")),
        )
