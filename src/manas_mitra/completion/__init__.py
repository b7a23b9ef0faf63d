"""Completion client for the Gemini generateContent API."""

from .client import CompletionRequest, ResilientCompletionClient
from .errors import (
    CompletionError,
    ConfigurationError,
    MalformedResponse,
    ServiceRefusal,
    TransientTransportError,
)
from .persona import PERSONA_INSTRUCTION
from .responses import CompletionResult, Malformed, Refusal, Success, decode_response

__all__ = [
    "CompletionRequest",
    "ResilientCompletionClient",
    "CompletionError",
    "ConfigurationError",
    "MalformedResponse",
    "ServiceRefusal",
    "TransientTransportError",
    "PERSONA_INSTRUCTION",
    "CompletionResult",
    "Malformed",
    "Refusal",
    "Success",
    "decode_response",
]
