"""Errors raised by the completion client."""


class CompletionError(Exception):
    """Base class for completion failures."""


class ConfigurationError(CompletionError):
    """No API key is configured."""


class TransientTransportError(CompletionError):
    """Network failure, timeout, or non-success HTTP status. Retried."""

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.status_code = status_code


class ServiceRefusal(CompletionError):
    """The service answered with a finish reason instead of text."""

    def __init__(self, reason: str):
        super().__init__(f"Generation stopped: {reason}")
        self.reason = reason


class MalformedResponse(CompletionError):
    """The service answered with a payload of unexpected shape."""
