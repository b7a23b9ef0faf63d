"""Stream module for real-time session events."""

from .memory import EventStream, event_stream

__all__ = ["EventStream", "event_stream"]
