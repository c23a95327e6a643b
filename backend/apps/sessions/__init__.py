"""Sessions module - stateful chat keyed by the session cookie."""

from apps.sessions.routes import router

__all__ = ["router"]
