"""Chat module - stateless question answering and attachment analysis."""

from apps.chat.routes import router

__all__ = ["router"]
