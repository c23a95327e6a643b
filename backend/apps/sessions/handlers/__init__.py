"""Session handlers."""

from apps.sessions.handlers.get_session import get_session
from apps.sessions.handlers.reset_session import reset_session
from apps.sessions.handlers.select_mode import select_mode
from apps.sessions.handlers.stage_attachment import clear_attachment, stage_attachment
from apps.sessions.handlers.submit_message import submit_message

__all__ = [
    "get_session",
    "select_mode",
    "stage_attachment",
    "clear_attachment",
    "submit_message",
    "reset_session",
]
