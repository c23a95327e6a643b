"""Chat handlers."""

from apps.chat.handlers.analyze_attachment import analyze_attachment
from apps.chat.handlers.ask_question import ask_question

__all__ = [
    "ask_question",
    "analyze_attachment",
]
