"""Exception to response-code mapping shared by handlers."""

from llm import LLMError, LLMRateLimitError
from responses import ResponseCode
from services.chat_session import (
    EmptySubmissionError,
    ModeLockedError,
    SessionBusyError,
)

# Checked in order, so subclasses come before their bases.
HANDLER_ERROR_MAP: dict[type[Exception], ResponseCode] = {
    LLMRateLimitError: ResponseCode.LLM_RATE_LIMIT,
    LLMError: ResponseCode.LLM_ERROR,
    SessionBusyError: ResponseCode.SESSION_BUSY,
    ModeLockedError: ResponseCode.MODE_LOCKED,
    EmptySubmissionError: ResponseCode.VALIDATION_ERROR,
    ValueError: ResponseCode.VALIDATION_ERROR,
}

HANDLED_ERRORS = tuple(HANDLER_ERROR_MAP)


def response_code_for(exc: Exception) -> ResponseCode:
    """Get the response code for a handled exception."""
    for exc_type, code in HANDLER_ERROR_MAP.items():
        if isinstance(exc, exc_type):
            return code
    return ResponseCode.INTERNAL_ERROR
