"""Standardized response infrastructure for API endpoints.

Provides consistent response format with structured codes and messages.
"""

from datetime import UTC, datetime
from enum import Enum
from typing import Any

from fastapi.responses import JSONResponse


class ResponseCode(str, Enum):
    """Response codes for API responses.

    Ranges: 0xxx=Success, 1xxx=Client Error, 2xxx=Server Error, 3xxx=External Service
    """

    # Success codes
    SUCCESS = "0000"
    ANSWER_GENERATED = "0001"
    SESSION_RESET = "0002"

    # Client errors
    VALIDATION_ERROR = "1000"
    FILE_TOO_LARGE = "1002"
    NOT_FOUND = "1003"
    SESSION_BUSY = "1007"
    MODE_LOCKED = "1008"

    # Server errors
    INTERNAL_ERROR = "2000"

    # External service errors
    LLM_ERROR = "3000"
    LLM_RATE_LIMIT = "3001"


# Response messages mapped to codes
RESPONSE_MESSAGES: dict[ResponseCode, str] = {
    ResponseCode.SUCCESS: "Operation completed successfully",
    ResponseCode.ANSWER_GENERATED: "Answer generated successfully",
    ResponseCode.SESSION_RESET: "Started a new chat",
    ResponseCode.VALIDATION_ERROR: "Request validation failed",
    ResponseCode.FILE_TOO_LARGE: "Attachment exceeds maximum allowed size",
    ResponseCode.NOT_FOUND: "Resource not found",
    ResponseCode.SESSION_BUSY: "A request is already in progress for this session",
    ResponseCode.MODE_LOCKED: "Mode cannot change while an attachment is staged",
    ResponseCode.INTERNAL_ERROR: "An internal error occurred",
    ResponseCode.LLM_ERROR: "The language model could not answer. Please try again",
    ResponseCode.LLM_RATE_LIMIT: "Rate limit exceeded. Please wait and retry",
}

# HTTP status codes for each response code
HTTP_STATUS_MAP: dict[ResponseCode, int] = {
    ResponseCode.SUCCESS: 200,
    ResponseCode.ANSWER_GENERATED: 200,
    ResponseCode.SESSION_RESET: 200,
    ResponseCode.VALIDATION_ERROR: 422,
    ResponseCode.FILE_TOO_LARGE: 413,
    ResponseCode.NOT_FOUND: 404,
    ResponseCode.SESSION_BUSY: 409,
    ResponseCode.MODE_LOCKED: 409,
    ResponseCode.INTERNAL_ERROR: 500,
    ResponseCode.LLM_ERROR: 502,
    ResponseCode.LLM_RATE_LIMIT: 429,
}


def _envelope(
    code: ResponseCode,
    success: bool,
    message: str | None,
    request_id: str | None,
    **body: Any,
) -> dict[str, Any]:
    return {
        "code": code.value,
        "success": success,
        "message": message or RESPONSE_MESSAGES.get(code, "Unknown error"),
        "timestamp": datetime.now(UTC).isoformat(),
        "request_id": request_id,
        **body,
    }


def success_dict(
    code: ResponseCode, data: Any = None, request_id: str | None = None
) -> dict[str, Any]:
    """Build a success envelope carrying ``data``."""
    return _envelope(code, True, None, request_id, data=data)


def success_response(
    code: ResponseCode, data: Any = None, request_id: str | None = None
) -> JSONResponse:
    return JSONResponse(
        content=success_dict(code, data, request_id),
        status_code=HTTP_STATUS_MAP.get(code, 200),
    )


def error_response(
    code: ResponseCode,
    custom_message: str | None = None,
    request_id: str | None = None,
    *,
    error_details: dict[str, Any] | None = None,
    status_code: int | None = None,
) -> JSONResponse:
    """Create an error envelope response.

    The HTTP status follows the response code unless ``status_code``
    overrides it (framework errors keep their own status).
    """
    return JSONResponse(
        content=_envelope(
            code, False, custom_message, request_id, error_details=error_details
        ),
        status_code=status_code or HTTP_STATUS_MAP.get(code, 500),
    )
