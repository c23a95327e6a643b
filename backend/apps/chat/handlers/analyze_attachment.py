"""POST /chat/attachment - Answer a question about an uploaded file."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.errors import HANDLED_ERRORS, response_code_for
from config import Settings, get_settings
from dependencies import get_assistant_service
from flows import AssistantService
from responses import ResponseCode, error_response, success_response
from services.extraction import estimate_decoded_size, sanitize_filename

logger = logging.getLogger(__name__)


# --- Request Schema ---


class AttachmentRequest(BaseModel):
    """Request body for the attachment endpoint."""

    question: str = Field(
        default="",
        max_length=4000,
        description="Question about the file; blank asks for a general analysis",
    )
    attachment_payload: str = Field(
        ...,
        min_length=1,
        description="File content as base64 or a base64 data URI",
    )
    mime_type: str | None = Field(
        None, description="MIME type; taken from the data URI when omitted"
    )
    filename: str | None = Field(None, description="Original filename")


# --- Handler ---


async def analyze_attachment(
    request: AttachmentRequest,
    assistant: AssistantService = Depends(get_assistant_service),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Extract the attachment's content and answer the question about it."""
    request_id = str(uuid.uuid4())[:8]
    filename = sanitize_filename(request.filename)
    size = estimate_decoded_size(request.attachment_payload)
    logger.info(
        "[%s] Attachment: %s (%s, ~%d bytes)",
        request_id,
        filename,
        request.mime_type,
        size,
    )

    if size > settings.max_attachment_size_bytes:
        return error_response(
            ResponseCode.FILE_TOO_LARGE,
            f"Attachment exceeds limit of {settings.max_attachment_size_mb}MB",
            request_id,
        )

    try:
        result = await assistant.analyze_attachment(
            request.question,
            request.attachment_payload,
            request.mime_type,
            filename,
        )

    except HANDLED_ERRORS as e:
        code = response_code_for(e)
        logger.warning("[%s] %s: %s", request_id, type(e).__name__, e)
        return error_response(code, str(e), request_id)

    return success_response(
        ResponseCode.ANSWER_GENERATED, result.model_dump(mode="json"), request_id
    )
