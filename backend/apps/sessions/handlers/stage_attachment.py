"""PUT/DELETE /session/attachment - Stage or clear a file for the next turn."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.sessions.helpers import get_or_create_session, session_response
from config import Settings, get_settings
from dependencies import get_session_store
from responses import ResponseCode, error_response
from services.extraction import (
    ExtractionError,
    estimate_decoded_size,
    resolve_mime_type,
    sanitize_filename,
    split_payload,
)
from services.session_store import SessionStore

logger = logging.getLogger(__name__)

FALLBACK_MIME_TYPE = "application/octet-stream"


class StageAttachmentRequest(BaseModel):
    """Request body for staging an attachment."""

    attachment_payload: str = Field(
        ..., min_length=1, description="File content as base64 or a data URI"
    )
    filename: str | None = Field(None, description="Original filename")
    mime_type: str | None = Field(None, description="Declared MIME type")


async def stage_attachment(
    request: StageAttachmentRequest,
    session_id: str = Depends(get_or_create_session),
    store: SessionStore = Depends(get_session_store),
    settings: Settings = Depends(get_settings),
) -> JSONResponse:
    """Stage a file, replacing any file already staged."""
    request_id = str(uuid.uuid4())[:8]
    filename = sanitize_filename(request.filename)

    size = estimate_decoded_size(request.attachment_payload)
    if size > settings.max_attachment_size_bytes:
        return error_response(
            ResponseCode.FILE_TOO_LARGE,
            f"Attachment exceeds limit of {settings.max_attachment_size_mb}MB",
            request_id,
        )

    try:
        declared_mime, _ = split_payload(request.attachment_payload)
    except ExtractionError:
        # Unreadable payloads are still staged; the turn reports the problem.
        declared_mime = None
    mime_type = (
        resolve_mime_type(request.mime_type, declared_mime, filename)
        or FALLBACK_MIME_TYPE
    )

    session = store.get_or_create(session_id)
    session.stage_attachment(filename, mime_type, request.attachment_payload)
    logger.info(
        "[%s] Staged %s (%s) on %s", request_id, filename, mime_type, session_id
    )
    return session_response(session, request_id=request_id)


async def clear_attachment(
    session_id: str = Depends(get_or_create_session),
    store: SessionStore = Depends(get_session_store),
) -> JSONResponse:
    """Discard the staged file, if any."""
    session = store.get_or_create(session_id)
    session.clear_attachment()
    return session_response(session)
