"""POST /session/messages - Submit one turn and wait for the reply."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.errors import HANDLED_ERRORS, response_code_for
from apps.sessions.helpers import get_or_create_session, session_response
from dependencies import get_session_store
from responses import ResponseCode, error_response
from services.session_store import SessionStore

logger = logging.getLogger(__name__)


class SubmitMessageRequest(BaseModel):
    """Request body for a chat turn."""

    text: str = Field(
        default="",
        max_length=4000,
        description="Message text; may be blank when an attachment is staged",
    )


async def submit_message(
    request: SubmitMessageRequest,
    session_id: str = Depends(get_or_create_session),
    store: SessionStore = Depends(get_session_store),
) -> JSONResponse:
    """Submit a turn to the session.

    Flow failures come back as an apology message, not an error response.
    Only rejected submissions (busy session, nothing to send) are errors.
    """
    request_id = str(uuid.uuid4())[:8]
    session = store.get_or_create(session_id)
    logger.info("[%s] Turn on %s: %s", request_id, session_id, request.text[:100])

    try:
        reply = await session.submit(request.text)
    except HANDLED_ERRORS as e:
        logger.warning("[%s] Turn rejected: %s", request_id, e)
        return error_response(response_code_for(e), str(e), request_id)

    return session_response(
        session,
        ResponseCode.ANSWER_GENERATED,
        request_id,
        reply=reply.model_dump(mode="json"),
    )
