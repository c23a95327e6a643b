"""PUT /session/mode - Select the answer mode."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.errors import HANDLED_ERRORS, response_code_for
from apps.sessions.helpers import get_or_create_session, session_response
from dependencies import get_session_store
from flows import Mode
from responses import error_response
from services.session_store import SessionStore

logger = logging.getLogger(__name__)


class SelectModeRequest(BaseModel):
    """Request body for mode selection."""

    mode: Mode = Field(..., description="standard, contextual or comprehensive")


async def select_mode(
    request: SelectModeRequest,
    session_id: str = Depends(get_or_create_session),
    store: SessionStore = Depends(get_session_store),
) -> JSONResponse:
    """Select the mode used by later turns.

    Rejected while an attachment is staged, since that turn will be
    answered by attachment analysis regardless of mode.
    """
    request_id = str(uuid.uuid4())[:8]
    session = store.get_or_create(session_id)

    try:
        session.select_mode(request.mode)
    except HANDLED_ERRORS as e:
        logger.info("[%s] Mode change rejected: %s", request_id, e)
        return error_response(response_code_for(e), str(e), request_id)

    logger.info(
        "[%s] Session %s mode -> %s", request_id, session_id, request.mode.value
    )
    return session_response(session, request_id=request_id)
