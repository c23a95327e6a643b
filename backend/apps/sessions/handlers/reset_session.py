"""DELETE /session - Start a new chat."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse

from apps.errors import HANDLED_ERRORS, response_code_for
from apps.sessions.helpers import get_or_create_session, session_response
from dependencies import get_session_store
from responses import ResponseCode, error_response
from services.session_store import SessionStore

logger = logging.getLogger(__name__)


async def reset_session(
    session_id: str = Depends(get_or_create_session),
    store: SessionStore = Depends(get_session_store),
) -> JSONResponse:
    """Reset the transcript to the greeting and clear any staged file."""
    request_id = str(uuid.uuid4())[:8]
    session = store.get_or_create(session_id)

    try:
        session.reset()
    except HANDLED_ERRORS as e:
        return error_response(response_code_for(e), str(e), request_id)

    logger.info("[%s] Reset session %s", request_id, session_id)
    return session_response(session, ResponseCode.SESSION_RESET, request_id)
