"""GET /session - Get (or start) the current chat session."""

from fastapi import Depends
from fastapi.responses import JSONResponse

from apps.sessions.helpers import get_or_create_session, session_response
from dependencies import get_session_store
from services.session_store import SessionStore


async def get_session(
    session_id: str = Depends(get_or_create_session),
    store: SessionStore = Depends(get_session_store),
) -> JSONResponse:
    """Return the transcript, mode and staged attachment for this browser."""
    session = store.get_or_create(session_id)
    return session_response(session)
