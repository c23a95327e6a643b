"""Session cookie and snapshot utilities."""

import uuid
from typing import Any

from fastapi import Cookie
from fastapi.responses import JSONResponse

from config import get_settings
from responses import ResponseCode, success_dict
from services.chat_session import ChatSession


def set_session_cookie(response: JSONResponse, session_id: str) -> JSONResponse:
    """Set session cookie on response."""
    settings = get_settings()
    response.set_cookie(
        key="session_id",
        value=session_id,
        max_age=settings.session_ttl_hours * 3600,
        httponly=True,
        samesite="lax",
        secure=False,  # Set True in production with HTTPS
    )
    return response


def get_or_create_session(session_id: str | None = Cookie(default=None)) -> str:
    """Get existing session ID from cookie or create new one."""
    if session_id:
        return session_id
    return str(uuid.uuid4())


def session_snapshot(session: ChatSession) -> dict[str, Any]:
    """Serialize what a client needs to render the session."""
    pending = session.pending_attachment
    return {
        "session_id": session.session_id,
        "state": session.state.value,
        "mode": session.mode.value,
        "pending_attachment": {
            "name": pending.filename,
            "mime_type": pending.mime_type,
        }
        if pending
        else None,
        "messages": [m.model_dump(mode="json") for m in session.messages],
    }


def session_response(
    session: ChatSession,
    code: ResponseCode = ResponseCode.SUCCESS,
    request_id: str | None = None,
    **extra: Any,
) -> JSONResponse:
    """Build a success response carrying the session snapshot, with cookie."""
    data = {**extra, "session": session_snapshot(session)}
    resp = JSONResponse(content=success_dict(code, data, request_id=request_id))
    return set_session_cookie(resp, session.session_id)
