"""Session routes - stateful chat keyed by the session cookie."""

from fastapi import APIRouter

from apps.sessions.handlers import (
    clear_attachment,
    get_session,
    reset_session,
    select_mode,
    stage_attachment,
    submit_message,
)

router = APIRouter(prefix="/session", tags=["Session"])

# GET /session - Current transcript, mode and staged attachment
router.get("")(get_session)

# DELETE /session - Start a new chat
router.delete("")(reset_session)

# PUT /session/mode - Select answer mode
router.put("/mode")(select_mode)

# PUT /session/attachment - Stage a file for the next turn
router.put("/attachment")(stage_attachment)

# DELETE /session/attachment - Clear the staged file
router.delete("/attachment")(clear_attachment)

# POST /session/messages - Submit a turn
router.post("/messages")(submit_message)
