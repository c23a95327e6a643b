"""POST /chat/ask - Answer a question in the selected mode."""

import logging
import uuid

from fastapi import Depends
from fastapi.responses import JSONResponse
from pydantic import BaseModel, Field

from apps.errors import HANDLED_ERRORS, response_code_for
from dependencies import get_assistant_service
from flows import AssistantService, Mode
from responses import ResponseCode, error_response, success_response

logger = logging.getLogger(__name__)


# --- Request Schema ---


class AskRequest(BaseModel):
    """Request body for the ask endpoint."""

    question: str = Field(
        ...,
        min_length=1,
        max_length=4000,
        description="Natural language question about IDMC",
    )
    mode: Mode = Field(
        default=Mode.COMPREHENSIVE,
        description="Answer strategy: standard, contextual or comprehensive",
    )


# --- Handler ---


async def ask_question(
    request: AskRequest,
    assistant: AssistantService = Depends(get_assistant_service),
) -> JSONResponse:
    """Answer a question and return the full answer (no streaming)."""
    request_id = str(uuid.uuid4())[:8]
    logger.info(
        "[%s] Ask (%s): %s", request_id, request.mode.value, request.question[:100]
    )

    try:
        result = await assistant.ask(request.question, request.mode)

    except HANDLED_ERRORS as e:
        code = response_code_for(e)
        logger.warning("[%s] %s: %s", request_id, type(e).__name__, e)
        return error_response(code, str(e), request_id)

    return success_response(
        ResponseCode.ANSWER_GENERATED, result.model_dump(mode="json"), request_id
    )
