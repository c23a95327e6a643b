"""Answer flows - one per mode, plus attachment analysis.

Usage:
    from flows import AssistantService, Mode

    assistant = AssistantService(llm, knowledge)
    result = await assistant.ask("What is CDGC?", Mode.CONTEXTUAL)
"""

from flows.attachment import AttachmentFlow, render_attachment_prompt
from flows.comprehensive import ComprehensiveFlow
from flows.contextual import ContextualFlow
from flows.schemas import (
    ATTACHMENT_MODE_LABEL,
    AnswerOutput,
    AnswerResult,
    ContextualOutput,
    Mode,
)
from flows.service import AssistantService
from flows.standard import StandardFlow

__all__ = [
    "AssistantService",
    "AttachmentFlow",
    "ComprehensiveFlow",
    "ContextualFlow",
    "StandardFlow",
    "render_attachment_prompt",
    "ATTACHMENT_MODE_LABEL",
    "AnswerOutput",
    "AnswerResult",
    "ContextualOutput",
    "Mode",
]
