"""Assistant service - entry point for answering questions.

Routes a question to the flow for the selected mode, or to the
attachment flow when a file is supplied. Model failures propagate as
LLMError; flows never retry.
"""

import logging

from flows.attachment import AttachmentFlow
from flows.comprehensive import ComprehensiveFlow
from flows.contextual import ContextualFlow
from flows.schemas import AnswerResult, Mode
from flows.standard import StandardFlow
from llm import BaseLLMService
from services.extraction import FormatExtractor
from services.knowledge import KnowledgeSource

logger = logging.getLogger(__name__)


class AssistantService:
    """Dispatches questions and attachments to the answer flows."""

    def __init__(
        self,
        llm: BaseLLMService,
        knowledge: KnowledgeSource,
        extractor: FormatExtractor | None = None,
    ) -> None:
        """Initialize the flows around one LLM service and knowledge source."""
        self._flows = {
            Mode.STANDARD: StandardFlow(llm),
            Mode.CONTEXTUAL: ContextualFlow(llm, knowledge),
            Mode.COMPREHENSIVE: ComprehensiveFlow(llm, knowledge),
        }
        self._attachment_flow = AttachmentFlow(llm, extractor)

    async def ask(self, question: str, mode: Mode | str) -> AnswerResult:
        """Answer a question with the flow for ``mode``.

        Raises:
            ValueError: If the question is blank or the mode is unknown.
            LLMError: If a model call fails.
        """
        if not question or not question.strip():
            raise ValueError("Question cannot be empty")

        mode = Mode(mode)
        logger.info("Answering in %s mode", mode.value)
        return await self._flows[mode].run(question)

    async def analyze_attachment(
        self,
        question: str,
        payload: str,
        mime_type: str | None = None,
        filename: str | None = None,
    ) -> AnswerResult:
        """Answer a question about an attachment. A blank question is allowed."""
        logger.info("Analyzing attachment %s (%s)", filename or "<unnamed>", mime_type)
        return await self._attachment_flow.run(question, payload, mime_type, filename)
