"""Attachment mode: answer a question about an uploaded file.

Flow:
1. Extract prompt content from the attachment (media, text or nothing)
2. Render the prompt sections for that content
3. One model call, with the media inline when the type is native
"""

import logging

from flows.schemas import ATTACHMENT_MODE_LABEL, AnswerOutput, AnswerResult
from llm import BaseLLMService
from llm.prompts import (
    ATTACHMENT_SYSTEM_PROMPT,
    DEFAULT_ATTACHMENT_QUESTION,
    EXTRACTED_SECTION,
    MEDIA_SECTION,
    NO_CONTENT_SECTION,
    QUESTION_SECTION,
)
from services.extraction import FormatExtractor
from services.types import AttachmentContent, RenderVariant

logger = logging.getLogger(__name__)


def render_attachment_prompt(question: str, content: AttachmentContent) -> str:
    """Render the user prompt for an attachment question.

    Every render variant maps to an explicit set of sections; an unknown
    variant is a programming error.
    """
    sections = [QUESTION_SECTION.format(question=question)]

    if content.variant is RenderVariant.MEDIA_ONLY:
        sections.append(MEDIA_SECTION)
    elif content.variant is RenderVariant.TEXT_ONLY:
        sections.append(EXTRACTED_SECTION.format(content=content.text))
    elif content.variant is RenderVariant.BOTH:
        sections.append(MEDIA_SECTION)
        sections.append(EXTRACTED_SECTION.format(content=content.text))
    elif content.variant is RenderVariant.NEITHER:
        sections.append(NO_CONTENT_SECTION)
    else:
        raise ValueError(f"Unhandled render variant: {content.variant}")

    return "\n\n".join(sections)


class AttachmentFlow:
    """Answers questions about images, PDFs and office documents."""

    def __init__(
        self,
        llm: BaseLLMService,
        extractor: FormatExtractor | None = None,
    ) -> None:
        self._llm = llm
        self._extractor = extractor or FormatExtractor()

    async def run(
        self,
        question: str,
        payload: str,
        mime_type: str | None = None,
        filename: str | None = None,
    ) -> AnswerResult:
        question = question.strip() or DEFAULT_ATTACHMENT_QUESTION

        content = await self._extractor.extract(payload, mime_type, filename)
        logger.info(
            "Attachment %s rendered as %s",
            filename or "<unnamed>",
            content.variant.value,
        )

        output = await self._llm.generate_structured_output(
            render_attachment_prompt(question, content),
            ATTACHMENT_SYSTEM_PROMPT,
            "idmc_attachment_answer",
            AnswerOutput,
            media=content.media,
        )
        return AnswerResult(answer=output.answer, mode=ATTACHMENT_MODE_LABEL)
