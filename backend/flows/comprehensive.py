"""Comprehensive mode: fast overview + deep answer, then synthesis.

The overview (lightweight model, no tools) and the detailed answer
(capable model, documentation tool available) do not depend on each
other and run concurrently in a task group. Synthesis waits for both; if
either fails, the other is cancelled and synthesis is never called.
"""

import asyncio
import logging

from config import get_settings
from flows.schemas import AnswerOutput, AnswerResult, Mode
from llm import BaseLLMService, LLMError
from llm.prompts import (
    DETAILED_PROMPT,
    DETAILED_SYSTEM_PROMPT,
    OVERVIEW_PROMPT,
    OVERVIEW_SYSTEM_PROMPT,
    SYNTHESIS_PROMPT,
    SYNTHESIS_SYSTEM_PROMPT,
)
from services.knowledge import KnowledgeSource, KnowledgeTool

logger = logging.getLogger(__name__)


class ComprehensiveFlow:
    """Multi-model answer trading latency for quality."""

    def __init__(
        self,
        llm: BaseLLMService,
        knowledge: KnowledgeSource,
        *,
        fast_model: str | None = None,
        deep_model: str | None = None,
    ) -> None:
        settings = get_settings()
        self._llm = llm
        self._tool = KnowledgeTool(knowledge)
        self._fast_model = fast_model or settings.fast_llm_model
        self._deep_model = deep_model or settings.llm_model

    async def run(self, question: str) -> AnswerResult:
        try:
            async with asyncio.TaskGroup() as tg:
                fast = tg.create_task(self._fast_path(question))
                deep = tg.create_task(self._deep_path(question))
        except ExceptionGroup as eg:
            # Surface the first path failure as-is so callers see an LLMError.
            raise eg.exceptions[0]
        overview, detailed = fast.result(), deep.result()

        output = await self._llm.generate_structured_output(
            SYNTHESIS_PROMPT.format(
                question=question, overview=overview, detailed=detailed
            ),
            SYNTHESIS_SYSTEM_PROMPT,
            "idmc_synthesized_answer",
            AnswerOutput,
            model=self._deep_model,
        )
        # Links the deep path may have seen are not surfaced.
        return AnswerResult(answer=output.answer, mode=Mode.COMPREHENSIVE.value)

    async def _fast_path(self, question: str) -> str:
        overview = await self._llm.generate(
            OVERVIEW_PROMPT.format(question=question),
            OVERVIEW_SYSTEM_PROMPT,
            model=self._fast_model,
        )
        if not overview.strip():
            raise LLMError("Fast path returned an empty answer")
        logger.debug("Fast path answered (%d chars)", len(overview))
        return overview

    async def _deep_path(self, question: str) -> str:
        detailed = await self._llm.generate_with_tools(
            DETAILED_PROMPT.format(question=question),
            DETAILED_SYSTEM_PROMPT.format(tool_name=self._tool.name),
            [self._tool],
            model=self._deep_model,
        )
        if not detailed.strip():
            raise LLMError("Deep path returned an empty answer")
        logger.debug("Deep path answered (%d chars)", len(detailed))
        return detailed
