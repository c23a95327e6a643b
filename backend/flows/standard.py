"""Standard mode: one ungrounded model call."""

import logging

from flows.schemas import AnswerOutput, AnswerResult, Mode
from llm import BaseLLMService
from llm.prompts import STANDARD_PROMPT, STANDARD_SYSTEM_PROMPT

logger = logging.getLogger(__name__)


class StandardFlow:
    """Answers from the model's general IDMC knowledge."""

    def __init__(self, llm: BaseLLMService) -> None:
        self._llm = llm

    async def run(self, question: str) -> AnswerResult:
        output = await self._llm.generate_structured_output(
            STANDARD_PROMPT.format(question=question),
            STANDARD_SYSTEM_PROMPT,
            "idmc_answer",
            AnswerOutput,
        )
        return AnswerResult(answer=output.answer, mode=Mode.STANDARD.value)
