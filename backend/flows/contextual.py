"""Contextual mode: answer only from retrieved documentation.

Flow:
1. Look up documentation for the question
2. Ask the model to answer from that documentation alone
3. Return the answer with the lookup's reference links
"""

import logging

from flows.schemas import AnswerResult, ContextualOutput, Mode
from llm import BaseLLMService
from llm.prompts import CONTEXTUAL_PROMPT, CONTEXTUAL_SYSTEM_PROMPT, REFUSAL_SENTENCE
from services.knowledge import KnowledgeSource

logger = logging.getLogger(__name__)


class ContextualFlow:
    """Grounded answers with source links."""

    def __init__(self, llm: BaseLLMService, knowledge: KnowledgeSource) -> None:
        self._llm = llm
        self._knowledge = knowledge

    async def run(self, question: str) -> AnswerResult:
        """Answer a question from looked-up documentation.

        The returned links are always the lookup's links, whether or not
        the model found the answer in the documentation. When it did not,
        the answer is exactly ``REFUSAL_SENTENCE``.
        """
        knowledge = await self._knowledge.lookup(question)

        output = await self._llm.generate_structured_output(
            CONTEXTUAL_PROMPT.format(question=question, context=knowledge.text),
            CONTEXTUAL_SYSTEM_PROMPT,
            "idmc_grounded_answer",
            ContextualOutput,
        )

        answer = output.answer
        if not output.answer_found or REFUSAL_SENTENCE in answer:
            logger.info("Answer not found in documentation, returning refusal")
            answer = REFUSAL_SENTENCE

        return AnswerResult(
            answer=answer,
            source_links=knowledge.links,
            mode=Mode.CONTEXTUAL.value,
        )
