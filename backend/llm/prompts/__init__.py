"""LLM prompts for the answer modes."""

from llm.prompts.attachment import (
    ATTACHMENT_SYSTEM_PROMPT,
    DEFAULT_ATTACHMENT_QUESTION,
    EXTRACTED_SECTION,
    MEDIA_SECTION,
    NO_CONTENT_SECTION,
    QUESTION_SECTION,
)
from llm.prompts.comprehensive import (
    DETAILED_PROMPT,
    DETAILED_SYSTEM_PROMPT,
    OVERVIEW_PROMPT,
    OVERVIEW_SYSTEM_PROMPT,
    SYNTHESIS_PROMPT,
    SYNTHESIS_SYSTEM_PROMPT,
)
from llm.prompts.contextual import (
    CONTEXTUAL_PROMPT,
    CONTEXTUAL_SYSTEM_PROMPT,
    REFUSAL_SENTENCE,
)
from llm.prompts.standard import STANDARD_PROMPT, STANDARD_SYSTEM_PROMPT

__all__ = [
    "ATTACHMENT_SYSTEM_PROMPT",
    "DEFAULT_ATTACHMENT_QUESTION",
    "EXTRACTED_SECTION",
    "MEDIA_SECTION",
    "NO_CONTENT_SECTION",
    "QUESTION_SECTION",
    "DETAILED_PROMPT",
    "DETAILED_SYSTEM_PROMPT",
    "OVERVIEW_PROMPT",
    "OVERVIEW_SYSTEM_PROMPT",
    "SYNTHESIS_PROMPT",
    "SYNTHESIS_SYSTEM_PROMPT",
    "CONTEXTUAL_PROMPT",
    "CONTEXTUAL_SYSTEM_PROMPT",
    "REFUSAL_SENTENCE",
    "STANDARD_PROMPT",
    "STANDARD_SYSTEM_PROMPT",
]
