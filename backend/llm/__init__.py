"""LLM module - unified interface for language model interactions.

Usage:
    from llm import LLMService, LLMError

    llm = LLMService()
    text = await llm.generate(prompt, system)
    output = await llm.generate_structured_output(prompt, system, "answer", AnswerOutput)

Structure:
    - base.py: Abstract interface (BaseLLMService)
    - anthropic.py: Claude implementation (AnthropicService)
    - tools.py: Tool interface for model-invoked functions
"""

from llm.anthropic import AnthropicService
from llm.base import BaseLLMService, LLMError, LLMRateLimitError, MediaPart
from llm.tools import BaseTool, ToolDefinition

# Default provider - can be swapped by changing this alias
LLMService = AnthropicService

__all__ = [
    "BaseLLMService",
    "LLMService",
    "LLMError",
    "LLMRateLimitError",
    "AnthropicService",
    "MediaPart",
    "BaseTool",
    "ToolDefinition",
]
