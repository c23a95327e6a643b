"""Base LLM service interface.

Defines the contract that all LLM providers must implement.
"""

from abc import ABC, abstractmethod
from collections.abc import Sequence
from dataclasses import dataclass
from typing import TypeVar

from pydantic import BaseModel

from llm.tools import BaseTool

OutputT = TypeVar("OutputT", bound=BaseModel)


class LLMError(Exception):
    """Raised when LLM generation fails."""


class LLMRateLimitError(LLMError):
    """Raised when the provider rejects a call with a rate limit."""


@dataclass(frozen=True)
class MediaPart:
    """Inline media sent to the model next to the prompt text."""

    mime_type: str
    data: str  # base64, no data URI prefix


class BaseLLMService(ABC):
    """Abstract base class for LLM services.

    All LLM providers (Anthropic, OpenAI, etc.) must implement these methods.
    """

    @abstractmethod
    async def generate(
        self,
        prompt: str,
        system: str,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a single plain-text response.

        Args:
            prompt: User message.
            system: System instructions.
            model: Override model name.
            temperature: Sampling temperature (0-1).
            max_tokens: Maximum tokens to generate.

        Returns:
            Generated text.
        """

    @abstractmethod
    async def generate_structured_output(
        self,
        prompt: str,
        system: str,
        tool_name: str,
        output_model: type[OutputT],
        *,
        media: MediaPart | None = None,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> OutputT:
        """Generate output that must validate against a pydantic model.

        Args:
            prompt: User message.
            system: System instructions.
            tool_name: Name of the forced output tool.
            output_model: Pydantic model describing the expected output.
            media: Optional inline image or document.
            model: Override model name.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens.

        Returns:
            Validated instance of ``output_model``.

        Raises:
            LLMError: If the call fails or the output does not validate.
        """

    @abstractmethod
    async def generate_with_tools(
        self,
        prompt: str,
        system: str,
        tools: Sequence[BaseTool],
        *,
        model: str | None = None,
        max_tool_rounds: int | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a plain-text response, letting the model call tools.

        The model decides whether to call any of ``tools``. Each call is
        executed and its result fed back until the model answers in text.

        Args:
            prompt: User message.
            system: System instructions.
            tools: Tools the model may invoke.
            model: Override model name.
            max_tool_rounds: Max tool-call round trips before failing.
            temperature: Sampling temperature.
            max_tokens: Maximum tokens per call.

        Returns:
            Final generated text.
        """
