"""Anthropic Claude LLM implementation."""

import logging
from collections.abc import Sequence
from typing import Any

import httpx
from anthropic import APIError, AsyncAnthropic, RateLimitError
from pydantic import ValidationError

from config import get_settings

from .base import BaseLLMService, LLMError, LLMRateLimitError, MediaPart, OutputT
from .tools import BaseTool

logger = logging.getLogger(__name__)


def _media_block(media: MediaPart) -> dict[str, Any]:
    """Build an inline content block; PDFs go as documents, the rest as images."""
    source = {"type": "base64", "media_type": media.mime_type, "data": media.data}
    if media.mime_type == "application/pdf":
        return {"type": "document", "source": source}
    return {"type": "image", "source": source}


def _collect_text(response: Any) -> str:
    return "".join(
        block.text for block in response.content if block.type == "text"
    ).strip()


class AnthropicService(BaseLLMService):
    """Claude LLM service via Anthropic API."""

    def __init__(
        self,
        model: str | None = None,
        client: AsyncAnthropic | None = None,
    ) -> None:
        settings = get_settings()
        self.model = model or settings.llm_model
        self.settings = settings

        self._client = client or AsyncAnthropic(
            api_key=settings.anthropic_api_key,
            timeout=httpx.Timeout(timeout=60.0, connect=10.0),
        )

    async def _create(self, **kwargs: Any) -> Any:
        try:
            return await self._client.messages.create(**kwargs)
        except RateLimitError as e:
            logger.warning("Rate limit: %s", e)
            raise LLMRateLimitError("Rate limit exceeded. Please try again.") from e
        except APIError as e:
            logger.error("API error: %s", e)
            raise LLMError(f"LLM error: {e}") from e

    def _temperature(self, temperature: float | None) -> float:
        return temperature if temperature is not None else self.settings.llm_temperature

    async def generate(
        self,
        prompt: str,
        system: str,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
    ) -> str:
        """Generate a response using Claude."""
        response = await self._create(
            model=model or self.model,
            max_tokens=max_tokens or self.settings.llm_max_tokens,
            temperature=self._temperature(temperature),
            system=system,
            messages=[{"role": "user", "content": prompt}],
        )
        return _collect_text(response)

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
        """Generate structured output using Claude's tool_use."""
        content: str | list[dict[str, Any]] = prompt
        if media is not None:
            content = [_media_block(media), {"type": "text", "text": prompt}]

        response = await self._create(
            model=model or self.model,
            max_tokens=max_tokens or self.settings.structured_max_tokens,
            temperature=self._temperature(temperature),
            system=system,
            messages=[{"role": "user", "content": content}],
            tools=[
                {
                    "name": tool_name,
                    "description": f"Structured output for {tool_name}",
                    "input_schema": output_model.model_json_schema(),
                }
            ],
            tool_choice={"type": "tool", "name": tool_name},
        )

        for block in response.content:
            if block.type == "tool_use" and block.name == tool_name:
                try:
                    return output_model.model_validate(block.input)
                except ValidationError as e:
                    logger.error("Output of '%s' failed validation: %s", tool_name, e)
                    raise LLMError(f"Invalid output from '{tool_name}'") from e

        raise LLMError(f"Tool '{tool_name}' was not called")

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
        """Run Claude with tools available until it answers in text."""
        if max_tool_rounds is None:
            max_tool_rounds = self.settings.deep_path_max_tool_rounds

        handlers = {tool.name: tool for tool in tools}
        tool_schemas = [tool.definition.to_anthropic_schema() for tool in tools]
        messages: list[dict[str, Any]] = [{"role": "user", "content": prompt}]

        rounds = 0
        while True:
            response = await self._create(
                model=model or self.model,
                max_tokens=max_tokens or self.settings.llm_max_tokens,
                temperature=self._temperature(temperature),
                system=system,
                messages=messages,
                tools=tool_schemas,
            )
            if response.stop_reason != "tool_use":
                return _collect_text(response)

            if rounds >= max_tool_rounds:
                raise LLMError(f"Model exceeded {max_tool_rounds} tool rounds")
            rounds += 1

            messages.append({"role": "assistant", "content": response.content})
            results = []
            for block in response.content:
                if block.type != "tool_use":
                    continue
                tool = handlers.get(block.name)
                if tool is None:
                    logger.warning("Model requested unknown tool '%s'", block.name)
                    results.append(
                        {
                            "type": "tool_result",
                            "tool_use_id": block.id,
                            "content": f"Unknown tool: {block.name}",
                            "is_error": True,
                        }
                    )
                    continue

                logger.info("Tool '%s' called with %s", block.name, block.input)
                output = await tool.execute(**block.input)
                results.append(
                    {"type": "tool_result", "tool_use_id": block.id, "content": output}
                )
            messages.append({"role": "user", "content": results})
