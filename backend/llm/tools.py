"""Tool interface for model-invoked functions.

Tools take keyword parameters and return a string result that is fed
back to the model as a ``tool_result`` block.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class ToolDefinition:
    """Tool definition for LLM function calling."""

    name: str
    description: str
    parameters: dict[str, Any]  # JSON Schema

    def to_anthropic_schema(self) -> dict[str, Any]:
        """Convert to Anthropic tool format."""
        return {
            "name": self.name,
            "description": self.description,
            "input_schema": self.parameters,
        }


class BaseTool(ABC):
    """Base class for tools the model may call."""

    @property
    @abstractmethod
    def definition(self) -> ToolDefinition:
        """Tool definition sent to the model."""

    @property
    def name(self) -> str:
        return self.definition.name

    @abstractmethod
    async def execute(self, **params: Any) -> str:
        """Execute the tool with the parameters chosen by the model."""
