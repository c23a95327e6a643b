"""Answer modes and the output shapes shared by all flows."""

from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class Mode(str, Enum):
    """User-selected answer strategy."""

    STANDARD = "standard"
    CONTEXTUAL = "contextual"
    COMPREHENSIVE = "comprehensive"


# Label for answers produced from an attachment, whatever mode was selected.
ATTACHMENT_MODE_LABEL = "attachment-analysis"


class AnswerOutput(BaseModel):
    """Model output for a final answer."""

    answer: str = Field(..., description="The answer to the user's IDMC question.")


class ContextualOutput(BaseModel):
    """Model output for an answer restricted to the supplied context."""

    answer: str = Field(..., description="The answer, grounded only in the CONTEXT.")
    answer_found: bool = Field(
        ..., description="False when the CONTEXT does not contain the answer."
    )


class AnswerResult(BaseModel):
    """Final result of one flow invocation."""

    model_config = ConfigDict(frozen=True)

    answer: str = Field(..., description="Answer text shown to the user")
    source_links: tuple[str, ...] | None = Field(
        None, description="Documentation links backing the answer"
    )
    mode: str | None = Field(None, description="Mode label for the transcript")
