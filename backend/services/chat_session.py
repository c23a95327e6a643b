"""Chat session controller.

Holds one conversation: the transcript, the selected mode, the staged
attachment and whether a request is in flight. Exactly one flow runs per
submitted turn, and a session never runs two at once.

State machine:
    IDLE --submit--> SUBMITTING --answer or fault--> IDLE
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from enum import Enum
from typing import Literal

from pydantic import BaseModel, Field

from flows.schemas import Mode
from flows.service import AssistantService

logger = logging.getLogger(__name__)

GREETING = (
    "Hello! I am your IDMC CogniAssistant. I can help you with Informatica Data "
    "Management Cloud (IDMC) documentation, integration patterns, data quality, or "
    "governance questions. You can also upload screenshots, architecture diagrams, "
    "or even Excel/Word docs for analysis! How can I assist you today?"
)

APOLOGY = (
    "I encountered an error processing your request. "
    "Please try again or check your connection."
)


class SessionState(str, Enum):
    """Whether the session is waiting for a flow to finish."""

    IDLE = "idle"
    SUBMITTING = "submitting"


ALLOWED_TRANSITIONS: dict[SessionState, frozenset[SessionState]] = {
    SessionState.IDLE: frozenset({SessionState.SUBMITTING}),
    SessionState.SUBMITTING: frozenset({SessionState.IDLE}),
}


class ChatSessionError(Exception):
    """Base class for rejected session operations."""


class SessionBusyError(ChatSessionError):
    """Raised when an operation needs the session to be idle."""


class ModeLockedError(ChatSessionError):
    """Raised when changing mode while an attachment is staged."""


class EmptySubmissionError(ChatSessionError):
    """Raised when submitting with neither text nor an attachment."""


class AttachmentDescriptor(BaseModel):
    """What the transcript remembers about an attachment (never its bytes)."""

    name: str
    mime_type: str


class Message(BaseModel):
    """One transcript entry."""

    role: Literal["user", "assistant"]
    content: str
    source_links: tuple[str, ...] | None = None
    mode: str | None = None
    attachment: AttachmentDescriptor | None = None
    timestamp: datetime = Field(default_factory=lambda: datetime.now(UTC))


@dataclass(frozen=True)
class StagedAttachment:
    """A file selected for the next turn."""

    filename: str
    mime_type: str
    payload: str


class ChatSession:
    """Client-side conversation state, driving one flow per turn."""

    def __init__(
        self,
        session_id: str,
        assistant: AssistantService,
        mode: Mode = Mode.COMPREHENSIVE,
    ) -> None:
        self.session_id = session_id
        self._assistant = assistant
        self._state = SessionState.IDLE
        self._mode = mode
        self._pending: StagedAttachment | None = None
        self._messages: list[Message] = [Message(role="assistant", content=GREETING)]

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def mode(self) -> Mode:
        return self._mode

    @property
    def pending_attachment(self) -> StagedAttachment | None:
        return self._pending

    @property
    def messages(self) -> tuple[Message, ...]:
        return tuple(self._messages)

    def _transition(self, target: SessionState) -> None:
        if target not in ALLOWED_TRANSITIONS[self._state]:
            raise ChatSessionError(
                f"Invalid transition {self._state.value} -> {target.value}"
            )
        self._state = target

    def can_submit(self, text: str) -> bool:
        """Whether a submit with ``text`` would be accepted right now."""
        has_input = bool(text.strip()) or self._pending is not None
        return has_input and self._state is SessionState.IDLE

    def select_mode(self, mode: Mode | str) -> None:
        """Select the answer mode for later turns.

        Raises:
            ModeLockedError: If an attachment is staged.
        """
        if self._pending is not None:
            raise ModeLockedError("Mode cannot change while an attachment is staged")
        self._mode = Mode(mode)

    def stage_attachment(self, filename: str, mime_type: str, payload: str) -> None:
        """Stage a file for the next turn, replacing any staged file."""
        self._pending = StagedAttachment(
            filename=filename, mime_type=mime_type, payload=payload
        )

    def clear_attachment(self) -> None:
        self._pending = None

    def reset(self) -> None:
        """Start a new chat: greeting-only transcript, nothing staged."""
        if self._state is SessionState.SUBMITTING:
            raise SessionBusyError("Cannot reset while a request is in flight")
        self._pending = None
        self._messages = [Message(role="assistant", content=GREETING)]

    async def submit(self, text: str) -> Message:
        """Send one turn and wait for the reply.

        The user message is appended before the flow runs. A staged
        attachment always selects the attachment flow; otherwise the
        selected mode does. A flow failure becomes an apology message.

        Returns:
            The appended assistant message.

        Raises:
            SessionBusyError: If a previous turn is still in flight.
            EmptySubmissionError: If there is neither text nor an attachment.
        """
        if self._state is not SessionState.IDLE:
            raise SessionBusyError("A request is already in flight")

        question = text.strip()
        attachment = self._pending
        if not question and attachment is None:
            raise EmptySubmissionError("Nothing to submit")

        mode = self._mode
        self._messages.append(
            Message(
                role="user",
                content=question or f"Analyzing {attachment.filename}...",
                attachment=AttachmentDescriptor(
                    name=attachment.filename, mime_type=attachment.mime_type
                )
                if attachment
                else None,
            )
        )
        self._pending = None
        self._transition(SessionState.SUBMITTING)

        try:
            if attachment is not None:
                result = await self._assistant.analyze_attachment(
                    question,
                    attachment.payload,
                    attachment.mime_type,
                    attachment.filename,
                )
            else:
                result = await self._assistant.ask(question, mode)
            reply = Message(
                role="assistant",
                content=result.answer,
                source_links=result.source_links,
                mode=result.mode,
            )
        except Exception:
            logger.exception("Turn failed for session %s", self.session_id)
            reply = Message(role="assistant", content=APOLOGY)
        finally:
            self._transition(SessionState.IDLE)

        self._messages.append(reply)
        return reply
