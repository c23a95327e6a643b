"""Tests for the chat session controller and session store."""

import asyncio

import pytest

from flows import Mode
from llm import LLMError
from services.chat_session import (
    APOLOGY,
    GREETING,
    ChatSession,
    ChatSessionError,
    EmptySubmissionError,
    ModeLockedError,
    SessionBusyError,
    SessionState,
)
from services.session_store import SessionStore


class TestChatSession:
    """Tests for ChatSession."""

    def test_initial_state(self, mock_assistant):
        session = ChatSession("s1", mock_assistant)

        assert session.state is SessionState.IDLE
        assert session.mode is Mode.COMPREHENSIVE
        assert session.pending_attachment is None
        assert len(session.messages) == 1
        assert session.messages[0].role == "assistant"
        assert session.messages[0].content == GREETING

    @pytest.mark.asyncio
    async def test_submit_question(self, mock_assistant):
        session = ChatSession("s1", mock_assistant)
        session.select_mode("standard")

        reply = await session.submit("  What is a mapping?  ")

        mock_assistant.ask.assert_awaited_once_with("What is a mapping?", Mode.STANDARD)
        user, assistant = session.messages[1:]
        assert user.role == "user"
        assert user.content == "What is a mapping?"
        assert assistant is reply
        assert reply.content == "Mappings move data between sources and targets."
        assert reply.mode == "standard"
        assert session.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_attachment_overrides_mode(self, mock_assistant, png_payload):
        session = ChatSession("s1", mock_assistant, mode=Mode.CONTEXTUAL)
        session.stage_attachment("arch.png", "image/png", png_payload)

        reply = await session.submit("")

        mock_assistant.ask.assert_not_awaited()
        mock_assistant.analyze_attachment.assert_awaited_once_with(
            "", png_payload, "image/png", "arch.png"
        )
        user = session.messages[1]
        assert user.content == "Analyzing arch.png..."
        assert user.attachment.name == "arch.png"
        assert user.attachment.mime_type == "image/png"
        assert reply.mode == "attachment-analysis"
        assert session.pending_attachment is None

    def test_mode_locked_while_attachment_staged(self, mock_assistant):
        session = ChatSession("s1", mock_assistant)
        session.stage_attachment("a.txt", "text/plain", "aGk=")

        with pytest.raises(ModeLockedError):
            session.select_mode(Mode.STANDARD)
        assert session.mode is Mode.COMPREHENSIVE

        session.clear_attachment()
        session.select_mode(Mode.STANDARD)
        assert session.mode is Mode.STANDARD

    def test_staging_replaces_previous_file(self, mock_assistant):
        session = ChatSession("s1", mock_assistant)
        session.stage_attachment("a.txt", "text/plain", "aGk=")
        session.stage_attachment("b.png", "image/png", "AAAA")

        assert session.pending_attachment.filename == "b.png"

    @pytest.mark.asyncio
    async def test_empty_submission_rejected(self, mock_assistant):
        session = ChatSession("s1", mock_assistant)

        assert not session.can_submit("   ")
        with pytest.raises(EmptySubmissionError):
            await session.submit("   ")

        assert len(session.messages) == 1
        assert session.state is SessionState.IDLE

    @pytest.mark.asyncio
    async def test_second_submit_rejected_while_in_flight(self, mock_assistant):
        release = asyncio.Event()

        async def slow_ask(question, mode):
            await release.wait()
            return mock_assistant.ask.return_value

        mock_assistant.ask.side_effect = slow_ask
        session = ChatSession("s1", mock_assistant)

        first = asyncio.create_task(session.submit("first"))
        await asyncio.sleep(0)

        assert session.state is SessionState.SUBMITTING
        assert not session.can_submit("second")
        with pytest.raises(SessionBusyError):
            await session.submit("second")
        with pytest.raises(SessionBusyError):
            session.reset()

        release.set()
        await first

        assert session.state is SessionState.IDLE
        assert [m.role for m in session.messages] == ["assistant", "user", "assistant"]
        assert mock_assistant.ask.await_count == 1

    @pytest.mark.asyncio
    async def test_failure_becomes_apology(self, mock_assistant):
        mock_assistant.ask.side_effect = LLMError("connection reset")
        session = ChatSession("s1", mock_assistant)

        reply = await session.submit("What is CDQ?")

        assert reply.content == APOLOGY
        assert reply.source_links is None
        assert session.state is SessionState.IDLE
        assert len(session.messages) == 3

    @pytest.mark.asyncio
    async def test_can_submit_again_after_failure(self, mock_assistant):
        answer = mock_assistant.ask.return_value
        mock_assistant.ask.side_effect = [LLMError("boom"), answer]
        session = ChatSession("s1", mock_assistant)

        await session.submit("first")
        reply = await session.submit("second")

        assert reply.content == "Mappings move data between sources and targets."
        assert len(session.messages) == 5

    @pytest.mark.asyncio
    async def test_reset(self, mock_assistant):
        session = ChatSession("s1", mock_assistant)
        await session.submit("hello")
        session.stage_attachment("a.txt", "text/plain", "aGk=")

        session.reset()

        assert [m.content for m in session.messages] == [GREETING]
        assert session.pending_attachment is None

    def test_invalid_transition(self, mock_assistant):
        session = ChatSession("s1", mock_assistant)

        with pytest.raises(ChatSessionError):
            session._transition(SessionState.IDLE)


class TestSessionStore:
    """Tests for SessionStore."""

    def test_get_or_create_reuses_session(self, mock_assistant):
        store = SessionStore(mock_assistant)

        first = store.get_or_create("abc")
        second = store.get_or_create("abc")

        assert first is second
        assert len(store) == 1

    def test_evicts_least_recently_used(self, mock_assistant):
        store = SessionStore(mock_assistant, max_sessions=2)
        store.get_or_create("a")
        store.get_or_create("b")
        store.get("a")

        store.get_or_create("c")

        assert store.get("b") is None
        assert store.get("a") is not None
        assert len(store) == 2
