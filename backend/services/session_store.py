"""In-memory chat session store.

Sessions live as long as the process; nothing is written to disk. The
oldest sessions are evicted once ``max_sessions`` is reached.
"""

import logging
from collections import OrderedDict

from flows.service import AssistantService
from services.chat_session import ChatSession

logger = logging.getLogger(__name__)


class SessionStore:
    """Maps session ids to chat sessions."""

    def __init__(self, assistant: AssistantService, max_sessions: int = 1000) -> None:
        self._assistant = assistant
        self._max_sessions = max_sessions
        self._sessions: OrderedDict[str, ChatSession] = OrderedDict()

    def __len__(self) -> int:
        return len(self._sessions)

    def get(self, session_id: str) -> ChatSession | None:
        session = self._sessions.get(session_id)
        if session is not None:
            self._sessions.move_to_end(session_id)
        return session

    def get_or_create(self, session_id: str) -> ChatSession:
        """Get the session for an id, creating it on first use."""
        session = self.get(session_id)
        if session is not None:
            return session

        while len(self._sessions) >= self._max_sessions:
            evicted_id, _ = self._sessions.popitem(last=False)
            logger.info("Evicted session %s", evicted_id)

        session = ChatSession(session_id, self._assistant)
        self._sessions[session_id] = session
        logger.info("Created session %s", session_id)
        return session
