"""FastAPI dependency injection for services.

Services are cached with @lru_cache() to avoid recreation per request.
Tests swap them out with app.dependency_overrides.
"""

from functools import lru_cache

from flows import AssistantService
from llm import BaseLLMService, LLMService
from services import FormatExtractor, KnowledgeSource, MockKnowledgeSource
from services.session_store import SessionStore

# --- Cached Singletons ---
# These are created once and reused across all requests


@lru_cache
def get_llm_service() -> BaseLLMService:
    """Get cached LLM service (expensive - has API client)."""
    return LLMService()


@lru_cache
def get_knowledge_source() -> KnowledgeSource:
    """Get the documentation lookup backend.

    Swap the mock for a real search/embedding index here.
    """
    return MockKnowledgeSource()


@lru_cache
def get_assistant_service() -> AssistantService:
    """Get cached assistant service wired to the LLM and knowledge source."""
    return AssistantService(
        llm=get_llm_service(),
        knowledge=get_knowledge_source(),
        extractor=FormatExtractor(),
    )


@lru_cache
def get_session_store() -> SessionStore:
    """Get the process-wide in-memory session store."""
    return SessionStore(get_assistant_service())
