"""Services module for cross-cutting business logic.

Contains the pieces the answer flows and HTTP handlers share:
- Attachment format extraction
- Documentation lookup (mock knowledge source)

Chat session state lives in services.chat_session and services.session_store;
import those directly (they depend on flows, which depends on this package).

Note: Service instances are managed via dependencies.py using FastAPI DI.
"""

from services.extraction import ExtractionError, FormatExtractor
from services.knowledge import KnowledgeSource, KnowledgeTool, MockKnowledgeSource
from services.types import AttachmentContent, KnowledgeResult, RenderVariant

__all__ = [
    # Extraction
    "ExtractionError",
    "FormatExtractor",
    # Knowledge
    "KnowledgeSource",
    "KnowledgeTool",
    "MockKnowledgeSource",
    # Types
    "AttachmentContent",
    "KnowledgeResult",
    "RenderVariant",
]
