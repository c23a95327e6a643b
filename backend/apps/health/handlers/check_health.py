"""GET /health - Report service configuration and load."""

from datetime import UTC, datetime

from fastapi import Depends
from pydantic import BaseModel, Field

from config import Settings, get_settings
from dependencies import get_session_store
from services.session_store import SessionStore

# --- Response Schemas ---


class ModelConfig(BaseModel):
    """Models used by the answer flows."""

    primary: str = Field(..., description="Model for answers and synthesis")
    fast: str = Field(..., description="Model for the comprehensive overview path")


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = Field(..., description="Overall status: healthy or degraded")
    version: str = Field(..., description="Application version")
    environment: str = Field(..., description="Environment name")
    models: ModelConfig
    active_sessions: int = Field(..., description="Sessions held in memory")
    timestamp: datetime


# --- Handler ---


async def check_health(
    settings: Settings = Depends(get_settings),
    store: SessionStore = Depends(get_session_store),
) -> HealthResponse:
    """Check configuration without calling the model API."""
    status = "healthy" if settings.anthropic_api_key.strip() else "degraded"

    return HealthResponse(
        status=status,
        version="0.1.0",
        environment=settings.environment,
        models=ModelConfig(primary=settings.llm_model, fast=settings.fast_llm_model),
        active_sessions=len(store),
        timestamp=datetime.now(UTC),
    )
