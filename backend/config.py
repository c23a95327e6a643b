"""Configuration and settings for CogniAssist.

Uses Pydantic Settings for fail-fast validation on startup.
All required environment variables are validated at import time.
"""

import logging
import sys
from functools import lru_cache
from typing import Any

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


def setup_logging(level: str = "INFO") -> None:
    """Configure application logging.

    Args:
        level: Log level (DEBUG, INFO, WARNING, ERROR)
    """
    logging.basicConfig(
        level=getattr(logging, level.upper()),
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Reduce noise from third-party libraries
    logging.getLogger("httpx").setLevel(logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)
    logging.getLogger("anthropic").setLevel(logging.WARNING)


class Settings(BaseSettings):
    """Application settings loaded from environment variables.

    Raises ValidationError on startup if required variables are missing.
    """

    model_config = SettingsConfigDict(
        env_file=("../.env", ".env"),
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # API Keys (required)
    anthropic_api_key: str = Field(..., description="Anthropic API key for Claude")

    # Application Settings
    environment: str = Field(default="development", description="Environment name")
    debug: bool = Field(default=False, description="Debug mode")
    log_level: str = Field(default="INFO", description="Root log level")

    # Model Settings
    llm_model: str = Field(
        default="claude-sonnet-4-20250514",
        description="Higher-capability model (standard, contextual, deep path, synthesis)",
    )
    fast_llm_model: str = Field(
        default="claude-3-5-haiku-latest",
        description="Lightweight model for the comprehensive fast path",
    )
    llm_temperature: float = Field(
        default=0.2, description="LLM temperature for factual responses"
    )
    llm_max_tokens: int = Field(default=2048, description="Max tokens for generation")
    structured_max_tokens: int = Field(
        default=2048, description="Max tokens for schema-validated answers"
    )
    deep_path_max_tool_rounds: int = Field(
        default=3,
        description="Max documentation tool calls the deep path may make per request",
    )

    # Attachment Limits
    max_attachment_size_mb: int = Field(
        default=10, description="Max decoded attachment size in MB"
    )

    # Session Settings
    session_ttl_hours: int = Field(
        default=24, description="Session cookie TTL in hours"
    )

    @field_validator("anthropic_api_key")
    @classmethod
    def validate_api_key_not_empty(cls, v: str, info) -> str:
        """Ensure API keys are not empty strings."""
        if not v or not v.strip():
            raise ValueError(f"{info.field_name} cannot be empty")
        return v.strip()

    @property
    def max_attachment_size_bytes(self) -> int:
        """Get max attachment size in bytes."""
        return self.max_attachment_size_mb * 1024 * 1024


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Uses lru_cache to ensure settings are only loaded once.
    """
    return Settings()


# CORS Configuration
CORS_CONFIG: dict[str, Any] = {
    "allow_origins": [
        "http://localhost:3000",
        "http://localhost:9002",
        "http://127.0.0.1:3000",
        "http://127.0.0.1:9002",
    ],
    "allow_credentials": True,
    "allow_methods": ["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    "allow_headers": ["*"],
    "expose_headers": ["*"],
    "max_age": 600,
}

# FastAPI App Configuration
APP_CONFIG: dict[str, Any] = {
    "title": "CogniAssist",
    "description": (
        "Conversational assistant for Informatica Data Management Cloud (IDMC). "
        "Answers questions in standard, contextual or comprehensive mode and "
        "analyzes uploaded screenshots, diagrams and office documents."
    ),
    "version": "0.1.0",
    "docs_url": "/api/docs",
    "redoc_url": "/api/redoc",
    "openapi_url": "/api/openapi.json",
    "openapi_tags": [
        {
            "name": "Health",
            "description": "Health check and service status",
        },
        {
            "name": "Chat",
            "description": "Stateless question answering and attachment analysis",
        },
        {
            "name": "Session",
            "description": "Per-browser chat transcript, mode and staged attachment",
        },
    ],
}


def get_app_config() -> dict[str, Any]:
    """Get FastAPI application configuration."""
    return APP_CONFIG.copy()


def get_cors_config() -> dict[str, Any]:
    """Get CORS middleware configuration."""
    return CORS_CONFIG.copy()
