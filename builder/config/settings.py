"""Builder service configuration.

Requires: DATABASE_URL
Optional: GEMINI_API_KEY (+ GEMINI_API_KEY_2..N), AI_GATEWAY_API_KEY
"""

from functools import lru_cache
from typing import Literal

from pydantic import Field

from shared.config import BaseSettings, secret_field


class Settings(BaseSettings):
    """Builder service settings."""

    # Required
    database_url: str = Field(
        ...,
        description="PostgreSQL connection URL",
        examples=["postgresql+asyncpg://user:pass@db:5432/playground"],
    )

    # Primary provider (Gemini). Additional pool keys are GEMINI_API_KEY_2, _3, ...
    gemini_api_key: str = secret_field("GEMINI_API_KEY")
    gemini_model: str = "gemini-2.0-flash-exp"
    gemini_base_url: str = "https://generativelanguage.googleapis.com"

    # Fallback provider (OpenAI-compatible AI gateway)
    ai_gateway_api_key: str = secret_field("AI_GATEWAY_API_KEY")
    ai_gateway_url: str = "https://ai.gateway.lovable.dev/v1"
    ai_gateway_model: str = "google/gemini-2.5-flash"

    # Credential rotation
    rotation_service_name: str = "gemini"
    rotation_interval_seconds: int = Field(default=3600, ge=1)

    # Review retry loop
    review_max_attempts: int = Field(default=3, ge=1)
    review_backoff_seconds: float = Field(default=1.5, ge=0)

    # Subpages
    subpage_fallback_routes_enabled: bool = Field(
        default=True,
        description="Materialize generic routes when the site HTML links to no subpages",
    )
    subpage_fallback_routes: list[str] = ["/about", "/contact", "/privacy", "/terms", "/faq", "/blog"]
    subpage_min_chars: int = Field(default=800, ge=0)
    subpage_context_chars: int = Field(default=1500, ge=0)

    # Continuation
    continuation_conflict_policy: Literal["last_writer_wins", "reject_stale"] = "last_writer_wins"

    # Generated site locale
    site_language: str = "ar"
    site_direction: Literal["rtl", "ltr"] = "rtl"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance.

    Validates required env vars on first call.
    Raises ValidationError if DATABASE_URL is missing.
    """
    return Settings()
