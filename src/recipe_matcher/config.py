"""Application configuration."""

import os

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    catalog_backend: str = "file"
    catalog_path: str = "data/catalog.json"
    supabase_url: str | None = None
    supabase_service_key: str | None = None
    openai_api_key: str | None = None
    openai_model: str = "gpt-5.2"
    openai_reasoning_effort: str = "low"
    openai_store: bool = False
    acceptance_threshold: float = Field(default=0.5, ge=0.0, le=1.0)
    default_page_size: int = Field(default=10, ge=1)
    scoring_workers: int = Field(default=1, ge=1)
    excluded_allergens: str | None = None
    debug: bool = False
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )


def parse_allergens(raw: str | None) -> frozenset[str]:
    """Parse a comma-separated allergen list from env."""
    if raw is None:
        return frozenset()
    tags: set[str] = set()
    for chunk in raw.split(","):
        value = chunk.strip().lower()
        if value:
            tags.add(value)
    return frozenset(tags)
