"""
mathpractice.settings

Central configuration model (Pydantic Settings).

Responsibilities:
- Provide strongly-typed, env-driven settings for the API, client and adapters.
- Hide secrets from repr/logging (e.g., the Gemini API key).
- Offer a cached settings instance for dependency injection.
"""

from __future__ import annotations

from functools import lru_cache
from typing import Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """
    Single settings object shared by the HTTP API and the terminal client.
    Defaults are safe for local dev.
    """

    model_config = SettingsConfigDict(env_prefix="MATHPRACTICE_", case_sensitive=False)

    # Environment controls toggle behavior like auto-init DB tables.
    env: Literal["dev", "test", "prod"] = "dev"
    service_name: str = "math-practice"
    log_level: str = "INFO"

    api_host: str = "0.0.0.0"
    api_port: int = 8080

    # Persistence
    database_url: str = "sqlite+aiosqlite:///./mathpractice.db"

    # Text generation
    gemini_api_url: str = (
        "https://generativelanguage.googleapis.com/v1beta/models/"
        "gemini-2.0-flash:generateContent"
    )
    gemini_api_key: str = Field(default="", repr=False)

    # Upper bound on a single outbound call made on behalf of the user.
    request_timeout_seconds: float = Field(default=120.0, gt=0)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    # Cache avoids re-parsing env vars for each request dependency.
    return Settings()


# --- Module Notes -----------------------------------------------------------
# Both entrypoints (`mathpractice.api` and `mathpractice.client`) read this module;
# tests construct `Settings(...)` directly instead of going through the cache.
