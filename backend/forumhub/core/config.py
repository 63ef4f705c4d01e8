"""
ForumHub Backend Configuration.

Environment-based configuration using Pydantic Settings.
Values can be overridden via environment variables or a .env file.
"""

from functools import lru_cache
from pathlib import Path
from typing import Any

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

BUNDLED_FIXTURES = Path(__file__).resolve().parent.parent / "fixtures" / "fixtures.json"


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "ForumHub"
    app_version: str = "1.0.0"
    debug: bool = False

    # API
    api_v1_prefix: str = "/api/v1"

    # Acting identity used when a request omits the user ID
    default_user_id: str = "1"

    # Seed data
    fixtures_path: Path = BUNDLED_FIXTURES

    # CORS
    cors_origins: list[str] = [
        "http://localhost:3000",
        "http://localhost:4000",
    ]

    @field_validator("default_user_id", mode="before")
    @classmethod
    def validate_default_user_id(cls, v: Any) -> Any:
        """Accept numeric IDs from the environment and strip whitespace."""
        if isinstance(v, int):
            return str(v)
        if isinstance(v, str):
            return v.strip()
        return v


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
