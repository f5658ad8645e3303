"""Application configuration using pydantic-settings."""

from functools import lru_cache
from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application environment
    env: Literal["dev", "test", "staging", "prod"] = "dev"

    # Logging
    log_level: str = "INFO"

    # Database (used by the sql catalog backend)
    database_url: str = "sqlite+aiosqlite:///./serviceflow.db"
    init_db_on_startup: bool = False

    # Catalog backend selection
    catalog_backend: Literal["yaml", "sql", "notion"] = "yaml"
    catalog_file: str = "default.yaml"
    # Per-fetch timeout applied by the flow orchestrator
    catalog_fetch_timeout_seconds: float = 10.0

    # Notion catalog
    notion_secret: str | None = None
    notion_api_url: str = "https://api.notion.com/v1"
    notion_version: str = "2022-06-28"
    notion_database_goals_id: str | None = None
    notion_database_questions_id: str | None = None
    notion_database_services_id: str | None = None
    notion_database_rules_id: str | None = None

    # Serve fixture goals when the catalog is empty or unreachable
    goals_fallback_enabled: bool = True

    @property
    def is_dev(self) -> bool:
        """Check if running in development mode."""
        return self.env == "dev"

    @property
    def is_prod(self) -> bool:
        """Check if running in production mode."""
        return self.env == "prod"

    @property
    def is_test(self) -> bool:
        """Check if running in test mode."""
        return self.env == "test"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()


settings = get_settings()
