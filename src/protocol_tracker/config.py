"""Application configuration."""

import os

from pydantic_settings import BaseSettings, SettingsConfigDict

_ENVIRONMENT = os.getenv("ENVIRONMENT", "local")

DEV_ENVIRONMENTS = frozenset({"local", "development"})


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    supabase_url: str
    supabase_service_key: str
    supabase_anon_key: str | None = None
    api_prefix: str = "/api/v1"
    routine_version_max_attempts: int = 3
    default_page_size: int = 50
    max_page_size: int = 200
    log_level: str = "INFO"
    environment: str = _ENVIRONMENT

    model_config = SettingsConfigDict(
        env_file=(f".env.{_ENVIRONMENT}", ".env"),
        extra="ignore",
    )

    @property
    def dev_bypass_enabled(self) -> bool:
        """Return True when the X-Dev-Bypass header may skip token checks."""
        return self.environment in DEV_ENVIRONMENTS
