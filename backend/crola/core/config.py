"""
Application configuration using Pydantic Settings.

Every value can be overridden through environment variables or a local .env file.
"""

from functools import lru_cache
from typing import List, Literal

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    # ===========================================
    # Environment
    # ===========================================
    ENVIRONMENT: Literal["local", "production"] = "local"
    DEBUG: bool = False
    LOG_LEVEL: str = "INFO"

    # ===========================================
    # Database
    # ===========================================
    DATABASE_URL: str = "sqlite+aiosqlite:///./crola.db"

    # ===========================================
    # Auth (password + JWT)
    # ===========================================
    JWT_SECRET: str = ""
    JWT_ISSUER: str = "crola-chat"
    # 7 days; set to 1440 for one-day tokens
    JWT_EXPIRE_MINUTES: int = 60 * 24 * 7

    # ===========================================
    # Completion API
    # ===========================================
    # Provider profile: "requesty" | "deepseek" | "custom"
    # - requesty: Requesty router (OpenAI-compatible, multi-vendor models)
    # - deepseek: DeepSeek API
    # - custom: any OpenAI-compatible endpoint set in AI_API_ENDPOINT
    LLM_PROVIDER: Literal["requesty", "deepseek", "custom"] = "requesty"

    # API key sent as a bearer token to the completion endpoint
    AI_API_KEY: str = ""

    # Overrides the profile endpoint (required for "custom")
    AI_API_ENDPOINT: str = ""

    # Overrides the profile default model
    AI_MODEL_NAME: str = ""

    AI_TIMEOUT_SECONDS: float = 30.0

    # Attribution headers sent to the Requesty router
    AI_APP_REFERER: str = "http://localhost:3000"
    AI_APP_TITLE: str = "Crola Chat"

    # ===========================================
    # Server
    # ===========================================
    HOST: str = "0.0.0.0"
    PORT: int = 8000
    ALLOWED_ORIGINS: List[str] = Field(
        default=["http://localhost:3000", "http://localhost:5173"]
    )

    @property
    def is_local(self) -> bool:
        """Check if running in local environment."""
        return self.ENVIRONMENT == "local"


@lru_cache()
def get_settings() -> Settings:
    """
    Get cached settings instance.

    Using lru_cache ensures settings are loaded only once.
    """
    return Settings()
