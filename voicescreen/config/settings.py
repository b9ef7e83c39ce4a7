"""
Application settings and configuration management.

Uses pydantic-settings for environment variable loading.
The API credential and the session-signing secret are mandatory:
loading settings without them raises and the process refuses to start.
"""

from functools import lru_cache

from pydantic import Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    # Application
    app_name: str = "VoiceScreen"
    app_version: str = "0.1.0"
    debug: bool = False
    host: str = "0.0.0.0"
    port: int = 3000
    environment: str = "development"

    # Required secrets
    openai_api_key: str = Field(..., min_length=1)
    session_secret: str = Field(..., min_length=1)

    # Completion collaborator (OpenAI-compatible API)
    openai_base_url: str = "https://api.openai.com/v1"
    openai_model: str = "gpt-4o-mini"
    request_timeout_seconds: float = 60.0

    # TTS configuration
    openai_tts_model: str = "gpt-4o-mini-tts"
    openai_tts_voice: str = "coral"  # alloy, coral, nova, onyx, shimmer, ...
    openai_tts_speed: float = 1.0
    tts_max_chars: int = 4096

    # Session settings
    session_cookie_name: str = "voicescreen_session"
    session_max_age_seconds: int = 60 * 60  # 1 hour
    session_backend: str = "memory"  # Options: memory, redis
    redis_url: str = ""

    # Interview settings
    recent_history_window: int = 5

    # CORS - stored as comma-separated string in env
    cors_origins_str: str = Field(
        default="http://localhost:3000",
        validation_alias="cors_origins"
    )

    @field_validator("openai_api_key", "session_secret")
    @classmethod
    def _require_secret(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @computed_field
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [origin.strip() for origin in self.cors_origins_str.split(",") if origin.strip()]

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
