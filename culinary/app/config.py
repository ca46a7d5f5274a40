from __future__ import annotations

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8-sig",
        case_sensitive=False,
        extra="ignore",
    )

    GEMINI_API_KEY: SecretStr = SecretStr("")
    GEMINI_TEXT_MODEL: str = "gemini-2.5-flash"
    GEMINI_IMAGE_MODEL: str = "gemini-2.5-flash-image"
    RECIPE_TEMPERATURE: float = 0.4

    HISTORY_DIR: str = "data/storage"
    HISTORY_STORAGE_KEY: str = "culinaryai_history"
    HISTORY_CAPACITY: int = Field(default=20, ge=1)
    STORAGE_QUOTA_BYTES: int = 5 * 1024 * 1024

    CONNECTIVITY_PROBE_URL: str = "https://www.google.com/generate_204"
    CONNECTIVITY_TIMEOUT_SECONDS: float = 3.0
    FORCE_OFFLINE: bool = False

    FRONTEND_CORS_ORIGINS: list[str] = Field(
        default_factory=lambda: ["http://localhost:5173"],
    )


settings = Settings()
