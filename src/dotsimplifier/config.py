"""Application configuration from environment variables."""

from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    log_level: str = "info"

    # Defaults for requests that leave an option out
    default_epsilon: float = 10.0
    default_min_distance: float = 0.5
    default_should_resize: bool = True

    # Fixed canvas that resized output is fitted into
    target_width: float = 720.0
    target_height: float = 1080.0

    max_upload_bytes: int = 5 * 1024 * 1024

    # CORS
    cors_origins: List[str] = ["http://localhost:3000"]

    model_config = SettingsConfigDict(
        env_prefix="DOTSIMPLIFIER_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )


settings = Settings()


def get_settings() -> Settings:
    return settings
