from __future__ import annotations

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    # Loads keys from process env, and also from a local .env file for convenience.
    model_config = SettingsConfigDict(env_prefix="", extra="ignore", env_file=".env", env_file_encoding="utf-8")

    log_level: str = "INFO"

    # "openai" or "gemini"
    generation_provider: str = "openai"

    # Keys
    gemini_api_key: str | None = None
    openai_api_key: str | None = None

    # Models
    gemini_vision_model: str = "gemini-2.0-flash"
    openai_text_model: str = "gpt-4o-mini"

    # Request limits
    max_image_data_url_chars: int = 10_000_000
    debug_excerpt_chars: int = 4000

    # Image normalization defaults (tasks may carry their own preset)
    image_max_edge: int = 1200
    image_start_quality: float = 0.88
    image_max_bytes: int = 4_000_000
    image_quality_floor: float = 0.4
    image_quality_step: float = 0.05


settings = Settings()
