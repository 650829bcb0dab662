"""Application configuration from environment variables."""

from __future__ import annotations

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    anthropic_api_key: str = ""
    annotator_env: str = "development"
    annotator_log_level: str = "info"

    # CORS
    cors_origins: list[str] = ["http://localhost:3000"]

    # Vision oracle
    model_vision: str = "claude-sonnet-4-5-20250929"
    oracle_max_tokens: int = 256
    oracle_timeout_s: float = 30.0
    oracle_cache_size: int = 512

    model_config = {"env_file": ".env", "env_file_encoding": "utf-8"}


settings = Settings()
