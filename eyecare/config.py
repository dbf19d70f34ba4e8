# eyecare/config.py
from functools import lru_cache
from typing import List

from pydantic_settings import BaseSettings, SettingsConfigDict
from pydantic import Field


class Settings(BaseSettings):
    openai_api_key: str | None = Field(None, validation_alias="OPENAI_API_KEY")
    openai_base_url: str | None = Field(None, validation_alias="OPENAI_BASE_URL")
    llm_model: str = Field("gpt-4o-mini", validation_alias="LLM_MODEL")
    # Must accept image input; falls back to llm_model when unset
    vision_model: str | None = Field(None, validation_alias="VISION_MODEL")

    chat_max_output_tokens: int = Field(1000, validation_alias="CHAT_MAX_OUTPUT_TOKENS")
    max_image_bytes: int = Field(10 * 1024 * 1024, validation_alias="MAX_IMAGE_BYTES")

    # In-memory wizard sessions
    session_ttl_seconds: float = Field(3600, validation_alias="SESSION_TTL_SECONDS")
    max_sessions: int = Field(1000, validation_alias="MAX_SESSIONS")

    cors_origins: List[str] = Field(default_factory=lambda: ["*"], validation_alias="CORS_ORIGINS")
    log_level: str = Field("INFO", validation_alias="LOG_LEVEL")

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
    )


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    return Settings()
