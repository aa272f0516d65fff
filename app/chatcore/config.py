"""
Purpose: Runtime configuration, read from the environment or a local .env file.
One place for the API key, model options, language and logging switches so the
UI and the responder never call os.getenv themselves.
"""

from __future__ import annotations
from functools import lru_cache
from typing import Optional

from pydantic import Field, SecretStr
from pydantic_settings import BaseSettings, SettingsConfigDict

from .models import LLMSettings

DEFAULT_SYSTEM_PROMPT = (
    "You are a helpful, concise assistant. Answer in the same language "
    "the user writes in."
)


class ChatSettings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=True,
        extra="ignore",
    )

    OPENAI_API_KEY: SecretStr = Field(default=SecretStr(""))
    OPENAI_MODEL: str = Field(default="gpt-4o-mini")
    TEMPERATURE: float = Field(default=0.7, ge=0.0, le=2.0)
    TOP_P: float = Field(default=1.0, ge=0.0, le=1.0)
    MAX_TOKENS: int = Field(default=512, gt=0)
    SYSTEM_PROMPT: str = Field(default=DEFAULT_SYSTEM_PROMPT)

    LANGUAGE: str = Field(default="en")
    # None keeps the responder wait unbounded.
    RESPONDER_TIMEOUT_SECONDS: Optional[float] = Field(default=None, gt=0)

    LOG_LEVEL: str = Field(default="INFO")
    JSON_LOGS: bool = Field(default=False)

    def llm_settings(self) -> LLMSettings:
        return LLMSettings(
            model=self.OPENAI_MODEL,
            temperature=self.TEMPERATURE,
            top_p=self.TOP_P,
            max_tokens=self.MAX_TOKENS,
        )


@lru_cache
def get_settings() -> ChatSettings:
    return ChatSettings()
