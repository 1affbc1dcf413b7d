from __future__ import annotations

from functools import lru_cache

from pydantic import AliasChoices, Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    app_name: str = "terraform-plan-summarizer"
    app_env: str = Field(
        default="production",
        validation_alias=AliasChoices("APP_ENV", "app_env"),
        description="Runtime environment: development|production.",
    )
    log_level: str = Field(
        default="INFO",
        validation_alias=AliasChoices("LOG_LEVEL", "log_level"),
        description="Root log level for the service (DEBUG shows each summarizer step).",
    )

    # LLM integration (OpenRouter)
    # Plan text is sent upstream as-is; keep configuration explicit and never log the key.
    openrouter_api_key: str | None = Field(
        default=None,
        validation_alias=AliasChoices("OPENROUTER_API_KEY", "openrouter_api_key"),
        description="OpenRouter API key. When unset, plan summarization is disabled.",
    )
    openrouter_system_prompt: str | None = Field(
        default=None,
        validation_alias=AliasChoices(
            "OPENROUTER_TERRAFORM_PLAN_SUMMARIZER_SYSTEM_PROMPT",
            "openrouter_system_prompt",
        ),
        description="Overrides the built-in instruction prompt sent as the system message.",
    )

    @property
    def is_development(self) -> bool:
        return str(self.app_env).strip().lower() == "development"


def load_settings() -> Settings:
    """Read settings from the process environment only, without caching.

    The summarizer calls this once per invocation so key rotation and prompt
    overrides take effect without a restart. `.env` is skipped: a stray file in
    the caller's working directory must not switch summarization on.
    """

    return Settings(_env_file=None)


@lru_cache
def get_settings() -> Settings:
    """Service-level settings; also reads `.env`."""

    return Settings()
