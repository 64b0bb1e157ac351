"""Application settings for plan generation."""

import json
import os
from functools import lru_cache
from typing import Literal

from pydantic import field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


DEFAULT_PROFILES = ("DIY/Budget", "Premium/Convenience", "Unique/Adventure")


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=(".env"), env_file_encoding="utf-8")

    # App
    APP_NAME: str = "BirthdayPlanner"
    ENVIRONMENT: str = "development"  # development | production | test

    # LLM provider configuration
    LLM_PROVIDER: Literal["openai", "azure_openai", "gemini"] = "openai"
    OPENAI_API_KEY: str | None = None
    AZURE_OPENAI_ENDPOINT: str | None = None
    AZURE_OPENAI_API_KEY: str | None = None
    AZURE_OPENAI_API_VERSION: str | None = None
    GEMINI_API_KEY: str | None = None

    # Models used for each task
    PLAN_MODEL: str = "gpt-4o"
    OPTIMIZER_MODEL: str = "gpt-3.5-turbo"
    PLAN_TEMPERATURE: float = 0.7
    OPTIMIZER_TEMPERATURE: float = 0.6
    INVITATION_MODEL: str = "gpt-3.5-turbo"
    INVITATION_TEMPERATURE: float = 0.7
    INVITATION_IMAGE_MODEL: str = "dall-e-3"
    INVITATION_IMAGE_SIZE: Literal["1024x1024", "1792x1024", "1024x1792"] = "1024x1024"

    # HTTP transport policy for the generation client
    GENERATION_TIMEOUT_SECONDS: float = 120.0
    GENERATION_MAX_ATTEMPTS: int = 3

    # Accept list or CSV/JSON string from env; normalized to list[str] by validators
    PLAN_PROFILES: list[str] | str = list(DEFAULT_PROFILES)

    @field_validator("PLAN_PROFILES", mode="before")
    @classmethod
    def assemble_profiles(cls, v: object) -> list[str]:
        """Allow list, CSV string, or JSON array string for plan profiles."""
        if isinstance(v, list):
            return [str(i).strip() for i in v if str(i).strip()]
        if isinstance(v, str):
            s = v.strip()
            if not s:
                return []
            if s.startswith("["):
                try:
                    parsed = json.loads(s)
                except json.JSONDecodeError as e:
                    raise ValueError(
                        "PLAN_PROFILES must be a CSV list or JSON array string"
                    ) from e
                if not isinstance(parsed, list):
                    raise ValueError("PLAN_PROFILES JSON must be a list")
                return [str(i).strip() for i in parsed if str(i).strip()]
            # CSV fallback
            return [i.strip() for i in s.split(",") if i.strip()]
        raise ValueError("Invalid PLAN_PROFILES type; expected str or list[str]")

    @model_validator(mode="after")
    def _validate_generation_policy(self) -> "Settings":
        if isinstance(self.PLAN_PROFILES, str):
            self.PLAN_PROFILES = self.assemble_profiles(self.PLAN_PROFILES)
        if not self.PLAN_PROFILES:
            raise ValueError("PLAN_PROFILES must contain at least one profile")
        if self.GENERATION_MAX_ATTEMPTS < 1:
            raise ValueError("GENERATION_MAX_ATTEMPTS must be >= 1")
        if self.GENERATION_TIMEOUT_SECONDS <= 0:
            raise ValueError("GENERATION_TIMEOUT_SECONDS must be positive")
        return self


@lru_cache
def get_settings() -> Settings:
    env = os.getenv("ENVIRONMENT", "development").lower()
    if env not in {"development", "production", "test"}:
        raise ValueError("ENVIRONMENT must be 'development', 'production', or 'test'")

    if env == "production":
        env_file = ".env.prod"
    elif env == "development":
        env_file = ".env.dev"
    else:
        # test environment - no env file needed, use defaults
        env_file = ""

    # pydantic-settings accepts `_env_file` at runtime; mypy's stub doesn't.
    return Settings(_env_file=env_file or None)  # type: ignore[call-arg]
