from __future__ import annotations

import os
from functools import lru_cache
from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class Settings(BaseModel):
    """Runtime configuration resolved from environment variables."""

    gemini_api_key: Optional[str] = Field(
        default=None,
        alias="GEMINI_API_KEY",
        description="Google Gemini API key. Leave unset to run in static echo mode.",
    )
    gemini_model_name: str = Field(
        default="gemini-1.5-flash",
        alias="GEMINI_MODEL_NAME",
        description="Generative model used to answer chat messages.",
    )
    gemini_timeout_seconds: float = Field(
        default=30.0,
        gt=0,
        alias="GEMINI_TIMEOUT_SECONDS",
        description="Upper bound for a single Gemini call before falling back.",
    )
    host: str = Field(
        default="0.0.0.0",
        alias="HOST",
        description="Interface the HTTP server binds to.",
    )
    port: int = Field(
        default=3001,
        alias="PORT",
        description="Port the HTTP server listens on.",
    )
    cors_allow_origins: str = Field(
        default="*",
        alias="CORS_ALLOW_ORIGINS",
        description="Comma-separated list of origins allowed to call the API.",
    )
    log_level: str = Field(
        default="INFO",
        alias="LOG_LEVEL",
        description="Root logging level.",
    )

    model_config = {"populate_by_name": True}

    @field_validator("gemini_api_key", mode="before")
    @classmethod
    def _blank_key_is_missing(cls, value: Optional[str]) -> Optional[str]:
        if isinstance(value, str) and not value.strip():
            return None
        return value

    @property
    def gemini_configured(self) -> bool:
        return self.gemini_api_key is not None

    @property
    def allowed_origins(self) -> List[str]:
        origins = [item.strip() for item in self.cors_allow_origins.split(",")]
        return [origin for origin in origins if origin] or ["*"]

    @classmethod
    def from_env(cls) -> "Settings":
        return cls.model_validate(os.environ)


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Return a cached Settings instance built from environment variables."""
    return Settings.from_env()
