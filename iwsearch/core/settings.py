from __future__ import annotations

from pydantic import Field
from pydantic.functional_validators import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(
        case_sensitive=False,
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Upstream
    base_url: str = Field(default="https://incarnateword.in")
    http_timeout_seconds: float = Field(default=10.0)
    http_connect_timeout_seconds: float = Field(default=3.0)

    # Logging
    log_level: str = Field(default="INFO")
    enable_console_logging: bool = Field(default=True)

    # Output
    summary_max_results: int = Field(default=5)

    @field_validator("base_url", mode="before")
    @classmethod
    def strip_trailing_slash(cls, v: object) -> str:
        """Page URLs are built as base_url + path, so the base must not end in '/'."""
        if isinstance(v, str):
            return v.strip().rstrip("/")
        return ""


# Single, concrete settings instance that callers import directly
settings: Settings = Settings()
