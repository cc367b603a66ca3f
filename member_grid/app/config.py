from __future__ import annotations

from typing import Literal

from pydantic_settings import BaseSettings, SettingsConfigDict

from member_grid.clients.members_sdk.config import DEFAULT_BASE_URL, SDKConfig


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="MEMBER_GRID_", env_file=".env", extra="ignore")

    base_url: str = DEFAULT_BASE_URL
    api_token: str = ""
    timeout_seconds: float = 30.0
    verify_ssl: bool = True
    retry_max_attempts: int = 3
    retry_backoff_ms: int = 250
    container_kind: Literal["teams", "channels"] = "teams"
    container_id: str = ""
    log_level: str = "INFO"

    def to_sdk_config(self) -> SDKConfig:
        return SDKConfig(
            base_url=self.base_url,
            timeout_seconds=self.timeout_seconds,
            verify_ssl=self.verify_ssl,
            retry_max_attempts=self.retry_max_attempts,
            retry_backoff_ms=self.retry_backoff_ms,
        )


def validate_settings(settings: Settings) -> Settings:
    if not settings.base_url.strip():
        raise ValueError("MEMBER_GRID_BASE_URL must not be empty")
    if settings.timeout_seconds <= 0:
        raise ValueError("MEMBER_GRID_TIMEOUT_SECONDS must be greater than 0")
    if settings.retry_max_attempts < 1:
        raise ValueError("MEMBER_GRID_RETRY_MAX_ATTEMPTS must be >= 1")
    if settings.retry_backoff_ms < 0:
        raise ValueError("MEMBER_GRID_RETRY_BACKOFF_MS must be >= 0")
    return settings


def load_settings(env_file: str | None = ".env") -> Settings:
    return validate_settings(Settings(_env_file=env_file))
