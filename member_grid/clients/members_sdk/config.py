from __future__ import annotations

from dataclasses import dataclass

DEFAULT_BASE_URL = "http://localhost:8065/api/v4/"


@dataclass(frozen=True)
class SDKConfig:
    base_url: str = DEFAULT_BASE_URL
    timeout_seconds: float = 30.0
    verify_ssl: bool = True
    retry_max_attempts: int = 3
    retry_backoff_ms: int = 250

    def __post_init__(self) -> None:
        object.__setattr__(self, "base_url", normalize_base_url(self.base_url))
        object.__setattr__(self, "retry_max_attempts", max(1, int(self.retry_max_attempts)))
        object.__setattr__(self, "retry_backoff_ms", max(0, int(self.retry_backoff_ms)))


def normalize_base_url(value: str) -> str:
    normalized = (value or "").strip()
    if not normalized:
        return DEFAULT_BASE_URL
    return normalized if normalized.endswith("/") else f"{normalized}/"
