from __future__ import annotations

import time
from typing import Any

import httpx

from member_grid.clients.members_sdk.config import SDKConfig
from member_grid.clients.members_sdk.errors import ApiError


class HttpClient:
    def __init__(
        self,
        config: SDKConfig | None = None,
        token: str | None = None,
        client: httpx.Client | None = None,
    ) -> None:
        self.config = config or SDKConfig()
        self._token = token
        self._client = client or httpx.Client(
            base_url=self.config.base_url,
            timeout=self.config.timeout_seconds,
            verify=self.config.verify_ssl,
        )

    def request(
        self,
        method: str,
        path: str,
        json_body: Any = None,
        params: dict[str, Any] | None = None,
    ) -> Any:
        headers: dict[str, str] = {}
        if self._token:
            headers["Authorization"] = f"Bearer {self._token}"

        # relative to base_url so the /api/v4/ prefix is kept
        normalized_path = path.lstrip("/")
        allow_retry = method.upper() == "GET"

        for attempt in range(1, self.config.retry_max_attempts + 1):
            try:
                response = self._client.request(
                    method=method,
                    url=normalized_path,
                    json=json_body,
                    headers=headers,
                    params=params,
                )
            except (httpx.TimeoutException, httpx.TransportError) as exc:
                if (not allow_retry) or attempt >= self.config.retry_max_attempts:
                    raise ApiError(
                        code="NETWORK_ERROR",
                        message="Network error while calling members API",
                        details=str(exc),
                    ) from exc
                self._backoff(attempt)
                continue

            if response.status_code >= 400:
                error = ApiError.from_http_response(response)
                if allow_retry and self._is_retryable_status(error.status_code) and attempt < self.config.retry_max_attempts:
                    self._backoff(attempt)
                    continue
                raise error

            if not response.content:
                return {}
            try:
                return response.json()
            except ValueError:
                return {}

        raise ApiError(code="NETWORK_ERROR", message="Network error while calling members API", details="retry exhausted")

    def close(self) -> None:
        self._client.close()

    def _backoff(self, attempt: int) -> None:
        time.sleep((self.config.retry_backoff_ms * attempt) / 1000)

    @staticmethod
    def _is_retryable_status(status_code: int | None) -> bool:
        return bool(status_code and 500 <= status_code <= 599)
