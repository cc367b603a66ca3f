from __future__ import annotations

from typing import Any

from member_grid.clients.members_sdk.http_client import HttpClient
from member_grid.clients.members_sdk.normalizers import normalize_listing

CONTAINER_KINDS = {"teams": "in_team", "channels": "in_channel"}


class MembersClient:
    def __init__(self, http_client: HttpClient, container_kind: str, container_id: str) -> None:
        if container_kind not in CONTAINER_KINDS:
            raise ValueError(f"Unsupported container kind: {container_kind}")
        self.http_client = http_client
        self.container_kind = container_kind
        self.container_id = container_id

    def list_members(self, page: int, per_page: int) -> dict[str, Any]:
        params = _build_query_params(
            **{CONTAINER_KINDS[self.container_kind]: self.container_id},
            page=page,
            per_page=per_page,
            include_total_count="true",
            sort="admin",
        )
        payload = self.http_client.request("GET", "users", params=params)
        return normalize_listing(payload, page=page, page_size=per_page)

    def get_memberships(self, user_ids: list[str]) -> list[dict[str, Any]]:
        if not user_ids:
            return []
        payload = self.http_client.request(
            "POST",
            f"{self.container_kind}/{self.container_id}/members/ids",
            json_body=list(user_ids),
        )
        if isinstance(payload, list):
            return [item for item in payload if isinstance(item, dict)]
        return normalize_listing(payload, page_size=len(user_ids))["rows"]

    def remove_member(self, user_id: str) -> dict[str, Any]:
        return self.http_client.request("DELETE", f"{self.container_kind}/{self.container_id}/members/{user_id}")

    def update_member_roles(self, user_id: str, roles: str) -> dict[str, Any]:
        return self.http_client.request(
            "PUT",
            f"{self.container_kind}/{self.container_id}/members/{user_id}/roles",
            json_body={"roles": roles},
        )


def _build_query_params(**kwargs: Any) -> dict[str, Any]:
    return {key: value for key, value in kwargs.items() if value not in (None, "")}
