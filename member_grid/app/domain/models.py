from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal[
    "system_admin",
    "team_admin",
    "team_user",
    "channel_admin",
    "channel_user",
    "shared_member",
    "guest",
]

ADMIN_ROLE_SUFFIX = "_admin"


class MemberRecord(BaseModel):
    """A user shown as one grid row. Treated as immutable once fetched."""

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1)
    username: str = ""
    nickname: str = ""
    first_name: str = ""
    last_name: str = ""
    email: str = ""
    roles: str = ""
    is_bot: bool = False
    delete_at: int = 0

    @property
    def full_name(self) -> str:
        return " ".join(part for part in (self.first_name, self.last_name) if part)

    @property
    def display_name(self) -> str:
        return self.full_name or self.nickname or self.username or self.id


class Membership(BaseModel):
    """Role-bearing association between a user and a team or channel."""

    model_config = ConfigDict(frozen=True, extra="ignore", populate_by_name=True)

    user_id: str = Field(..., min_length=1)
    container_id: str = Field(default="", validation_alias="team_id")
    roles: str = ""
    scheme_user: bool = True
    scheme_admin: bool = False
    delete_at: int = 0

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> "Membership":
        data = dict(payload)
        if "channel_id" in data and "team_id" not in data:
            data["team_id"] = data.pop("channel_id")
        return cls.model_validate(data)

    @property
    def role_tags(self) -> list[str]:
        return self.roles.split()

    @property
    def is_admin(self) -> bool:
        return self.scheme_admin or any(tag.endswith(ADMIN_ROLE_SUFFIX) for tag in self.role_tags)

    def with_roles(self, roles: str) -> "Membership":
        return self.model_copy(update={"roles": roles})


def parse_records(rows: list[dict[str, Any]]) -> list[MemberRecord]:
    return [MemberRecord.model_validate(row) for row in rows]


def parse_memberships(rows: list[dict[str, Any]]) -> dict[str, Membership]:
    memberships = (Membership.from_payload(row) for row in rows)
    return {membership.user_id: membership for membership in memberships}
