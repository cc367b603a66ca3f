import pytest
from pydantic import ValidationError

from member_grid.app.domain.models import MemberRecord, Membership, parse_memberships, parse_records


def test_display_name_prefers_full_name_then_nickname() -> None:
    assert MemberRecord(id="u1", username="ana", first_name="Ana", last_name="Diaz").display_name == "Ana Diaz"
    assert MemberRecord(id="u2", username="bo", nickname="Bobby").display_name == "Bobby"
    assert MemberRecord(id="u3", username="cy").display_name == "cy"
    assert MemberRecord(id="u4").display_name == "u4"


def test_records_ignore_unknown_fields_and_require_id() -> None:
    records = parse_records([{"id": "u1", "username": "ana", "notify_props": {"push": "all"}}])

    assert records[0].username == "ana"
    with pytest.raises(ValidationError):
        parse_records([{"username": "nobody"}])


def test_memberships_parse_team_and_channel_payloads() -> None:
    memberships = parse_memberships(
        [
            {"user_id": "u1", "team_id": "team-1", "roles": "team_user team_admin", "scheme_admin": True},
            {"user_id": "u2", "channel_id": "chan-1", "roles": "channel_user"},
        ]
    )

    assert memberships["u1"].container_id == "team-1"
    assert memberships["u1"].is_admin
    assert memberships["u2"].container_id == "chan-1"
    assert not memberships["u2"].is_admin


def test_with_roles_returns_new_membership() -> None:
    original = Membership(user_id="u1", container_id="team-1", roles="team_user")

    updated = original.with_roles("team_user team_admin")

    assert original.roles == "team_user"
    assert updated.role_tags == ["team_user", "team_admin"]
    assert updated.container_id == "team-1"
