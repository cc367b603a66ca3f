from member_grid.app.domain.models import MemberRecord, Membership
from member_grid.app.grid.overlay import (
    MutationStatus,
    OverlayState,
    effective_membership,
    is_removed,
    mark_removed,
    mutation_status_for,
    removal_key,
    role_update_key,
    settle_mutation,
    stage_role_update,
)


def _record(record_id: str) -> MemberRecord:
    return MemberRecord(id=record_id, username=record_id.replace("userid", "user-"))


def test_mark_removed_is_idempotent() -> None:
    once = mark_removed(OverlayState(), _record("userid1"))
    twice = mark_removed(once, _record("userid1"))

    assert twice is once
    assert is_removed(twice, "userid1")
    assert once.mutations[removal_key("userid1")].status is MutationStatus.PENDING


def test_mark_removed_does_not_touch_previous_state() -> None:
    empty = OverlayState()

    mark_removed(empty, _record("userid1"))

    assert dict(empty.removed) == {}


def test_staged_role_wins_and_last_write_wins() -> None:
    memberships = {"userid1": Membership(user_id="userid1", container_id="team", roles="team_user")}
    overlay = stage_role_update(OverlayState(), "userid1", memberships["userid1"], "team_user team_admin")

    staged = effective_membership(overlay, memberships, "userid1")
    assert staged.roles == "team_user team_admin"
    assert staged.container_id == "team"
    assert memberships["userid1"].roles == "team_user"

    overlay = stage_role_update(overlay, "userid1", memberships["userid1"], "team_user")
    assert effective_membership(overlay, memberships, "userid1").roles == "team_user"


def test_role_update_without_known_membership() -> None:
    overlay = stage_role_update(OverlayState(), "userid9", None, "channel_admin")

    membership = effective_membership(overlay, {}, "userid9")

    assert membership.user_id == "userid9"
    assert membership.is_admin


def test_settle_records_failure_without_rollback() -> None:
    overlay = mark_removed(OverlayState(), _record("userid1"))

    failed = settle_mutation(overlay, removal_key("userid1"), ok=False, error_code="PERMISSION_DENIED")

    assert is_removed(failed, "userid1")
    assert failed.mutations[removal_key("userid1")].error_code == "PERMISSION_DENIED"
    assert mutation_status_for(failed, "userid1") is MutationStatus.FAILED


def test_settle_unknown_key_is_ignored() -> None:
    overlay = OverlayState()

    assert settle_mutation(overlay, role_update_key("ghost"), ok=True) is overlay
    assert mutation_status_for(overlay, "ghost") is None
