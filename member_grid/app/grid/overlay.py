from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field, replace
from enum import Enum

from member_grid.app.domain.models import MemberRecord, Membership


class MutationStatus(str, Enum):
    PENDING = "pending"
    CONFIRMED = "confirmed"
    FAILED = "failed"


@dataclass(frozen=True)
class PendingMutation:
    key: str
    kind: str
    record_id: str
    status: MutationStatus = MutationStatus.PENDING
    error_code: str | None = None


@dataclass(frozen=True)
class OverlayState:
    """Local edits staged on top of the fetched members.

    Removals are terminal for the lifetime of the grid. Role updates are
    last-write-wins per user. Neither is reverted when the server rejects it;
    ``mutations`` only records what happened to each forwarded intent.
    """

    removed: Mapping[str, MemberRecord] = field(default_factory=dict)
    memberships_to_update: Mapping[str, Membership] = field(default_factory=dict)
    mutations: Mapping[str, PendingMutation] = field(default_factory=dict)


def removal_key(record_id: str) -> str:
    return f"remove:{record_id}"


def role_update_key(record_id: str) -> str:
    return f"update_roles:{record_id}"


def is_removed(overlay: OverlayState, record_id: str) -> bool:
    return record_id in overlay.removed


def mark_removed(overlay: OverlayState, record: MemberRecord) -> OverlayState:
    if is_removed(overlay, record.id):
        return overlay
    key = removal_key(record.id)
    return replace(
        overlay,
        removed={**overlay.removed, record.id: record},
        mutations={**overlay.mutations, key: PendingMutation(key=key, kind="remove", record_id=record.id)},
    )


def stage_role_update(
    overlay: OverlayState,
    record_id: str,
    current: Membership | None,
    role: str,
) -> OverlayState:
    membership = current.with_roles(role) if current is not None else Membership(user_id=record_id, roles=role)
    key = role_update_key(record_id)
    return replace(
        overlay,
        memberships_to_update={**overlay.memberships_to_update, record_id: membership},
        mutations={**overlay.mutations, key: PendingMutation(key=key, kind="update_roles", record_id=record_id)},
    )


def effective_membership(
    overlay: OverlayState,
    memberships: Mapping[str, Membership],
    record_id: str,
) -> Membership | None:
    staged = overlay.memberships_to_update.get(record_id)
    if staged is not None:
        return staged
    return memberships.get(record_id)


def settle_mutation(overlay: OverlayState, key: str, ok: bool, error_code: str | None = None) -> OverlayState:
    pending = overlay.mutations.get(key)
    if pending is None:
        return overlay
    status = MutationStatus.CONFIRMED if ok else MutationStatus.FAILED
    settled = replace(pending, status=status, error_code=None if ok else error_code)
    return replace(overlay, mutations={**overlay.mutations, key: settled})


def mutation_status_for(overlay: OverlayState, record_id: str) -> MutationStatus | None:
    """Most severe status among the record's forwarded mutations."""
    statuses = {m.status for m in overlay.mutations.values() if m.record_id == record_id}
    for status in (MutationStatus.FAILED, MutationStatus.PENDING, MutationStatus.CONFIRMED):
        if status in statuses:
            return status
    return None
