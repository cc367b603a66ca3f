from __future__ import annotations

from dataclasses import dataclass, field, replace
from typing import Union

from member_grid.app.domain.models import MemberRecord, Membership
from member_grid.app.grid import overlay as overlay_ops
from member_grid.app.grid import pagination
from member_grid.app.grid.overlay import OverlayState
from member_grid.app.grid.pagination import PaginationState


@dataclass(frozen=True)
class GridState:
    pagination: PaginationState = field(default_factory=PaginationState)
    overlay: OverlayState = field(default_factory=OverlayState)


# Events


@dataclass(frozen=True)
class TotalCountChanged:
    total: int


@dataclass(frozen=True)
class PageRequested:
    page: int


@dataclass(frozen=True)
class RecordRemoved:
    record: MemberRecord
    # externally excluded rows still counted in visible_total
    hidden: int = 0
    # the record was one of those excluded rows
    was_hidden: bool = False
    # staged additions were never part of the server total
    counted: bool = True


@dataclass(frozen=True)
class RoleUpdateStaged:
    record_id: str
    role: str
    current: Membership | None = None


@dataclass(frozen=True)
class MutationSettled:
    key: str
    ok: bool
    error_code: str | None = None


Event = Union[TotalCountChanged, PageRequested, RecordRemoved, RoleUpdateStaged, MutationSettled]


# Effects, delivered to the data source and mutation sink by the host


@dataclass(frozen=True)
class LoadPage:
    page: int


@dataclass(frozen=True)
class RemoveMember:
    record: MemberRecord


@dataclass(frozen=True)
class UpdateMemberRoles:
    record_id: str
    role: str


Effect = Union[LoadPage, RemoveMember, UpdateMemberRoles]


@dataclass(frozen=True)
class Transition:
    state: GridState
    effects: tuple[Effect, ...] = ()


def reduce(state: GridState, event: Event) -> Transition:
    if isinstance(event, TotalCountChanged):
        synced = pagination.sync_authoritative_total(state.pagination, event.total)
        return Transition(state if synced is state.pagination else replace(state, pagination=synced))

    if isinstance(event, PageRequested):
        moved = pagination.goto_page(state.pagination, event.page)
        return Transition(replace(state, pagination=moved), (LoadPage(event.page),))

    if isinstance(event, RecordRemoved):
        if overlay_ops.is_removed(state.overlay, event.record.id):
            return Transition(state)
        paged = state.pagination
        if event.counted:
            paged = pagination.apply_removal(paged, event.hidden, event.was_hidden)
        return Transition(
            GridState(
                pagination=paged,
                overlay=overlay_ops.mark_removed(state.overlay, event.record),
            ),
            (RemoveMember(event.record),),
        )

    if isinstance(event, RoleUpdateStaged):
        staged = overlay_ops.stage_role_update(state.overlay, event.record_id, event.current, event.role)
        return Transition(
            replace(state, overlay=staged),
            (UpdateMemberRoles(event.record_id, event.role),),
        )

    if isinstance(event, MutationSettled):
        settled = overlay_ops.settle_mutation(state.overlay, event.key, event.ok, event.error_code)
        return Transition(state if settled is state.overlay else replace(state, overlay=settled))

    raise TypeError(f"Unsupported grid event: {type(event).__name__}")
