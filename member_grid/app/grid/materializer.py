from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from functools import partial

from member_grid.app.domain.models import MemberRecord, Membership
from member_grid.app.grid.columns import ColumnDef, member_columns
from member_grid.app.grid.overlay import MutationStatus, effective_membership, is_removed, mutation_status_for
from member_grid.app.grid.pagination import MEMBERS_PER_PAGE, PaginationWindow, pagination_window
from member_grid.app.grid.state import GridState, LoadPage

RemoveCallback = Callable[[MemberRecord], None]
UpdateRoleCallback = Callable[[str, str], None]


@dataclass(frozen=True)
class GridProps:
    """Inputs owned by the host: every page fetched so far, flattened, plus the server total."""

    records: tuple[MemberRecord, ...] = ()
    memberships: Mapping[str, Membership] = field(default_factory=dict)
    authoritative_total: int = 0
    # staged by a sibling editor, not yet confirmed by the server
    excluded: Mapping[str, MemberRecord] = field(default_factory=dict)
    included: Mapping[str, MemberRecord] = field(default_factory=dict)


@dataclass(frozen=True)
class RowDescriptor:
    id: str
    name: str
    record: MemberRecord
    membership: Membership | None
    mutation_status: MutationStatus | None = None
    update_role: Callable[[str], None] | None = field(default=None, compare=False, repr=False)
    remove: Callable[[], None] | None = field(default=None, compare=False, repr=False)


@dataclass(frozen=True)
class MaterializedRows:
    rows: tuple[RowDescriptor, ...]
    prefetch: LoadPage | None = None


@dataclass(frozen=True)
class GridView:
    columns: tuple[ColumnDef, ...]
    rows: tuple[RowDescriptor, ...]
    page: int
    start_count: int
    end_count: int
    total: int
    loading: bool
    prefetch: LoadPage | None = None


def hidden_count(state: GridState, props: GridProps) -> int:
    return sum(1 for record_id in props.excluded if not is_removed(state.overlay, record_id))


def window_for(state: GridState, props: GridProps) -> PaginationWindow:
    return pagination_window(state.pagination, hidden_count(state, props))


def materialize_rows(
    state: GridState,
    props: GridProps,
    on_remove: RemoveCallback | None = None,
    on_update_role: UpdateRoleCallback | None = None,
) -> MaterializedRows:
    window = window_for(state, props)
    overlay = state.overlay

    visible = [
        record
        for record in props.records
        if not is_removed(overlay, record.id) and record.id not in props.excluded
    ]
    page_slice = visible[window.start_count - 1 : window.end_count]

    prefetch = None
    if len(page_slice) < MEMBERS_PER_PAGE and len(props.records) < state.pagination.authoritative_total:
        # rows removed locally pushed later records onto this page, so read further ahead
        pages_of_removed = len(overlay.removed) // MEMBERS_PER_PAGE
        prefetch = LoadPage(state.pagination.page + pages_of_removed + 1)

    if not props.records or props.records[0].id not in props.memberships:
        return MaterializedRows(rows=(), prefetch=prefetch)

    to_display = page_slice
    if state.pagination.page == 0 and props.included:
        loaded_ids = {record.id for record in props.records}
        staged = [
            record
            for record_id, record in props.included.items()
            if record_id not in loaded_ids and not is_removed(overlay, record_id)
        ]
        to_display = staged + page_slice

    rows = tuple(_build_row(record, state, props, on_remove, on_update_role) for record in to_display)
    return MaterializedRows(rows=rows, prefetch=prefetch)


def _build_row(
    record: MemberRecord,
    state: GridState,
    props: GridProps,
    on_remove: RemoveCallback | None,
    on_update_role: UpdateRoleCallback | None,
) -> RowDescriptor:
    return RowDescriptor(
        id=record.id,
        name=record.display_name,
        record=record,
        membership=effective_membership(state.overlay, props.memberships, record.id),
        mutation_status=mutation_status_for(state.overlay, record.id),
        update_role=partial(on_update_role, record.id) if on_update_role else None,
        remove=partial(on_remove, record) if on_remove else None,
    )


def project_view(
    state: GridState,
    props: GridProps,
    on_remove: RemoveCallback | None = None,
    on_update_role: UpdateRoleCallback | None = None,
) -> GridView:
    materialized = materialize_rows(state, props, on_remove, on_update_role)
    window = window_for(state, props)
    return GridView(
        columns=tuple(member_columns()),
        rows=materialized.rows,
        page=state.pagination.page,
        start_count=window.start_count,
        end_count=window.end_count,
        total=window.total,
        loading=state.pagination.loading,
        prefetch=materialized.prefetch,
    )
