from __future__ import annotations

from dataclasses import dataclass, replace

MEMBERS_PER_PAGE = 10


@dataclass(frozen=True)
class PaginationState:
    page: int = 0
    visible_total: int = 0
    authoritative_total: int = 0
    loading: bool = False


@dataclass(frozen=True)
class PaginationWindow:
    """1-based inclusive display range, as in "showing 11-20 of 42"."""

    start_count: int
    end_count: int
    total: int


def sync_authoritative_total(state: PaginationState, total: int) -> PaginationState:
    # only a changed server total resets the local decrements
    if state.authoritative_total == total:
        return state
    return replace(state, authoritative_total=total, visible_total=total)


def goto_page(state: PaginationState, page: int) -> PaginationState:
    return replace(state, page=page, loading=False)


def next_page(state: PaginationState) -> PaginationState:
    return goto_page(state, state.page + 1)


def prev_page(state: PaginationState) -> PaginationState:
    return goto_page(state, state.page - 1)


def pagination_window(state: PaginationState, hidden: int = 0) -> PaginationWindow:
    total = max(0, state.visible_total - hidden)
    start_count = state.page * MEMBERS_PER_PAGE + 1
    end_count = min((state.page + 1) * MEMBERS_PER_PAGE, total)
    return PaginationWindow(start_count=start_count, end_count=end_count, total=total)


def apply_removal(state: PaginationState, hidden: int = 0, was_hidden: bool = False) -> PaginationState:
    """Account for one optimistically removed row.

    When the removed row was the only one left on a page past the first,
    step back so the grid keeps showing a page with content.
    """
    previous_end = pagination_window(state, hidden).end_count
    visible_total = state.visible_total - 1
    hidden_after = hidden - 1 if was_hidden else hidden
    page = state.page
    if (
        previous_end > visible_total - hidden_after
        and previous_end % MEMBERS_PER_PAGE == 1
        and page > 0
    ):
        page -= 1
    return replace(state, visible_total=visible_total, page=page)
