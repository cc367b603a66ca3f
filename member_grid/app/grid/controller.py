from __future__ import annotations

import logging
from collections import deque
from collections.abc import Callable

from member_grid.app.domain.models import MemberRecord
from member_grid.app.grid.materializer import GridProps, GridView, hidden_count, project_view
from member_grid.app.grid.overlay import removal_key, role_update_key
from member_grid.app.grid.state import (
    Effect,
    Event,
    GridState,
    LoadPage,
    MutationSettled,
    PageRequested,
    RecordRemoved,
    RemoveMember,
    RoleUpdateStaged,
    TotalCountChanged,
    UpdateMemberRoles,
    reduce,
)
from member_grid.app.infrastructure.errors.error_mapper import ErrorMapper
from member_grid.app.infrastructure.logging.logger import get_logger, log_action
from member_grid.clients.members_sdk.errors import ApiError

MODULE = "member_grid"


class MemberGrid:
    """Hosts the grid reducer and delivers its effects to the outside world.

    Effects are queued and drained in order, so a data source that answers
    ``load_page`` synchronously by calling :meth:`receive` does not recurse.
    Remote calls are fire-and-forget: ``loading`` never waits on them.
    """

    def __init__(
        self,
        load_page: Callable[[int], None],
        remove_user: Callable[[MemberRecord], None],
        update_member_roles_for_user: Callable[[str, str], None],
        props: GridProps | None = None,
        on_change: Callable[[GridView], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self._load_page = load_page
        self._remove_user = remove_user
        self._update_member_roles_for_user = update_member_roles_for_user
        self._on_change = on_change
        self._logger = logger or get_logger("member_grid.grid")
        self._state = GridState()
        self._props = GridProps()
        self._effects: deque[Effect] = deque()
        self._draining = False
        if props is not None:
            self.receive(props)

    @property
    def state(self) -> GridState:
        return self._state

    @property
    def props(self) -> GridProps:
        return self._props

    def receive(self, props: GridProps) -> None:
        if props == self._props:
            return
        self._props = props
        self._dispatch(TotalCountChanged(props.authoritative_total))
        self._notify()

    def goto_page(self, page: int) -> None:
        self._dispatch(PageRequested(page))
        self._notify()

    def next_page(self) -> None:
        self.goto_page(self._state.pagination.page + 1)

    def previous_page(self) -> None:
        self.goto_page(self._state.pagination.page - 1)

    def remove_user(self, record: MemberRecord) -> None:
        before = self._state
        loaded = any(existing.id == record.id for existing in self._props.records)
        self._dispatch(
            RecordRemoved(
                record,
                hidden=hidden_count(self._state, self._props),
                was_hidden=record.id in self._props.excluded,
                counted=loaded or record.id not in self._props.included,
            )
        )
        if self._state is not before:
            self._notify()

    def update_membership(self, record_id: str, role: str) -> None:
        current = self._props.memberships.get(record_id)
        self._dispatch(RoleUpdateStaged(record_id, role, current))
        self._notify()

    def settle_mutation(self, key: str, ok: bool, error: ApiError | None = None) -> None:
        before = self._state
        self._dispatch(MutationSettled(key, ok, error.code if error else None))
        if self._state is not before:
            self._notify()

    def render(self) -> GridView:
        view = project_view(self._state, self._props, self.remove_user, self.update_membership)
        if view.prefetch is not None:
            log_action(self._logger, MODULE, "prefetch", None, view.prefetch.page, "requested")
            self._enqueue((view.prefetch,))
        return view

    def _dispatch(self, event: Event) -> None:
        transition = reduce(self._state, event)
        changed = transition.state is not self._state
        self._state = transition.state
        if changed or transition.effects:
            log_action(
                self._logger,
                MODULE,
                type(event).__name__,
                _event_record_id(event),
                self._state.pagination.page,
                "applied" if changed else "noop",
                visible_total=self._state.pagination.visible_total,
            )
        self._enqueue(transition.effects)

    def _enqueue(self, effects: tuple[Effect, ...]) -> None:
        self._effects.extend(effects)
        if self._draining:
            return
        self._draining = True
        try:
            while self._effects:
                self._deliver(self._effects.popleft())
        finally:
            self._draining = False

    def _deliver(self, effect: Effect) -> None:
        if isinstance(effect, LoadPage):
            log_action(self._logger, MODULE, "load_page", None, effect.page, "sent")
            self._load_page(effect.page)
            return

        if isinstance(effect, RemoveMember):
            key = removal_key(effect.record.id)
            try:
                self._remove_user(effect.record)
            except ApiError as error:
                self._mutation_failed(key, effect.record.id, error)
                return
            log_action(self._logger, MODULE, "remove_user", effect.record.id, None, "sent")
            return

        if isinstance(effect, UpdateMemberRoles):
            key = role_update_key(effect.record_id)
            try:
                self._update_member_roles_for_user(effect.record_id, effect.role)
            except ApiError as error:
                self._mutation_failed(key, effect.record_id, error)
                return
            log_action(self._logger, MODULE, "update_member_roles", effect.record_id, None, "sent", role=effect.role)

    def _mutation_failed(self, key: str, record_id: str, error: ApiError) -> None:
        # the optimistic overlay stays as it is; only the mutation status records the failure
        payload = ErrorMapper.to_payload(error)
        log_action(
            self._logger,
            MODULE,
            key.split(":", 1)[0],
            record_id,
            None,
            "failed",
            code=payload["code"],
            trace_id=payload["trace_id"],
        )
        self._state = reduce(self._state, MutationSettled(key, False, error.code)).state

    def _notify(self) -> None:
        if self._on_change is not None:
            self._on_change(self.render())


def _event_record_id(event: Event) -> str | None:
    if isinstance(event, RecordRemoved):
        return event.record.id
    if isinstance(event, RoleUpdateStaged):
        return event.record_id
    return None
