from __future__ import annotations

import logging
from collections.abc import Callable

from pydantic import ValidationError

from member_grid.app.domain.models import MemberRecord, Membership, parse_memberships, parse_records
from member_grid.app.grid.materializer import GridProps
from member_grid.app.grid.overlay import removal_key, role_update_key
from member_grid.app.grid.pagination import MEMBERS_PER_PAGE
from member_grid.app.infrastructure.errors.error_mapper import ErrorMapper
from member_grid.app.infrastructure.logging.logger import get_logger, log_action
from member_grid.clients.members_sdk.errors import ApiError
from member_grid.clients.members_sdk.members_client import MembersClient

MODULE = "member_source"


class RemoteMemberSource:
    """Accumulates fetched pages into one flat member list for the grid."""

    def __init__(
        self,
        client: MembersClient,
        on_props: Callable[[GridProps], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.client = client
        self._on_props = on_props
        self._logger = logger or get_logger("member_grid.source")
        self._records: dict[str, MemberRecord] = {}
        self._memberships: dict[str, Membership] = {}
        self._total = 0
        self._excluded: dict[str, MemberRecord] = {}
        self._included: dict[str, MemberRecord] = {}
        self.last_error: dict | None = None

    def subscribe(self, on_props: Callable[[GridProps], None]) -> None:
        self._on_props = on_props

    def props(self) -> GridProps:
        return GridProps(
            records=tuple(self._records.values()),
            memberships=dict(self._memberships),
            authoritative_total=self._total,
            excluded=dict(self._excluded),
            included=dict(self._included),
        )

    def stage_addition(self, record: MemberRecord) -> None:
        self._included[record.id] = record
        self._excluded.pop(record.id, None)
        self._publish()

    def stage_exclusion(self, record: MemberRecord) -> None:
        self._excluded[record.id] = record
        self._included.pop(record.id, None)
        self._publish()

    def load_page(self, page: int) -> None:
        try:
            listing = self.client.list_members(page=page, per_page=MEMBERS_PER_PAGE)
            records = parse_records(listing["rows"])
            new_ids = [record.id for record in records if record.id not in self._records]
            memberships = parse_memberships(self.client.get_memberships(new_ids))
        except ApiError as error:
            self.last_error = ErrorMapper.to_payload(error)
            log_action(
                self._logger, MODULE, "load_page", None, page, "failed",
                code=self.last_error["code"], trace_id=self.last_error["trace_id"],
            )
            return
        except ValidationError as error:
            self.last_error = ErrorMapper.to_payload(error)
            log_action(self._logger, MODULE, "load_page", None, page, "invalid_payload", errors=error.error_count())
            return

        self.last_error = None
        before = self.props()
        for record in records:
            self._records.setdefault(record.id, record)
        self._memberships.update(memberships)
        if listing["total"] is not None:
            self._total = listing["total"]
        log_action(
            self._logger, MODULE, "load_page", None, page, "loaded",
            received=len(records), new=len(new_ids), total=self._total,
        )
        if self.props() != before:
            self._publish()

    def _publish(self) -> None:
        if self._on_props is not None:
            self._on_props(self.props())


class RemoteMutationSink:
    """Forwards grid intents to the members API and reports how they ended."""

    def __init__(
        self,
        client: MembersClient,
        on_settled: Callable[[str, bool, ApiError | None], None] | None = None,
        logger: logging.Logger | None = None,
    ) -> None:
        self.client = client
        self._on_settled = on_settled
        self._logger = logger or get_logger("member_grid.sink")

    def bind(self, on_settled: Callable[[str, bool, ApiError | None], None]) -> None:
        self._on_settled = on_settled

    def remove_user(self, record: MemberRecord) -> None:
        self.client.remove_member(record.id)
        log_action(self._logger, MODULE, "remove_member", record.id, None, "confirmed")
        self._settled(removal_key(record.id))

    def update_member_roles_for_user(self, record_id: str, role: str) -> None:
        self.client.update_member_roles(record_id, role)
        log_action(self._logger, MODULE, "update_member_roles", record_id, None, "confirmed", role=role)
        self._settled(role_update_key(record_id))

    def _settled(self, key: str) -> None:
        if self._on_settled is not None:
            self._on_settled(key, True, None)
