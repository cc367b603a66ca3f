from __future__ import annotations

import logging

from pydantic import ValidationError

from member_grid.app.config import Settings, load_settings
from member_grid.app.domain.models import MemberRecord
from member_grid.app.grid.controller import MemberGrid
from member_grid.app.grid.materializer import GridView
from member_grid.app.grid.overlay import removal_key, role_update_key
from member_grid.app.infrastructure.data_source.remote_member_source import RemoteMemberSource, RemoteMutationSink
from member_grid.app.infrastructure.logging.logger import get_logger
from member_grid.app.ui.components.mutation_feedback import print_mutation_outcome
from member_grid.app.ui.table_printer import print_grid
from member_grid.clients.members_sdk.http_client import HttpClient
from member_grid.clients.members_sdk.members_client import MembersClient

COMMANDS_HELP = "Commands: n=next, p=prev, g <page>=goto, r <id>=remove, role <id> <role>=change role, q=quit"


def build_grid(settings: Settings, client: MembersClient | None = None) -> tuple[MemberGrid, RemoteMemberSource]:
    level = getattr(logging, settings.log_level.upper(), logging.INFO)
    logger = get_logger("member_grid", level)
    if client is None:
        http = HttpClient(config=settings.to_sdk_config(), token=settings.api_token or None)
        client = MembersClient(http, settings.container_kind, settings.container_id)

    source = RemoteMemberSource(client, logger=logger)
    sink = RemoteMutationSink(client, logger=logger)
    grid = MemberGrid(
        load_page=source.load_page,
        remove_user=sink.remove_user,
        update_member_roles_for_user=sink.update_member_roles_for_user,
        logger=logger,
    )
    source.subscribe(grid.receive)
    sink.bind(grid.settle_mutation)
    return grid, source


def find_record(grid: MemberGrid, record_id: str) -> MemberRecord | None:
    for record in grid.props.records:
        if record.id == record_id:
            return record
    return grid.props.included.get(record_id)


def run_console(grid: MemberGrid, source: RemoteMemberSource, title: str) -> None:
    source.load_page(0)
    while True:
        view: GridView = grid.render()
        if view.prefetch is not None:
            # the prefetched page has been delivered by now
            view = grid.render()
        print_grid(title, view)
        if source.last_error:
            print(f"[error] {source.last_error['code']}: {source.last_error['message']}")
        print(COMMANDS_HELP)
        parts = input("cmd: ").strip().split()
        if not parts:
            continue
        command, args = parts[0].lower(), parts[1:]

        if command == "q":
            return
        if command == "n":
            if view.end_count < view.total:
                grid.next_page()
            continue
        if command == "p":
            if view.page > 0:
                grid.previous_page()
            continue
        if command == "g" and args and args[0].isdigit():
            grid.goto_page(max(0, int(args[0]) - 1))
            continue
        if command == "r" and args:
            record = find_record(grid, args[0])
            if record is None:
                print(f"[error] unknown member {args[0]}")
                continue
            grid.remove_user(record)
            print_mutation_outcome(grid.state.overlay.mutations.get(removal_key(record.id)))
            continue
        if command == "role" and len(args) == 2:
            grid.update_membership(args[0], args[1])
            print_mutation_outcome(grid.state.overlay.mutations.get(role_update_key(args[0])))
            continue
        print(f"[error] unknown command: {' '.join(parts)}")


def main() -> None:
    try:
        settings = load_settings()
    except (ValueError, ValidationError) as error:
        print(f"[config-error] {error}")
        raise SystemExit(2) from error
    if not settings.container_id:
        print("[config-error] MEMBER_GRID_CONTAINER_ID is required")
        raise SystemExit(2)

    grid, source = build_grid(settings)
    run_console(grid, source, f"{settings.container_kind.upper()} {settings.container_id} MEMBERS")


if __name__ == "__main__":
    main()
