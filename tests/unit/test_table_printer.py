from member_grid.app.domain.models import MemberRecord, Membership
from member_grid.app.grid.materializer import GridProps, project_view
from member_grid.app.grid.pagination import PaginationState
from member_grid.app.grid.state import GridState, MutationSettled, RoleUpdateStaged, reduce
from member_grid.app.ui.table_printer import format_grid, pager_text, print_grid


def _view(state: GridState | None = None):
    records = (
        MemberRecord(id="u1", username="ana", first_name="Ana", last_name="Diaz"),
        MemberRecord(id="u2", username="bo"),
    )
    memberships = {
        "u1": Membership(user_id="u1", container_id="team", roles="team_user team_admin"),
        "u2": Membership(user_id="u2", container_id="team", roles="team_user"),
    }
    state = state or GridState(pagination=PaginationState(visible_total=2, authoritative_total=2))
    return project_view(state, GridProps(records=records, memberships=memberships, authoritative_total=2))


def test_format_grid_renders_rows_and_pager() -> None:
    lines = format_grid(_view())

    assert lines[0].startswith("Name")
    assert "Ana Diaz" in lines[2] and "Admin" in lines[2] and "[u1]" in lines[2]
    assert "bo" in lines[3] and "Member" in lines[3]
    assert lines[-1] == "1 - 2 of 2"


def test_failed_role_update_is_flagged() -> None:
    state = GridState(pagination=PaginationState(visible_total=2, authoritative_total=2))
    state = reduce(state, RoleUpdateStaged("u2", "team_admin", None)).state
    state = reduce(state, MutationSettled("update_roles:u2", ok=False, error_code="FORBIDDEN")).state

    lines = format_grid(_view(state))

    assert "Admin (not saved)" in lines[3]


def test_empty_grid_message() -> None:
    state = GridState(pagination=PaginationState(visible_total=0, authoritative_total=0))
    view = project_view(state, GridProps())

    assert "(no members)" in format_grid(view)
    assert pager_text(view) == "No members"


def test_print_grid_writes_title(capsys) -> None:
    print_grid("TEAM MEMBERS", _view())

    output = capsys.readouterr().out
    assert "TEAM MEMBERS" in output
    assert "1 - 2 of 2" in output
