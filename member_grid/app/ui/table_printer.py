from __future__ import annotations

from member_grid.app.grid.columns import ColumnDef
from member_grid.app.grid.materializer import GridView, RowDescriptor
from member_grid.app.grid.overlay import MutationStatus

EMPTY_VALUE = "—"
REMOVE_LABEL = "Remove"


def cell_text(row: RowDescriptor, column: ColumnDef) -> str:
    if column.field == "name":
        return row.name
    if column.field == "role":
        if row.membership is None:
            return EMPTY_VALUE
        label = "Admin" if row.membership.is_admin else "Member"
        if row.mutation_status is MutationStatus.FAILED:
            label = f"{label} (not saved)"
        return label
    if column.field == "remove":
        return REMOVE_LABEL
    return EMPTY_VALUE


def format_grid(view: GridView) -> list[str]:
    lines: list[str] = []
    headers = [column.name or "action" for column in view.columns]
    cells = [[cell_text(row, column) for column in view.columns] for row in view.rows]

    widths = [len(header) for header in headers]
    for row_cells in cells:
        for idx, value in enumerate(row_cells):
            widths[idx] = max(widths[idx], len(value))

    def _line(values: list[str]) -> str:
        parts = []
        for idx, (value, column) in enumerate(zip(values, view.columns)):
            parts.append(value.rjust(widths[idx]) if column.text_align == "right" else value.ljust(widths[idx]))
        return " | ".join(parts)

    lines.append(_line(headers))
    lines.append("-+-".join("-" * width for width in widths))
    if not cells:
        lines.append("(no members)")
    for row, row_cells in zip(view.rows, cells):
        lines.append(f"{_line(row_cells)}  [{row.id}]")
    lines.append(pager_text(view))
    return lines


def pager_text(view: GridView) -> str:
    if view.total == 0:
        return "No members"
    return f"{view.start_count} - {view.end_count} of {view.total}"


def print_grid(title: str, view: GridView) -> None:
    print(f"\n{title}")
    for line in format_grid(view):
        print(line)
