from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class ColumnDef:
    name: str
    field: str
    width: int | None = None
    fixed: bool = False
    text_align: str = "left"
    overflow: str = "hidden"


MEMBER_COLUMNS: tuple[ColumnDef, ...] = (
    ColumnDef(name="Name", field="name", width=3, fixed=True),
    # the role dropdown renders outside the cell
    ColumnDef(name="Role", field="role", overflow="visible"),
    ColumnDef(name="", field="remove", text_align="right", fixed=True),
)


def member_columns() -> list[ColumnDef]:
    return list(MEMBER_COLUMNS)
