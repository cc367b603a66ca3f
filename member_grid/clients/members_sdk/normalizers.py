from __future__ import annotations

from typing import Any

ROW_KEYS = ("users", "rows", "items", "data")
TOTAL_KEYS = ("total_count", "total", "count")


def normalize_listing(payload: Any, *, page: int = 0, page_size: int = 10) -> dict[str, Any]:
    safe_page = max(0, _to_int(page) or 0)
    safe_page_size = max(1, _to_int(page_size) or 10)

    rows: list[Any] = []
    total: int | None = None

    if isinstance(payload, list):
        rows = payload
    elif isinstance(payload, dict):
        for key in ROW_KEYS:
            if isinstance(payload.get(key), list):
                rows = payload[key]
                break

        for key in TOTAL_KEYS:
            total = _to_int(payload.get(key))
            if total is not None:
                break

        meta = payload.get("meta")
        if total is None and isinstance(meta, dict):
            total = _to_int(meta.get("total"))

        safe_page = _first_int(payload.get("page"), safe_page)
        safe_page_size = _first_int(payload.get("per_page"), payload.get("page_size"), safe_page_size)

    rows = [row for row in rows if isinstance(row, dict)]

    # a short first page is the whole listing
    if total is None and safe_page == 0 and len(rows) < safe_page_size:
        total = len(rows)

    return {
        "rows": rows,
        "page": max(0, safe_page),
        "page_size": max(1, safe_page_size),
        "total": total,
    }


def _first_int(*values: Any) -> int:
    for value in values:
        parsed = _to_int(value)
        if parsed is not None:
            return parsed
    return 0


def _to_int(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    try:
        if value is None or value == "":
            return None
        return int(value)
    except (TypeError, ValueError):
        return None
