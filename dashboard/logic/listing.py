"""Normalisation of customers listing query parameters.

Turns raw ``page``/``limit``/``search``/``sortBy``/``sortOrder`` strings into
a ``ListQuery`` whose ORDER BY clause is assembled only from whitelisted
column names. User-supplied values never reach the SQL text; the search
term is bound as a parameter with LIKE wildcards escaped.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional, Tuple

SORTABLE_COLUMNS: Tuple[str, ...] = (
    "id",
    "first_name",
    "last_name",
    "email",
    "company",
    "created_at",
    "sort_order",
)
DEFAULT_SORT = "sort_order"
LIKE_ESCAPE = "\\"
# Larger pages are clamped so OFFSET stays inside a 64-bit integer
MAX_PAGE = 10_000_000


@dataclass(frozen=True)
class ListQuery:
    page: int = 1
    limit: int = 5
    search: str = ""
    sort: Tuple[Tuple[str, str], ...] = field(default=((DEFAULT_SORT, "ASC"),))

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.limit

    @property
    def search_pattern(self) -> str:
        return f"%{escape_like(self.search)}%"

    def order_by_clause(self) -> str:
        """Return ``col DIR, ..., id ASC``; ties always break on id ascending."""
        parts = [f"{col} {direction}" for col, direction in self.sort]
        if not any(col == "id" for col, _ in self.sort):
            parts.append("id ASC")
        return ", ".join(parts)


def escape_like(term: str) -> str:
    out = []
    for ch in term:
        if ch in ("\\", "%", "_"):
            out.append(LIKE_ESCAPE)
        out.append(ch)
    return "".join(out)


def _to_int(raw: Optional[str], default: int) -> int:
    try:
        return int(str(raw).strip())
    except (TypeError, ValueError):
        return default


def parse_sort(sort_by: Optional[str], sort_order: Optional[str]) -> Tuple[Tuple[str, str], ...]:
    """Pair comma-separated sort keys with directions by position.

    Unknown keys are dropped along with their direction; repeated keys keep
    their first occurrence. Missing directions default to ascending.
    """
    keys = [k.strip() for k in (sort_by or "").split(",")]
    directions = [d.strip().lower() for d in (sort_order or "").split(",")]
    seen: set[str] = set()
    result: list[Tuple[str, str]] = []
    for idx, key in enumerate(keys):
        if key not in SORTABLE_COLUMNS or key in seen:
            continue
        seen.add(key)
        direction = directions[idx] if idx < len(directions) else "asc"
        result.append((key, "DESC" if direction == "desc" else "ASC"))
    if not result:
        result.append((DEFAULT_SORT, "DESC" if directions[0] == "desc" else "ASC"))
    return tuple(result)


def parse_list_query(
    page: Optional[str] = None,
    limit: Optional[str] = None,
    search: Optional[str] = None,
    sort_by: Optional[str] = None,
    sort_order: Optional[str] = None,
    *,
    default_limit: int = 5,
    max_limit: int = 50,
) -> ListQuery:
    return ListQuery(
        page=min(MAX_PAGE, max(1, _to_int(page, 1))),
        limit=min(max_limit, max(1, _to_int(limit, default_limit))),
        search=(search or "").strip(),
        sort=parse_sort(sort_by, sort_order),
    )


__all__ = [
    "ListQuery",
    "MAX_PAGE",
    "SORTABLE_COLUMNS",
    "escape_like",
    "parse_list_query",
    "parse_sort",
]
