"""Row list state container shared by the listing and reorder controllers.

The displayed rows are held as an immutable tuple. ``replace`` installs a
new sequence and ``revert_to`` restores a snapshot taken earlier; the
current sequence is never mutated in place, so a snapshot stays valid for
as long as a caller holds it.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)

Row = Mapping[str, Any]


@dataclass(frozen=True)
class Snapshot:
    rows: Tuple[Row, ...]
    total_count: int


class RowListState:
    def __init__(self, rows: Iterable[Row] = (), total_count: int | None = None) -> None:
        self._rows: Tuple[Row, ...] = ()
        self._index: Dict[Any, int] = {}
        self._total_count = 0
        rows = tuple(rows)
        self.replace(rows, len(rows) if total_count is None else total_count)

    @property
    def rows(self) -> Tuple[Row, ...]:
        return self._rows

    @property
    def total_count(self) -> int:
        return self._total_count

    @property
    def ids(self) -> list:
        return [r["id"] for r in self._rows]

    def index_of(self, row_id: Any) -> Optional[int]:
        return self._index.get(row_id)

    def snapshot(self) -> Snapshot:
        return Snapshot(self._rows, self._total_count)

    def replace(self, rows: Iterable[Row], total_count: int | None = None) -> None:
        new_rows = tuple(rows)
        self._rows = new_rows
        self._index = {r["id"]: i for i, r in enumerate(new_rows)}
        if total_count is not None:
            self._total_count = int(total_count)

    def revert_to(self, snapshot: Snapshot) -> None:
        logger.info("rows.revert count=%s", len(snapshot.rows))
        self.replace(snapshot.rows, snapshot.total_count)


__all__ = ["Row", "RowListState", "Snapshot"]
