"""Drag-to-reorder controller for the customers table.

A drop is handled in two phases. Phase 1 runs synchronously inside
``handle_drop``: it snapshots the displayed rows, installs the moved
sequence and schedules phase 2. Phase 2 is a plain asyncio task that
submits the new ordinals and, on failure, runs the undo closure captured
in phase 1 and posts an error notice. Failed submissions are not retried.

Gestures are not serialized: a second drop may start while the first
submission is still in flight, and the server keeps whichever write
commits last.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Callable, Dict, List, Optional, Sequence, Set, Tuple

from dashboard.client.api import DashboardClient
from dashboard.client.errors import ClientError
from dashboard.client.notices import NoticeBoard
from dashboard.client.state import Row, RowListState

logger = logging.getLogger(__name__)

REORDER_FAILED_MESSAGE = "Failed to update order. Changes have been reverted."


def move_row(rows: Sequence[Row], source_id: Any, target_id: Any) -> Tuple[Row, ...]:
    """Return a new sequence with ``source_id`` moved to ``target_id``'s position.

    This is a list move, not a swap: the source is removed and reinserted
    at the target's original index, and all other rows keep their relative
    order. Raises ``ValueError`` for a drop onto itself or an unknown id.
    """
    if source_id == target_id:
        raise ValueError("source and target must differ")
    index = {r["id"]: i for i, r in enumerate(rows)}
    if source_id not in index or target_id not in index:
        raise ValueError(f"unknown row id in drop: {source_id!r} -> {target_id!r}")
    old_index, new_index = index[source_id], index[target_id]
    moved = list(rows)
    row = moved.pop(old_index)
    moved.insert(new_index, row)
    return tuple(moved)


def build_reorder_batch(rows: Sequence[Row]) -> List[Dict[str, int]]:
    """Ordinal of each row is its position: ``{0, 1, ..., k-1}``."""
    return [{"id": int(r["id"]), "order": index} for index, r in enumerate(rows)]


class ReorderController:
    def __init__(
        self,
        client: DashboardClient,
        state: RowListState,
        notices: Optional[NoticeBoard] = None,
    ) -> None:
        self.client = client
        self.state = state
        self.notices = notices or NoticeBoard()
        self._pending: Set[asyncio.Task] = set()

    @property
    def pending(self) -> Set[asyncio.Task]:
        return set(self._pending)

    def handle_drop(self, source_id: Any, target_id: Any) -> Optional[asyncio.Task]:
        """Apply a drop optimistically and schedule its persistence.

        Must be called from a running event loop. Returns the persistence
        task, or None when the drop is a no-op (onto itself, or an id that is
        not on the displayed page).
        """
        if source_id is None or target_id is None or source_id == target_id:
            return None
        if self.state.index_of(source_id) is None or self.state.index_of(target_id) is None:
            logger.info("reorder.drop_ignored source=%s target=%s", source_id, target_id)
            return None

        snapshot = self.state.snapshot()
        new_rows = move_row(snapshot.rows, source_id, target_id)
        self.state.replace(new_rows)
        batch = build_reorder_batch(new_rows)

        def undo() -> None:
            self.state.revert_to(snapshot)

        task = asyncio.get_running_loop().create_task(self._persist(batch, undo))
        self._pending.add(task)
        task.add_done_callback(self._pending.discard)
        return task

    async def _persist(self, batch: List[Dict[str, int]], undo: Callable[[], None]) -> bool:
        try:
            await self.client.submit_reorder(batch)
        except ClientError as exc:
            logger.warning("reorder.submit_failed error=%s", exc)
            undo()
            self.notices.error(REORDER_FAILED_MESSAGE)
            return False
        logger.info("reorder.confirmed count=%s", len(batch))
        return True

    async def drain(self) -> None:
        """Wait for every submission in flight."""
        if self._pending:
            await asyncio.gather(*list(self._pending), return_exceptions=True)


__all__ = [
    "REORDER_FAILED_MESSAGE",
    "ReorderController",
    "build_reorder_batch",
    "move_row",
]
