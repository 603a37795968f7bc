"""Non-blocking user notices ("toasts") raised by view controllers."""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field
from typing import Callable, List, Optional

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Notice:
    level: str
    message: str
    created_at: float = field(default_factory=time.time)


class NoticeBoard:
    """Collects notices and forwards each to an optional listener."""

    def __init__(self, listener: Optional[Callable[[Notice], None]] = None, limit: int = 50) -> None:
        if limit < 1:
            raise ValueError("limit must be at least 1")
        self._listener = listener
        self._limit = limit
        self._items: List[Notice] = []

    @property
    def items(self) -> List[Notice]:
        return list(self._items)

    def _post(self, level: str, message: str) -> Notice:
        notice = Notice(level, message)
        self._items.append(notice)
        del self._items[: -self._limit]
        log = logger.warning if level == "error" else logger.info
        log("notice level=%s message=%s", level, message)
        if self._listener is not None:
            self._listener(notice)
        return notice

    def success(self, message: str) -> Notice:
        return self._post("success", message)

    def error(self, message: str) -> Notice:
        return self._post("error", message)

    def clear(self) -> None:
        self._items.clear()


__all__ = ["Notice", "NoticeBoard"]
