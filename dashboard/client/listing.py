"""Customers listing view controller.

Each ``refresh`` cancels the list fetch still in flight, if any, before
starting a new one, so an older response can never overwrite the rows of
a newer request. Reorder submissions are separate tasks owned by
``ReorderController`` and are never cancelled here.
"""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field, replace
from typing import Dict, Optional, Tuple

from dashboard.client.api import DashboardClient
from dashboard.client.errors import ClientError, StaleResponse
from dashboard.client.notices import NoticeBoard
from dashboard.client.state import RowListState

logger = logging.getLogger(__name__)

PAGE_SIZES: Tuple[int, ...] = (5, 10, 20, 50)


@dataclass(frozen=True)
class ViewQuery:
    """Listing view state: zero-based page index, page size, search, sorting.

    ``sorting`` holds ``(column, descending)`` pairs in priority order.
    """

    page_index: int = 0
    page_size: int = 5
    search: str = ""
    sorting: Tuple[Tuple[str, bool], ...] = field(default=())

    def to_params(self) -> Dict[str, str]:
        if self.sorting:
            sort_by = ",".join(col for col, _ in self.sorting)
            sort_order = ",".join("desc" if desc else "asc" for _, desc in self.sorting)
        else:
            sort_by, sort_order = "sort_order", "asc"
        return {
            "page": str(self.page_index + 1),
            "limit": str(self.page_size),
            "search": self.search or "",
            "sortBy": sort_by,
            "sortOrder": sort_order,
        }


class CustomerListController:
    def __init__(
        self,
        client: DashboardClient,
        state: RowListState,
        notices: Optional[NoticeBoard] = None,
        query: ViewQuery = ViewQuery(),
    ) -> None:
        self.client = client
        self.state = state
        self.notices = notices or NoticeBoard()
        self.query = query
        self.loading = False
        self._inflight: Optional[asyncio.Task] = None
        self._generation = 0

    async def refresh(self, query: Optional[ViewQuery] = None) -> bool:
        """Fetch the page described by ``query`` and install it.

        Returns True when the response was applied, False when this fetch
        was superseded or failed.
        """
        if query is not None:
            self.query = query
        previous = self._inflight
        if previous is not None and not previous.done():
            previous.cancel()
            logger.info("listing.fetch_cancelled")

        self._generation += 1
        generation = self._generation
        params = self.query.to_params()
        task = asyncio.ensure_future(self.client.fetch_customers(params))
        self._inflight = task
        self.loading = True
        try:
            data = await task
            if generation != self._generation:
                raise StaleResponse(f"response for generation {generation} superseded by {self._generation}")
        except asyncio.CancelledError:
            if task.cancelled() and generation != self._generation:
                # Superseded by a newer refresh; the newer one owns loading state
                logger.info("listing.stale_response_discarded generation=%s", generation)
                return False
            # Cancelled via cancel() or by the caller; no newer fetch will clear it
            if generation == self._generation:
                self.loading = False
            raise
        except StaleResponse as exc:
            logger.info("listing.stale_response_discarded %s", exc)
            return False
        except ClientError as exc:
            logger.warning("listing.fetch_failed error=%s", exc)
            if generation == self._generation:
                self.loading = False
                self.notices.error("Failed to fetch customers")
            return False

        self.state.replace(data.get("users") or [], int(data.get("totalCount") or 0))
        self.loading = False
        return True

    async def go_to_page(self, page_index: int) -> bool:
        return await self.refresh(replace(self.query, page_index=max(0, int(page_index))))

    async def set_page_size(self, page_size: int) -> bool:
        return await self.refresh(replace(self.query, page_size=int(page_size), page_index=0))

    async def set_search(self, search: str) -> bool:
        return await self.refresh(replace(self.query, search=search, page_index=0))

    async def set_sorting(self, sorting: Tuple[Tuple[str, bool], ...]) -> bool:
        return await self.refresh(replace(self.query, sorting=tuple(sorting)))

    def cancel(self) -> None:
        if self._inflight is not None and not self._inflight.done():
            self._inflight.cancel()


__all__ = ["CustomerListController", "PAGE_SIZES", "ViewQuery"]
