"""Page-number strip for the listing footer."""

from __future__ import annotations

import math
from typing import List, Union

LEFT_ELLIPSIS = "left-ellipsis"
RIGHT_ELLIPSIS = "right-ellipsis"
PAGES_TO_SHOW = 5

PageItem = Union[int, str]


def total_pages(total_count: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return math.ceil(max(0, total_count) / page_size)


def pagination_items(page_index: int, total_count: int, page_size: int) -> List[PageItem]:
    """Return 1-based page numbers with ellipsis markers.

    Near the start the first five pages are shown, near the end the last
    five, otherwise ``1 … current-1 current current+1 … last``.
    """
    pages = total_pages(total_count, page_size)
    current = page_index + 1
    show_left = current > 3
    show_right = current < pages - 2

    if not show_left:
        return list(range(1, min(PAGES_TO_SHOW, pages) + 1))
    if not show_right:
        return [i for i in range(pages - PAGES_TO_SHOW + 1, pages + 1) if i > 0]
    return [1, LEFT_ELLIPSIS, *range(max(1, current - 1), min(pages, current + 1) + 1), RIGHT_ELLIPSIS, pages]


__all__ = ["LEFT_ELLIPSIS", "RIGHT_ELLIPSIS", "pagination_items", "total_pages"]
