import re
from dataclasses import dataclass, field
from typing import Optional, Tuple

from .core import WINDOW_HALF_WIDTH

_DIGITS = re.compile(r'^\s*[0-9]+\s*$')


@dataclass(frozen=True)
class PageWindow:
    current_page: int
    total_pages: int
    visible_pages: Tuple[int, ...] = field(default_factory=tuple)
    has_previous: bool = False
    has_next: bool = False
    previous_page: Optional[int] = None
    next_page: Optional[int] = None

    def to_dict(self) -> dict:
        return {
            'current_page': self.current_page,
            'total_pages': self.total_pages,
            'visible_pages': list(self.visible_pages),
            'has_previous': self.has_previous,
            'has_next': self.has_next,
            'previous_page': self.previous_page,
            'next_page': self.next_page,
        }


def compute_window(total_count: int, page_size: int, current_page: int) -> PageWindow:
    """Compute total pages and the clipped run of page indices around current_page.

    Pages are zero-based. The window spans current_page +/- 2 and is clipped to
    [0, total_pages - 1], so it can be shorter near either edge and empty when
    current_page is stale (past the last page). Any integer input yields a
    result; nothing here raises.
    """
    if total_count <= 0 or page_size <= 0:
        return PageWindow(current_page=current_page, total_pages=0)

    # Ceiling division without floats
    total_pages = -(-total_count // page_size)
    start = max(0, current_page - WINDOW_HALF_WIDTH)
    end = min(total_pages - 1, current_page + WINDOW_HALF_WIDTH)
    visible = tuple(range(start, end + 1))

    has_previous = current_page > 0
    # No next link from a page outside the listing (negative or beyond the window)
    has_next = bool(visible) and 0 <= current_page < total_pages - 1
    return PageWindow(
        current_page=current_page,
        total_pages=total_pages,
        visible_pages=visible,
        has_previous=has_previous,
        has_next=has_next,
        previous_page=current_page - 1 if has_previous else None,
        next_page=current_page + 1 if has_next else None,
    )


def coerce_page_index(value) -> int:
    """Turn a navigation parameter into a non-negative page index (0 on failure)."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return value if value > 0 else 0
    if not isinstance(value, str):
        return 0
    if not _DIGITS.match(value):
        return 0
    return int(value.strip())
