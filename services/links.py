from dataclasses import dataclass
from typing import List, Optional

from .pagination import PageWindow

PREV_LABEL = '« Prev'
NEXT_LABEL = 'Next »'


@dataclass(frozen=True)
class PageControl:
    kind: str  # 'prev' | 'page' | 'next'
    label: str
    href: str
    page: int
    active: bool = False

    def to_dict(self) -> dict:
        return {
            'kind': self.kind,
            'label': self.label,
            'href': self.href,
            'page': self.page,
            'active': self.active,
        }


def page_href(page_index: int, base_path: str = '/') -> str:
    return f"{base_path}?offset={page_index}"


def detail_href(resource_id: str) -> str:
    return f"/pokemon/{resource_id}"


def home_href() -> str:
    return '/'


def build_page_controls(window: Optional[PageWindow], base_path: str = '/') -> List[PageControl]:
    """Controls in display order: optional prev, the visible pages, optional next.

    Page labels are one-based; hrefs carry the zero-based index.
    """
    if window is None or window.total_pages == 0:
        return []
    controls = []
    if window.has_previous:
        controls.append(PageControl(
            kind='prev',
            label=PREV_LABEL,
            href=page_href(window.previous_page, base_path),
            page=window.previous_page,
        ))
    for page in window.visible_pages:
        controls.append(PageControl(
            kind='page',
            label=str(page + 1),
            href=page_href(page, base_path),
            page=page,
            active=page == window.current_page,
        ))
    if window.has_next:
        controls.append(PageControl(
            kind='next',
            label=NEXT_LABEL,
            href=page_href(window.next_page, base_path),
            page=window.next_page,
        ))
    return controls
