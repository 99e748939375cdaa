from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


@dataclass(frozen=True)
class PageSummary:
    id: int
    title: str
    address: Optional[str]
    fav_icon_url: Optional[str]
    active: bool

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "url": self.address,
            "favIconUrl": self.fav_icon_url,
            "active": self.active,
        }


@dataclass(frozen=True)
class GroupSummary:
    id: int
    title: str
    color: str
    collapsed: bool
    pages: Tuple[PageSummary, ...] = ()

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "color": self.color,
            "collapsed": self.collapsed,
            "tabs": [page.to_payload() for page in self.pages],
        }


@dataclass(frozen=True)
class WindowOverview:
    """
    Display snapshot of a window: its groups in window order, the pages
    outside any group, and the active page.
    """
    window_id: int
    groups: Tuple[GroupSummary, ...] = ()
    ungrouped_pages: Tuple[PageSummary, ...] = ()
    active_page_id: Optional[int] = None

    @property
    def page_count(self) -> int:
        return sum(len(g.pages) for g in self.groups) + len(self.ungrouped_pages)

    def to_payload(self) -> Dict[str, Any]:
        groups: List[Dict[str, Any]] = [group.to_payload() for group in self.groups]
        return {
            "windowId": self.window_id,
            "groups": groups,
            "ungroupedPages": [page.to_payload() for page in self.ungrouped_pages],
            "activePageId": self.active_page_id,
            "pageCount": self.page_count,
        }
