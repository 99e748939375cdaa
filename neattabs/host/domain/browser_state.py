from dataclasses import dataclass
from typing import Any, Dict, Optional

# Group id the host reports for a page that belongs to no group
UNGROUPED = -1


@dataclass(frozen=True)
class TabGroupView:
    """
    Read-only view of a host-owned group at query time.
    """
    id: int
    window_id: int
    title: str = ""
    color: str = "grey"
    collapsed: bool = False

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "TabGroupView":
        return cls(
            id=int(payload["id"]),
            window_id=int(payload.get("windowId", payload.get("window_id", -1))),
            title=str(payload.get("title") or ""),
            color=str(payload.get("color") or "grey"),
            collapsed=bool(payload.get("collapsed", False)),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "windowId": self.window_id,
            "title": self.title,
            "color": self.color,
            "collapsed": self.collapsed,
        }


@dataclass(frozen=True)
class PageView:
    """
    Read-only view of a host-owned page (browser tab) at query time.
    """
    id: int
    window_id: int
    address: Optional[str] = None
    group_id: int = UNGROUPED
    active: bool = False
    title: str = ""
    fav_icon_url: Optional[str] = None

    @property
    def grouped(self) -> bool:
        return self.group_id != UNGROUPED

    @classmethod
    def from_payload(cls, payload: Dict[str, Any]) -> "PageView":
        group_id = payload.get("groupId", payload.get("group_id", UNGROUPED))
        return cls(
            id=int(payload["id"]),
            window_id=int(payload.get("windowId", payload.get("window_id", -1))),
            address=payload.get("url", payload.get("address")),
            group_id=UNGROUPED if group_id is None else int(group_id),
            active=bool(payload.get("active", False)),
            title=str(payload.get("title") or ""),
            fav_icon_url=payload.get("favIconUrl", payload.get("fav_icon_url")),
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "windowId": self.window_id,
            "url": self.address,
            "groupId": self.group_id,
            "active": self.active,
            "title": self.title,
            "favIconUrl": self.fav_icon_url,
        }
