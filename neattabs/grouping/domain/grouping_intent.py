from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional, Sequence, Tuple

from neattabs.coloring.domain.group_color import GroupColor


class GroupingAction(Enum):
    NO_OP = "no_op"
    JOIN_GROUP = "join_group"
    FORM_GROUP = "form_group"


class NoOpReason(Enum):
    DISABLED = "disabled"
    EXCEPTED = "excepted"
    UNCLASSIFIABLE = "unclassifiable"
    LONE_PAGE = "lone_page"
    DROPPED = "dropped"  # Event abandoned after a host failure


@dataclass(frozen=True)
class GroupingIntent:
    """
    The engine's decided outcome for one page event.
    Describes WHAT should change in the browser; a dispatcher makes it happen.
    """
    action: GroupingAction
    window_id: int
    page_ids: Tuple[int, ...] = ()
    group_id: Optional[int] = None
    title: Optional[str] = None
    color: Optional[GroupColor] = None
    reason: Optional[NoOpReason] = None

    @classmethod
    def no_op(cls, window_id: int, reason: NoOpReason) -> "GroupingIntent":
        return cls(action=GroupingAction.NO_OP, window_id=window_id, reason=reason)

    @classmethod
    def join(cls, window_id: int, group_id: int, page_id: int) -> "GroupingIntent":
        return cls(
            action=GroupingAction.JOIN_GROUP,
            window_id=window_id,
            page_ids=(page_id,),
            group_id=group_id,
        )

    @classmethod
    def form(cls, window_id: int, page_ids: Sequence[int], title: str, color: GroupColor) -> "GroupingIntent":
        return cls(
            action=GroupingAction.FORM_GROUP,
            window_id=window_id,
            page_ids=tuple(page_ids),
            title=title,
            color=color,
        )

    @property
    def is_noop(self) -> bool:
        return self.action == GroupingAction.NO_OP

    def to_payload(self) -> Dict[str, Any]:
        return {
            "action": self.action.value,
            "window_id": self.window_id,
            "page_ids": list(self.page_ids),
            "group_id": self.group_id,
            "title": self.title,
            "color": self.color.value if self.color else None,
            "reason": self.reason.value if self.reason else None,
        }
