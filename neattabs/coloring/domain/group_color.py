from enum import Enum
from typing import Optional, Tuple


class GroupColor(Enum):
    BLUE = "blue"
    RED = "red"
    YELLOW = "yellow"
    GREEN = "green"
    PINK = "pink"
    PURPLE = "purple"
    CYAN = "cyan"
    ORANGE = "orange"
    GREY = "grey"

    @classmethod
    def parse(cls, raw: Optional[str]) -> Optional["GroupColor"]:
        if isinstance(raw, cls):
            return raw
        try:
            return cls(str(raw).strip().lower())
        except ValueError:
            return None


# Allocation order
PALETTE: Tuple[GroupColor, ...] = (
    GroupColor.BLUE,
    GroupColor.RED,
    GroupColor.YELLOW,
    GroupColor.GREEN,
    GroupColor.PINK,
    GroupColor.PURPLE,
    GroupColor.CYAN,
    GroupColor.ORANGE,
    GroupColor.GREY,
)
