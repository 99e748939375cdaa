from dataclasses import dataclass
from enum import Enum


class PageEventKind(Enum):
    CREATED = "created"
    ADDRESS_CHANGED = "address_changed"


@dataclass(frozen=True)
class PageEvent:
    """
    A page was opened, or navigated to a new address, in a window.
    Both kinds take the same decision path.
    """
    page_id: int
    window_id: int
    address: str
    kind: PageEventKind = PageEventKind.CREATED
