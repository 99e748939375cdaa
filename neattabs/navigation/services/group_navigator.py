from enum import Enum
from typing import Optional

from neattabs.host.interfaces.browser_host import BrowserHost


class CycleCommand(Enum):
    NEXT_GROUP = "next-group"
    PREV_GROUP = "prev-group"


class GroupNavigator:
    """
    Keyboard-command glue: moves focus to the next or previous group of a window.
    Groups are taken in window order and the cycle wraps around.
    """

    def __init__(self, host: BrowserHost):
        self.host = host

    def cycle(self, window_id: int, command: CycleCommand) -> Optional[int]:
        """Activate the first page of the target group; returns its id, or None if nothing moved."""
        groups = self.host.list_groups(window_id)
        if not groups:
            return None

        active = next((p for p in self.host.list_pages(window_id) if p.active), None)
        current = -1
        if active is not None:
            current = next((i for i, g in enumerate(groups) if g.id == active.group_id), -1)

        if command == CycleCommand.NEXT_GROUP:
            target = (current + 1) % len(groups)
        else:
            target = len(groups) - 1 if current <= 0 else current - 1

        pages = self.host.list_group_pages(groups[target].id)
        if not pages:
            return None
        self.host.activate_page(pages[0].id)
        return pages[0].id
