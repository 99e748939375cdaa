from abc import ABC, abstractmethod
from typing import Iterable

from neattabs.coloring.domain.group_color import GroupColor
from neattabs.host.domain.browser_state import TabGroupView


class ColorAllocator(ABC):
    """
    Interface for choosing the color of a new group in a window.
    While spare palette colors exist, the result must not collide with
    any color used by groups_in_window.
    """
    @abstractmethod
    def allocate(self, window_id: int, groups_in_window: Iterable[TabGroupView]) -> GroupColor:
        pass

    @abstractmethod
    def evict(self, window_id: int) -> None:
        """Forget any per-window state once the window is gone."""
        pass
