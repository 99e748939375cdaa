from threading import Lock
from typing import Iterable, Optional, Sequence, Set

from neattabs.coloring.domain.group_color import PALETTE, GroupColor
from neattabs.coloring.interfaces.color_allocator import ColorAllocator
from neattabs.coloring.store.window_color_state_store import (
    InMemoryWindowColorStateStore,
    WindowColorStateStore,
)
from neattabs.host.domain.browser_state import TabGroupView


class RotatingColorAllocator(ColorAllocator):
    """
    First unused palette color; round-robin per window once the palette is saturated.
    Saturated windows may repeat colors. That is a heuristic, not a collision guarantee.
    """

    def __init__(
        self,
        palette: Sequence[GroupColor] = PALETTE,
        state_store: Optional[WindowColorStateStore] = None,
    ):
        if not palette:
            raise ValueError("palette must not be empty")
        self.palette = tuple(palette)
        self.state_store = state_store or InMemoryWindowColorStateStore()
        self._lock = Lock()

    def allocate(self, window_id: int, groups_in_window: Iterable[TabGroupView]) -> GroupColor:
        with self._lock:
            used = self._used_colors(groups_in_window)
            for color in self.palette:
                if color not in used:
                    return color
            index = self.state_store.next_rotation_index(window_id, len(self.palette))
            return self.palette[index]

    def evict(self, window_id: int) -> None:
        self.state_store.evict(window_id)

    @staticmethod
    def _used_colors(groups: Iterable[TabGroupView]) -> Set[GroupColor]:
        used: Set[GroupColor] = set()
        for group in groups:
            color = GroupColor.parse(group.color)
            if color is not None:
                used.add(color)
        return used
