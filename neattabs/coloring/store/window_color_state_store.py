from abc import ABC, abstractmethod
from threading import Lock
from typing import Dict


class WindowColorStateStore(ABC):
    @abstractmethod
    def next_rotation_index(self, window_id: int, palette_size: int) -> int:
        """Return the current rotation index and advance it, atomically."""
        pass

    @abstractmethod
    def evict(self, window_id: int) -> None:
        pass

    @abstractmethod
    def tracked_windows(self) -> int:
        pass


class InMemoryWindowColorStateStore(WindowColorStateStore):
    """
    Rotation indexes keyed by window id.
    Entries are created on the first overflow and removed by evict().
    """

    def __init__(self):
        self._indexes: Dict[int, int] = {}
        self._lock = Lock()

    def next_rotation_index(self, window_id: int, palette_size: int) -> int:
        if palette_size <= 0:
            raise ValueError("palette_size must be positive")
        with self._lock:
            index = self._indexes.get(window_id, 0) % palette_size
            self._indexes[window_id] = (index + 1) % palette_size
            return index

    def evict(self, window_id: int) -> None:
        with self._lock:
            self._indexes.pop(window_id, None)

    def tracked_windows(self) -> int:
        with self._lock:
            return len(self._indexes)
