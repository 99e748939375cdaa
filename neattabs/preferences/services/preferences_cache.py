from threading import Lock
from typing import Any, Optional

from neattabs.preferences.domain.grouping_preferences import GroupingPreferences
from neattabs.preferences.store.preferences_store import GroupingPreferencesStore


class GroupingPreferencesCache:
    """
    Cached view of the stored preferences, shared by reference with the engine.
    The store is read on first use and again only after invalidate() or update().
    """

    def __init__(self, store: GroupingPreferencesStore):
        self.store = store
        self._cached: Optional[GroupingPreferences] = None
        self._lock = Lock()

    def current(self) -> GroupingPreferences:
        with self._lock:
            if self._cached is None:
                self._cached = self.store.load()
            return self._cached

    def invalidate(self) -> None:
        with self._lock:
            self._cached = None

    def update(self, **changes: Any) -> GroupingPreferences:
        with self._lock:
            base = self._cached if self._cached is not None else self.store.load()
            updated = base.with_changes(**changes)
            self.store.save(updated)
            self._cached = updated
            return updated

    def replace(self, preferences: GroupingPreferences) -> GroupingPreferences:
        with self._lock:
            self.store.save(preferences)
            self._cached = preferences
            return preferences
