import json
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from threading import Lock
from typing import Any, Dict, Optional

from sqlalchemy import create_engine, text
from sqlalchemy.engine import Engine

from neattabs.preferences.domain.grouping_preferences import GroupingPreferences, defaults


class GroupingPreferencesStore(ABC):
    @abstractmethod
    def load(self) -> GroupingPreferences:
        """Stored preferences; defaults for any option never written."""
        pass

    @abstractmethod
    def save(self, preferences: GroupingPreferences) -> None:
        pass

    @abstractmethod
    def ensure_defaults(self) -> GroupingPreferences:
        """Write the default preferences when nothing is stored yet."""
        pass


class InMemoryGroupingPreferencesStore(GroupingPreferencesStore):
    def __init__(self, initial: Optional[GroupingPreferences] = None):
        self._preferences = initial
        self._lock = Lock()
        self.load_count = 0

    def load(self) -> GroupingPreferences:
        with self._lock:
            self.load_count += 1
            return self._preferences or defaults()

    def save(self, preferences: GroupingPreferences) -> None:
        with self._lock:
            self._preferences = preferences

    def ensure_defaults(self) -> GroupingPreferences:
        with self._lock:
            if self._preferences is None:
                self._preferences = defaults()
            return self._preferences


class SqlGroupingPreferencesStore(GroupingPreferencesStore):
    """
    One JSON-encoded row per option in grouping_preferences.
    Plain SQL that runs on both SQLite and PostgreSQL.
    """

    def __init__(self, engine: Engine):
        self.engine = engine
        self.ensure_schema()

    @classmethod
    def from_dsn(cls, dsn: str) -> "SqlGroupingPreferencesStore":
        engine = create_engine(dsn, pool_pre_ping=True, future=True)
        return cls(engine)

    def ensure_schema(self) -> None:
        with self.engine.begin() as conn:
            conn.execute(
                text(
                    """
                    CREATE TABLE IF NOT EXISTS grouping_preferences (
                        option_key TEXT PRIMARY KEY,
                        option_value TEXT NOT NULL,
                        updated_at TIMESTAMP NOT NULL
                    )
                    """
                )
            )

    def load(self) -> GroupingPreferences:
        return GroupingPreferences.from_payload(self._read_rows())

    def save(self, preferences: GroupingPreferences) -> None:
        now = datetime.now(timezone.utc)
        with self.engine.begin() as conn:
            for key, value in preferences.to_payload().items():
                conn.execute(
                    text(
                        """
                        INSERT INTO grouping_preferences (option_key, option_value, updated_at)
                        VALUES (:option_key, :option_value, :updated_at)
                        ON CONFLICT (option_key) DO UPDATE
                        SET option_value = excluded.option_value,
                            updated_at = excluded.updated_at
                        """
                    ),
                    {
                        "option_key": key,
                        "option_value": json.dumps(value),
                        "updated_at": now.isoformat(),
                    },
                )

    def ensure_defaults(self) -> GroupingPreferences:
        if self._read_rows():
            return self.load()
        preferences = defaults()
        self.save(preferences)
        return preferences

    def _read_rows(self) -> Dict[str, Any]:
        with self.engine.connect() as conn:
            rows = conn.execute(
                text("SELECT option_key, option_value FROM grouping_preferences")
            ).fetchall()
        payload: Dict[str, Any] = {}
        for key, raw_value in rows:
            try:
                payload[str(key)] = json.loads(raw_value)
            except (TypeError, ValueError):
                continue
        return payload
