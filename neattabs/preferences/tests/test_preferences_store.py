import pytest
from sqlalchemy import create_engine, text

from neattabs.preferences.domain.grouping_preferences import GroupingPreferences, defaults
from neattabs.preferences.store.preferences_store import (
    InMemoryGroupingPreferencesStore,
    SqlGroupingPreferencesStore,
)


@pytest.fixture
def sql_store():
    return SqlGroupingPreferencesStore(create_engine("sqlite://"))


def test_sql_store_returns_defaults_when_empty(sql_store):
    assert sql_store.load() == defaults()


def test_sql_store_round_trips_preferences(sql_store):
    prefs = GroupingPreferences(
        enabled=False,
        exceptions=("intranet.local", "bank"),
        sensitivity="strict",
        custom_colors={"Gmail": "red"},
    )

    sql_store.save(prefs)

    assert sql_store.load() == prefs


def test_sql_store_save_overwrites_previous_values(sql_store):
    sql_store.save(GroupingPreferences(exceptions=("a.test",)))
    sql_store.save(GroupingPreferences(exceptions=("b.test",)))

    assert sql_store.load().exceptions == ("b.test",)
    with sql_store.engine.connect() as conn:
        count = conn.execute(text("SELECT COUNT(*) FROM grouping_preferences")).scalar()
    assert count == 4


def test_sql_store_ensure_defaults_writes_once(sql_store):
    assert sql_store.ensure_defaults() == defaults()

    sql_store.save(GroupingPreferences(enabled=False))

    assert sql_store.ensure_defaults().enabled is False


def test_sql_store_skips_corrupt_rows(sql_store):
    sql_store.save(GroupingPreferences(exceptions=("bank",)))
    with sql_store.engine.begin() as conn:
        conn.execute(
            text("UPDATE grouping_preferences SET option_value = :v WHERE option_key = 'enabled'"),
            {"v": "{not json"},
        )

    prefs = sql_store.load()

    assert prefs.enabled is True
    assert prefs.exceptions == ("bank",)


def test_in_memory_store_defaults_and_save():
    store = InMemoryGroupingPreferencesStore()
    assert store.load() == defaults()

    store.save(GroupingPreferences(enabled=False))

    assert store.load().enabled is False
    assert store.ensure_defaults().enabled is False
    assert store.load_count == 2


def test_preferences_from_payload_normalizes_values():
    prefs = GroupingPreferences.from_payload({
        "enabled": "no",
        "exceptions": [" bank ", "", None, "bank", "intranet"],
        "customColors": {"Gmail": "red"},
    })

    # Only an explicit false disables grouping
    assert prefs.enabled is True
    assert prefs.exceptions == ("bank", "intranet")
    assert prefs.custom_colors == {"Gmail": "red"}
    assert prefs.sensitivity == "balanced"


def test_is_excepted_is_substring_match():
    prefs = GroupingPreferences(exceptions=("google",))

    assert prefs.is_excepted("mail.google.com")
    assert not prefs.is_excepted("github.com")
    assert not prefs.is_excepted(None)
