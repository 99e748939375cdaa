import pytest

from neattabs.coloring.domain.group_color import GroupColor
from neattabs.coloring.services.color_allocator import RotatingColorAllocator
from neattabs.grouping.domain.grouping_intent import GroupingAction, NoOpReason
from neattabs.grouping.domain.page_event import PageEvent, PageEventKind
from neattabs.grouping.services.grouping_decision_engine import GroupingDecisionEngine
from neattabs.host.adapters.in_memory_browser_host import InMemoryBrowserHost
from neattabs.host.domain.host_errors import HostError
from neattabs.preferences.domain.grouping_preferences import GroupingPreferences
from neattabs.preferences.services.preferences_cache import GroupingPreferencesCache
from neattabs.preferences.store.preferences_store import InMemoryGroupingPreferencesStore

WINDOW = 1


# --- Helpers ---

def make_engine(host, preferences=None):
    cache = GroupingPreferencesCache(InMemoryGroupingPreferencesStore(preferences))
    return GroupingDecisionEngine(host, RotatingColorAllocator(), cache)


def event_for(page, kind=PageEventKind.CREATED):
    return PageEvent(page_id=page.id, window_id=page.window_id, address=page.address, kind=kind)


@pytest.fixture
def host():
    return InMemoryBrowserHost()


# --- Tests ---

def test_lone_page_is_deferred(host):
    engine = make_engine(host)
    page = host.open_page(WINDOW, "https://mail.google.com/inbox")

    intent = engine.on_page_event(event_for(page))

    assert intent.action == GroupingAction.NO_OP
    assert intent.reason == NoOpReason.LONE_PAGE


def test_second_matching_page_forms_group_with_both(host):
    engine = make_engine(host)
    first = host.open_page(WINDOW, "https://mail.google.com/inbox")
    host.open_page(WINDOW, "https://example.org/")
    second = host.open_page(WINDOW, "https://mail.google.com/u/1")

    intent = engine.on_page_event(event_for(second))

    assert intent.action == GroupingAction.FORM_GROUP
    assert set(intent.page_ids) == {first.id, second.id}
    assert intent.title == "Gmail"
    assert intent.color == GroupColor.BLUE


def test_existing_group_with_same_title_is_joined(host):
    engine = make_engine(host)
    a = host.open_page(WINDOW, "https://mail.google.com/a")
    b = host.open_page(WINDOW, "https://mail.google.com/b")
    group = host.add_group(WINDOW, "Gmail", "blue", [a.id, b.id])
    third = host.open_page(WINDOW, "https://mail.google.com/c")

    intent = engine.on_page_event(event_for(third))

    assert intent.action == GroupingAction.JOIN_GROUP
    assert intent.group_id == group.id
    assert intent.page_ids == (third.id,)


def test_group_in_other_window_is_not_joined(host):
    engine = make_engine(host)
    a = host.open_page(2, "https://mail.google.com/a")
    b = host.open_page(2, "https://mail.google.com/b")
    host.add_group(2, "Gmail", "blue", [a.id, b.id])
    lone = host.open_page(WINDOW, "https://mail.google.com/c")

    intent = engine.on_page_event(event_for(lone))

    assert intent.reason == NoOpReason.LONE_PAGE


def test_new_group_avoids_colors_in_use(host):
    engine = make_engine(host)
    a = host.open_page(WINDOW, "https://reddit.com/r/python")
    b = host.open_page(WINDOW, "https://www.reddit.com/r/rust")
    host.add_group(WINDOW, "Reddit", "blue", [a.id, b.id])
    c = host.open_page(WINDOW, "https://netflix.com/")
    d = host.open_page(WINDOW, "https://netflix.com/browse")
    host.add_group(WINDOW, "Netflix", "red", [c.id, d.id])
    host.open_page(WINDOW, "https://docs.python.org/3/")
    trigger = host.open_page(WINDOW, "https://www.python.org/")

    intent = engine.on_page_event(event_for(trigger))

    assert intent.action == GroupingAction.FORM_GROUP
    assert intent.title == "Python"
    assert intent.color == GroupColor.YELLOW


def test_disabled_preferences_short_circuit(host):
    engine = make_engine(host, GroupingPreferences(enabled=False))
    host.open_page(WINDOW, "https://mail.google.com/a")
    page = host.open_page(WINDOW, "https://mail.google.com/b")

    intent = engine.on_page_event(event_for(page))

    assert intent.reason == NoOpReason.DISABLED
    assert host.calls == []


def test_exception_substring_always_wins(host):
    engine = make_engine(host, GroupingPreferences(exceptions=("google.com",)))
    a = host.open_page(WINDOW, "https://mail.google.com/a")
    b = host.open_page(WINDOW, "https://mail.google.com/b")
    host.add_group(WINDOW, "Gmail", "blue", [a.id])
    page = host.open_page(WINDOW, "https://mail.google.com/c")

    assert engine.on_page_event(event_for(page)).reason == NoOpReason.EXCEPTED
    assert engine.on_page_event(event_for(b)).reason == NoOpReason.EXCEPTED


def test_exception_does_not_touch_other_hosts(host):
    engine = make_engine(host, GroupingPreferences(exceptions=("intranet",)))
    host.open_page(WINDOW, "https://github.com/a")
    page = host.open_page(WINDOW, "https://gist.github.com/b")

    intent = engine.on_page_event(event_for(page))

    # Gist has its own identity, so github.com is not a sibling
    assert intent.reason == NoOpReason.LONE_PAGE


def test_unclassifiable_address(host):
    engine = make_engine(host)
    page = host.open_page(WINDOW, "about:blank")

    intent = engine.on_page_event(event_for(page))

    assert intent.reason == NoOpReason.UNCLASSIFIABLE
    assert host.calls == []


def test_navigation_uses_event_address_for_triggering_page(host):
    engine = make_engine(host)
    host.open_page(WINDOW, "https://open.spotify.com/playlist/1")
    page = host.open_page(WINDOW, "https://example.org/")
    event = PageEvent(
        page_id=page.id,
        window_id=WINDOW,
        address="https://open.spotify.com/album/2",
        kind=PageEventKind.ADDRESS_CHANGED,
    )

    intent = engine.on_page_event(event)

    assert intent.action == GroupingAction.FORM_GROUP
    assert intent.title == "Spotify"
    assert page.id in intent.page_ids


def test_pages_without_address_are_not_candidates(host):
    engine = make_engine(host)
    host.open_page(WINDOW, None)
    page = host.open_page(WINDOW, "https://discord.com/channels")

    assert engine.on_page_event(event_for(page)).reason == NoOpReason.LONE_PAGE


def test_engine_never_mutates_host(host):
    engine = make_engine(host)
    host.open_page(WINDOW, "https://x.com/home")
    page = host.open_page(WINDOW, "https://x.com/explore")

    engine.on_page_event(event_for(page))

    assert set(host.calls) <= {"list_groups", "list_pages"}
    assert host.list_groups(WINDOW) == []


def test_host_query_failure_propagates(host):
    engine = make_engine(host)
    page = host.open_page(WINDOW, "https://x.com/home")
    host.failing_operations.add("list_groups")

    with pytest.raises(HostError):
        engine.on_page_event(event_for(page))
