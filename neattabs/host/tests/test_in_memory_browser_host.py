import pytest

from neattabs.host.adapters.in_memory_browser_host import InMemoryBrowserHost
from neattabs.host.domain.browser_state import UNGROUPED
from neattabs.host.domain.host_errors import HostApiError, HostNotFoundError


def test_group_pages_creates_group_in_first_page_window():
    host = InMemoryBrowserHost()
    a = host.open_page(3, "https://a.test/")
    b = host.open_page(3, "https://b.test/")

    group_id = host.group_pages([a.id, b.id])

    assert host.get_group(group_id).window_id == 3
    assert {p.id for p in host.list_group_pages(group_id)} == {a.id, b.id}
    assert host.get_page(a.id).grouped


def test_moving_last_page_out_drops_group():
    host = InMemoryBrowserHost()
    a = host.open_page(1, "https://a.test/")
    b = host.open_page(1, "https://b.test/")
    first = host.group_pages([a.id])
    second = host.group_pages([b.id])

    host.group_pages([a.id], group_id=second)

    with pytest.raises(HostNotFoundError):
        host.get_group(first)
    assert len(host.list_group_pages(second)) == 2


def test_ungroup_and_close_pages():
    host = InMemoryBrowserHost()
    a = host.open_page(1, "https://a.test/")
    b = host.open_page(1, "https://b.test/")
    group_id = host.group_pages([a.id, b.id])

    host.ungroup_pages([a.id])
    assert host.get_page(a.id).group_id == UNGROUPED

    host.close_pages([b.id])
    assert host.list_groups(1) == []
    assert [p.id for p in host.list_pages(1)] == [a.id]
    with pytest.raises(HostNotFoundError):
        host.update_group(group_id, title="Gone")


def test_activate_page_is_exclusive_per_window():
    host = InMemoryBrowserHost()
    a = host.open_page(1, "https://a.test/", active=True)
    b = host.open_page(1, "https://b.test/")
    other = host.open_page(2, "https://c.test/", active=True)

    host.activate_page(b.id)

    assert not host.get_page(a.id).active
    assert host.get_page(b.id).active
    assert host.get_page(other.id).active


def test_update_group_keeps_unset_fields():
    host = InMemoryBrowserHost()
    page = host.open_page(1, "https://a.test/")
    group = host.add_group(1, "A", "pink", [page.id])

    updated = host.update_group(group.id, title="Renamed")

    assert updated.title == "Renamed"
    assert updated.color == "pink"


def test_unknown_ids_raise_not_found():
    host = InMemoryBrowserHost()

    with pytest.raises(HostNotFoundError) as exc_info:
        host.group_pages([42])
    assert exc_info.value.status_code == 404


def test_failing_operations_raise_api_error_and_are_recorded():
    host = InMemoryBrowserHost()
    host.failing_operations.add("list_pages")

    with pytest.raises(HostApiError):
        host.list_pages(1)
    assert host.calls == ["list_pages"]


def test_close_window_forgets_pages_and_groups():
    host = InMemoryBrowserHost()
    page = host.open_page(1, "https://a.test/")
    host.group_pages([page.id])

    host.close_window(1)

    assert host.list_pages(1) == []
    assert host.list_groups(1) == []


def test_close_pages_tolerates_duplicate_ids():
    host = InMemoryBrowserHost()
    a = host.open_page(1, "https://a.test/")
    b = host.open_page(1, "https://b.test/")

    host.close_pages([a.id, a.id])

    assert [p.id for p in host.list_pages(1)] == [b.id]
