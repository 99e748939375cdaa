from neattabs.host.adapters.in_memory_browser_host import InMemoryBrowserHost
from neattabs.host.domain.browser_state import UNGROUPED
from neattabs.host.domain.host_operation_result import HostFailureType, HostOperationStatus
from neattabs.navigation.services.group_actions_service import GroupActionsService


def _grouped_window():
    host = InMemoryBrowserHost()
    a = host.open_page(1, "https://mail.google.com/a")
    b = host.open_page(1, "https://mail.google.com/b")
    loose = host.open_page(1, "https://example.org/")
    group = host.add_group(1, "Gmail", "blue", [a.id, b.id])
    return host, group, a, b, loose


def test_switch_to_page():
    host, _, a, _, _ = _grouped_window()

    result = GroupActionsService(host).switch_to_page(a.id)

    assert result.ok
    assert result.effects == ["page_activated"]
    assert host.get_page(a.id).active


def test_switch_to_missing_page_is_not_found():
    host, _, _, _, _ = _grouped_window()

    result = GroupActionsService(host).switch_to_page(999)

    assert result.status == HostOperationStatus.FAILED
    assert result.failure_type == HostFailureType.NOT_FOUND


def test_close_page_and_empty_close_is_rejected():
    host, _, _, _, loose = _grouped_window()
    actions = GroupActionsService(host)

    assert actions.close_page(loose.id).ok
    assert len(host.list_pages(1)) == 2
    assert actions.close_pages([]).status == HostOperationStatus.REJECTED


def test_ungroup_pages_removes_group():
    host, group, a, b, _ = _grouped_window()

    result = GroupActionsService(host).ungroup_pages([a.id, b.id])

    assert result.ok
    assert host.list_groups(1) == []
    assert host.get_page(a.id).group_id == UNGROUPED


def test_update_group_color():
    host, group, _, _, _ = _grouped_window()
    actions = GroupActionsService(host)

    assert actions.update_group_color(group.id, "Purple").ok
    assert host.get_group(group.id).color == "purple"

    rejected = actions.update_group_color(group.id, "magenta")
    assert rejected.status == HostOperationStatus.REJECTED
    assert host.get_group(group.id).color == "purple"


def test_ungroup_page_from_context_menu():
    host, group, a, b, loose = _grouped_window()
    actions = GroupActionsService(host)

    assert actions.ungroup_page(1, a.id).ok
    assert host.get_page(a.id).group_id == UNGROUPED
    assert host.get_page(b.id).group_id == group.id

    assert actions.ungroup_page(1, loose.id).status == HostOperationStatus.REJECTED


def test_close_page_group_closes_every_member():
    host, _, a, _, loose = _grouped_window()
    actions = GroupActionsService(host)

    result = actions.close_page_group(1, a.id)

    assert result.ok
    assert [p.id for p in host.list_pages(1)] == [loose.id]
    assert host.list_groups(1) == []


def test_context_menu_actions_reject_unknown_page():
    host, _, _, _, _ = _grouped_window()
    actions = GroupActionsService(host)

    assert actions.close_page_group(1, 999).status == HostOperationStatus.REJECTED
    assert actions.close_page_group(1, 999).failure_type == HostFailureType.POLICY


def test_host_failure_surfaces_as_environment_failure():
    host, _, a, _, _ = _grouped_window()
    host.failing_operations.add("list_pages")

    result = GroupActionsService(host).ungroup_page(1, a.id)

    assert result.status == HostOperationStatus.FAILED
    assert result.failure_type == HostFailureType.ENVIRONMENT
