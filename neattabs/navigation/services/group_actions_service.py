from typing import Callable, Sequence

from neattabs.coloring.domain.group_color import GroupColor
from neattabs.host.domain.host_operation_result import HostOperationResult
from neattabs.host.interfaces.browser_host import BrowserHost
from neattabs.host.services.result_normalizer import HostResultNormalizer


class GroupActionsService:
    """
    Popup and context-menu actions on pages and groups.
    Each action is a thin pass-through to the host, normalized into a HostOperationResult.
    """

    def __init__(self, host: BrowserHost):
        self.host = host

    # --- Popup actions ---

    def switch_to_page(self, page_id: int) -> HostOperationResult:
        return self._run(["page_activated"], lambda: self.host.activate_page(page_id))

    def close_page(self, page_id: int) -> HostOperationResult:
        return self.close_pages([page_id])

    def close_pages(self, page_ids: Sequence[int]) -> HostOperationResult:
        if not page_ids:
            return HostResultNormalizer.rejection(reason="No pages given")
        return self._run(["pages_closed"], lambda: self.host.close_pages(list(page_ids)))

    def ungroup_pages(self, page_ids: Sequence[int]) -> HostOperationResult:
        if not page_ids:
            return HostResultNormalizer.rejection(reason="No pages given")
        return self._run(["pages_ungrouped"], lambda: self.host.ungroup_pages(list(page_ids)))

    def update_group_color(self, group_id: int, color: str) -> HostOperationResult:
        parsed = GroupColor.parse(color)
        if parsed is None:
            return HostResultNormalizer.rejection(reason=f"Unknown group color: {color}")
        return self._run(["group_recolored"], lambda: self.host.update_group(group_id, color=parsed.value))

    # --- Context-menu actions (target: a page) ---

    def ungroup_page(self, window_id: int, page_id: int) -> HostOperationResult:
        page = self._find_page(window_id, page_id)
        if isinstance(page, HostOperationResult):
            return page
        if not page.grouped:
            return HostResultNormalizer.rejection(reason=f"Page {page_id} is not in a group")
        return self.ungroup_pages([page_id])

    def close_page_group(self, window_id: int, page_id: int) -> HostOperationResult:
        page = self._find_page(window_id, page_id)
        if isinstance(page, HostOperationResult):
            return page
        if not page.grouped:
            return HostResultNormalizer.rejection(reason=f"Page {page_id} is not in a group")
        try:
            members = [p.id for p in self.host.list_group_pages(page.group_id)]
        except Exception as e:
            return HostResultNormalizer.from_exception(e)
        return self.close_pages(members)

    # --- Internals ---

    def _find_page(self, window_id: int, page_id: int):
        try:
            pages = self.host.list_pages(window_id)
        except Exception as e:
            return HostResultNormalizer.from_exception(e)
        for page in pages:
            if page.id == page_id:
                return page
        return HostResultNormalizer.rejection(reason=f"Page {page_id} not found in window {window_id}")

    @staticmethod
    def _run(effects, operation: Callable[[], object]) -> HostOperationResult:
        try:
            operation()
        except Exception as e:
            return HostResultNormalizer.from_exception(e)
        return HostResultNormalizer.success(effects=effects)
