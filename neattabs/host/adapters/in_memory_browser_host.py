from dataclasses import replace
from itertools import count
from threading import RLock
from typing import Dict, Iterable, List, Optional, Sequence, Set

from neattabs.host.domain.browser_state import UNGROUPED, PageView, TabGroupView
from neattabs.host.domain.host_errors import HostApiError, HostNotFoundError
from neattabs.host.interfaces.browser_host import BrowserHost


class InMemoryBrowserHost(BrowserHost):
    """
    In-process browser model used for tests and local simulation.
    Follows the browser's membership rules: a group left without pages disappears.
    """

    def __init__(self):
        self._pages: Dict[int, PageView] = {}
        self._groups: Dict[int, TabGroupView] = {}
        self._page_ids = count(1)
        self._group_ids = count(1)
        self._lock = RLock()
        self.failing_operations: Set[str] = set()
        self.calls: List[str] = []

    # --- Simulation helpers ---

    def open_page(self, window_id: int, address: Optional[str], active: bool = False, title: str = "") -> PageView:
        with self._lock:
            page = PageView(id=next(self._page_ids), window_id=window_id, address=address, title=title)
            self._pages[page.id] = page
            if active:
                self._activate(page.id)
            return self._pages[page.id]

    def navigate(self, page_id: int, address: str) -> PageView:
        with self._lock:
            page = self._require_page(page_id)
            self._pages[page_id] = replace(page, address=address)
            return self._pages[page_id]

    def close_window(self, window_id: int) -> None:
        with self._lock:
            for page_id in [p.id for p in self._pages.values() if p.window_id == window_id]:
                del self._pages[page_id]
            for group_id in [g.id for g in self._groups.values() if g.window_id == window_id]:
                del self._groups[group_id]

    def get_page(self, page_id: int) -> PageView:
        with self._lock:
            return self._require_page(page_id)

    def get_group(self, group_id: int) -> TabGroupView:
        with self._lock:
            return self._require_group(group_id)

    def add_group(self, window_id: int, title: str, color: str, page_ids: Iterable[int] = ()) -> TabGroupView:
        with self._lock:
            group = TabGroupView(id=next(self._group_ids), window_id=window_id, title=title, color=color)
            self._groups[group.id] = group
            for page_id in page_ids:
                self._pages[page_id] = replace(self._require_page(page_id), group_id=group.id)
            return group

    # --- Queries ---

    def list_groups(self, window_id: int) -> List[TabGroupView]:
        self._record("list_groups")
        with self._lock:
            return [g for g in self._groups.values() if g.window_id == window_id]

    def list_pages(self, window_id: int) -> List[PageView]:
        self._record("list_pages")
        with self._lock:
            return [p for p in self._pages.values() if p.window_id == window_id]

    def list_group_pages(self, group_id: int) -> List[PageView]:
        self._record("list_group_pages")
        with self._lock:
            return [p for p in self._pages.values() if p.group_id == group_id]

    # --- Mutations ---

    def group_pages(self, page_ids: Sequence[int], group_id: Optional[int] = None) -> int:
        self._record("group_pages")
        with self._lock:
            pages = [self._require_page(page_id) for page_id in page_ids]
            if not pages:
                raise HostApiError(400, "No pages to group")
            if group_id is None:
                group = TabGroupView(id=next(self._group_ids), window_id=pages[0].window_id)
                self._groups[group.id] = group
            else:
                group = self._require_group(group_id)
            for page in pages:
                self._pages[page.id] = replace(page, group_id=group.id, window_id=group.window_id)
            self._drop_empty_groups()
            return group.id

    def update_group(self, group_id: int, title: Optional[str] = None, color: Optional[str] = None) -> TabGroupView:
        self._record("update_group")
        with self._lock:
            group = self._require_group(group_id)
            if title is not None:
                group = replace(group, title=title)
            if color is not None:
                group = replace(group, color=color)
            self._groups[group_id] = group
            return group

    def ungroup_pages(self, page_ids: Sequence[int]) -> None:
        self._record("ungroup_pages")
        with self._lock:
            for page_id in page_ids:
                self._pages[page_id] = replace(self._require_page(page_id), group_id=UNGROUPED)
            self._drop_empty_groups()

    def close_pages(self, page_ids: Sequence[int]) -> None:
        self._record("close_pages")
        with self._lock:
            unique_ids = list(dict.fromkeys(page_ids))
            for page_id in unique_ids:
                self._require_page(page_id)
            for page_id in unique_ids:
                del self._pages[page_id]
            self._drop_empty_groups()

    def activate_page(self, page_id: int) -> None:
        self._record("activate_page")
        with self._lock:
            self._activate(page_id)

    # --- Internals ---

    def _record(self, operation: str) -> None:
        self.calls.append(operation)
        if operation in self.failing_operations:
            raise HostApiError(500, f"{operation} failed")

    def _activate(self, page_id: int) -> None:
        target = self._require_page(page_id)
        for page in list(self._pages.values()):
            if page.window_id == target.window_id:
                self._pages[page.id] = replace(page, active=page.id == page_id)

    def _drop_empty_groups(self) -> None:
        in_use = {p.group_id for p in self._pages.values()}
        for group_id in [g for g in self._groups if g not in in_use]:
            del self._groups[group_id]

    def _require_page(self, page_id: int) -> PageView:
        page = self._pages.get(page_id)
        if page is None:
            raise HostNotFoundError(404, f"No page with id {page_id}")
        return page

    def _require_group(self, group_id: int) -> TabGroupView:
        group = self._groups.get(group_id)
        if group is None:
            raise HostNotFoundError(404, f"No group with id {group_id}")
        return group
