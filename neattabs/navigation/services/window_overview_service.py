from typing import Dict, List

from neattabs.host.domain.browser_state import PageView
from neattabs.host.interfaces.browser_host import BrowserHost
from neattabs.navigation.domain.window_overview import GroupSummary, PageSummary, WindowOverview


def _summary(page: PageView) -> PageSummary:
    return PageSummary(
        id=page.id,
        title=page.title,
        address=page.address,
        fav_icon_url=page.fav_icon_url,
        active=page.active,
    )


class WindowOverviewService:
    """
    Builds the display snapshot for a window. Read-only.
    """

    def __init__(self, host: BrowserHost):
        self.host = host

    def snapshot(self, window_id: int) -> WindowOverview:
        pages = self.host.list_pages(window_id)
        groups = self.host.list_groups(window_id)

        by_group: Dict[int, List[PageSummary]] = {group.id: [] for group in groups}
        ungrouped: List[PageSummary] = []
        active_page_id = None
        for page in pages:
            if page.active:
                active_page_id = page.id
            if page.grouped and page.group_id in by_group:
                by_group[page.group_id].append(_summary(page))
            else:
                ungrouped.append(_summary(page))

        return WindowOverview(
            window_id=window_id,
            groups=tuple(
                GroupSummary(
                    id=group.id,
                    title=group.title,
                    color=group.color,
                    collapsed=group.collapsed,
                    pages=tuple(by_group[group.id]),
                )
                for group in groups
            ),
            ungrouped_pages=tuple(ungrouped),
            active_page_id=active_page_id,
        )
