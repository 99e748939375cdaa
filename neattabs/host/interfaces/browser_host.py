from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from neattabs.host.domain.browser_state import PageView, TabGroupView


class BrowserHost(ABC):
    """
    Surface of the browser that owns windows, pages and groups.
    Implementations raise HostError subclasses on failure; they never retry
    on behalf of the caller.
    """

    # --- Queries ---

    @abstractmethod
    def list_groups(self, window_id: int) -> List[TabGroupView]:
        """Groups of a window, in window order."""
        pass

    @abstractmethod
    def list_pages(self, window_id: int) -> List[PageView]:
        """Pages of a window, in window order."""
        pass

    @abstractmethod
    def list_group_pages(self, group_id: int) -> List[PageView]:
        pass

    # --- Mutations ---

    @abstractmethod
    def group_pages(self, page_ids: Sequence[int], group_id: Optional[int] = None) -> int:
        """
        Add pages to group_id, or create a new group from them when group_id is None.
        Returns the id of the group the pages ended up in.
        """
        pass

    @abstractmethod
    def update_group(self, group_id: int, title: Optional[str] = None, color: Optional[str] = None) -> TabGroupView:
        pass

    @abstractmethod
    def ungroup_pages(self, page_ids: Sequence[int]) -> None:
        pass

    @abstractmethod
    def close_pages(self, page_ids: Sequence[int]) -> None:
        pass

    @abstractmethod
    def activate_page(self, page_id: int) -> None:
        pass
