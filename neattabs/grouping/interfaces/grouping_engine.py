from abc import ABC, abstractmethod

from neattabs.grouping.domain.grouping_intent import GroupingIntent
from neattabs.grouping.domain.page_event import PageEvent


class GroupingEngine(ABC):
    """
    Interface for deciding what a page event should do to the window's groups.
    Reads host snapshots but never mutates the host.
    Host query failures propagate to the caller.
    """
    @abstractmethod
    def on_page_event(self, event: PageEvent) -> GroupingIntent:
        pass
