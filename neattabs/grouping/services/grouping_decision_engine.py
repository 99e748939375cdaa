from typing import List, Optional

from neattabs.classification.interfaces.address_classifier import AddressClassifier
from neattabs.classification.services.address_classifier import StandardAddressClassifier, extract_hostname
from neattabs.coloring.interfaces.color_allocator import ColorAllocator
from neattabs.grouping.domain.grouping_intent import GroupingIntent, NoOpReason
from neattabs.grouping.domain.page_event import PageEvent
from neattabs.grouping.interfaces.grouping_engine import GroupingEngine
from neattabs.host.interfaces.browser_host import BrowserHost
from neattabs.preferences.services.preferences_cache import GroupingPreferencesCache

# A group is only formed once this many pages share an identity
MIN_GROUP_SIZE = 2


class GroupingDecisionEngine(GroupingEngine):
    """
    Decides join / form / defer for a page event.

    Steps:
    1. Preferences gate (disabled, or hostname matches an exception).
    2. Classification; unclassifiable pages stay ungrouped.
    3. Join an existing group whose title equals the identity.
    4. Otherwise collect every page in the window with the same identity and
       form a group once there are at least two of them.
    """

    def __init__(
        self,
        host: BrowserHost,
        allocator: ColorAllocator,
        preferences: GroupingPreferencesCache,
        classifier: Optional[AddressClassifier] = None,
    ):
        self.host = host
        self.allocator = allocator
        self.preferences = preferences
        self.classifier = classifier or StandardAddressClassifier()

    def on_page_event(self, event: PageEvent) -> GroupingIntent:
        window_id = event.window_id

        # 1. Preferences
        prefs = self.preferences.current()
        if not prefs.enabled:
            return GroupingIntent.no_op(window_id, NoOpReason.DISABLED)
        if prefs.is_excepted(extract_hostname(event.address)):
            return GroupingIntent.no_op(window_id, NoOpReason.EXCEPTED)

        # 2. Classification
        identity = self.classifier.classify(event.address)
        if not identity:
            return GroupingIntent.no_op(window_id, NoOpReason.UNCLASSIFIABLE)

        # 3. Existing group with the same title
        groups = self.host.list_groups(window_id)
        for group in groups:
            if group.title == identity:
                return GroupingIntent.join(window_id, group.id, event.page_id)

        # 4. Candidate set
        candidates = self._candidates(event, identity)
        if len(candidates) < MIN_GROUP_SIZE:
            return GroupingIntent.no_op(window_id, NoOpReason.LONE_PAGE)

        color = self.allocator.allocate(window_id, groups)
        return GroupingIntent.form(window_id, candidates, identity, color)

    def _candidates(self, event: PageEvent, identity: str) -> List[int]:
        candidates: List[int] = []
        seen_trigger = False
        for page in self.host.list_pages(event.window_id):
            if page.id == event.page_id:
                # The event carries the newest address of the triggering page
                seen_trigger = True
                candidates.append(page.id)
                continue
            if page.address and self.classifier.classify(page.address) == identity:
                candidates.append(page.id)
        if not seen_trigger:
            candidates.insert(0, event.page_id)
        return candidates
