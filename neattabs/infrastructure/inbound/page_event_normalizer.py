from typing import Any, Dict, Optional

from neattabs.grouping.domain.page_event import PageEvent, PageEventKind


class PageEventNormalizer:
    """
    Pure service. Normalizes raw browser tab events into PageEvents.
    Events without an address are not grouping events and yield None.
    """

    def normalize(self, payload: Dict[str, Any], kind: PageEventKind) -> Optional[PageEvent]:
        tab = payload.get("tab") if isinstance(payload.get("tab"), dict) else payload

        address = payload.get("address") or payload.get("url") or tab.get("url")
        if kind == PageEventKind.ADDRESS_CHANGED:
            # Only a changed url counts, not title/status/favicon updates
            change_info = payload.get("changeInfo")
            if isinstance(change_info, dict):
                address = change_info.get("url")
        if not address or not isinstance(address, str):
            return None

        page_id = payload.get("page_id", tab.get("id"))
        window_id = payload.get("window_id", tab.get("windowId"))
        if page_id is None or window_id is None:
            raise ValueError("page_id and window_id are required")

        return PageEvent(
            page_id=int(page_id),
            window_id=int(window_id),
            address=address,
            kind=kind,
        )
