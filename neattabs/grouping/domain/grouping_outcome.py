from dataclasses import dataclass
from typing import Any, Dict, Optional

from neattabs.grouping.domain.grouping_intent import GroupingIntent
from neattabs.grouping.domain.page_event import PageEvent
from neattabs.host.domain.host_operation_result import HostOperationResult


@dataclass(frozen=True)
class GroupingOutcome:
    """
    What happened to one page event: the decision and, if one was made, its execution.
    """
    event: PageEvent
    intent: GroupingIntent
    result: Optional[HostOperationResult] = None

    @property
    def applied(self) -> bool:
        return not self.intent.is_noop and self.result is not None and self.result.ok

    def to_payload(self) -> Dict[str, Any]:
        payload = self.intent.to_payload()
        payload["page_id"] = self.event.page_id
        payload["applied"] = self.applied
        if self.result is not None and not self.result.ok:
            payload["failure"] = self.result.reason
        return payload
