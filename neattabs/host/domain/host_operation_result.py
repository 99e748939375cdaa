from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any, Dict, List


class HostOperationStatus(Enum):
    SUCCESS = "SUCCESS"
    FAILED = "FAILED"
    REJECTED = "REJECTED"


class HostFailureType(Enum):
    """
    Categorizes the source of the failure or rejection.
    """
    POLICY = "POLICY"  # Refused before reaching the host (e.g., invalid request)
    ENVIRONMENT = "ENVIRONMENT"  # Host unreachable or refused the operation
    NOT_FOUND = "NOT_FOUND"  # Page/group/window id unknown to the host
    INTERNAL = "INTERNAL"  # Unexpected error on our side
    NONE = "NONE"  # No failure (Success)


@dataclass(frozen=True)
class HostOperationResult:
    """
    Outcome of driving the host: WHAT HAPPENED, not what was decided.
    """
    status: HostOperationStatus
    timestamp: datetime

    # Effects produced in the browser (e.g., "group_created", "pages_closed")
    effects: List[str] = field(default_factory=list)

    # Identifiers and values observed while executing (e.g., "group_id")
    observations: Dict[str, Any] = field(default_factory=dict)

    failure_type: HostFailureType = HostFailureType.NONE
    reason: str = ""

    @property
    def ok(self) -> bool:
        return self.status == HostOperationStatus.SUCCESS

    def to_payload(self) -> Dict[str, Any]:
        return {
            "status": self.status.value,
            "effects": list(self.effects),
            "observations": dict(self.observations),
            "failure_type": self.failure_type.value,
            "reason": self.reason,
        }
