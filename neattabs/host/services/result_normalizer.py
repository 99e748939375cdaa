from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from neattabs.host.domain.host_errors import HostError, HostNotFoundError
from neattabs.host.domain.host_operation_result import (
    HostFailureType,
    HostOperationResult,
    HostOperationStatus,
)


class HostResultNormalizer:
    """
    Normalizes host outcomes and host exceptions into HostOperationResult objects.
    """

    @staticmethod
    def success(
            effects: List[str],
            observations: Optional[Dict[str, Any]] = None,
            timestamp: Optional[datetime] = None
    ) -> HostOperationResult:
        return HostOperationResult(
            status=HostOperationStatus.SUCCESS,
            timestamp=timestamp or datetime.now(timezone.utc),
            effects=effects,
            observations=observations or {},
            failure_type=HostFailureType.NONE
        )

    @staticmethod
    def failure(
            reason: str,
            failure_type: HostFailureType = HostFailureType.ENVIRONMENT,
            effects: Optional[List[str]] = None,
            timestamp: Optional[datetime] = None
    ) -> HostOperationResult:
        return HostOperationResult(
            status=HostOperationStatus.FAILED,
            timestamp=timestamp or datetime.now(timezone.utc),
            effects=effects or [],
            failure_type=failure_type,
            reason=reason
        )

    @staticmethod
    def rejection(
            reason: str,
            timestamp: Optional[datetime] = None
    ) -> HostOperationResult:
        return HostOperationResult(
            status=HostOperationStatus.REJECTED,
            timestamp=timestamp or datetime.now(timezone.utc),
            failure_type=HostFailureType.POLICY,
            reason=reason
        )

    @classmethod
    def from_exception(cls, exc: Exception, effects: Optional[List[str]] = None) -> HostOperationResult:
        if isinstance(exc, HostNotFoundError):
            return cls.failure(f"Host object not found: {exc}", HostFailureType.NOT_FOUND, effects)
        if isinstance(exc, HostError):
            return cls.failure(f"Host error: {exc}", HostFailureType.ENVIRONMENT, effects)
        return cls.failure(f"Unexpected error: {exc}", HostFailureType.INTERNAL, effects)
