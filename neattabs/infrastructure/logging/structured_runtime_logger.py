import json
import logging
from datetime import datetime, timezone
from typing import Any, Dict, Optional


class StructuredRuntimeLogger:
    """
    JSON-lines logger for session/dispatcher/bridge paths.
    Every record carries a UTC timestamp and an event_type.
    """

    def __init__(self, logger: Optional[logging.Logger] = None, **context: Any):
        self._logger = logger or logging.getLogger("neattabs.runtime")
        self._context: Dict[str, Any] = dict(context)

    def bind(self, **context: Any) -> "StructuredRuntimeLogger":
        merged = dict(self._context)
        merged.update(context)
        return StructuredRuntimeLogger(self._logger, **merged)

    def emit(self, event_type: str, level: int = logging.INFO, **fields: Any) -> None:
        payload: Dict[str, Any] = {
            "timestamp": datetime.now(timezone.utc).isoformat(),
            "event_type": event_type,
        }
        payload.update(self._context)
        payload.update(fields)
        self._logger.log(level, json.dumps(payload, default=str, ensure_ascii=True))

    def warning(self, event_type: str, **fields: Any) -> None:
        self.emit(event_type, level=logging.WARNING, **fields)
