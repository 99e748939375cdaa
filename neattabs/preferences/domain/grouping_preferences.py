from dataclasses import dataclass, field, replace
from typing import Any, Dict, Iterable, Optional, Tuple

DEFAULT_SENSITIVITY = "balanced"


def _normalize_exceptions(raw: Optional[Iterable[Any]]) -> Tuple[str, ...]:
    if raw is None or isinstance(raw, str):
        raw = [raw] if raw else []
    cleaned = []
    for item in raw:
        value = str(item).strip() if item is not None else ""
        if value and value not in cleaned:
            cleaned.append(value)
    return tuple(cleaned)


@dataclass(frozen=True)
class GroupingPreferences:
    """
    User-controlled grouping options.
    sensitivity and custom_colors are stored but not consulted by any decision.
    """
    enabled: bool = True
    exceptions: Tuple[str, ...] = ()
    sensitivity: str = DEFAULT_SENSITIVITY
    custom_colors: Dict[str, str] = field(default_factory=dict)

    def is_excepted(self, hostname: Optional[str]) -> bool:
        if not hostname:
            return False
        return any(exception in hostname for exception in self.exceptions)

    def with_changes(self, **changes: Any) -> "GroupingPreferences":
        return GroupingPreferences.from_payload({**self.to_payload(), **changes})

    @classmethod
    def from_payload(cls, payload: Optional[Dict[str, Any]]) -> "GroupingPreferences":
        payload = payload or {}
        enabled = payload.get("enabled", True)
        custom_colors = payload.get("custom_colors", payload.get("customColors")) or {}
        return cls(
            # Only an explicit false disables grouping
            enabled=enabled is not False,
            exceptions=_normalize_exceptions(payload.get("exceptions")),
            sensitivity=str(payload.get("sensitivity") or DEFAULT_SENSITIVITY),
            custom_colors={str(k): str(v) for k, v in dict(custom_colors).items()},
        )

    def to_payload(self) -> Dict[str, Any]:
        return {
            "enabled": self.enabled,
            "exceptions": list(self.exceptions),
            "sensitivity": self.sensitivity,
            "custom_colors": dict(self.custom_colors),
        }


DEFAULT_PREFERENCES = GroupingPreferences()


def defaults() -> GroupingPreferences:
    return replace(DEFAULT_PREFERENCES, custom_colors={})
