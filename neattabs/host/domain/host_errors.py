from dataclasses import dataclass


class HostError(Exception):
    """Base class for browser host failures."""
    pass


@dataclass
class HostApiError(HostError):
    """The host rejected an operation."""
    status_code: int
    description: str

    def __str__(self) -> str:
        return f"{self.status_code}: {self.description}"


class HostNotFoundError(HostApiError):
    """Page, group or window id unknown to the host."""
    pass


class HostNetworkError(HostError):
    """Host bridge unreachable or returned garbage."""
    pass
