from __future__ import annotations

from datetime import datetime, timezone
from enum import Enum
from typing import Optional


# PUBLIC_INTERFACE
class TaskStatus(str, Enum):
    """
    Lifecycle bucket of a task.

    On the wire an ongoing task carries no status at all (absent or null);
    finished tasks carry "success" or "failure". The enum makes the ongoing
    case explicit so callers never have to test for a missing value.
    """

    ONGOING = "ongoing"
    SUCCESS = "success"
    FAILURE = "failure"

    @classmethod
    def from_wire(cls, raw: Optional[str]) -> "TaskStatus":
        """
        Map a wire status to the enum.

        Raises:
            ValueError: for any value other than absent, "success" or "failure".
        """
        if raw is None or raw == "":
            return cls.ONGOING
        if raw == cls.SUCCESS.value:
            return cls.SUCCESS
        if raw == cls.FAILURE.value:
            return cls.FAILURE
        raise ValueError(f"unknown task status: {raw!r}")

    def to_wire(self) -> Optional[str]:
        """Return the wire form: None for ongoing, the value otherwise."""
        return None if self is TaskStatus.ONGOING else self.value


# PUBLIC_INTERFACE
def ensure_utc(value: datetime) -> datetime:
    """
    Normalize a datetime to an aware UTC instant.
    Naive values are taken to already be in UTC (the wire convention).
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)
