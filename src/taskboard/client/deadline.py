"""
Deadline evaluation.

These functions are pure and cheap so they can run on every render: "now"
keeps moving, so remaining time is never cached on the task.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta, tzinfo
from typing import Optional

from ..models import ensure_utc, utc_now

LOCAL_DEADLINE_FORMAT = "%d-%m-%Y %H:%M"

_MINUTE = timedelta(minutes=1)


@dataclass(frozen=True)
class DeadlineStatus:
    is_past_deadline: bool
    minutes_left: int


# PUBLIC_INTERFACE
def evaluate_deadline(deadline: datetime, now: Optional[datetime] = None) -> DeadlineStatus:
    """
    Compare a deadline with the current instant.

    Args:
        deadline: Absolute deadline. Naive values are taken as UTC.
        now: Instant to evaluate at; defaults to the current UTC time.

    Returns:
        DeadlineStatus where minutes_left = floor((deadline - now) / 1 minute),
        clamped to 0. A deadline equal to now counts as passed.
    """
    current = utc_now() if now is None else ensure_utc(now)
    remaining = ensure_utc(deadline) - current
    if remaining <= timedelta(0):
        return DeadlineStatus(is_past_deadline=True, minutes_left=0)
    return DeadlineStatus(is_past_deadline=False, minutes_left=remaining // _MINUTE)


def describe_time_status(deadline: datetime, now: Optional[datetime] = None) -> str:
    status = evaluate_deadline(deadline, now)
    if status.is_past_deadline:
        return "Deadline passed"
    return f"{status.minutes_left} min left"


def format_local_deadline(deadline: datetime, tz: Optional[tzinfo] = None) -> str:
    """Render a deadline in the given timezone, or the machine's local one when tz is None."""
    return ensure_utc(deadline).astimezone(tz).strftime(LOCAL_DEADLINE_FORMAT)
