from __future__ import annotations

from typing import Optional


# PUBLIC_INTERFACE
class SyncError(Exception):
    """
    Base class for every failure reported by the task sync client.

    Callers at the rendering boundary catch this one type; the subclasses
    say what went wrong.
    """

    def __init__(self, message: str, *, status_code: Optional[int] = None) -> None:
        super().__init__(message)
        self.status_code = status_code


class ValidationError(SyncError):
    """The task draft was rejected (locally or by the store)."""


class TransportError(SyncError):
    """The store could not be reached or answered with a server failure."""


class NotFoundError(SyncError):
    """The operation targeted a task that no longer exists."""


class ConflictError(SyncError):
    """The task is in a state that forbids the operation (e.g. completing a failed task)."""


class ParseError(SyncError):
    """The store answered with a body that is not a valid task payload."""
