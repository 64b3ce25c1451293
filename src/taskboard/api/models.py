from __future__ import annotations

from datetime import datetime
from typing import TypedDict

from ..models import TaskStatus


# PUBLIC_INTERFACE
class TaskEntity(TypedDict):
    """
    Stored representation of a task inside the store.

    Fields:
    - id: Opaque identifier (uuid4 hex), assigned on creation
    - title: Short title (1..200 chars, trimmed on input via schemas)
    - description: Free text, possibly empty
    - deadline: Aware UTC datetime; never changed after creation
    - status: Lifecycle status; ONGOING until completed or failed
    """

    id: str
    title: str
    description: str
    deadline: datetime
    status: TaskStatus
