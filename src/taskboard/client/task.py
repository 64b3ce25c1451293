from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError

from ..models import TaskStatus, ensure_utc
from .errors import ParseError


# PUBLIC_INTERFACE
class Task(BaseModel):
    """
    A task as seen by the client.

    The deadline is kept as an absolute UTC instant; localized text is only
    produced at render time (see taskboard.client.deadline). Instances are
    immutable: the board replaces the whole list on each refresh.
    """

    model_config = ConfigDict(frozen=True, extra="ignore")

    id: str = Field(..., min_length=1)
    title: str
    description: str = ""
    deadline: datetime
    status: TaskStatus = TaskStatus.ONGOING

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    @field_validator("deadline")
    @classmethod
    def normalize_deadline(cls, v: datetime) -> datetime:
        return ensure_utc(v)

    @field_validator("status", mode="before")
    @classmethod
    def parse_status(cls, v: Any) -> TaskStatus:
        if isinstance(v, TaskStatus):
            return v
        return TaskStatus.from_wire(v)


@dataclass(frozen=True)
class TaskDraft:
    """What the presentation layer submits when the user adds a task."""

    title: str
    description: str
    deadline: datetime


_TASK_LIST = TypeAdapter(List[Task])


def parse_task(payload: Any) -> Task:
    """
    Validate a single task payload.

    Raises:
        ParseError: the payload is not a valid task.
    """
    try:
        return Task.model_validate(payload)
    except PydanticValidationError as e:
        raise ParseError(f"malformed task: {e.error_count()} error(s)") from e


def parse_task_list(payload: Any) -> List[Task]:
    """
    Validate a list response. Anything but a JSON array of valid tasks is rejected.

    Raises:
        ParseError: the payload is not a list, or one of its items is malformed.
    """
    if not isinstance(payload, list):
        raise ParseError(f"expected a JSON array of tasks, got {type(payload).__name__}")
    try:
        return _TASK_LIST.validate_python(payload)
    except PydanticValidationError as e:
        raise ParseError(f"malformed task list: {e.error_count()} error(s)") from e
