from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

from ..models import ensure_utc


def _parse_deadline(value: object) -> datetime:
    """
    Internal helper to normalize deadline input into an aware UTC datetime.
    - If value is a string, parse it as ISO8601 ('Z' suffix accepted).
    - Naive values are taken to be UTC.
    """
    if isinstance(value, datetime):
        return ensure_utc(value)

    if isinstance(value, str):
        s = value.strip()
        if s.endswith("Z"):
            s = s[:-1] + "+00:00"
        try:
            return ensure_utc(datetime.fromisoformat(s))
        except ValueError as e:
            raise ValueError(
                "Invalid deadline format. Use an ISO8601 datetime string (e.g., '2025-01-31T13:45:00Z')."
            ) from e

    raise ValueError("Invalid type for deadline; expected an ISO8601 datetime string.")


# PUBLIC_INTERFACE
class TaskCreate(BaseModel):
    """
    Schema for creating a new task. New tasks never carry a status.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Submit report",
                "description": "Quarterly numbers",
                "deadline": "2025-02-01T17:00:00Z",
            }
        }
    )

    title: str = Field(..., description="Short title for the task", min_length=1, max_length=200)
    description: str = Field(default="", description="Optional detailed description")
    deadline: datetime = Field(..., description="Deadline as an ISO8601 instant; naive values are UTC")

    @field_validator("title")
    @classmethod
    def validate_title(cls, v: str) -> str:
        """
        Strip whitespace and enforce 1..200 length.
        """
        s = v.strip()
        if not (1 <= len(s) <= 200):
            raise ValueError("title length must be between 1 and 200 characters")
        return s

    @field_validator("description", mode="before")
    @classmethod
    def default_description(cls, v: Optional[str]) -> str:
        return "" if v is None else v

    @field_validator("deadline", mode="before")
    @classmethod
    def parse_deadline(cls, v: object) -> datetime:
        """
        Normalize deadline from str/datetime to an aware UTC datetime.
        """
        return _parse_deadline(v)


# PUBLIC_INTERFACE
class TaskOut(BaseModel):
    """
    Schema returned by the API for a task.
    """

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "id": "5f0c2a7e9b8d4c1e8a6f3b2d1c0e9f8a",
                "title": "Submit report",
                "description": "Quarterly numbers",
                "deadline": "2025-02-01T17:00:00Z",
                "status": None,
            }
        }
    )

    id: str = Field(..., description="Unique identifier of the task")
    title: str = Field(..., description="Short title for the task")
    description: str = Field(default="", description="Detailed description, possibly empty")
    deadline: datetime = Field(..., description="Deadline as an ISO8601 UTC instant")
    status: Optional[Literal["success", "failure"]] = Field(
        default=None, description="null while ongoing, then 'success' or 'failure'"
    )

    @field_serializer("deadline")
    def serialize_deadline(self, value: datetime) -> str:
        return ensure_utc(value).isoformat().replace("+00:00", "Z")
