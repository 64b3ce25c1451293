from .board import BusyFlag, TaskBoard
from .classifier import BUCKET_LABELS, classify_tasks
from .deadline import DeadlineStatus, describe_time_status, evaluate_deadline, format_local_deadline
from .errors import ConflictError, NotFoundError, ParseError, SyncError, TransportError, ValidationError
from .poller import PollScheduler
from .sync import TaskSyncClient
from .task import Task, TaskDraft

__all__ = [
    "BUCKET_LABELS",
    "BusyFlag",
    "ConflictError",
    "DeadlineStatus",
    "NotFoundError",
    "ParseError",
    "PollScheduler",
    "SyncError",
    "Task",
    "TaskBoard",
    "TaskDraft",
    "TaskSyncClient",
    "TransportError",
    "ValidationError",
    "classify_tasks",
    "describe_time_status",
    "evaluate_deadline",
    "format_local_deadline",
]
