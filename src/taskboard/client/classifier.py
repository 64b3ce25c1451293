from __future__ import annotations

from typing import Dict, Iterable, List

from ..models import TaskStatus
from .task import Task

BUCKET_LABELS: Dict[TaskStatus, str] = {
    TaskStatus.ONGOING: "Ongoing",
    TaskStatus.SUCCESS: "Completed On Time",
    TaskStatus.FAILURE: "Failed",
}


# PUBLIC_INTERFACE
def classify_tasks(tasks: Iterable[Task]) -> Dict[TaskStatus, List[Task]]:
    """
    Partition tasks into the three lifecycle buckets.

    Every bucket is present even when empty, and tasks keep their relative
    order inside a bucket. Keys are TaskStatus members, which also compare
    equal to their string values ("ongoing", "success", "failure").
    """
    buckets: Dict[TaskStatus, List[Task]] = {status: [] for status in BUCKET_LABELS}
    for task in tasks:
        buckets[task.status].append(task)
    return buckets
