from __future__ import annotations

import logging
import uuid
from abc import ABC, abstractmethod
from datetime import datetime
from functools import lru_cache
from threading import RLock
from typing import Callable, List, Optional

from ..models import TaskStatus, utc_now
from .models import TaskEntity
from .schemas import TaskCreate

logger = logging.getLogger(__name__)


class TaskClosedError(Exception):
    """Raised when completing a task whose deadline already failed."""

    def __init__(self, task_id: str) -> None:
        super().__init__(f"task {task_id} is already closed")
        self.task_id = task_id


# PUBLIC_INTERFACE
class Repository(ABC):
    """Abstract repository contract for task storage backends."""

    @abstractmethod
    def create(self, data: TaskCreate) -> TaskEntity:
        """Create and return a new ongoing TaskEntity."""

    @abstractmethod
    def complete(self, task_id: str) -> Optional[TaskEntity]:
        """
        Mark a task as completed on time. Return the updated entity, or None if not found.

        Raises:
            TaskClosedError: the task already failed its deadline.
        """

    @abstractmethod
    def delete(self, task_id: str) -> bool:
        """Delete a TaskEntity by id. Return True if deleted, False if not found."""

    @abstractmethod
    def list(self) -> List[TaskEntity]:
        """Return every task in creation order."""


class InMemoryRepository(Repository):
    """
    Thread-safe in-memory repository.

    Failure is asserted lazily: every read or completion first moves ongoing
    tasks whose deadline has elapsed to FAILURE. Nothing runs in the background.
    """

    def __init__(self, clock: Optional[Callable[[], datetime]] = None) -> None:
        self._lock = RLock()
        self._items: dict[str, TaskEntity] = {}
        self._clock = clock or utc_now

    def _expire_overdue(self) -> None:
        now = self._clock()
        for item in self._items.values():
            if item["status"] is TaskStatus.ONGOING and item["deadline"] <= now:
                item["status"] = TaskStatus.FAILURE
                logger.info("Task %s missed its deadline -> failure", item["id"])

    def create(self, data: TaskCreate) -> TaskEntity:
        entity: TaskEntity = {
            "id": uuid.uuid4().hex,
            "title": data.title,
            "description": data.description,
            "deadline": data.deadline,
            "status": TaskStatus.ONGOING,
        }
        with self._lock:
            self._items[entity["id"]] = entity
        logger.debug("Task created id=%s deadline=%s", entity["id"], entity["deadline"].isoformat())
        return entity.copy()

    def complete(self, task_id: str) -> Optional[TaskEntity]:
        with self._lock:
            self._expire_overdue()
            item = self._items.get(task_id)
            if item is None:
                return None
            if item["status"] is TaskStatus.FAILURE:
                raise TaskClosedError(task_id)
            if item["status"] is TaskStatus.ONGOING:
                item["status"] = TaskStatus.SUCCESS
                logger.info("Task %s -> success", task_id)
            return item.copy()

    def delete(self, task_id: str) -> bool:
        with self._lock:
            removed = self._items.pop(task_id, None) is not None
        if removed:
            logger.info("Task %s deleted", task_id)
        return removed

    def list(self) -> List[TaskEntity]:
        with self._lock:
            self._expire_overdue()
            # Return copies to avoid external mutation
            return [t.copy() for t in self._items.values()]


# PUBLIC_INTERFACE
@lru_cache(maxsize=1)
def get_repository() -> Repository:
    """
    Return the process-wide repository. Tasks live in memory for the lifetime
    of the process; tests override this dependency with a fresh instance.
    """
    return InMemoryRepository()
