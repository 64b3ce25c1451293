"""
Task board: the boundary between the client core and whatever renders it.

The board owns the task snapshot and the busy flags, and exposes:
- bucketed tasks (classifier output),
- per-task deadline status (evaluated against the board's clock on each call),
- action callbacks create/complete/delete that never raise SyncError.
"""

from __future__ import annotations

import asyncio
import logging
from contextlib import contextmanager
from datetime import datetime
from typing import Any, Callable, Dict, Iterator, List, Optional

from ..models import TaskStatus, utc_now
from .classifier import classify_tasks
from .deadline import DeadlineStatus, describe_time_status, evaluate_deadline, format_local_deadline
from .errors import SyncError
from .poller import DEFAULT_INTERVAL_SECONDS, PollScheduler, Sleep
from .sync import TaskSyncClient
from .task import Task, TaskDraft

logger = logging.getLogger(__name__)


class BusyFlag:
    """
    Loading indicator shared by one class of operations.

    Holds nest: the flag stays active until the last open hold is released.
    Release happens on success, error and cancellation alike.
    """

    def __init__(self, name: str) -> None:
        self.name = name
        self._holders = 0

    @property
    def active(self) -> bool:
        return self._holders > 0

    def __bool__(self) -> bool:
        return self.active

    @contextmanager
    def hold(self) -> Iterator[None]:
        self._holders += 1
        try:
            yield
        finally:
            self._holders -= 1


class TaskBoard:
    def __init__(
        self,
        sync: TaskSyncClient,
        *,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        sleep: Sleep = asyncio.sleep,
        clock: Optional[Callable[[], datetime]] = None,
    ) -> None:
        self._sync = sync
        self._clock = clock or utc_now
        self._tasks: List[Task] = []
        self._listeners: List[Callable[["TaskBoard"], None]] = []
        self._issued_seq = 0
        self._applied_seq = 0

        # "loading" drives the add-task button, "grid_loading" the task tables.
        self.loading = BusyFlag("loading")
        self.grid_loading = BusyFlag("grid_loading")

        self.poller = PollScheduler(self.refresh, interval_seconds=interval_seconds, sleep=sleep)

    # ---- snapshot ----

    @property
    def tasks(self) -> List[Task]:
        return list(self._tasks)

    @property
    def buckets(self) -> Dict[TaskStatus, List[Task]]:
        return classify_tasks(self._tasks)

    async def refresh(self) -> bool:
        """
        Fetch the task list and replace the snapshot with it.

        Each call takes a sequence number; a response is applied only when no
        newer response has been applied already, so a slow fetch never
        overwrites a fresher one.
        """
        self._issued_seq += 1
        seq = self._issued_seq
        with self.grid_loading.hold():
            try:
                tasks = await self._sync.list()
            except SyncError as e:
                logger.warning("Error fetching tasks: %s", e)
                return False

        if seq < self._applied_seq:
            logger.debug("Dropping stale task list seq=%d (applied=%d)", seq, self._applied_seq)
            return True
        self._applied_seq = seq
        self._tasks = tasks
        self._notify()
        return True

    def add_listener(self, listener: Callable[["TaskBoard"], None]) -> None:
        """Register a callback run after every applied snapshot (i.e. a re-render hook)."""
        self._listeners.append(listener)

    def _notify(self) -> None:
        for listener in list(self._listeners):
            try:
                listener(self)
            except Exception:
                logger.exception("Board listener failed")

    # ---- rendering helpers ----

    def now(self) -> datetime:
        return self._clock()

    def deadline_status(self, task: Task) -> DeadlineStatus:
        return evaluate_deadline(task.deadline, self.now())

    def time_status_text(self, task: Task) -> str:
        return describe_time_status(task.deadline, self.now())

    def local_deadline_text(self, task: Task) -> str:
        return format_local_deadline(task.deadline)

    # ---- actions ----

    async def create(self, draft: TaskDraft) -> bool:
        with self.loading.hold():
            try:
                await self._sync.create(draft.title, draft.description, draft.deadline)
            except SyncError as e:
                logger.warning("Error creating task %r: %s", draft.title, e)
                return False
        await self.poller.refresh_now()
        return True

    async def complete(self, task_id: str) -> bool:
        with self.grid_loading.hold():
            try:
                await self._sync.complete(task_id)
            except SyncError as e:
                logger.warning("Error completing task %s: %s", task_id, e)
                return False
        await self.poller.refresh_now()
        return True

    async def delete(self, task_id: str) -> bool:
        with self.grid_loading.hold():
            try:
                await self._sync.delete(task_id)
            except SyncError as e:
                logger.warning("Error deleting task %s: %s", task_id, e)
                return False
        await self.poller.refresh_now()
        return True

    # ---- lifecycle ----

    def start(self) -> None:
        self.poller.start()

    async def stop(self) -> None:
        await self.poller.stop()

    async def __aenter__(self) -> "TaskBoard":
        self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()
