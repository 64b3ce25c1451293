"""
Async client for the task store.

Every call either returns parsed tasks or raises a SyncError subclass:
- network failures and timeouts -> TransportError
- 404 -> NotFoundError, 409 -> ConflictError, 400/422 -> ValidationError
- any other non-2xx -> TransportError
- bodies that are not valid JSON tasks -> ParseError

Catching, logging and clearing busy flags is the caller's job (see TaskBoard).
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import Any, List, Optional

import httpx

from .errors import ConflictError, NotFoundError, ParseError, TransportError, ValidationError
from .task import Task, parse_task, parse_task_list

logger = logging.getLogger(__name__)

TASKS_PATH = "/api/tasks"


def to_utc_instant(deadline: datetime) -> datetime:
    """
    Convert a user-entered deadline to UTC.
    Naive values are local wall-clock time, as picked in a date/time input.
    """
    return deadline.astimezone(timezone.utc)


def _serialize_deadline(deadline: datetime) -> str:
    return to_utc_instant(deadline).isoformat().replace("+00:00", "Z")


class TaskSyncClient:
    """
    Mediates all reads and writes against the remote task store.

    Use as an async context manager, or call aclose() when done:

        async with TaskSyncClient("http://localhost:8000") as sync:
            tasks = await sync.list()
    """

    def __init__(
        self,
        base_url: str,
        *,
        timeout: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._client = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    async def __aenter__(self) -> "TaskSyncClient":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    # ---- low-level helpers ----

    async def _request(self, method: str, path: str, **kwargs: Any) -> httpx.Response:
        try:
            response = await self._client.request(method, path, **kwargs)
        except httpx.RequestError as e:
            raise TransportError(f"{method} {path} failed: {e!r}") from e

        code = response.status_code
        if code < 400:
            return response

        detail = _error_detail(response)
        message = f"{method} {path} -> {code}: {detail}"
        if code == 404:
            raise NotFoundError(message, status_code=code)
        if code == 409:
            raise ConflictError(message, status_code=code)
        if code in (400, 422):
            raise ValidationError(message, status_code=code)
        raise TransportError(message, status_code=code)

    @staticmethod
    def _json(response: httpx.Response) -> Any:
        try:
            return response.json()
        except ValueError as e:
            raise ParseError(f"response is not valid JSON ({response.status_code})") from e

    def _optional_task(self, response: httpx.Response) -> Optional[Task]:
        if not response.content.strip():
            return None
        return parse_task(self._json(response))

    # ---- public API ----

    async def list(self) -> List[Task]:
        """Fetch the full current set of tasks."""
        response = await self._request("GET", TASKS_PATH)
        tasks = parse_task_list(self._json(response))
        logger.debug("Fetched %d tasks", len(tasks))
        return tasks

    async def create(self, title: str, description: str, deadline: datetime) -> Optional[Task]:
        """
        Submit a new task. The store assigns its id and leaves its status empty.

        Raises:
            ValidationError: title is empty or blank, or the store rejected the draft.
        """
        if not title or not title.strip():
            raise ValidationError("title is required")

        body = {
            "title": title.strip(),
            "description": description or "",
            "deadline": _serialize_deadline(deadline),
        }
        response = await self._request("POST", TASKS_PATH, json=body)
        created = self._optional_task(response)
        logger.info("Created task %s", created.id if created else "(no body)")
        return created

    async def complete(self, task_id: str) -> Optional[Task]:
        """Ask the store to move a task to 'success'."""
        response = await self._request("POST", f"{TASKS_PATH}/{task_id}/complete")
        logger.info("Completed task %s", task_id)
        return self._optional_task(response)

    async def delete(self, task_id: str) -> None:
        """Ask the store to remove a task."""
        await self._request("DELETE", f"{TASKS_PATH}/{task_id}/delete")
        logger.info("Deleted task %s", task_id)


def _error_detail(response: httpx.Response) -> str:
    try:
        body = response.json()
    except ValueError:
        return response.text[:200] or response.reason_phrase
    if isinstance(body, dict):
        return str(body.get("detail") or body.get("message") or body)
    return str(body)
