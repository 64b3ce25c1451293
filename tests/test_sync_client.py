from __future__ import annotations

import json
from datetime import datetime, timedelta, timezone

import httpx
import pytest

from taskboard.client.errors import (
    ConflictError,
    NotFoundError,
    ParseError,
    TransportError,
    ValidationError,
)
from taskboard.client.sync import TaskSyncClient
from taskboard.models import TaskStatus

from .conftest import START
from .fakes import make_sync_client


class RecordingHandler:
    """httpx.MockTransport handler returning a canned response and keeping the requests."""

    def __init__(self, response: httpx.Response | None = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        assert self.response is not None
        return self.response


def mock_client(handler: RecordingHandler) -> TaskSyncClient:
    return TaskSyncClient("http://store.test", transport=httpx.MockTransport(handler))


TASK_JSON = {
    "id": "abc",
    "title": "Ship it",
    "description": "",
    "deadline": "2026-01-15T13:00:00Z",
    "status": None,
}


class TestErrorMapping:
    @pytest.mark.asyncio
    async def test_connect_error_is_transport_error(self) -> None:
        handler = RecordingHandler(error=httpx.ConnectError("connection refused"))
        async with mock_client(handler) as sync:
            with pytest.raises(TransportError):
                await sync.list()

    @pytest.mark.asyncio
    async def test_timeout_is_transport_error(self) -> None:
        handler = RecordingHandler(error=httpx.ReadTimeout("too slow"))
        async with mock_client(handler) as sync:
            with pytest.raises(TransportError):
                await sync.complete("abc")

    @pytest.mark.asyncio
    async def test_server_error_is_transport_error(self) -> None:
        handler = RecordingHandler(httpx.Response(500, text="boom"))
        async with mock_client(handler) as sync:
            with pytest.raises(TransportError) as exc_info:
                await sync.list()
        assert exc_info.value.status_code == 500

    @pytest.mark.asyncio
    async def test_404_is_not_found(self) -> None:
        handler = RecordingHandler(httpx.Response(404, json={"detail": "Task not found"}))
        async with mock_client(handler) as sync:
            with pytest.raises(NotFoundError, match="Task not found"):
                await sync.delete("gone")

    @pytest.mark.asyncio
    async def test_409_is_conflict(self) -> None:
        handler = RecordingHandler(httpx.Response(409, json={"detail": "Task is already closed"}))
        async with mock_client(handler) as sync:
            with pytest.raises(ConflictError):
                await sync.complete("late")

    @pytest.mark.asyncio
    async def test_422_is_validation_error(self) -> None:
        handler = RecordingHandler(httpx.Response(422, json={"error": "ValidationError", "detail": []}))
        async with mock_client(handler) as sync:
            with pytest.raises(ValidationError):
                await sync.create("x", "", START)

    @pytest.mark.asyncio
    async def test_non_json_body_is_parse_error(self) -> None:
        handler = RecordingHandler(httpx.Response(200, text="<html>oops</html>"))
        async with mock_client(handler) as sync:
            with pytest.raises(ParseError):
                await sync.list()

    @pytest.mark.asyncio
    async def test_non_array_list_is_parse_error(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json={"items": [TASK_JSON]}))
        async with mock_client(handler) as sync:
            with pytest.raises(ParseError):
                await sync.list()


class TestRequests:
    @pytest.mark.asyncio
    async def test_blank_title_fails_before_any_request(self) -> None:
        handler = RecordingHandler(httpx.Response(201, json=TASK_JSON))
        async with mock_client(handler) as sync:
            with pytest.raises(ValidationError):
                await sync.create("   ", "desc", START)
        assert handler.requests == []

    @pytest.mark.asyncio
    async def test_create_sends_utc_deadline(self) -> None:
        handler = RecordingHandler(httpx.Response(201, json=TASK_JSON))
        plus_two = timezone(timedelta(hours=2))
        async with mock_client(handler) as sync:
            created = await sync.create("Ship it", "", datetime(2026, 1, 15, 15, 0, tzinfo=plus_two))

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.url.path == "/api/tasks"
        assert json.loads(request.content) == {
            "title": "Ship it",
            "description": "",
            "deadline": "2026-01-15T13:00:00Z",
        }
        assert created is not None and created.id == "abc"

    @pytest.mark.asyncio
    async def test_empty_create_response_yields_none(self) -> None:
        handler = RecordingHandler(httpx.Response(201))
        async with mock_client(handler) as sync:
            assert await sync.create("Ship it", "", START) is None

    @pytest.mark.asyncio
    async def test_complete_and_delete_paths(self) -> None:
        handler = RecordingHandler(httpx.Response(204))
        async with mock_client(handler) as sync:
            assert await sync.complete("abc") is None
            await sync.delete("abc")

        assert [(r.method, r.url.path) for r in handler.requests] == [
            ("POST", "/api/tasks/abc/complete"),
            ("DELETE", "/api/tasks/abc/delete"),
        ]

    @pytest.mark.asyncio
    async def test_list_keeps_absolute_deadlines(self) -> None:
        handler = RecordingHandler(httpx.Response(200, json=[TASK_JSON]))
        async with mock_client(handler) as sync:
            (task,) = await sync.list()
        assert task.deadline == datetime(2026, 1, 15, 13, 0, tzinfo=timezone.utc)
        assert task.status is TaskStatus.ONGOING


class TestAgainstStore:
    @pytest.mark.asyncio
    async def test_create_then_list(self, repo) -> None:
        async with make_sync_client() as sync:
            created = await sync.create("A", "", START + timedelta(minutes=10))
            tasks = await sync.list()

        assert created is not None
        assert [t.id for t in tasks] == [created.id]
        assert tasks[0].status is TaskStatus.ONGOING
        assert tasks[0].deadline == START + timedelta(minutes=10)

    @pytest.mark.asyncio
    async def test_list_twice_without_mutation_is_identical(self, repo) -> None:
        async with make_sync_client() as sync:
            await sync.create("A", "", START + timedelta(minutes=10))
            await sync.create("B", "", START + timedelta(minutes=20))
            first = await sync.list()
            second = await sync.list()
        assert first == second

    @pytest.mark.asyncio
    async def test_complete_missing_task_is_not_found(self, repo) -> None:
        async with make_sync_client() as sync:
            with pytest.raises(NotFoundError):
                await sync.complete("missing")

    @pytest.mark.asyncio
    async def test_complete_failed_task_is_conflict(self, repo, clock) -> None:
        async with make_sync_client() as sync:
            created = await sync.create("late", "", START + timedelta(minutes=1))
            clock.advance(minutes=1)
            with pytest.raises(ConflictError):
                await sync.complete(created.id)

    @pytest.mark.asyncio
    async def test_store_rejects_overlong_title(self, repo) -> None:
        async with make_sync_client() as sync:
            with pytest.raises(ValidationError):
                await sync.create("x" * 201, "", START + timedelta(minutes=1))
