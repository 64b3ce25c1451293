from __future__ import annotations

from datetime import datetime, timezone
from typing import Iterator

import pytest
from fastapi.testclient import TestClient

from taskboard.api.main import app
from taskboard.api.repositories import InMemoryRepository, get_repository

from .fakes import MutableClock

START = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def clock() -> MutableClock:
    return MutableClock(START)


@pytest.fixture()
def repo(clock: MutableClock) -> Iterator[InMemoryRepository]:
    """
    Fresh in-memory store wired into the app for the duration of one test.

    The store and the client share the same clock, so deadline math in tests
    is exact.
    """
    repository = InMemoryRepository(clock=clock)
    app.dependency_overrides[get_repository] = lambda: repository
    try:
        yield repository
    finally:
        app.dependency_overrides.clear()


@pytest.fixture()
def api(repo: InMemoryRepository) -> TestClient:
    return TestClient(app)

