from __future__ import annotations

from datetime import datetime, timezone

from taskboard.client.classifier import BUCKET_LABELS, classify_tasks
from taskboard.client.task import Task
from taskboard.models import TaskStatus

DEADLINE = datetime(2026, 5, 1, tzinfo=timezone.utc)


def make_task(task_id: str, status: TaskStatus = TaskStatus.ONGOING) -> Task:
    return Task(id=task_id, title=f"task {task_id}", deadline=DEADLINE, status=status)


def test_empty_input_yields_all_three_empty_buckets() -> None:
    buckets = classify_tasks([])
    assert set(buckets) == {TaskStatus.ONGOING, TaskStatus.SUCCESS, TaskStatus.FAILURE}
    assert all(v == [] for v in buckets.values())


def test_each_task_lands_in_exactly_one_bucket() -> None:
    tasks = [
        make_task("1"),
        make_task("2", TaskStatus.SUCCESS),
        make_task("3", TaskStatus.FAILURE),
        make_task("4"),
        make_task("5", TaskStatus.SUCCESS),
    ]
    buckets = classify_tasks(tasks)

    assert sum(len(v) for v in buckets.values()) == len(tasks)
    for task in tasks:
        holders = [status for status, items in buckets.items() if task in items]
        assert holders == [task.status]


def test_relative_order_is_preserved() -> None:
    tasks = [make_task("a"), make_task("b", TaskStatus.FAILURE), make_task("c"), make_task("d")]
    buckets = classify_tasks(tasks)
    assert [t.id for t in buckets[TaskStatus.ONGOING]] == ["a", "c", "d"]
    assert [t.id for t in buckets[TaskStatus.FAILURE]] == ["b"]
    assert buckets[TaskStatus.SUCCESS] == []


def test_buckets_can_be_read_by_name() -> None:
    buckets = classify_tasks([make_task("x", TaskStatus.SUCCESS)])
    assert [t.id for t in buckets["success"]] == ["x"]
    assert buckets["ongoing"] == []


def test_bucket_labels() -> None:
    assert BUCKET_LABELS == {
        TaskStatus.ONGOING: "Ongoing",
        TaskStatus.SUCCESS: "Completed On Time",
        TaskStatus.FAILURE: "Failed",
    }
