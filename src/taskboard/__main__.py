"""
CLI entrypoint.

    python -m taskboard watch                 # poll the store and print the buckets
    python -m taskboard add "Title" --in 30   # task due in 30 minutes
    python -m taskboard complete <id>
    python -m taskboard delete <id>

The store URL and poll interval come from settings (TASKBOARD_API_URL,
TASKBOARD_POLL_INTERVAL_SECONDS).
"""

from __future__ import annotations

import argparse
import asyncio
import logging
from datetime import datetime, timedelta
from typing import List, Optional

from .client import BUCKET_LABELS, TaskBoard, TaskDraft, TaskSyncClient
from .logging_setup import setup_logging
from .settings import Settings, get_settings

logger = logging.getLogger(__name__)


def render_board(board: TaskBoard) -> None:
    lines: List[str] = []
    for status, tasks in board.buckets.items():
        lines.append(f"== {BUCKET_LABELS[status]} ({len(tasks)})")
        if not tasks:
            lines.append("   No tasks in this category.")
        for task in tasks:
            lines.append(
                f"   [{task.id}] {task.title} | Deadline: {board.local_deadline_text(task)}"
                f" | {board.time_status_text(task)}"
            )
    print("\n".join(lines), flush=True)


async def _watch(settings: Settings) -> None:
    async with TaskSyncClient(settings.api_base_url, timeout=settings.request_timeout_seconds) as sync:
        board = TaskBoard(sync, interval_seconds=settings.poll_interval_seconds)
        board.add_listener(render_board)
        async with board:
            # Runs until interrupted; the board's poller does the work.
            await asyncio.Event().wait()


async def _run_action(settings: Settings, args: argparse.Namespace) -> bool:
    async with TaskSyncClient(settings.api_base_url, timeout=settings.request_timeout_seconds) as sync:
        board = TaskBoard(sync, interval_seconds=settings.poll_interval_seconds)
        if args.command == "add":
            deadline = args.deadline
            if deadline is None:
                deadline = datetime.now().astimezone() + timedelta(minutes=args.minutes)
            ok = await board.create(TaskDraft(args.title, args.description, deadline))
        elif args.command == "complete":
            ok = await board.complete(args.task_id)
        else:
            ok = await board.delete(args.task_id)
        if ok:
            render_board(board)
        return ok


def _deadline_arg(value: str) -> datetime:
    # fromisoformat rejects a trailing Z before Python 3.11
    text = value.strip()
    if text.endswith(("Z", "z")):
        text = text[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid ISO8601 deadline: {value!r}") from None


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="taskboard", description="Deadline-aware task board client.")
    sub = parser.add_subparsers(dest="command", required=True)

    sub.add_parser("watch", help="poll the store and print the task buckets")

    add = sub.add_parser("add", help="create a task")
    add.add_argument("title")
    add.add_argument("--description", default="")
    group = add.add_mutually_exclusive_group()
    group.add_argument("--deadline", type=_deadline_arg, help="ISO8601 deadline; naive values are local time")
    group.add_argument("--in", dest="minutes", type=int, default=60, help="minutes from now (default: 60)")

    for name in ("complete", "delete"):
        p = sub.add_parser(name, help=f"{name} a task")
        p.add_argument("task_id")

    return parser


def main(argv: Optional[List[str]] = None) -> int:
    args = _build_parser().parse_args(argv)
    settings = get_settings()

    console_level = getattr(logging, settings.log_level, logging.INFO)
    setup_logging(console_level=console_level, log_dir=settings.log_dir)

    if args.command == "watch":
        logger.info("Watching %s every %ss", settings.api_base_url, settings.poll_interval_seconds)
        try:
            asyncio.run(_watch(settings))
        except KeyboardInterrupt:
            logger.info("Bye.")
        return 0

    return 0 if asyncio.run(_run_action(settings, args)) else 1


if __name__ == "__main__":
    raise SystemExit(main())
