"""
Poll scheduler.

Keeps the client's snapshot fresh:
- one refresh immediately on start,
- then one refresh every interval_seconds,
- out-of-band refreshes on demand (after a mutation).

The loop is an owned asyncio task: stop() cancels and awaits it, so no
refresh can fire after teardown. The sleep function is injectable so tests
can drive the schedule with a virtual timer instead of the wall clock.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

logger = logging.getLogger(__name__)

Refresh = Callable[[], Awaitable[Any]]
Sleep = Callable[[float], Awaitable[Any]]

DEFAULT_INTERVAL_SECONDS = 60.0


class PollScheduler:
    def __init__(
        self,
        refresh: Refresh,
        *,
        interval_seconds: float = DEFAULT_INTERVAL_SECONDS,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self._refresh = refresh
        self._interval = float(interval_seconds)
        self._sleep = sleep
        self._runner: Optional[asyncio.Task] = None

    @property
    def interval_seconds(self) -> float:
        return self._interval

    @property
    def is_running(self) -> bool:
        return self._runner is not None and not self._runner.done()

    def start(self) -> None:
        """Start polling on the running event loop. Calling start twice is a no-op."""
        if self.is_running:
            return
        self._runner = asyncio.get_running_loop().create_task(self._run())
        logger.debug("Poll scheduler started interval=%ss", self._interval)

    async def stop(self) -> None:
        """
        Cancel the polling loop and wait until it has exited.

        The runner's own cancellation is absorbed; a cancellation of the task
        calling stop() propagates to it.
        """
        runner, self._runner = self._runner, None
        if runner is None:
            return
        runner.cancel()
        await asyncio.wait({runner})
        logger.debug("Poll scheduler stopped")

    async def refresh_now(self) -> None:
        """Refresh immediately, outside the regular schedule."""
        await self._tick()

    async def __aenter__(self) -> "PollScheduler":
        self.start()
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.stop()

    async def _tick(self) -> None:
        try:
            await self._refresh()
        except Exception:
            logger.exception("Scheduled refresh failed")

    async def _run(self) -> None:
        while True:
            await self._tick()
            await self._sleep(self._interval)
