"""Fixed-interval asyncio timer that drives queue processing."""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional

logger = logging.getLogger(__name__)


class QueueTimer:
    """Invokes ``callback`` every ``interval`` seconds on the running loop.

    ``start()`` is idempotent: at most one timer task is alive at a time.
    """

    def __init__(self, interval: float, callback: Callable[[], Awaitable[None]]) -> None:
        self._interval = interval
        self._callback = callback
        self._task: Optional[asyncio.Task] = None
        self._tick: Optional[asyncio.Future] = None
        self._stopping = False

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> bool:
        """Start the timer on the running event loop.

        Returns False when no loop is running or a stop is in progress;
        the caller may retry later.
        """
        if self.running:
            return True
        if self._stopping:
            return False
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running event loop, queue timer not started")
            return False
        self._task = loop.create_task(self._run(), name="eventq-queue-timer")
        logger.debug("Queue timer started (interval=%ss)", self._interval)
        return True

    async def stop(self) -> None:
        """Stop the timer, letting a callback that is already running finish first."""
        task, self._task = self._task, None
        if task is None or task.done():
            return
        self._stopping = True
        try:
            tick = self._tick
            if tick is not None and not tick.done():
                await asyncio.wait([tick])
            task.cancel()
            try:
                await task
            except asyncio.CancelledError:
                pass
        finally:
            self._stopping = False
        logger.debug("Queue timer stopped")

    async def _run(self) -> None:
        while True:
            await asyncio.sleep(self._interval)
            if self._stopping:
                return
            self._tick = asyncio.ensure_future(self._callback())
            try:
                # cancelling the timer must not cancel a running callback
                await asyncio.shield(self._tick)
            except Exception as exc:
                logger.error("Queue timer callback failed: %s", exc)
            finally:
                self._tick = None


__all__ = ["QueueTimer"]
