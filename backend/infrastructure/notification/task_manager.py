from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import Any

logger = logging.getLogger(__name__)


class BackgroundTaskManager:
    """Best-effort in-process fire-and-forget tasks.

    The event loop only keeps weak references to tasks, so in-flight tasks are
    held here until they finish. Failures are logged, never retried and never
    reported back to the caller that scheduled them.
    """

    def __init__(self) -> None:
        self._tasks: set[asyncio.Task[Any]] = set()

    def schedule(self, *, name: str, coro_factory: Callable[[], Awaitable[Any]]) -> asyncio.Task[Any]:
        task = asyncio.create_task(self._run(name=name, coro_factory=coro_factory), name=name)
        self._tasks.add(task)
        task.add_done_callback(self._tasks.discard)
        return task

    @property
    def pending(self) -> int:
        return sum(1 for t in self._tasks if not t.done())

    async def _run(self, *, name: str, coro_factory: Callable[[], Awaitable[Any]]) -> None:
        try:
            await coro_factory()
        except asyncio.CancelledError:
            raise
        except Exception:
            logger.exception("background task failed (name=%s)", name)

    async def drain(self) -> None:
        """Wait for every in-flight task (used by tests and graceful shutdown)."""
        tasks = list(self._tasks)
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)

    async def shutdown(self) -> None:
        tasks = list(self._tasks)
        self._tasks.clear()
        for t in tasks:
            t.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)
