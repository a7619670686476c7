# This project was developed with assistance from AI tools.
"""Keyed asyncio debounce.

Repeated calls for the same key inside the quiet period collapse into one:
each call cancels the pending timer and starts a new one, and the callback
runs once ``delay`` seconds after the last call.
"""

import asyncio
import inspect
import logging
from collections.abc import Callable
from typing import Any

logger = logging.getLogger(__name__)


class Debouncer:
    """Per-key trailing-edge debounce backed by asyncio tasks."""

    def __init__(self, delay: float) -> None:
        self.delay = delay
        self._tasks: dict[str, asyncio.Task] = {}

    def call(self, key: str, fn: Callable[..., Any], *args: Any) -> asyncio.Task:
        """Schedule ``fn(*args)`` for ``key``, replacing any pending call.

        Must be called from a running event loop. ``fn`` may be a plain
        function or a coroutine function.
        """
        existing = self._tasks.pop(key, None)
        if existing is not None and not existing.done():
            existing.cancel()
            logger.debug("Debounce restarted for %s", key)

        task = asyncio.get_running_loop().create_task(
            self._run(key, fn, args),
            name=f"debounce-{key}",
        )
        self._tasks[key] = task
        return task

    async def _run(self, key: str, fn: Callable[..., Any], args: tuple) -> None:
        await asyncio.sleep(self.delay)
        # Unregister before firing so the callback may schedule the same key.
        if self._tasks.get(key) is asyncio.current_task():
            del self._tasks[key]
        try:
            result = fn(*args)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Debounced call for %s failed", key)

    def pending(self) -> list[str]:
        """Keys with a timer still waiting to fire."""
        return [key for key, task in self._tasks.items() if not task.done()]

    def cancel(self, key: str) -> bool:
        task = self._tasks.pop(key, None)
        if task is None or task.done():
            return False
        task.cancel()
        return True

    def cancel_all(self) -> int:
        """Cancel every pending timer. Returns how many were cancelled."""
        cancelled = 0
        for task in self._tasks.values():
            if not task.done():
                task.cancel()
                cancelled += 1
        self._tasks.clear()
        return cancelled
