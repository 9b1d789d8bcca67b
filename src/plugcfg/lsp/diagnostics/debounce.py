"""Debounce manager for diagnostics validation.

Keeps at most one pending validation task per document URI.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Awaitable, Callable

from plugcfg.logging import get_logger


class DebounceManager:
    """Manages debounced validation tasks per document URI."""

    def __init__(self, logger: logging.Logger | None = None) -> None:
        self._tasks: dict[str, asyncio.Task[None]] = {}
        self._lock = asyncio.Lock()
        self._logger = logger if logger is not None else get_logger("lsp.debounce")

    async def schedule(
        self,
        uri: str,
        func: Callable[[], Awaitable[None]],
        delay_ms: int = 400,
    ) -> None:
        """
        Schedule func for uri after delay_ms, replacing any pending task.

        Args:
            uri: The document URI.
            func: The async function to call after the delay.
            delay_ms: Debounce delay in milliseconds.
        """
        async with self._lock:
            await self._cancel_locked(uri)
            self._tasks[uri] = asyncio.create_task(self._debounced_call(uri, func, delay_ms))

    async def cancel(self, uri: str) -> None:
        """Cancel any pending task for uri."""
        async with self._lock:
            await self._cancel_locked(uri)

    async def cancel_all(self) -> None:
        async with self._lock:
            for uri in list(self._tasks):
                await self._cancel_locked(uri)

    def pending(self, uri: str) -> bool:
        task = self._tasks.get(uri)
        return task is not None and not task.done()

    async def _cancel_locked(self, uri: str) -> None:
        task = self._tasks.pop(uri, None)
        if task is None or task.done():
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass

    async def _debounced_call(
        self, uri: str, func: Callable[[], Awaitable[None]], delay_ms: int
    ) -> None:
        try:
            await asyncio.sleep(delay_ms / 1000)
            await func()
        except asyncio.CancelledError:
            raise
        except Exception:
            self._logger.exception("Debounced task failed for %s", uri)
