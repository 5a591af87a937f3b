"""
Single-flight gate around the credential fetch.
"""

from __future__ import annotations

import asyncio
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from shared.logging import get_logger

T = TypeVar("T")


class RefreshGate(Generic[T]):
    """Collapses concurrent refresh requests into one in-flight fetch.

    The first caller starts the fetch as a task; every caller arriving while
    that task is pending awaits the same task and receives the same result or
    the same exception. The pending task is dropped as soon as it resolves,
    so the next refresh starts a new fetch.
    """

    def __init__(self, fetch: Callable[[], Awaitable[T]], name: str = "credential") -> None:
        self._fetch = fetch
        self._pending: Optional[asyncio.Task] = None
        self.logger = get_logger(f"merchant.gate.{name}")

    @property
    def in_flight(self) -> bool:
        return self._pending is not None

    async def run(self) -> T:
        """Join the in-flight fetch, starting one if none is pending."""
        task = self._pending
        if task is None:
            task = asyncio.get_running_loop().create_task(self._run_fetch())
            task.add_done_callback(_consume_exception)
            self._pending = task
            self.logger.debug("Started refresh")
        else:
            self.logger.debug("Joined in-flight refresh")

        # A cancelled waiter must not cancel the fetch other waiters share.
        return await asyncio.shield(task)

    async def _run_fetch(self) -> T:
        try:
            return await self._fetch()
        finally:
            self._pending = None


def _consume_exception(task: asyncio.Task) -> None:
    # Waiters may all be gone; mark the exception as retrieved.
    if not task.cancelled():
        task.exception()
