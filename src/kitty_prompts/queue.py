"""FIFO serialization of prompt sessions.

Two callers prompting through the same adapter at the same time would
interleave their questions on one terminal. :class:`SessionQueue` chains
sessions so each starts only once the previous one has settled, whatever
its outcome.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Awaitable, Callable, Optional, TypeVar

logger = logging.getLogger(__name__)

T = TypeVar("T")


def _settle(future: "asyncio.Future[None]") -> None:
    if not future.done():
        future.set_result(None)


class SessionQueue:
    """Ordered queue of pending sessions owned by one adapter.

    Each enqueued task gets a completion future; the next task waits on
    it. The future is resolved on success, failure and cancellation alike,
    so one failed session never blocks the ones behind it.
    """

    def __init__(self) -> None:
        self._tail: Optional["asyncio.Future[None]"] = None
        self._submitted = 0

    @property
    def idle(self) -> bool:
        """True when no session is running or waiting."""
        return self._tail is None or self._tail.done()

    async def enqueue(self, task: Callable[[], Awaitable[T]]) -> T:
        """Run ``task`` after every previously enqueued task has settled.

        Args:
            task: Zero-argument coroutine function producing the session

        Returns:
            Whatever ``task`` returns; its exceptions propagate unchanged
        """
        loop = asyncio.get_running_loop()
        previous = self._tail
        done: "asyncio.Future[None]" = loop.create_future()
        self._tail = done
        self._submitted += 1
        position = self._submitted

        try:
            if previous is not None and not previous.done():
                logger.debug("Session %d waiting for previous session", position)
                # shield: cancelling this waiter must not settle the previous session
                await asyncio.shield(previous)
            logger.debug("Session %d started", position)
            return await task()
        finally:
            if previous is not None and not previous.done():
                # Cancelled while waiting: release successors only after previous settles
                previous.add_done_callback(lambda _f: _settle(done))
            else:
                _settle(done)
            logger.debug("Session %d settled", position)


__all__ = ["SessionQueue"]
