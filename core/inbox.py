"""
Sequential message inbox.

discord.py runs every event handler in its own task, so two messages can be
handled at the same time. The inbox funnels them through one consumer so a
message is fully processed (store write and rename included) before the next.
"""
import asyncio
from typing import Awaitable, Callable, Generic, Optional, TypeVar

from core.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class MessageInbox(Generic[T]):
    """Single-consumer queue that hands each item to ``handler`` in order."""

    def __init__(self, handler: Callable[[T], Awaitable[None]]):
        self._handler = handler
        self._queue: "asyncio.Queue[T]" = asyncio.Queue()
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._consume(), name="message-inbox")

    def put(self, item: T) -> None:
        self._queue.put_nowait(item)

    async def join(self) -> None:
        """Wait until every queued item has been handled."""
        await self._queue.join()

    async def stop(self) -> None:
        """Stop consuming. Items still queued are dropped."""
        if self._task is None:
            return
        self._task.cancel()
        try:
            await self._task
        except asyncio.CancelledError:
            pass
        self._task = None

    async def _consume(self) -> None:
        while True:
            item = await self._queue.get()
            try:
                await self._handler(item)
            except Exception as e:
                logger.error(f"Unhandled error while processing message: {e}", exc_info=e)
            finally:
                self._queue.task_done()
