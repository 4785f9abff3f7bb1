"""
Process lifecycle for Timezone Bot.

Tracks the ``starting -> ready -> shutting_down -> terminated`` progression and
runs the graceful shutdown sequence, with a forced exit if it stalls.
"""
import asyncio
import os
import signal
from enum import Enum
from typing import Awaitable, Callable, List, Optional, Tuple

import config
from core.logging import get_logger, log_error

logger = get_logger(__name__)

ShutdownStep = Tuple[str, Callable[[], Awaitable[None]]]


class LifecycleState(Enum):
    STARTING = "starting"
    READY = "ready"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"


class Lifecycle:
    """
    Owns the process state and the shutdown sequence.

    Shutdown steps run in registration order. If they have not all finished
    within ``timeout`` seconds, ``exit_func(1)`` is called.
    """

    def __init__(
        self,
        timeout: float = config.SHUTDOWN_TIMEOUT,
        exit_func: Callable[[int], None] = os._exit
    ):
        self.timeout = timeout
        self.state = LifecycleState.STARTING
        self._exit_func = exit_func
        self._steps: List[ShutdownStep] = []
        self._shutdown_task: Optional[asyncio.Task] = None

    @property
    def is_ready(self) -> bool:
        return self.state is LifecycleState.READY

    def mark_ready(self) -> bool:
        """Move from STARTING to READY. Returns False if already past STARTING."""
        if self.state is not LifecycleState.STARTING:
            return False
        self.state = LifecycleState.READY
        logger.info("Bot is ready")
        return True

    def add_shutdown_step(self, name: str, step: Callable[[], Awaitable[None]]) -> None:
        self._steps.append((name, step))

    # =========================================================================
    # Shutdown
    # =========================================================================

    def request_shutdown(self, reason: str = "requested") -> Optional[asyncio.Task]:
        """Schedule the shutdown sequence. Repeated requests are ignored."""
        if self._shutdown_task is not None:
            logger.info(f"Shutdown already in progress, ignoring {reason}")
            return self._shutdown_task
        logger.info(f"Shutting down ({reason})...")
        self._shutdown_task = asyncio.create_task(self.shutdown(), name="shutdown")
        return self._shutdown_task

    async def shutdown(self) -> None:
        if self.state in (LifecycleState.SHUTTING_DOWN, LifecycleState.TERMINATED):
            return
        self.state = LifecycleState.SHUTTING_DOWN

        loop = asyncio.get_running_loop()
        watchdog = loop.call_later(self.timeout, self._force_exit)
        try:
            for name, step in self._steps:
                try:
                    await step()
                    logger.info(f"{name} closed")
                except Exception as e:
                    log_error(f"Error while closing {name}", exc=e)
        finally:
            watchdog.cancel()

        self.state = LifecycleState.TERMINATED
        logger.info("Shutdown complete")

    async def wait_closed(self) -> None:
        if self._shutdown_task is not None:
            await self._shutdown_task

    def _force_exit(self) -> None:
        logger.error(f"Forced shutdown after {self.timeout:g}s timeout")
        self._exit_func(1)

    # =========================================================================
    # Process Hooks
    # =========================================================================

    def install_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        """Trigger graceful shutdown on SIGINT and SIGTERM."""
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.add_signal_handler(sig, lambda s=sig: self.request_shutdown(s.name))
            except NotImplementedError:
                # Windows event loops have no add_signal_handler
                signal.signal(sig, lambda s, _frame: loop.call_soon_threadsafe(
                    self.request_shutdown, signal.Signals(s).name
                ))

    def remove_signal_handlers(self, loop: asyncio.AbstractEventLoop) -> None:
        for sig in (signal.SIGINT, signal.SIGTERM):
            try:
                loop.remove_signal_handler(sig)
            except NotImplementedError:
                signal.signal(sig, signal.SIG_DFL)

    def install_exception_handler(self, loop: asyncio.AbstractEventLoop) -> None:
        """Log otherwise unhandled asyncio failures instead of losing them."""
        def handle(_loop: asyncio.AbstractEventLoop, context: dict) -> None:
            log_error(
                f"Unhandled async error: {context.get('message', 'no message')}",
                exc=context.get("exception"),
                state=self.state.value,
            )

        loop.set_exception_handler(handle)
