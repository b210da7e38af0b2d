from __future__ import annotations

import asyncio
import enum
import logging
from typing import Awaitable, Callable, Optional

from .config import SHUTDOWN_TIMEOUT

logger = logging.getLogger(__name__)


class ShutdownState(str, enum.Enum):
    RUNNING = "running"
    SHUTTING_DOWN = "shutting_down"
    TERMINATED = "terminated"
    FORCE_KILLED = "force_killed"


EXIT_OK = 0
EXIT_FORCED = 1


class GracefulShutdown:
    """Drains a running server on request, giving up after a fixed deadline.

    ``stop`` is called exactly once when shutdown starts; it should make the
    server stop accepting connections and let in-flight ones finish. ``run``
    then races the server's own completion against ``timeout`` seconds and
    returns the process exit code. If the deadline passes, ``abandon`` (when
    given) drops whatever connections are still open before the server task
    is cancelled, so clients see a closed connection rather than a response.
    """

    def __init__(
        self,
        stop: Callable[[], None],
        timeout: float = SHUTDOWN_TIMEOUT,
        abandon: Optional[Callable[[], None]] = None,
    ) -> None:
        self._stop = stop
        self._abandon = abandon
        self.timeout = timeout
        self.state = ShutdownState.RUNNING
        self.deadline: Optional[float] = None
        self._requested: Optional[asyncio.Event] = None

    def _event(self) -> asyncio.Event:
        if self._requested is None:
            self._requested = asyncio.Event()
        return self._requested

    def initiate_shutdown(self, reason: str = "shutdown request") -> bool:
        """Start draining. Returns False if a shutdown is already under way."""
        if self.state is not ShutdownState.RUNNING:
            logger.info("Received %s while already shutting down, ignoring.", reason)
            return False
        logger.info("Received %s. Gracefully shutting down...", reason)
        self.state = ShutdownState.SHUTTING_DOWN
        self.deadline = asyncio.get_running_loop().time() + self.timeout
        self._stop()
        self._event().set()
        return True

    async def run(self, serving: Awaitable[None]) -> int:
        server_task = asyncio.ensure_future(serving)
        requested = asyncio.ensure_future(self._event().wait())
        try:
            await asyncio.wait({server_task, requested}, return_when=asyncio.FIRST_COMPLETED)
        finally:
            requested.cancel()

        if self.state is ShutdownState.RUNNING:
            # The server stopped by itself; surface whatever it raised.
            await server_task
            self.state = ShutdownState.TERMINATED
            return EXIT_OK

        remaining = max(0.0, self.deadline - asyncio.get_running_loop().time())
        done, _ = await asyncio.wait({server_task}, timeout=remaining)
        if server_task in done:
            server_task.result()
            logger.info("Closed out remaining connections.")
            self.state = ShutdownState.TERMINATED
            return EXIT_OK

        logger.error("Forcefully shutting down.")
        self.state = ShutdownState.FORCE_KILLED
        if self._abandon is not None:
            self._abandon()
            # Let the transports report connection_lost before handlers are cancelled.
            await asyncio.sleep(0)
        server_task.cancel()
        return EXIT_FORCED
