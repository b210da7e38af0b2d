from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
from typing import Iterator, Optional

import uvicorn

from .config import HOST, SHUTDOWN_TIMEOUT, Settings
from .environment import Environment
from .main import create_app
from .quotes import QuoteClient
from .shutdown import GracefulShutdown
from .system import collect_system_info

logger = logging.getLogger(__name__)

SHUTDOWN_SIGNALS = tuple(
    getattr(signal, name) for name in ("SIGINT", "SIGTERM", "SIGQUIT") if hasattr(signal, name)
)


class Server(uvicorn.Server):
    """uvicorn server that leaves signal handling to ``GracefulShutdown``."""

    def install_signal_handlers(self) -> None:
        pass

    @contextlib.contextmanager
    def capture_signals(self) -> Iterator[None]:
        yield

    def begin_shutdown(self) -> None:
        self.should_exit = True

    def abandon_connections(self) -> None:
        for connection in list(self.server_state.connections):
            transport = getattr(connection, "transport", None)
            if transport is not None:
                transport.abort()


def wire_shutdown_signals(loop: asyncio.AbstractEventLoop, shutdown: GracefulShutdown) -> None:
    def handle(signum, frame):
        loop.call_soon_threadsafe(shutdown.initiate_shutdown, signal.Signals(signum).name)

    for sig in SHUTDOWN_SIGNALS:
        try:
            loop.add_signal_handler(sig, shutdown.initiate_shutdown, sig.name)
        except NotImplementedError:
            # Windows event loops have no add_signal_handler.
            signal.signal(sig, handle)


async def _announce(server: Server, settings: Settings, hostname: str) -> None:
    while not server.started:
        await asyncio.sleep(0.05)
    logger.info("Server is running on http://%s:%s", hostname, settings.port)
    logger.info("Background color is set to: %s", settings.bg_color)


async def serve(
    settings: Settings,
    timeout: float = SHUTDOWN_TIMEOUT,
    quotes: Optional[QuoteClient] = None,
) -> int:
    system_info = collect_system_info()
    app = create_app(settings, system_info, Environment(), quotes or QuoteClient())
    server = Server(uvicorn.Config(app, host=HOST, port=settings.port, log_config=None))

    shutdown = GracefulShutdown(server.begin_shutdown, timeout=timeout, abandon=server.abandon_connections)
    wire_shutdown_signals(asyncio.get_running_loop(), shutdown)

    announce = asyncio.ensure_future(_announce(server, settings, system_info.hostname))
    try:
        return await shutdown.run(server.serve())
    finally:
        announce.cancel()


def main(settings: Optional[Settings] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s: %(message)s")
    return asyncio.run(serve(settings or Settings.from_env()))
