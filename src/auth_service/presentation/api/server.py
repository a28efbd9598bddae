"""Uvicorn server with a readiness drain on shutdown.

On the first SIGINT/SIGTERM the app is marked as shutting down, so ``/ready``
answers 503 while the server keeps accepting requests. After the drain delay
uvicorn's normal graceful shutdown starts: it stops accepting connections,
waits up to ``timeout_graceful_shutdown`` for in-flight requests and then runs
the lifespan shutdown, which closes the database pool.

A second signal during the drain skips the rest of it.
"""

import asyncio
import logging
from types import FrameType

import uvicorn
from starlette.datastructures import State

logger = logging.getLogger(__name__)


class ReadinessAwareServer(uvicorn.Server):
    """``uvicorn.Server`` that fails readiness before it stops serving.

    Parameters
    ----------
    config
        The uvicorn configuration
    app_state
        ``app.state`` of the served application; ``shutting_down`` is set on it
    drain_delay
        Seconds between failing readiness and starting the graceful shutdown
    """

    def __init__(self, config: uvicorn.Config, app_state: State, drain_delay: float):
        super().__init__(config)
        self._app_state = app_state
        self._drain_delay = drain_delay
        self._draining = False

    @property
    def draining(self) -> bool:
        return self._draining

    def handle_exit(self, sig: int, frame: FrameType | None) -> None:
        if self._draining or self._drain_delay <= 0:
            super().handle_exit(sig, frame)
            return

        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            super().handle_exit(sig, frame)
            return

        self._draining = True
        self._app_state.shutting_down = True
        logger.info(
            "Received signal %s; reporting not ready for %.1fs before shutdown",
            sig,
            self._drain_delay,
        )
        # call_soon_threadsafe is the only loop entry point safe from a signal handler
        loop.call_soon_threadsafe(
            loop.call_later,
            self._drain_delay,
            self._finish_drain,
            sig,
            frame,
        )

    def _finish_drain(self, sig: int, frame: FrameType | None) -> None:
        # A second signal may already have started the shutdown
        if not self.should_exit:
            logger.info("Readiness drain finished; shutting down")
            super().handle_exit(sig, frame)
