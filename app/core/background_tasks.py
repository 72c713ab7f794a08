"""
Background Task Management

Periodic sweep of expired pending bookings, run as an asyncio task on
the application's event loop. The sweep itself is synchronous database
work and runs in a worker thread with its own session.
"""

import asyncio
from typing import Callable, Optional

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.logging import get_logger
from app.db.session import SessionLocal
from app.services.background.cleanup_service import CleanupResult, PendingBookingCleanupService

logger = get_logger(__name__)


def run_pending_sweep(session_factory: Callable[[], Session] = SessionLocal) -> CleanupResult:
    """One sweep in a fresh session."""
    db = session_factory()
    try:
        return PendingBookingCleanupService(db).cleanup_expired_pending_bookings()
    finally:
        db.close()


class PendingBookingSweeper:
    """
    Runs the pending-booking sweep once at start and then every interval.

    Usage:
        sweeper = PendingBookingSweeper()
        await sweeper.start()
        ...
        await sweeper.stop()
    """

    def __init__(
        self,
        interval_seconds: Optional[float] = None,
        session_factory: Callable[[], Session] = SessionLocal,
    ):
        self.interval_seconds = interval_seconds or settings.PENDING_SWEEP_INTERVAL_MINUTES * 60
        self.session_factory = session_factory
        self._task: Optional[asyncio.Task] = None

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def start(self) -> None:
        if self.running:
            return
        self._task = asyncio.create_task(self._sweep_loop())
        logger.info(
            "Pending booking sweeper started",
            extra={"interval_seconds": self.interval_seconds},
        )

    async def stop(self) -> None:
        if self._task is None:
            return
        self._task.cancel()
        await asyncio.gather(self._task, return_exceptions=True)
        self._task = None
        logger.info("Pending booking sweeper stopped")

    async def _sweep_loop(self) -> None:
        while True:
            try:
                await asyncio.to_thread(run_pending_sweep, self.session_factory)
            except asyncio.CancelledError:
                break
            except Exception as e:
                logger.error(f"Pending booking sweep error: {str(e)}", exc_info=True)
            try:
                await asyncio.sleep(self.interval_seconds)
            except asyncio.CancelledError:
                break
