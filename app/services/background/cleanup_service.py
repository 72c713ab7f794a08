"""
Background cleanup service.

Deletes pending bookings whose hold has lapsed. A pending booking older
than PENDING_BOOKING_TTL_MINUTES no longer reserves capacity; removing it
also drops its room lines, service selections and abandoned payments.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta
from typing import List, Optional

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.repositories.booking.booking_repository import BookingRepository
from app.services.base import BaseService, track_performance


@dataclass
class CleanupResult:
    """Outcome of one sweep."""
    count: int = 0
    booking_codes: List[str] = field(default_factory=list)
    duration_ms: float = 0.0


class PendingBookingCleanupService(BaseService):
    """Sweeps expired pending bookings."""

    def __init__(self, db_session: Session, ttl_minutes: Optional[int] = None):
        super().__init__(db_session)
        self.bookings = BookingRepository(db_session)
        self.ttl = timedelta(minutes=ttl_minutes or settings.PENDING_BOOKING_TTL_MINUTES)

    @track_performance("cleanup_expired_pending_bookings")
    def cleanup_expired_pending_bookings(self, now: Optional[datetime] = None) -> CleanupResult:
        """
        Delete bookings still ``pending`` after the hold TTL.

        Args:
            now: Reference time, defaults to current UTC time

        Returns:
            CleanupResult with the number and codes of deleted bookings
        """
        start_time = datetime.utcnow()
        cutoff = (now or start_time) - self.ttl

        with self.transaction():
            expired = self.bookings.find_expired_pending(cutoff)
            codes = [booking.booking_code for booking in expired]
            for booking in expired:
                self.bookings.delete(booking)

        result = CleanupResult(
            count=len(codes),
            booking_codes=codes,
            duration_ms=(datetime.utcnow() - start_time).total_seconds() * 1000,
        )
        if result.count:
            self._logger.info(
                f"Deleted {result.count} expired pending booking(s)",
                extra={"deleted_count": result.count, "booking_codes": codes},
            )
        else:
            self._logger.debug("No expired pending bookings")
        return result
