"""
Background Services Module

Services:
    - PendingBookingCleanupService: deletes pending bookings whose hold expired

Usage:
    from app.services.background import PendingBookingCleanupService

    result = PendingBookingCleanupService(db).cleanup_expired_pending_bookings()
    print(f"Deleted {result.count} pending bookings")
"""

from app.services.background.cleanup_service import CleanupResult, PendingBookingCleanupService

__all__ = ["CleanupResult", "PendingBookingCleanupService"]
