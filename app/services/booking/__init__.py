"""
Booking service layer.

Provides business logic for:
- Booking creation/update, lookup and queries
- Lifecycle transitions (check-in, check-out, cancel)
- The pending (temporary) booking flow
- Booking code sequencing
"""

from app.services.booking.booking_code import BookingCode, BookingCodeGenerator, format_booking_code
from app.services.booking.booking_service import BookingService
from app.services.booking.lifecycle_service import BookingLifecycleService
from app.services.booking.line_builder import BookingLineBuilder, refresh_totals
from app.services.booking.temporary_booking_service import TemporaryBookingService

__all__ = [
    "BookingCode",
    "BookingCodeGenerator",
    "BookingLifecycleService",
    "BookingLineBuilder",
    "BookingService",
    "TemporaryBookingService",
    "format_booking_code",
    "refresh_totals",
]
