"""
Booking aggregate models.
"""

from app.models.booking.booking import Booking
from app.models.booking.booking_room import BookingRoom
from app.models.booking.booking_service_item import BookingServiceItem

__all__ = ["Booking", "BookingRoom", "BookingServiceItem"]
