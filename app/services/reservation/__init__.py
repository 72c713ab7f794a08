"""
Reservation services: conflict detection and availability.
"""

from app.services.reservation.availability_resolver import (
    AvailabilityResolver,
    RoomAvailability,
    TypeAvailability,
)
from app.services.reservation.conflict_detector import (
    ConflictDetector,
    RequestedLine,
    effective_window,
    has_overlap,
    windows_overlap,
)

__all__ = [
    "AvailabilityResolver",
    "ConflictDetector",
    "RequestedLine",
    "RoomAvailability",
    "TypeAvailability",
    "effective_window",
    "has_overlap",
    "windows_overlap",
]
