# models/__init__.py
"""
Importing this package registers every table on ``Base.metadata``.
"""

from app.models.base import Base
from app.models.booking import Booking, BookingRoom, BookingServiceItem
from app.models.customer import Customer
from app.models.housekeeping import HousekeepingTask
from app.models.inventory import InventoryConsumption, InventoryItem
from app.models.payment import Payment
from app.models.room import Room, RoomType
from app.models.service import Service

__all__ = [
    "Base",
    "Booking",
    "BookingRoom",
    "BookingServiceItem",
    "Customer",
    "HousekeepingTask",
    "InventoryConsumption",
    "InventoryItem",
    "Payment",
    "Room",
    "RoomType",
    "Service",
]
