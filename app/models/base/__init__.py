"""
Base models package.

Provides the declarative base, abstract base classes, and enums
for all database models.
"""

from app.models.base.base_model import (
    Base,
    BaseModel,
    TimestampModel,
    enum_type,
)

from app.models.base.enums import (
    Amenity,
    BookingStatus,
    CheckoutHint,
    Honorific,
    HousekeepingStatus,
    PaymentCategory,
    PaymentMethod,
    PaymentRecordStatus,
    PaymentStatus,
    RoomLineStatus,
    RoomStatus,
    ServiceCategory,
    TaskPriority,
    TaskStatus,
    VisibleStatus,
)

__all__ = [
    "Base",
    "BaseModel",
    "TimestampModel",
    "enum_type",
    "Amenity",
    "BookingStatus",
    "CheckoutHint",
    "Honorific",
    "HousekeepingStatus",
    "PaymentCategory",
    "PaymentMethod",
    "PaymentRecordStatus",
    "PaymentStatus",
    "RoomLineStatus",
    "RoomStatus",
    "ServiceCategory",
    "TaskPriority",
    "TaskStatus",
    "VisibleStatus",
]
