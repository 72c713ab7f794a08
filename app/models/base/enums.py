"""
Database enums for the reservation engine.

Values are the persisted strings; booking-level and room-line status
are distinct enums (only the booking can be cancelled).
"""

import enum


class RoomStatus(str, enum.Enum):
    """Persistent occupancy status of a physical room."""
    AVAILABLE = "available"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class HousekeepingStatus(str, enum.Enum):
    """Cleanliness of a physical room."""
    CLEAN = "clean"
    DIRTY = "dirty"
    CLEANING = "cleaning"


class VisibleStatus(str, enum.Enum):
    """Query-time availability of a room for a requested date range."""
    AVAILABLE = "available"
    BOOKED = "booked"
    OCCUPIED = "occupied"
    MAINTENANCE = "maintenance"


class CheckoutHint(str, enum.Enum):
    """Informational checkout marker for occupied rooms."""
    TODAY = "today"
    PAST = "past"


class BookingStatus(str, enum.Enum):
    """Booking lifecycle status."""
    PENDING = "pending"
    BOOKED = "booked"
    CHECKED_IN = "checked_in"
    COMPLETED = "completed"
    CANCELLED = "cancelled"


class RoomLineStatus(str, enum.Enum):
    """Status of a single room line inside a booking."""
    PENDING = "pending"
    BOOKED = "booked"
    CHECKED_IN = "checked_in"
    COMPLETED = "completed"


class PaymentStatus(str, enum.Enum):
    """Derived payment status of a booking."""
    UNPAID = "unpaid"
    PARTIALLY_PAID = "partially_paid"
    PAID = "paid"
    REFUNDED = "refunded"


class PaymentRecordStatus(str, enum.Enum):
    """Status of one settlement record."""
    PENDING = "pending"
    PAID = "paid"
    FAILED = "failed"
    REFUNDED = "refunded"


class PaymentMethod(str, enum.Enum):
    CASH = "cash"
    BANK_TRANSFER = "bank_transfer"
    VNPAY = "vnpay"


class PaymentCategory(str, enum.Enum):
    ONLINE = "online"
    OFFLINE = "offline"


class ServiceCategory(str, enum.Enum):
    """Pricing category of a sellable add-on."""
    PER_UNIT = "per_unit"
    PER_DURATION = "per_duration"
    PER_PERSON = "per_person"
    FIXED = "fixed"
    TRANSPORTATION = "transportation"
    MINIBAR = "minibar"


class Amenity(str, enum.Enum):
    """Room type amenities."""
    WIFI = "wifi"
    AIR_CONDITIONING = "air_conditioning"
    TV = "tv"
    MINIBAR = "minibar"
    SAFE = "safe"
    BATHTUB = "bathtub"
    BALCONY = "balcony"
    SEA_VIEW = "sea_view"
    HAIR_DRYER = "hair_dryer"
    KETTLE = "kettle"


class TaskStatus(str, enum.Enum):
    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    COMPLETED = "completed"


class TaskPriority(str, enum.Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Honorific(str, enum.Enum):
    MR = "Ông"
    MRS = "Bà"
