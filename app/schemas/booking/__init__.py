"""
Booking schemas package.
"""

from app.schemas.booking.booking_base import (
    BookingCreate,
    BookingUpdate,
    GuestInfo,
    RoomLineCreate,
    ServiceSelection,
)
from app.schemas.booking.booking_request import (
    BookingServicesUpdate,
    CashPaymentRequest,
    CheckInRequest,
    CheckOutRequest,
    RoomAssignment,
    TemporaryBookingCreate,
    TemporaryConfirmRequest,
    TemporaryLineTypeRequest,
    TemporaryRoomRequest,
)
from app.schemas.booking.booking_response import (
    BookingResponse,
    BookingRoomResponse,
    CheckoutReceipt,
    CheckOutResponse,
    LinePriceResponse,
    PriceBreakdownResponse,
    ReceiptRoomLine,
    ReceiptServiceLine,
    ServiceItemResponse,
)

__all__ = [
    "BookingCreate",
    "BookingResponse",
    "BookingRoomResponse",
    "BookingServicesUpdate",
    "BookingUpdate",
    "CashPaymentRequest",
    "CheckInRequest",
    "CheckOutRequest",
    "CheckOutResponse",
    "CheckoutReceipt",
    "GuestInfo",
    "LinePriceResponse",
    "PriceBreakdownResponse",
    "ReceiptRoomLine",
    "ReceiptServiceLine",
    "RoomAssignment",
    "RoomLineCreate",
    "ServiceItemResponse",
    "ServiceSelection",
    "TemporaryBookingCreate",
    "TemporaryConfirmRequest",
    "TemporaryLineTypeRequest",
    "TemporaryRoomRequest",
]
