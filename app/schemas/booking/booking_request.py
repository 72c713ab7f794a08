"""
Request schemas for booking lifecycle operations and the pending
booking flow.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Union

from pydantic import Field, model_validator

from app.models.base.enums import PaymentMethod
from app.schemas.booking.booking_base import ServiceSelection
from app.schemas.common.base import BaseSchema

__all__ = [
    "RoomAssignment",
    "CheckInRequest",
    "CheckOutRequest",
    "BookingServicesUpdate",
    "CashPaymentRequest",
    "TemporaryRoomRequest",
    "TemporaryBookingCreate",
    "TemporaryLineTypeRequest",
    "TemporaryConfirmRequest",
]


class RoomAssignment(BaseSchema):
    line_id: str = Field(..., description="Room line identifier")
    room_id: str = Field(..., description="Physical room to assign")


class CheckInRequest(BaseSchema):
    """Explicit assignments; lines left out get a room automatically."""

    assignments: List[RoomAssignment] = Field(default_factory=list)


class CheckOutRequest(BaseSchema):
    room_ids: List[str] = Field(..., min_length=1, description="Rooms leaving now")


class BookingServicesUpdate(BaseSchema):
    services: List[ServiceSelection] = Field(default_factory=list)


class CashPaymentRequest(BaseSchema):
    money_received: Decimal = Field(..., ge=0)


class TemporaryRoomRequest(BaseSchema):
    number_of_adults: int = Field(1, ge=1)
    number_of_children: int = Field(0, ge=0)


class TemporaryBookingCreate(BaseSchema):
    day_start: datetime
    day_end: datetime
    rooms: Union[List[TemporaryRoomRequest], None] = None

    @model_validator(mode="after")
    def validate_range(self) -> "TemporaryBookingCreate":
        if self.day_end < self.day_start:
            raise ValueError("day_end must not be before day_start")
        return self


class TemporaryLineTypeRequest(BaseSchema):
    room_type_id: str
    number_of_adults: int = Field(1, ge=1)
    number_of_children: int = Field(0, ge=0)


class TemporaryConfirmRequest(BaseSchema):
    customer_id: str
    payment_method: PaymentMethod = PaymentMethod.CASH
