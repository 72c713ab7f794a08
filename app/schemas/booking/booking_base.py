"""
Booking base schemas with validation.

A booking is created with one or more room lines; each line names the
desired room type (and optionally a specific room), its expected dates,
its guests and its room-scoped services.
"""

from datetime import datetime
from typing import List, Union

from pydantic import EmailStr, Field, model_validator

from app.models.base.enums import Honorific
from app.schemas.common.base import BaseCreateSchema, BaseSchema, BaseUpdateSchema

__all__ = [
    "GuestInfo",
    "ServiceSelection",
    "RoomLineCreate",
    "BookingCreate",
    "BookingUpdate",
]


class GuestInfo(BaseSchema):
    """Identity of a guest staying in a room."""

    honorific: Union[Honorific, None] = None
    first_name: str = Field(..., min_length=1, max_length=100)
    last_name: str = Field(..., min_length=1, max_length=100)
    identification_number: Union[str, None] = Field(None, max_length=50)
    phone_number: Union[str, None] = Field(None, max_length=20)
    email: Union[EmailStr, None] = None
    gender: Union[str, None] = Field(None, max_length=10)


class ServiceSelection(BaseSchema):
    service_id: str = Field(..., description="Service identifier")
    quantity: int = Field(1, ge=1, description="Units, used by per-unit pricing")


class RoomLineCreate(BaseSchema):
    room_type_id: str = Field(..., description="Desired room type")
    room_id: Union[str, None] = Field(
        None,
        description="Specific room, if the guest asked for one",
    )
    expected_check_in: datetime
    expected_check_out: datetime
    number_of_adults: int = Field(1, ge=1)
    number_of_children: int = Field(0, ge=0)
    main_guest: Union[GuestInfo, None] = None
    additional_guests: List[GuestInfo] = Field(default_factory=list)
    services: List[ServiceSelection] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_dates(self) -> "RoomLineCreate":
        if self.expected_check_out < self.expected_check_in:
            raise ValueError("expected_check_out must not be before expected_check_in")
        return self


class BookingCreate(BaseCreateSchema):
    """
    Staff-created booking.

    Booking-level ``services`` are not tied to a room (e.g. airport
    transfer); room-scoped services go on the room line.
    """

    customer_id: str = Field(..., description="Booker")
    rooms: List[RoomLineCreate] = Field(..., min_length=1)
    services: List[ServiceSelection] = Field(default_factory=list)
    notes: Union[str, None] = Field(None, max_length=2000)
    internal_notes: Union[str, None] = Field(None, max_length=2000)


class BookingUpdate(BaseUpdateSchema):
    """Partial edit; supplying ``rooms`` replaces every room line."""

    rooms: Union[List[RoomLineCreate], None] = Field(None, min_length=1)
    notes: Union[str, None] = Field(None, max_length=2000)
    internal_notes: Union[str, None] = Field(None, max_length=2000)
