"""
Availability query and response schemas.

``visible_status`` answers whether the room is free for the queried
dates; ``status`` is the room's state right now.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Union

from pydantic import Field, model_validator

from app.models.base.enums import Amenity, CheckoutHint, HousekeepingStatus, RoomStatus, VisibleStatus
from app.schemas.common.base import BaseSchema

__all__ = [
    "AvailabilityQuery",
    "RoomAvailabilityResponse",
    "RoomTypeSummary",
    "TypeAvailabilityResponse",
    "AvailabilityResponse",
    "RemainingCapacityResponse",
]


class AvailabilityQuery(BaseSchema):
    check_in: datetime
    check_out: datetime
    room_type_id: Union[str, None] = None
    client_mode: bool = False

    @model_validator(mode="after")
    def validate_range(self) -> "AvailabilityQuery":
        if self.check_out < self.check_in:
            raise ValueError("check_out must not be before check_in")
        return self


class RoomAvailabilityResponse(BaseSchema):
    id: str
    room_number: str
    floor: Union[int, None] = None
    room_type_id: str
    status: RoomStatus
    housekeeping_status: HousekeepingStatus
    do_not_disturb: bool
    visible_status: VisibleStatus
    checkout: Union[CheckoutHint, None] = Field(
        None,
        description="'today' or 'past' for in-house rooms due to check out",
    )


class RoomTypeSummary(BaseSchema):
    id: str
    name: str
    capacity: int
    max_guests: Union[int, None] = None
    price_per_night: Decimal
    extra_bed_allowed: bool
    extra_bed_price: Decimal
    amenities: List[Amenity] = Field(default_factory=list)


class TypeAvailabilityResponse(BaseSchema):
    room_type: RoomTypeSummary
    available_count: int
    rooms: List[RoomAvailabilityResponse]


class AvailabilityResponse(BaseSchema):
    """Either ``rooms`` (staff view) or ``rooms_by_type`` (client view) is set."""

    rooms: Union[List[RoomAvailabilityResponse], None] = None
    rooms_by_type: Union[List[TypeAvailabilityResponse], None] = None


class RemainingCapacityResponse(BaseSchema):
    room_type_id: str
    check_in: datetime
    check_out: datetime
    remaining: int
