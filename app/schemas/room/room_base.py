"""
Room catalog input schemas: room types and physical rooms.
"""

from decimal import Decimal
from typing import List, Union

from pydantic import Field, model_validator

from app.models.base.enums import Amenity, HousekeepingStatus, RoomStatus
from app.schemas.common.base import BaseCreateSchema

__all__ = [
    "RoomTypeCreate",
    "RoomCreate",
]


class RoomTypeCreate(BaseCreateSchema):
    """
    Room category with its pricing and capacity policy.

    ``capacity`` is the number of adults covered by the nightly price; an
    extra bed is charged beyond it when the type allows one.
    """

    name: str = Field(..., min_length=1, max_length=100, description="Type name, e.g. Double")
    description: Union[str, None] = Field(None, max_length=2000)
    capacity: int = Field(..., ge=1, description="Guests covered by the base price")
    max_guests: int = Field(..., ge=1, description="Hard guest limit, extra bed included")
    price_per_night: Decimal = Field(..., gt=0, description="Nightly price")
    extra_bed_allowed: bool = Field(False)
    extra_bed_price: Decimal = Field(Decimal("0"), ge=0, description="Nightly extra-bed surcharge")
    amenities: List[Amenity] = Field(default_factory=list)

    @model_validator(mode="after")
    def validate_guest_limits(self) -> "RoomTypeCreate":
        if self.max_guests < self.capacity:
            raise ValueError("max_guests must be at least capacity")
        return self


class RoomCreate(BaseCreateSchema):
    room_number: str = Field(..., min_length=1, max_length=20)
    floor: Union[int, None] = Field(None, ge=0)
    room_type_id: str = Field(..., description="Room type identifier")
    status: RoomStatus = Field(RoomStatus.AVAILABLE)
    housekeeping_status: HousekeepingStatus = Field(HousekeepingStatus.CLEAN)
    do_not_disturb: bool = Field(False)
