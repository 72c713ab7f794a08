"""
Room catalog response schemas.
"""

from decimal import Decimal
from typing import List, Union

from pydantic import Field

from app.models.base.enums import Amenity, HousekeepingStatus, RoomStatus
from app.schemas.common.base import BaseResponseSchema

__all__ = [
    "RoomTypeResponse",
    "RoomResponse",
]


class RoomTypeResponse(BaseResponseSchema):
    name: str
    description: Union[str, None] = None
    capacity: int
    max_guests: Union[int, None] = None
    price_per_night: Decimal
    extra_bed_allowed: bool
    extra_bed_price: Decimal
    amenities: List[Amenity] = Field(default_factory=list)


class RoomResponse(BaseResponseSchema):
    room_number: str
    floor: Union[int, None] = None
    room_type_id: str
    status: RoomStatus
    housekeeping_status: HousekeepingStatus
    do_not_disturb: bool
