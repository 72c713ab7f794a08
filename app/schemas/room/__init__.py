from app.schemas.room.room_availability import (
    AvailabilityQuery,
    AvailabilityResponse,
    RemainingCapacityResponse,
    RoomAvailabilityResponse,
    RoomTypeSummary,
    TypeAvailabilityResponse,
)
from app.schemas.room.room_base import RoomCreate, RoomTypeCreate
from app.schemas.room.room_response import RoomResponse, RoomTypeResponse

__all__ = [
    "AvailabilityQuery",
    "AvailabilityResponse",
    "RemainingCapacityResponse",
    "RoomAvailabilityResponse",
    "RoomCreate",
    "RoomResponse",
    "RoomTypeCreate",
    "RoomTypeResponse",
    "RoomTypeSummary",
    "TypeAvailabilityResponse",
]
