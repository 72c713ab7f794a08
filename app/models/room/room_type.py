# app/models/room/room_type.py
"""
Room type (category) model.

A type is shared by many physical rooms and carries the capacity and
pricing rules used when a booking line is priced.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, List, Optional

from sqlalchemy import JSON, Boolean, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel

if TYPE_CHECKING:
    from app.models.room.room import Room

__all__ = ["RoomType"]


class RoomType(TimestampModel):
    """
    Room category such as "Double" or "Deluxe".

    Attributes:
        name: Unique display name
        capacity: Guests allowed before an extra bed is required
        max_guests: Hard guest limit including extra bed
        price_per_night: Base nightly rate
        extra_bed_allowed: Whether an extra bed can be added
        extra_bed_price: Nightly surcharge for the extra bed
        amenities: List of amenity codes
    """

    __tablename__ = "room_types"

    name: Mapped[str] = mapped_column(
        String(100),
        unique=True,
        nullable=False,
        index=True,
    )
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    capacity: Mapped[int] = mapped_column(
        Integer,
        nullable=False,
        default=2,
        comment="Guests before an extra bed is required",
    )
    max_guests: Mapped[Optional[int]] = mapped_column(Integer, nullable=True)
    price_per_night: Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
    )
    extra_bed_allowed: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
    )
    extra_bed_price: Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
        default=Decimal("0"),
    )
    amenities: Mapped[List[str]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    rooms: Mapped[List["Room"]] = relationship(
        "Room",
        back_populates="room_type",
        lazy="select",
    )

    def __repr__(self) -> str:
        return f"<RoomType(name={self.name}, price={self.price_per_night})>"
