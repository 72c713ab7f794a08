"""
Room line model: one guest-room assignment inside a booking.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional, Tuple

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel, enum_type
from app.models.base.enums import RoomLineStatus

if TYPE_CHECKING:
    from app.models.booking.booking import Booking
    from app.models.booking.booking_service_item import BookingServiceItem
    from app.models.room.room import Room
    from app.models.room.room_type import RoomType

__all__ = ["BookingRoom"]


class BookingRoom(BaseModel):
    """
    Room line owned by a booking.

    Expected dates reserve capacity until check-in; once both actual dates
    are set they become the binding occupancy window.
    """

    __tablename__ = "booking_rooms"

    booking_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    room_type_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("room_types.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
        comment="Desired room type",
    )
    room_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("rooms.id", ondelete="RESTRICT"),
        nullable=True,
        index=True,
        comment="Assigned physical room, empty until assignment",
    )
    status: Mapped[RoomLineStatus] = mapped_column(
        enum_type(RoomLineStatus),
        nullable=False,
        default=RoomLineStatus.BOOKED,
    )

    expected_check_in: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    expected_check_out: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    actual_check_in: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)
    actual_check_out: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    number_of_adults: Mapped[int] = mapped_column(Integer, nullable=False, default=1)
    number_of_children: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    extra_bed_added: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    price_per_night: Mapped[Optional[Decimal]] = mapped_column(
        Numeric(14, 2),
        nullable=True,
        comment="Nightly price frozen at assignment, extra bed included",
    )

    room_snapshot: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    main_guest: Mapped[Optional[Dict[str, Any]]] = mapped_column(JSON, nullable=True)
    additional_guests: Mapped[List[Dict[str, Any]]] = mapped_column(
        JSON,
        nullable=False,
        default=list,
    )

    booking: Mapped["Booking"] = relationship("Booking", back_populates="rooms")
    room_type: Mapped[Optional["RoomType"]] = relationship("RoomType", lazy="joined")
    room: Mapped[Optional["Room"]] = relationship("Room", lazy="joined")
    services: Mapped[List["BookingServiceItem"]] = relationship(
        "BookingServiceItem",
        back_populates="booking_room",
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    __table_args__ = (
        Index("ix_booking_rooms_type_dates", "room_type_id", "expected_check_in", "expected_check_out"),
    )

    @property
    def effective_window(self) -> Tuple[Optional[datetime], Optional[datetime]]:
        """Actual dates when both are set, else expected dates."""
        if self.actual_check_in and self.actual_check_out:
            return self.actual_check_in, self.actual_check_out
        return self.expected_check_in, self.expected_check_out

    @property
    def guest_count(self) -> int:
        return (self.number_of_adults or 0) + (self.number_of_children or 0)
