"""
Service selection attached to a booking or to one of its room lines.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Optional

from sqlalchemy import CheckConstraint, ForeignKey, Integer, Numeric, String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import BaseModel, enum_type
from app.models.base.enums import ServiceCategory

if TYPE_CHECKING:
    from app.models.booking.booking import Booking
    from app.models.booking.booking_room import BookingRoom
    from app.models.service.service import Service

__all__ = ["BookingServiceItem"]


class BookingServiceItem(BaseModel):
    """
    One selected service with its price frozen at selection time.

    Exactly one of ``booking_id`` (booking-level, e.g. transportation) or
    ``booking_room_id`` (room-scoped, e.g. minibar) is set.
    """

    __tablename__ = "booking_services"

    booking_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    booking_room_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("booking_rooms.id", ondelete="CASCADE"),
        nullable=True,
        index=True,
    )
    service_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("services.id", ondelete="SET NULL"),
        nullable=True,
    )
    service_name: Mapped[str] = mapped_column(String(150), nullable=False)
    category: Mapped[ServiceCategory] = mapped_column(
        enum_type(ServiceCategory),
        nullable=False,
    )
    unit_price: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=1)

    booking: Mapped[Optional["Booking"]] = relationship("Booking", back_populates="services")
    booking_room: Mapped[Optional["BookingRoom"]] = relationship("BookingRoom", back_populates="services")
    service: Mapped[Optional["Service"]] = relationship("Service", lazy="joined")

    __table_args__ = (
        CheckConstraint(
            "(booking_id IS NULL) <> (booking_room_id IS NULL)",
            name="ck_booking_services_single_owner",
        ),
    )
