"""
Booking aggregate model.

A booking owns its room lines, its booking-level service selections and
its payments; rooms and room types are only referenced.
"""

from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Optional

from sqlalchemy import JSON, ForeignKey, Index, Integer, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel, enum_type
from app.models.base.enums import BookingStatus, PaymentStatus, RoomLineStatus

if TYPE_CHECKING:
    from app.models.booking.booking_room import BookingRoom
    from app.models.booking.booking_service_item import BookingServiceItem
    from app.models.customer.customer import Customer
    from app.models.payment.payment import Payment

__all__ = ["Booking"]


class Booking(TimestampModel):
    """
    Reservation aggregate.

    Attributes:
        booking_code: Human-readable code, ``BK-MMYY-NNNNN``
        sequence_number: Per-month sequence used to build the code
        code_month: ``MMYY`` part of the code
        customer_id: Booker, nullable so the booking survives customer removal
        customer_snapshot: Customer fields copied at booking time
        status: Lifecycle status
        payment_status: Derived from paid payments against total_price
        total_price: Last computed total
        money_received: Cash received at the desk
        change_amount: Change handed back for cash settlement
    """

    __tablename__ = "bookings"

    booking_code: Mapped[str] = mapped_column(
        String(20),
        unique=True,
        nullable=False,
        index=True,
        comment="Unique human-readable booking code (e.g., BK-0125-00001)",
    )
    sequence_number: Mapped[int] = mapped_column(Integer, nullable=False)
    code_month: Mapped[str] = mapped_column(String(4), nullable=False)

    customer_id: Mapped[Optional[str]] = mapped_column(
        String(36),
        ForeignKey("customers.id", ondelete="SET NULL"),
        nullable=True,
        index=True,
    )
    customer_snapshot: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        JSON,
        nullable=True,
    )

    status: Mapped[BookingStatus] = mapped_column(
        enum_type(BookingStatus),
        nullable=False,
        default=BookingStatus.PENDING,
        index=True,
    )
    payment_status: Mapped[PaymentStatus] = mapped_column(
        enum_type(PaymentStatus),
        nullable=False,
        default=PaymentStatus.UNPAID,
    )

    total_price: Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
        default=Decimal("0"),
    )
    money_received: Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
        default=Decimal("0"),
    )
    change_amount: Mapped[Decimal] = mapped_column(
        Numeric(14, 2),
        nullable=False,
        default=Decimal("0"),
    )

    notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    internal_notes: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    customer: Mapped[Optional["Customer"]] = relationship("Customer", lazy="select")
    rooms: Mapped[List["BookingRoom"]] = relationship(
        "BookingRoom",
        back_populates="booking",
        cascade="all, delete-orphan",
        order_by="BookingRoom.position",
        lazy="selectin",
    )
    services: Mapped[List["BookingServiceItem"]] = relationship(
        "BookingServiceItem",
        back_populates="booking",
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    payments: Mapped[List["Payment"]] = relationship(
        "Payment",
        back_populates="booking",
        cascade="all, delete-orphan",
        lazy="select",
    )

    __table_args__ = (
        Index("ix_bookings_code_month_seq", "code_month", "sequence_number"),
        Index("ix_bookings_status_created", "status", "created_at"),
    )

    @property
    def is_terminal(self) -> bool:
        return self.status in (BookingStatus.COMPLETED, BookingStatus.CANCELLED)

    @property
    def all_rooms_completed(self) -> bool:
        return bool(self.rooms) and all(
            line.status == RoomLineStatus.COMPLETED for line in self.rooms
        )

    def __repr__(self) -> str:
        return f"<Booking(code={self.booking_code}, status={self.status})>"
