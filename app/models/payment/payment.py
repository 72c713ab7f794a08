"""
Payment model.

One settlement record against a booking. A booking may hold several
(deposits, partial payments); its payment status is derived from the
sum of records in status ``paid``.
"""

from datetime import datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, Optional

from sqlalchemy import JSON, Boolean, DateTime, ForeignKey, Index, Numeric, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.models.base.base_model import TimestampModel, enum_type
from app.models.base.enums import PaymentCategory, PaymentMethod, PaymentRecordStatus

if TYPE_CHECKING:
    from app.models.booking.booking import Booking

__all__ = ["Payment"]


class Payment(TimestampModel):
    """Payment record for a booking."""

    __tablename__ = "payments"

    # ==================== Foreign Keys ====================
    booking_id: Mapped[str] = mapped_column(
        String(36),
        ForeignKey("bookings.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    # ==================== Settlement ====================
    amount: Mapped[Decimal] = mapped_column(Numeric(14, 2), nullable=False)
    method: Mapped[PaymentMethod] = mapped_column(
        enum_type(PaymentMethod),
        nullable=False,
    )
    category: Mapped[PaymentCategory] = mapped_column(
        enum_type(PaymentCategory),
        nullable=False,
    )
    status: Mapped[PaymentRecordStatus] = mapped_column(
        enum_type(PaymentRecordStatus),
        nullable=False,
        default=PaymentRecordStatus.PENDING,
        index=True,
    )
    is_deposit: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    transaction_code: Mapped[Optional[str]] = mapped_column(
        String(100),
        unique=True,
        nullable=True,
        comment="Gateway reference (vnp_TxnRef) or bank transfer reference",
    )
    note: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    payment_metadata: Mapped[Optional[Dict[str, Any]]] = mapped_column(
        "metadata",
        JSON,
        nullable=True,
    )
    paid_at: Mapped[Optional[datetime]] = mapped_column(DateTime, nullable=True)

    booking: Mapped["Booking"] = relationship("Booking", back_populates="payments")

    __table_args__ = (
        Index("ix_payments_booking_status", "booking_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Payment(amount={self.amount}, status={self.status})>"
