# app/services/payment/payment_aggregator.py
"""
Derived payment status of a booking.
"""

from decimal import Decimal
from typing import Any

from sqlalchemy.orm import Session

from app.core.logging import get_logger
from app.models.base.enums import PaymentStatus
from app.models.booking.booking import Booking
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.payment.payment_repository import PaymentRepository

logger = get_logger(__name__)


def derive_payment_status(paid: Any, total: Any) -> PaymentStatus:
    """``unpaid`` when nothing is paid, ``paid`` once the total is covered."""
    paid = Decimal(str(paid or 0))
    total = Decimal(str(total or 0))
    if paid <= 0:
        return PaymentStatus.UNPAID
    if paid >= total:
        return PaymentStatus.PAID
    return PaymentStatus.PARTIALLY_PAID


class PaymentAggregator:
    """Sums settled payments against the booking total."""

    def __init__(self, session: Session):
        self.session = session
        self.payments = PaymentRepository(session)
        self.bookings = BookingRepository(session)

    def recompute_status(self, booking: Booking) -> PaymentStatus:
        """
        Recompute and store the booking's payment status.

        Idempotent; run after every payment change and every price change.
        The caller owns the commit.
        """
        self.session.flush()
        paid = self.payments.sum_paid(booking.id)
        status = derive_payment_status(paid, booking.total_price)
        if booking.payment_status != status:
            logger.info(
                "Payment status changed",
                extra={
                    "booking_code": booking.booking_code,
                    "from_status": booking.payment_status,
                    "to_status": status,
                    "paid": str(paid),
                    "total": str(booking.total_price),
                },
            )
        booking.payment_status = status
        return status

    def recompute_status_for(self, booking_id: str) -> PaymentStatus:
        return self.recompute_status(self.bookings.get_by_id(booking_id))
