"""
Payment records: manual recording, status changes and staff
confirmation of off-gateway payments.

Every change re-runs the payment aggregator so the booking's derived
payment status never drifts from its paid records.
"""

from datetime import datetime
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidTransitionError, ValidationError
from app.models.base.enums import BookingStatus, PaymentMethod, PaymentRecordStatus, RoomLineStatus
from app.models.booking.booking import Booking
from app.models.payment.payment import Payment
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.payment.payment_repository import PaymentRepository
from app.schemas.payment.payment_base import PaymentCreate
from app.services.base import BaseService, track_performance
from app.services.integrations import NotificationService, call_collaborator
from app.services.integrations.notification_service import LoggingNotificationService
from app.services.payment.payment_aggregator import PaymentAggregator


class PaymentService(BaseService):
    """CRUD over payment records with payment-status recomputation."""

    def __init__(self, db_session: Session, notifications: Optional[NotificationService] = None):
        super().__init__(db_session)
        self.payments = PaymentRepository(db_session)
        self.bookings = BookingRepository(db_session)
        self.aggregator = PaymentAggregator(db_session)
        self.notifications = notifications or LoggingNotificationService()

    @track_performance("record_payment")
    def record_payment(self, data: PaymentCreate) -> Payment:
        """
        Add a payment record; ``paid_at`` is stamped when it arrives paid.

        Raises:
            ValidationError: Negative amount
            NotFoundError: Booking missing
        """
        if data.amount < 0:
            raise ValidationError("Số tiền không hợp lệ", field_errors={"amount": ["must be >= 0"]})

        with self.transaction():
            booking = self.bookings.get_by_id(data.booking_id)
            payment = Payment(
                booking_id=booking.id,
                amount=data.amount,
                method=data.method,
                category=data.category,
                status=data.status,
                is_deposit=data.is_deposit,
                transaction_code=data.transaction_code,
                note=data.note,
                paid_at=datetime.utcnow() if data.status == PaymentRecordStatus.PAID else None,
            )
            self.payments.add(payment)
            self.aggregator.recompute_status(booking)

        self._log_operation(
            "Payment recorded",
            booking.booking_code,
            {
                "amount": str(payment.amount),
                "method": payment.method.value,
                "payment_record_status": payment.status.value,
                "payment_status": booking.payment_status.value,
            },
        )
        return payment

    def update_payment_status(self, payment_id: str, status: PaymentRecordStatus) -> Payment:
        with self.transaction():
            payment = self.payments.get_by_id(payment_id)
            payment.status = status
            if status == PaymentRecordStatus.PAID and payment.paid_at is None:
                payment.paid_at = datetime.utcnow()
            self.aggregator.recompute_status_for(payment.booking_id)

        self._log_operation("Payment status updated", payment.id, {"payment_record_status": status.value})
        return payment

    def list_payments(self, booking_id: str) -> List[Payment]:
        self.bookings.get_by_id(booking_id)
        return self.payments.list_for_booking(booking_id)

    def delete_payment(self, payment_id: str) -> None:
        with self.transaction():
            payment = self.payments.get_by_id(payment_id)
            booking_id = payment.booking_id
            self.payments.delete(payment)
            self.aggregator.recompute_status_for(booking_id)

        self._log_operation("Payment deleted", payment_id, {"booking_id": booking_id})

    @track_performance("confirm_manual_payment")
    def confirm_manual_payment(
        self,
        booking_id: str,
        method: PaymentMethod = PaymentMethod.BANK_TRANSFER,
    ) -> Booking:
        """
        Staff confirmation that a booking was paid outside the gateway.

        Abandoned gateway attempts (pending records) are dropped and the
        booking becomes ``booked``; the guest then gets a confirmation.
        """
        with self.transaction():
            booking = self.bookings.get_by_id(booking_id)
            if booking.status not in (BookingStatus.PENDING, BookingStatus.BOOKED):
                raise InvalidTransitionError(booking.status.value, "confirm payment of")

            dropped = self.payments.delete_pending_for_booking(booking.id)
            self.db.expire(booking, ["payments"])
            booking.status = BookingStatus.BOOKED
            for line in booking.rooms:
                if line.status == RoomLineStatus.PENDING:
                    line.status = RoomLineStatus.BOOKED
            self.aggregator.recompute_status(booking)

        self._log_operation(
            "Manual payment confirmed",
            booking.booking_code,
            {"method": method.value, "dropped_pending_payments": dropped},
        )
        call_collaborator(
            "notifications",
            self.notifications.send_booking_confirmation,
            booking,
            booking.customer_snapshot,
        )
        return booking
