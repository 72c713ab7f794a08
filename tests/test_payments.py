"""Payment records, derived payment status and cash settlement."""

from decimal import Decimal

import pytest

from app.core.exceptions import InvalidTransitionError, ValidationError
from app.models.base.enums import (
    BookingStatus,
    PaymentMethod,
    PaymentRecordStatus,
    PaymentStatus,
    RoomLineStatus,
    ServiceCategory,
)
from app.schemas.booking import BookingCreate, RoomLineCreate, ServiceSelection
from app.schemas.payment import PaymentCreate
from app.services.booking import BookingService, TemporaryBookingService
from app.services.payment import PaymentService, derive_payment_status

from tests.conftest import JAN_10, JAN_12


@pytest.fixture
def booking(db, double_type, make_customer):
    """One Double for two nights: 1,000,000 total."""
    return BookingService(db).create_booking(BookingCreate(
        customer_id=make_customer().id,
        rooms=[RoomLineCreate(
            room_type_id=double_type.id,
            expected_check_in=JAN_10,
            expected_check_out=JAN_12,
            number_of_adults=2,
        )],
    ))


def paid(booking, amount, status=PaymentRecordStatus.PAID):
    return PaymentCreate(booking_id=booking.id, amount=Decimal(amount), status=status)


class TestDerivedStatus:
    def test_thresholds(self):
        assert derive_payment_status(0, 100) == PaymentStatus.UNPAID
        assert derive_payment_status(40, 100) == PaymentStatus.PARTIALLY_PAID
        assert derive_payment_status(100, 100) == PaymentStatus.PAID
        assert derive_payment_status(None, None) == PaymentStatus.UNPAID


class TestPaymentService:
    def test_status_follows_paid_amount(self, db, booking):
        service = PaymentService(db)
        assert booking.total_price == Decimal("1000000")
        assert booking.payment_status == PaymentStatus.UNPAID

        service.record_payment(paid(booking, "400000"))
        assert booking.payment_status == PaymentStatus.PARTIALLY_PAID

        service.record_payment(paid(booking, "600000"))
        assert booking.payment_status == PaymentStatus.PAID

    def test_pending_payment_does_not_count(self, db, booking):
        payment = PaymentService(db).record_payment(paid(booking, "1000000", PaymentRecordStatus.PENDING))

        assert payment.paid_at is None
        assert booking.payment_status == PaymentStatus.UNPAID

    def test_status_update_and_delete_recompute(self, db, booking):
        service = PaymentService(db)
        pending = service.record_payment(paid(booking, "1000000", PaymentRecordStatus.PENDING))

        updated = service.update_payment_status(pending.id, PaymentRecordStatus.PAID)
        assert updated.paid_at is not None
        assert BookingService(db).get_booking(booking.id).payment_status == PaymentStatus.PAID

        service.delete_payment(pending.id)
        assert BookingService(db).get_booking(booking.id).payment_status == PaymentStatus.UNPAID
        assert service.list_payments(booking.id) == []

    def test_negative_amount_rejected_by_schema(self, booking):
        with pytest.raises(ValueError):
            PaymentCreate(booking_id=booking.id, amount=Decimal("-1"))

    def test_added_service_moves_status_back(self, db, booking, make_service):
        transfer = make_service(name="Airport transfer", category=ServiceCategory.FIXED, price="200000")
        PaymentService(db).record_payment(paid(booking, "1000000"))
        bookings = BookingService(db)

        bookings.save_booking_services(booking.id, [ServiceSelection(service_id=transfer.id)])
        assert booking.total_price == Decimal("1200000")
        assert booking.payment_status == PaymentStatus.PARTIALLY_PAID

        bookings.save_booking_services(booking.id, [])
        assert booking.payment_status == PaymentStatus.PAID


class TestManualConfirmation:
    def test_confirms_pending_online_booking(self, db, double_type, make_customer, notifications):
        temporary = TemporaryBookingService(db)
        pending = temporary.create_temporary_booking(JAN_10, JAN_12)
        temporary.set_line_room_type(pending.id, 0, double_type.id, number_of_adults=2)
        pending = temporary.confirm_temporary_booking(pending.id, make_customer().id, PaymentMethod.VNPAY)
        assert pending.status == BookingStatus.PENDING
        service = PaymentService(db, notifications=notifications)
        service.record_payment(paid(pending, "1000000", PaymentRecordStatus.PENDING))

        confirmed = service.confirm_manual_payment(pending.id)

        assert confirmed.status == BookingStatus.BOOKED
        assert all(line.status == RoomLineStatus.BOOKED for line in confirmed.rooms)
        assert service.list_payments(pending.id) == []
        assert notifications.confirmations == [confirmed.booking_code]

    def test_cancelled_booking_cannot_be_confirmed(self, db, booking):
        booking.status = BookingStatus.CANCELLED
        db.commit()

        with pytest.raises(InvalidTransitionError):
            PaymentService(db).confirm_manual_payment(booking.id)


class TestCashSettlement:
    def test_change_is_returned_over_total(self, db, booking):
        settled = BookingService(db).settle_cash(booking.id, Decimal("1200000"))

        assert settled.money_received == Decimal("1200000")
        assert settled.change_amount == Decimal("200000")
        assert settled.payment_status == PaymentStatus.PAID

    def test_received_cash_accumulates(self, db, booking):
        service = BookingService(db)
        service.settle_cash(booking.id, Decimal("300000"))
        assert booking.payment_status == PaymentStatus.PARTIALLY_PAID

        settled = service.settle_cash(booking.id, Decimal("800000"))
        assert settled.money_received == Decimal("1100000")
        assert settled.change_amount == Decimal("100000")
        assert len(PaymentService(db).list_payments(booking.id)) == 2

    def test_negative_cash_rejected(self, db, booking):
        with pytest.raises(ValidationError):
            BookingService(db).settle_cash(booking.id, Decimal("-5"))
