"""Pending booking flow used by the checkout screens."""

from decimal import Decimal

import pytest

from app.core.exceptions import CapacityConflictError, InvalidTransitionError, ValidationError
from app.models.base.enums import BookingStatus, PaymentMethod, RoomLineStatus
from app.schemas.booking import BookingCreate, RoomLineCreate, ServiceSelection, TemporaryRoomRequest
from app.services.booking import BookingService, TemporaryBookingService

from tests.conftest import JAN_10, JAN_12


class TestCreate:
    def test_default_single_untyped_line(self, db):
        booking = TemporaryBookingService(db).create_temporary_booking(JAN_10, JAN_12)

        assert booking.status == BookingStatus.PENDING
        assert booking.booking_code
        assert len(booking.rooms) == 1
        line = booking.rooms[0]
        assert line.room_type_id is None
        assert line.status == RoomLineStatus.PENDING
        assert line.number_of_adults == 1
        assert booking.total_price == Decimal("0")

    def test_one_line_per_requested_room(self, db):
        rooms = [TemporaryRoomRequest(number_of_adults=2), TemporaryRoomRequest(number_of_adults=1, number_of_children=1)]

        booking = TemporaryBookingService(db).create_temporary_booking(JAN_10, JAN_12, rooms)

        assert [line.number_of_children for line in booking.rooms] == [0, 1]

    def test_missing_or_reversed_dates(self, db):
        service = TemporaryBookingService(db)
        with pytest.raises(ValidationError):
            service.create_temporary_booking(None, JAN_12)
        with pytest.raises(ValidationError):
            service.create_temporary_booking(JAN_12, JAN_10)


class TestShaping:
    def test_set_type_prices_the_line(self, db, double_type):
        service = TemporaryBookingService(db)
        booking = service.create_temporary_booking(JAN_10, JAN_12)

        booking = service.set_line_room_type(booking.id, 0, double_type.id, number_of_adults=3)

        line = booking.rooms[0]
        assert line.price_per_night == Decimal("600000")
        assert line.extra_bed_added is True
        assert booking.total_price == Decimal("1200000")

    def test_type_blocked_when_type_is_full(self, db, double_type, make_customer):
        BookingService(db).create_booking(BookingCreate(
            customer_id=make_customer().id,
            rooms=[
                RoomLineCreate(room_type_id=double_type.id, expected_check_in=JAN_10, expected_check_out=JAN_12)
                for _ in range(2)
            ],
        ))
        service = TemporaryBookingService(db)
        booking = service.create_temporary_booking(JAN_10, JAN_12)

        with pytest.raises(CapacityConflictError) as exc_info:
            service.set_line_room_type(booking.id, 0, double_type.id)
        assert exc_info.value.remaining == 0

    def test_hold_blocks_another_guest(self, db, double_type):
        service = TemporaryBookingService(db)
        first = service.create_temporary_booking(JAN_10, JAN_12, [TemporaryRoomRequest(), TemporaryRoomRequest()])
        service.set_line_room_type(first.id, 0, double_type.id)
        service.set_line_room_type(first.id, 1, double_type.id)
        second = service.create_temporary_booking(JAN_10, JAN_12)

        with pytest.raises(CapacityConflictError):
            service.set_line_room_type(second.id, 0, double_type.id)

    def test_bad_index(self, db):
        service = TemporaryBookingService(db)
        booking = service.create_temporary_booking(JAN_10, JAN_12)
        with pytest.raises(ValidationError):
            service.remove_line_room_type(booking.id, 3)

    def test_services_and_reset(self, db, double_type, make_service):
        breakfast = make_service()
        service = TemporaryBookingService(db)
        booking = service.create_temporary_booking(JAN_10, JAN_12)
        service.set_line_room_type(booking.id, 0, double_type.id, number_of_adults=2)

        booking = service.add_line_services(booking.id, 0, [ServiceSelection(service_id=breakfast.id, quantity=2)])
        assert booking.total_price == Decimal("1100000")

        booking = service.reset_temporary_booking(booking.id)
        assert booking.rooms[0].room_type_id is None
        assert booking.rooms[0].services == []
        assert booking.total_price == Decimal("0")


class TestConfirm:
    def test_cash_confirmation_books_and_fills_main_guest(self, db, double_type, make_customer):
        customer = make_customer()
        service = TemporaryBookingService(db)
        booking = service.create_temporary_booking(JAN_10, JAN_12)
        service.set_line_room_type(booking.id, 0, double_type.id, number_of_adults=2)

        booking = service.confirm_temporary_booking(booking.id, customer.id)

        assert booking.status == BookingStatus.BOOKED
        assert booking.rooms[0].status == RoomLineStatus.BOOKED
        assert booking.customer_snapshot["phone_number"] == "0912345678"
        assert booking.rooms[0].main_guest["gender"] == "male"
        assert booking.total_price == Decimal("1000000")

    def test_online_confirmation_stays_pending(self, db, double_type, make_customer):
        service = TemporaryBookingService(db)
        booking = service.create_temporary_booking(JAN_10, JAN_12)
        service.set_line_room_type(booking.id, 0, double_type.id)

        booking = service.confirm_temporary_booking(booking.id, make_customer(honorific="Bà").id, PaymentMethod.VNPAY)

        assert booking.status == BookingStatus.PENDING
        assert booking.rooms[0].main_guest["gender"] == "female"

    def test_untyped_line_cannot_be_confirmed(self, db, make_customer):
        service = TemporaryBookingService(db)
        booking = service.create_temporary_booking(JAN_10, JAN_12)

        with pytest.raises(ValidationError):
            service.confirm_temporary_booking(booking.id, make_customer().id)

    def test_confirmed_booking_is_no_longer_editable(self, db, double_type, make_customer):
        service = TemporaryBookingService(db)
        booking = service.create_temporary_booking(JAN_10, JAN_12)
        service.set_line_room_type(booking.id, 0, double_type.id)
        service.confirm_temporary_booking(booking.id, make_customer().id)

        with pytest.raises(InvalidTransitionError):
            service.reset_temporary_booking(booking.id)
