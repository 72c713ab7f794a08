"""Conflict detection, capacity checks and availability resolution."""

from datetime import datetime, timedelta

import pytest

from app.core.exceptions import CapacityConflictError, RoomConflictError
from app.models.base.enums import BookingStatus, CheckoutHint, RoomStatus, VisibleStatus
from app.schemas.booking import BookingCreate, RoomLineCreate
from app.services.booking import BookingService, TemporaryBookingService
from app.services.reservation import (
    AvailabilityResolver,
    ConflictDetector,
    RequestedLine,
    windows_overlap,
)

from tests.conftest import JAN_10, JAN_11, JAN_12, JAN_13


def booking_payload(customer, room_type, check_in, check_out, count=1, room_id=None):
    return BookingCreate(
        customer_id=customer.id,
        rooms=[
            RoomLineCreate(
                room_type_id=room_type.id,
                room_id=room_id,
                expected_check_in=check_in,
                expected_check_out=check_out,
            )
            for _ in range(count)
        ],
    )


class TestOverlap:
    def test_inclusive_bounds(self):
        a = (datetime(2030, 1, 10), datetime(2030, 1, 12))
        b = (datetime(2030, 1, 12), datetime(2030, 1, 14))
        assert windows_overlap(a, b)
        assert windows_overlap(b, a)

    def test_disjoint(self):
        a = (datetime(2030, 1, 10), datetime(2030, 1, 11))
        b = (datetime(2030, 1, 12), datetime(2030, 1, 14))
        assert not windows_overlap(a, b)
        assert not windows_overlap(b, a)

    def test_undated_window_never_overlaps(self):
        assert not windows_overlap((None, datetime(2030, 1, 12)), (datetime(2030, 1, 10), datetime(2030, 1, 14)))


class TestCapacity:
    def test_double_scenario(self, db, double_type, make_customer):
        customer = make_customer()
        BookingService(db).create_booking(booking_payload(customer, double_type, JAN_10, JAN_12))

        resolver = AvailabilityResolver(db)
        assert resolver.remaining_for_type(double_type.id, JAN_11, JAN_11 + timedelta(hours=1)) == 1

        with pytest.raises(CapacityConflictError) as exc_info:
            BookingService(db).create_booking(booking_payload(customer, double_type, JAN_11, JAN_13, count=2))
        assert exc_info.value.remaining == 1
        assert exc_info.value.requested == 2
        assert exc_info.value.status_code == 409
        assert "Chỉ còn 1 phòng" in exc_info.value.message

    def test_second_single_room_still_fits(self, db, double_type, make_customer):
        customer = make_customer()
        service = BookingService(db)
        service.create_booking(booking_payload(customer, double_type, JAN_10, JAN_12))
        second = service.create_booking(booking_payload(customer, double_type, JAN_11, JAN_13))
        assert second.status == BookingStatus.BOOKED

    def test_edit_excludes_the_booking_itself(self, db, double_type, make_customer):
        customer = make_customer()
        service = BookingService(db)
        booking = service.create_booking(booking_payload(customer, double_type, JAN_10, JAN_12, count=2))

        detector = ConflictDetector(db)
        requested = [RequestedLine(double_type.id, JAN_11, JAN_13)] * 2
        detector.ensure_capacity(requested, exclude_booking_id=booking.id)
        with pytest.raises(CapacityConflictError):
            detector.ensure_capacity(requested)

    def test_cancelled_booking_frees_capacity(self, db, double_type, make_customer):
        customer = make_customer()
        service = BookingService(db)
        booking = service.create_booking(booking_payload(customer, double_type, JAN_10, JAN_12, count=2))
        booking.status = BookingStatus.CANCELLED
        db.commit()

        assert ConflictDetector(db).remaining(double_type.id, JAN_10, JAN_12) == 2

    def test_expired_pending_hold_does_not_count(self, db, double_type):
        temporary = TemporaryBookingService(db)
        stale = temporary.create_temporary_booking(JAN_10, JAN_12, now=datetime.utcnow() - timedelta(hours=2))
        temporary.set_line_room_type(stale.id, 0, double_type.id)
        fresh = temporary.create_temporary_booking(JAN_10, JAN_12)
        temporary.set_line_room_type(fresh.id, 0, double_type.id)

        assert ConflictDetector(db).count_conflicts(double_type.id, JAN_10, JAN_12) == 1

    def test_named_room_conflict(self, db, double_type, make_customer):
        customer = make_customer()
        room = double_type.rooms[0]
        service = BookingService(db)
        service.create_booking(booking_payload(customer, double_type, JAN_10, JAN_12, room_id=room.id))

        with pytest.raises(RoomConflictError) as exc_info:
            service.create_booking(booking_payload(customer, double_type, JAN_11, JAN_13, room_id=room.id))
        assert exc_info.value.room_number == room.room_number


class TestAvailability:
    def test_assigned_and_type_held_rooms_are_booked(self, db, double_type, make_room, make_customer):
        third = make_room(double_type, "103")
        customer = make_customer()
        service = BookingService(db)
        service.create_booking(booking_payload(customer, double_type, JAN_10, JAN_12, room_id=third.id))
        service.create_booking(booking_payload(customer, double_type, JAN_10, JAN_12))

        statuses = {
            entry.room.room_number: entry.visible_status
            for entry in AvailabilityResolver(db).resolve(JAN_10, JAN_12)
        }
        assert statuses == {
            "101": VisibleStatus.BOOKED,
            "102": VisibleStatus.AVAILABLE,
            "103": VisibleStatus.BOOKED,
        }

    def test_maintenance_and_occupied_rooms(self, db, make_room_type, make_room):
        suite = make_room_type(name="Suite")
        make_room(suite, "201", status=RoomStatus.MAINTENANCE)
        make_room(suite, "202", status=RoomStatus.OCCUPIED)

        statuses = {
            entry.room.room_number: entry.visible_status
            for entry in AvailabilityResolver(db).resolve(JAN_10, JAN_12)
        }
        assert statuses["201"] == VisibleStatus.MAINTENANCE
        # occupied now but nobody holds it for the requested dates
        assert statuses["202"] == VisibleStatus.AVAILABLE

    def test_grouped_view_counts_available_rooms(self, db, double_type, make_customer):
        BookingService(db).create_booking(booking_payload(make_customer(), double_type, JAN_10, JAN_12))

        groups = AvailabilityResolver(db).resolve_grouped(JAN_10, JAN_12)

        assert len(groups) == 1
        assert groups[0].room_type.name == "Double"
        assert groups[0].available_count == 1
        assert groups[0].to_dict()["available_count"] == 1

    def test_checkout_hints(self, db, double_type, make_customer):
        today = datetime(2030, 1, 12).date()
        booking = BookingService(db).create_booking(
            booking_payload(make_customer(), double_type, JAN_10, JAN_12, count=2)
        )
        first, second = booking.rooms
        for line, room in zip(booking.rooms, double_type.rooms):
            line.room_id = room.id
            line.actual_check_in = JAN_10
        second.expected_check_out = JAN_11
        db.commit()

        hints = AvailabilityResolver(db).checkout_hints(today=today)

        assert hints[first.room_id] == CheckoutHint.TODAY
        assert hints[second.room_id] == CheckoutHint.PAST
