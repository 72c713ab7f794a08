"""Editing a booking: terminal states, capacity re-checks and line progress."""

from datetime import datetime

import pytest

from app.core.exceptions import CapacityConflictError, InvalidTransitionError, RoomConflictError
from app.models.base.enums import BookingStatus, RoomLineStatus
from app.schemas.booking import BookingCreate, RoomLineCreate
from app.schemas.booking.booking_base import BookingUpdate
from app.services.booking import BookingLifecycleService, BookingService

from tests.conftest import JAN_10, JAN_11, JAN_12, JAN_13

JAN_14 = datetime(2030, 1, 14, 14, 0)
JAN_15 = datetime(2030, 1, 15, 12, 0)
JAN_16 = datetime(2030, 1, 16, 12, 0)
FEB_1 = datetime(2030, 2, 1, 14, 0)
FEB_3 = datetime(2030, 2, 3, 12, 0)


def line(room_type, check_in=JAN_10, check_out=JAN_12, room=None):
    return RoomLineCreate(
        room_type_id=room_type.id,
        room_id=room.id if room else None,
        expected_check_in=check_in,
        expected_check_out=check_out,
        number_of_adults=2,
    )


@pytest.fixture
def room_101(double_type):
    return next(room for room in double_type.rooms if room.room_number == "101")


@pytest.fixture
def book(db, make_customer):
    customer = make_customer()

    def factory(*lines):
        return BookingService(db).create_booking(BookingCreate(customer_id=customer.id, rooms=list(lines)))
    return factory


class TestEditableStates:
    @pytest.mark.parametrize("status", [BookingStatus.COMPLETED, BookingStatus.CANCELLED])
    def test_terminal_booking_is_rejected(self, db, double_type, book, status):
        booking = book(line(double_type))
        booking.status = status
        db.commit()

        with pytest.raises(InvalidTransitionError):
            BookingService(db).update_booking(booking.id, BookingUpdate(notes="late arrival"))

    def test_explicit_null_clears_notes(self, db, double_type, book):
        service = BookingService(db)
        booking = book(line(double_type))
        service.update_booking(booking.id, BookingUpdate(notes="late arrival", internal_notes="vip"))

        booking = service.update_booking(booking.id, BookingUpdate(notes=None))

        assert booking.notes is None
        assert booking.internal_notes == "vip"


class TestCapacityOnEdit:
    def test_edit_does_not_conflict_with_itself(self, db, double_type, book):
        booking = book(line(double_type), line(double_type))

        booking = BookingService(db).update_booking(booking.id, BookingUpdate(rooms=[
            line(double_type, JAN_11, JAN_13),
            line(double_type, JAN_11, JAN_13),
        ]))

        assert [edited.expected_check_in for edited in booking.rooms] == [JAN_11, JAN_11]
        assert booking.total_price > 0

    def test_edit_is_checked_against_other_bookings(self, db, double_type, book):
        book(line(double_type))
        booking = book(line(double_type, FEB_1, FEB_3))

        with pytest.raises(CapacityConflictError) as exc_info:
            BookingService(db).update_booking(booking.id, BookingUpdate(rooms=[
                line(double_type, JAN_11, JAN_13),
                line(double_type, JAN_11, JAN_13),
            ]))
        assert exc_info.value.remaining == 1
        assert BookingService(db).get_booking(booking.id).rooms[0].expected_check_in == FEB_1

    def test_named_room_held_elsewhere_conflicts(self, db, double_type, book, room_101):
        book(line(double_type, room=room_101))
        booking = book(line(double_type, FEB_1, FEB_3))

        with pytest.raises(RoomConflictError):
            BookingService(db).update_booking(booking.id, BookingUpdate(rooms=[line(double_type, room=room_101)]))


class TestCarriedRoom:
    def test_room_held_for_new_dates_is_released(self, db, double_type, book, room_101):
        moved = book(line(double_type, room=room_101))
        book(line(double_type, FEB_1, FEB_3, room=room_101))

        moved = BookingService(db).update_booking(moved.id, BookingUpdate(rooms=[line(double_type, FEB_1, FEB_3)]))

        assert moved.rooms[0].room_id is None
        assert moved.rooms[0].expected_check_in == FEB_1

    def test_room_free_for_new_dates_is_kept(self, db, double_type, book, room_101):
        booking = book(line(double_type, room=room_101))

        booking = BookingService(db).update_booking(booking.id, BookingUpdate(rooms=[line(double_type, FEB_1, FEB_3)]))

        assert booking.rooms[0].room_id == room_101.id

    def test_checked_in_line_keeps_progress(self, db, double_type, book, collaborators):
        booking = book(line(double_type))
        booking = BookingLifecycleService(db, collaborators).check_in(booking.id, now=JAN_10)
        room_id = booking.rooms[0].room_id

        booking = BookingService(db).update_booking(booking.id, BookingUpdate(rooms=[line(double_type, JAN_10, JAN_13)]))

        edited = booking.rooms[0]
        assert booking.status == BookingStatus.CHECKED_IN
        assert edited.status == RoomLineStatus.CHECKED_IN
        assert edited.actual_check_in == JAN_10
        assert edited.room_id == room_id
        assert edited.room_snapshot["room_number"] == "101"

    def test_checked_in_line_cannot_extend_into_a_held_room(self, db, double_type, book, room_101, collaborators):
        booking = book(line(double_type))
        booking = BookingLifecycleService(db, collaborators).check_in(booking.id, now=JAN_10)
        assert booking.rooms[0].room_id == room_101.id
        book(line(double_type, JAN_14, JAN_16, room=room_101))

        with pytest.raises(RoomConflictError):
            BookingService(db).update_booking(booking.id, BookingUpdate(rooms=[line(double_type, JAN_10, JAN_15)]))


class TestEditOverHttp:
    def test_patch_updates_notes(self, client):
        room_type = client.post("/api/v1/room-types", json={
            "name": "Single", "capacity": 1, "max_guests": 1, "price_per_night": "300000",
        }).json()
        client.post("/api/v1/rooms", json={"room_number": "201", "room_type_id": room_type["id"], "floor": 2})
        customer = client.post("/api/v1/customers", json={
            "honorific": "Bà", "first_name": "Lan", "last_name": "Tran", "phone_number": "0987654321",
        }).json()
        booking = client.post("/api/v1/bookings", json={
            "customer_id": customer["id"],
            "rooms": [{
                "room_type_id": room_type["id"],
                "expected_check_in": "2030-03-01T14:00:00",
                "expected_check_out": "2030-03-02T12:00:00",
            }],
        }).json()

        response = client.patch(f"/api/v1/bookings/{booking['id']}", json={"notes": "early check-in"})

        assert response.status_code == 200
        assert response.json()["notes"] == "early check-in"
