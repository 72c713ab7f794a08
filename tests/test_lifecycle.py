"""Check-in, check-out and cancellation."""

from decimal import Decimal

import pytest

from app.core.exceptions import InvalidTransitionError, RoomConflictError, ValidationError
from app.models import Booking, InventoryItem, Room
from app.models.base.enums import (
    BookingStatus,
    HousekeepingStatus,
    RoomLineStatus,
    RoomStatus,
    ServiceCategory,
)
from app.repositories.inventory.inventory_repository import InventoryConsumptionRepository
from app.schemas.booking import BookingCreate, RoomLineCreate, ServiceSelection
from app.schemas.booking.booking_request import RoomAssignment
from app.services.booking import BookingLifecycleService, BookingService, TemporaryBookingService
from app.services.integrations import (
    CHECKOUT_COMPLETED,
    ROOM_HOUSEKEEPING_UPDATED,
    TASK_REFRESH,
    Collaborators,
    DatabaseInventoryService,
    RealtimeBroadcaster,
)

from tests.conftest import (
    JAN_10,
    JAN_12,
    RecordingHousekeeping,
    RecordingInventory,
    RecordingNotifications,
)


def create_booking(db, customer, room_type, count=1, room_id=None, services=()):
    return BookingService(db).create_booking(BookingCreate(
        customer_id=customer.id,
        rooms=[
            RoomLineCreate(
                room_type_id=room_type.id,
                room_id=room_id,
                expected_check_in=JAN_10,
                expected_check_out=JAN_12,
                number_of_adults=2,
                services=list(services),
            )
            for _ in range(count)
        ],
    ))


class TestCheckIn:
    def test_auto_assigns_rooms_in_number_order(self, db, double_type, make_customer, collaborators):
        booking = create_booking(db, make_customer(), double_type, count=2)

        booking = BookingLifecycleService(db, collaborators).check_in(booking.id, now=JAN_10)

        assert booking.status == BookingStatus.CHECKED_IN
        assert [line.room_snapshot["room_number"] for line in booking.rooms] == ["101", "102"]
        assert booking.rooms[0].room_snapshot["type_name"] == "Double"
        for line in booking.rooms:
            assert line.status == RoomLineStatus.CHECKED_IN
            assert line.actual_check_in == JAN_10
            assert line.room.status == RoomStatus.OCCUPIED

    def test_auto_assign_skips_room_claimed_by_a_later_line(self, db, double_type, make_customer, collaborators):
        room_101 = next(room for room in double_type.rooms if room.room_number == "101")
        booking = BookingService(db).create_booking(BookingCreate(
            customer_id=make_customer().id,
            rooms=[
                RoomLineCreate(room_type_id=double_type.id, expected_check_in=JAN_10, expected_check_out=JAN_12),
                RoomLineCreate(
                    room_type_id=double_type.id,
                    room_id=room_101.id,
                    expected_check_in=JAN_10,
                    expected_check_out=JAN_12,
                ),
            ],
        ))

        booking = BookingLifecycleService(db, collaborators).check_in(booking.id, now=JAN_10)

        assert [line.room_snapshot["room_number"] for line in booking.rooms] == ["102", "101"]

    def test_explicit_room_claimed_by_a_sibling_line_conflicts(self, db, double_type, make_customer, collaborators):
        booking = create_booking(db, make_customer(), double_type, count=2)
        room = double_type.rooms[0]
        first, second = booking.rooms

        with pytest.raises(RoomConflictError):
            BookingLifecycleService(db, collaborators).check_in(booking.id, [
                RoomAssignment(line_id=first.id, room_id=room.id),
                RoomAssignment(line_id=second.id, room_id=room.id),
            ])

    def test_auto_assign_skips_room_held_by_another_booking(self, db, double_type, make_customer, collaborators):
        customer = make_customer()
        first_room = next(room for room in double_type.rooms if room.room_number == "101")
        create_booking(db, customer, double_type, room_id=first_room.id)
        booking = create_booking(db, customer, double_type)

        booking = BookingLifecycleService(db, collaborators).check_in(booking.id, now=JAN_10)

        assert booking.rooms[0].room_snapshot["room_number"] == "102"

    def test_explicit_room_held_by_another_booking_conflicts(self, db, double_type, make_customer, collaborators):
        customer = make_customer()
        taken = double_type.rooms[0]
        create_booking(db, customer, double_type, room_id=taken.id)
        booking = create_booking(db, customer, double_type)

        with pytest.raises(RoomConflictError) as exc_info:
            BookingLifecycleService(db, collaborators).check_in(
                booking.id,
                [RoomAssignment(line_id=booking.rooms[0].id, room_id=taken.id)],
            )
        assert exc_info.value.room_number == taken.room_number
        assert BookingService(db).get_booking(booking.id).status == BookingStatus.BOOKED

    def test_pending_booking_cannot_check_in(self, db, double_type, collaborators):
        pending = TemporaryBookingService(db).create_temporary_booking(JAN_10, JAN_12)

        with pytest.raises(InvalidTransitionError):
            BookingLifecycleService(db, collaborators).check_in(pending.id)


class TestCheckOut:
    def test_partial_then_final_checkout(self, db, double_type, make_customer, collaborators, realtime_events):
        lifecycle = BookingLifecycleService(db, collaborators)
        booking = create_booking(db, make_customer(), double_type, count=2)
        booking = lifecycle.check_in(booking.id, now=JAN_10)
        first, second = (line.room for line in booking.rooms)

        booking, receipt = lifecycle.check_out(booking.id, [first.id], now=JAN_12)

        assert booking.status == BookingStatus.CHECKED_IN
        assert booking.rooms[0].status == RoomLineStatus.COMPLETED
        assert booking.rooms[1].status == RoomLineStatus.CHECKED_IN
        assert first.status == RoomStatus.AVAILABLE
        assert first.housekeeping_status == HousekeepingStatus.CLEANING
        assert second.status == RoomStatus.OCCUPIED

        assert [room["room_number"] for room in receipt["rooms"]] == ["101"]
        assert receipt["rooms"][0]["nights"] == 2
        assert receipt["room_total"] == Decimal("1000000")
        assert receipt["grand_total"] == Decimal("1000000")
        assert receipt["balance_due"] == Decimal("2000000")
        assert receipt["booking_code"] == booking.booking_code

        booking, _ = lifecycle.check_out(booking.id, [second.id], now=JAN_12)
        assert booking.status == BookingStatus.COMPLETED

    def test_collaborators_are_called(self, db, double_type, make_customer, collaborators, notifications, realtime_events):
        lifecycle = BookingLifecycleService(db, collaborators)
        booking = lifecycle.check_in(create_booking(db, make_customer(), double_type).id, now=JAN_10)

        lifecycle.check_out(booking.id, [booking.rooms[0].room_id], now=JAN_12)

        assert collaborators.housekeeping.rooms == ["101"]
        assert len(notifications.receipts) == 1
        _, events = realtime_events
        assert [e.event for e in events] == [ROOM_HOUSEKEEPING_UPDATED, TASK_REFRESH, CHECKOUT_COMPLETED]
        assert events[-1].payload["tasks_created"] == 1

    def test_failing_collaborators_do_not_undo_checkout(self, db, session_factory, double_type, make_customer):
        failing = Collaborators(
            notifications=RecordingNotifications(fail=True),
            housekeeping=RecordingHousekeeping(fail=True),
            inventory=RecordingInventory(),
            realtime=RealtimeBroadcaster(),
        )
        lifecycle = BookingLifecycleService(db, failing)
        booking = lifecycle.check_in(create_booking(db, make_customer(), double_type).id, now=JAN_10)
        room_id = booking.rooms[0].room_id

        lifecycle.check_out(booking.id, [room_id], now=JAN_12)

        other = session_factory()
        try:
            assert other.get(Booking, booking.id).status == BookingStatus.COMPLETED
            assert other.get(Room, room_id).housekeeping_status == HousekeepingStatus.CLEANING
        finally:
            other.close()

    def test_unknown_room_is_rejected(self, db, double_type, make_customer, collaborators):
        lifecycle = BookingLifecycleService(db, collaborators)
        booking = lifecycle.check_in(create_booking(db, make_customer(), double_type).id, now=JAN_10)

        with pytest.raises(ValidationError):
            lifecycle.check_out(booking.id, ["no-such-room"], now=JAN_12)

    def test_minibar_consumption_deducts_stock(self, db, double_type, make_customer, make_service, notifications):
        cola = InventoryItem(name="Cola", item_type="drink", quantity=10)
        db.add(cola)
        db.commit()
        minibar = make_service(name="Cola", category=ServiceCategory.MINIBAR, price="20000",
                               inventory_item_ids=[cola.id])
        collaborators = Collaborators(
            notifications=notifications,
            housekeeping=RecordingHousekeeping(),
            inventory=DatabaseInventoryService(db),
            realtime=RealtimeBroadcaster(),
        )
        lifecycle = BookingLifecycleService(db, collaborators)
        booking = create_booking(
            db, make_customer(), double_type,
            services=[ServiceSelection(service_id=minibar.id, quantity=2)],
        )
        booking = lifecycle.check_in(booking.id, now=JAN_10)

        _, receipt = lifecycle.check_out(booking.id, [booking.rooms[0].room_id], now=JAN_12)

        assert receipt["rooms"][0]["services"][0]["amount"] == Decimal("40000")
        assert db.get(InventoryItem, cola.id).quantity == 8
        slips = InventoryConsumptionRepository(db).list_for_booking(booking.id)
        assert len(slips) == 1
        assert slips[0].items[0]["quantity"] == 2
        assert slips[0].items[0]["item_type"] == "drink"


class TestCancel:
    def test_cancel_booked_booking(self, db, double_type, make_customer, collaborators):
        booking = create_booking(db, make_customer(), double_type)

        cancelled = BookingLifecycleService(db, collaborators).cancel(booking.id)

        assert cancelled.status == BookingStatus.CANCELLED

    def test_cancel_releases_stale_occupied_room(self, db, double_type, make_customer, collaborators):
        room = double_type.rooms[0]
        booking = create_booking(db, make_customer(), double_type, room_id=room.id)
        room.status = RoomStatus.OCCUPIED
        db.commit()

        BookingLifecycleService(db, collaborators).cancel(booking.id)

        assert db.get(Room, room.id).status == RoomStatus.AVAILABLE

    def test_completed_booking_cannot_be_cancelled(self, db, double_type, make_customer, collaborators):
        lifecycle = BookingLifecycleService(db, collaborators)
        booking = lifecycle.check_in(create_booking(db, make_customer(), double_type).id, now=JAN_10)
        lifecycle.check_out(booking.id, [booking.rooms[0].room_id], now=JAN_12)

        with pytest.raises(InvalidTransitionError):
            lifecycle.cancel(booking.id)
