"""
Booking lifecycle transitions: check-in, check-out and cancel.

State changes commit first; collaborator calls (cleaning tasks, minibar
stock, real-time events, receipt mail) run afterwards and can fail
without undoing the transition.
"""

from datetime import datetime
from decimal import Decimal
from typing import Dict, List, Optional, Sequence, Set, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions import (
    CapacityConflictError,
    InvalidTransitionError,
    RoomConflictError,
    ValidationError,
)
from app.models.base.enums import (
    BookingStatus,
    HousekeepingStatus,
    RoomLineStatus,
    RoomStatus,
    ServiceCategory,
)
from app.models.booking.booking import Booking
from app.models.booking.booking_room import BookingRoom
from app.models.booking.booking_service_item import BookingServiceItem
from app.models.room.room import Room
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.payment.payment_repository import PaymentRepository
from app.repositories.room.room_repository import RoomRepository
from app.schemas.booking.booking_request import RoomAssignment
from app.services.base import BaseService, track_performance
from app.services.booking.line_builder import refresh_totals
from app.services.integrations import (
    CHECKOUT_COMPLETED,
    ROOM_HOUSEKEEPING_UPDATED,
    TASK_REFRESH,
    Collaborators,
    call_collaborator,
    default_collaborators,
)
from app.services.pricing.price_calculator import (
    ServiceContext,
    booking_nights,
    line_nightly_price,
    line_nights,
    service_amount,
)
from app.services.reservation.conflict_detector import ConflictDetector

ZERO = Decimal("0")


class BookingLifecycleService(BaseService):
    """State machine for booked → checked_in → completed, and cancellation."""

    def __init__(self, db_session: Session, collaborators: Optional[Collaborators] = None):
        super().__init__(db_session)
        self.bookings = BookingRepository(db_session)
        self.rooms = RoomRepository(db_session)
        self.payments = PaymentRepository(db_session)
        self.detector = ConflictDetector(db_session)
        self.collaborators = collaborators or default_collaborators(db_session)

    # -------------------------------------------------------------------------
    # Check-in
    # -------------------------------------------------------------------------

    @track_performance("check_in")
    def check_in(
        self,
        booking_id: str,
        assignments: Sequence[RoomAssignment] = (),
        now: Optional[datetime] = None,
    ) -> Booking:
        """
        Check in every room line of a ``booked`` booking.

        Lines named in ``assignments`` get that room; lines already holding
        a room keep it; the rest get the first free room of their type in
        room-number order.

        Raises:
            InvalidTransitionError: Booking is not ``booked``
            RoomConflictError: An assigned room is held by another booking
            CapacityConflictError: No free room of a line's type remains
        """
        now = now or datetime.utcnow()
        with self.transaction():
            booking = self.bookings.get_by_id(booking_id)
            if booking.status != BookingStatus.BOOKED:
                raise InvalidTransitionError(
                    booking.status.value,
                    "check in",
                    message="Đặt phòng không ở trạng thái 'đã đặt'",
                )

            requested = {a.line_id: a.room_id for a in assignments}
            line_ids = {line.id for line in booking.rooms}
            unknown = set(requested) - line_ids
            if unknown:
                raise ValidationError(
                    "Assignments reference room lines outside this booking",
                    field_errors={"assignments": sorted(unknown)},
                )

            claimed = {
                line.id: requested.get(line.id, line.room_id)
                for line in booking.rooms
                if requested.get(line.id, line.room_id)
            }
            picked: Set[str] = set()
            for line in booking.rooms:
                # rooms already picked or claimed by a sibling line
                held = picked | {rid for lid, rid in claimed.items() if lid != line.id}
                if line.id in requested:
                    room = self._explicit_room(booking, line, requested[line.id], held)
                elif line.room_id:
                    room = line.room
                    if room.id in held:
                        raise RoomConflictError(room.room_number, room.id)
                else:
                    room = self._auto_assign(booking, line, held)
                picked.add(room.id)

                line.room_id = room.id
                line.room = room
                line.actual_check_in = now
                line.status = RoomLineStatus.CHECKED_IN
                line.room_snapshot = {
                    "room_number": room.room_number,
                    "type_name": room.room_type.name if room.room_type else None,
                }
                room.status = RoomStatus.OCCUPIED

            booking.status = BookingStatus.CHECKED_IN
            refresh_totals(self.db, booking)

        self._log_operation(
            "Booking checked in",
            booking.booking_code,
            {"rooms": [line.room_snapshot["room_number"] for line in booking.rooms]},
        )
        return booking

    def _explicit_room(self, booking: Booking, line: BookingRoom, room_id: str, held: Set[str]) -> Room:
        room = self.rooms.get_by_id(room_id)
        if line.room_type_id and room.room_type_id != line.room_type_id:
            raise ValidationError(
                f"Room {room.room_number} is not of the booked type",
                field_errors={"room_id": ["room type mismatch"]},
            )
        check_in, check_out = self._window(line, datetime.utcnow())
        if room.id in held or self.detector.room_is_taken(room.id, check_in, check_out, booking.id):
            raise RoomConflictError(room.room_number, room.id)
        return room

    def _auto_assign(self, booking: Booking, line: BookingRoom, held: Set[str]) -> Room:
        check_in, check_out = self._window(line, datetime.utcnow())
        for room in self.rooms.list_rooms(line.room_type_id):
            if room.id in held or room.status != RoomStatus.AVAILABLE:
                continue
            if self.detector.room_is_taken(room.id, check_in, check_out, booking.id):
                continue
            return room

        type_name = line.room_type.name if line.room_type else str(line.room_type_id)
        raise CapacityConflictError(type_name, remaining=0, requested=1)

    @staticmethod
    def _window(line: BookingRoom, fallback: datetime) -> Tuple[datetime, datetime]:
        return line.expected_check_in or fallback, line.expected_check_out or fallback

    # -------------------------------------------------------------------------
    # Check-out
    # -------------------------------------------------------------------------

    @track_performance("check_out")
    def check_out(
        self,
        booking_id: str,
        room_ids: Sequence[str],
        now: Optional[datetime] = None,
    ) -> Tuple[Booking, Dict]:
        """
        Check out the given rooms of a ``checked_in`` booking.

        The booking completes once every line is completed. Returns the
        booking and the receipt for the rooms checked out.
        """
        now = now or datetime.utcnow()
        selected = set(room_ids)
        with self.transaction():
            booking = self.bookings.get_by_id(booking_id)
            if booking.status != BookingStatus.CHECKED_IN:
                raise InvalidTransitionError(
                    booking.status.value,
                    "check out",
                    message="Đặt phòng không ở trạng thái 'đã nhận phòng'",
                )

            leaving = [
                line for line in booking.rooms
                if line.room_id in selected and line.status != RoomLineStatus.COMPLETED
            ]
            if not leaving:
                raise ValidationError(
                    "None of the given rooms is checked in under this booking",
                    field_errors={"room_ids": sorted(selected)},
                )

            for line in leaving:
                line.actual_check_out = now
                line.status = RoomLineStatus.COMPLETED
                line.room.status = RoomStatus.AVAILABLE
                line.room.housekeeping_status = HousekeepingStatus.CLEANING

            if booking.all_rooms_completed:
                booking.status = BookingStatus.COMPLETED
            refresh_totals(self.db, booking)
            receipt = self.build_receipt(booking, leaving, now)

        self._log_operation(
            "Rooms checked out",
            booking.booking_code,
            {
                "rooms": [line.room.room_number for line in leaving],
                "booking_status": booking.status.value,
                "total_price": str(booking.total_price),
            },
        )
        self._after_check_out(booking, leaving, receipt)
        return booking, receipt

    def build_receipt(self, booking: Booking, lines: Sequence[BookingRoom], now: datetime) -> Dict:
        """Room and service breakdown for the checked-out lines plus booking-level services."""
        rooms = []
        room_total = ZERO
        services_total = ZERO
        for line in lines:
            nights = line_nights(line)
            nightly = line_nightly_price(line)
            context = ServiceContext(nights=nights, guests=line.guest_count)
            services = [self._receipt_service(item, context) for item in line.services]
            rooms.append({
                "room_number": (line.room_snapshot or {}).get("room_number"),
                "room_type": (line.room_snapshot or {}).get("type_name"),
                "check_in": line.actual_check_in or line.expected_check_in,
                "check_out": line.actual_check_out or now,
                "nights": nights,
                "price_per_night": nightly,
                "room_cost": nightly * nights,
                "services": services,
            })
            room_total += nightly * nights
            services_total += sum((s["amount"] for s in services), ZERO)

        priced_lines = [line for line in booking.rooms if line.room_type_id]
        booking_context = ServiceContext(
            nights=booking_nights(priced_lines),
            guests=sum(line.guest_count for line in priced_lines),
        )
        booking_services = [self._receipt_service(item, booking_context) for item in booking.services]
        services_total += sum((s["amount"] for s in booking_services), ZERO)

        paid = self.payments.sum_paid(booking.id)
        return {
            "booking_code": booking.booking_code,
            "customer": booking.customer_snapshot,
            "rooms": rooms,
            "booking_services": booking_services,
            "room_total": room_total,
            "services_total": services_total,
            "grand_total": room_total + services_total,
            "paid": paid,
            "balance_due": max(ZERO, Decimal(str(booking.total_price)) - paid),
            "payment_status": booking.payment_status,
            "issued_at": now,
        }

    @staticmethod
    def _receipt_service(item: BookingServiceItem, context: ServiceContext) -> Dict:
        return {
            "name": item.service_name,
            "category": item.category,
            "unit_price": item.unit_price,
            "quantity": item.quantity if item.quantity is not None else 1,
            "amount": service_amount(item, context),
        }

    def _after_check_out(self, booking: Booking, lines: List[BookingRoom], receipt: Dict) -> None:
        c = self.collaborators
        rooms = [line.room for line in lines]

        for room in rooms:
            call_collaborator(
                "housekeeping",
                c.housekeeping.create_cleaning_task,
                room,
                booking.booking_code,
                session=self.db,
            )

        for room_id, item in self._minibar_items(booking, lines):
            call_collaborator(
                "inventory",
                self._consume_minibar,
                booking,
                room_id,
                item,
                session=self.db,
            )

        for room in rooms:
            call_collaborator(
                "realtime",
                c.realtime.broadcast,
                ROOM_HOUSEKEEPING_UPDATED,
                {"room_id": room.id, "housekeeping_status": HousekeepingStatus.CLEANING.value},
            )
        call_collaborator("realtime", c.realtime.broadcast, TASK_REFRESH, {"rooms": [r.id for r in rooms]})
        call_collaborator(
            "realtime",
            c.realtime.broadcast,
            CHECKOUT_COMPLETED,
            {"booking_id": booking.id, "rooms": [r.id for r in rooms], "tasks_created": len(rooms)},
        )

        call_collaborator(
            "notifications",
            c.notifications.send_receipt,
            booking,
            booking.customer_snapshot,
            receipt,
        )

    @staticmethod
    def _minibar_items(booking: Booking, lines: Sequence[BookingRoom]) -> List[Tuple[Optional[str], BookingServiceItem]]:
        """Minibar selections of the leaving rooms and of the booking itself."""
        found = []
        for line in lines:
            for item in line.services:
                found.append((line.room_id, item))
        for item in booking.services:
            found.append((None, item))
        return [
            (room_id, item) for room_id, item in found
            if item.category == ServiceCategory.MINIBAR
            and item.service is not None
            and item.service.inventory_item_ids
        ]

    def _consume_minibar(self, booking: Booking, room_id: Optional[str], item: BookingServiceItem) -> None:
        inventory = self.collaborators.inventory
        quantity = item.quantity if item.quantity is not None else 1
        used = []
        for inventory_id in item.service.inventory_item_ids:
            stock = inventory.deduct(inventory_id, quantity)
            if stock is not None:
                used.append({
                    "inventory_id": inventory_id,
                    "quantity": quantity,
                    "item_type": stock.item_type,
                    "condition": "USED",
                })
        if used:
            inventory.record_consumption(
                room_id,
                booking.id,
                item.service_id,
                used,
                note=f"Sử dụng minibar: {item.service_name} (checkout booking {booking.booking_code})",
            )

    # -------------------------------------------------------------------------
    # Cancel
    # -------------------------------------------------------------------------

    @track_performance("cancel_booking")
    def cancel(self, booking_id: str) -> Booking:
        """
        Cancel a ``pending`` or ``booked`` booking and release its rooms.

        A pre-assigned room is only released when no checked-in booking
        is occupying it.
        """
        with self.transaction():
            booking = self.bookings.get_by_id(booking_id)
            if booking.status not in (BookingStatus.PENDING, BookingStatus.BOOKED):
                raise InvalidTransitionError(
                    booking.status.value,
                    "cancel",
                    message="Không thể huỷ đặt phòng này",
                )
            booking.status = BookingStatus.CANCELLED

            released = []
            for line in booking.rooms:
                room = line.room
                if room is None or room.status != RoomStatus.OCCUPIED:
                    continue
                if self.bookings.find_checked_in_for_room(room.id) is None:
                    room.status = RoomStatus.AVAILABLE
                    released.append(room.room_number)

        self._log_operation("Booking cancelled", booking.booking_code, {"released_rooms": released})
        return booking
