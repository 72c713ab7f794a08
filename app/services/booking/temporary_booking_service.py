"""
Pending booking flow used by the customer checkout screens.

A temporary booking is created ``pending`` as soon as the guest picks a
date range; while pending (and younger than the hold TTL) its lines
reserve capacity so two guests cannot race for the last room of a type.
The sweep deletes it if it is never confirmed.
"""

from datetime import datetime
from typing import Optional, Sequence

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidTransitionError, ValidationError
from app.models.base.enums import BookingStatus, Honorific, PaymentMethod, RoomLineStatus
from app.models.booking.booking import Booking
from app.models.booking.booking_room import BookingRoom
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.customer.customer_repository import CustomerRepository
from app.repositories.room.room_repository import RoomTypeRepository
from app.schemas.booking.booking_base import ServiceSelection
from app.schemas.booking.booking_request import TemporaryRoomRequest
from app.services.base import BaseService, track_performance
from app.services.booking.booking_code import BookingCodeGenerator
from app.services.booking.line_builder import BookingLineBuilder, refresh_totals
from app.services.reservation.conflict_detector import ConflictDetector, RequestedLine

GENDER_BY_HONORIFIC = {
    Honorific.MR.value: "male",
    Honorific.MRS.value: "female",
}


class TemporaryBookingService(BaseService):
    """Create, shape and confirm pending bookings."""

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.bookings = BookingRepository(db_session)
        self.customers = CustomerRepository(db_session)
        self.room_types = RoomTypeRepository(db_session)
        self.detector = ConflictDetector(db_session)
        self.builder = BookingLineBuilder(db_session)
        self.codes = BookingCodeGenerator(db_session)

    @track_performance("create_temporary_booking")
    def create_temporary_booking(
        self,
        day_start: Optional[datetime],
        day_end: Optional[datetime],
        rooms: Optional[Sequence[TemporaryRoomRequest]] = None,
        now: Optional[datetime] = None,
    ) -> Booking:
        """Pending booking with one untyped line per requested room (default one, 1 adult)."""
        if day_start is None or day_end is None:
            raise ValidationError(
                "Vui lòng chọn ngày nhận phòng và trả phòng",
                field_errors={"day_start": ["required"], "day_end": ["required"]},
            )
        if day_end < day_start:
            raise ValidationError(
                "Ngày trả phòng phải sau ngày nhận phòng",
                field_errors={"day_end": ["before day_start"]},
            )
        rooms = list(rooms) if rooms else [TemporaryRoomRequest()]

        with self.transaction():
            code = self.codes.next_code(now)
            booking = Booking(
                booking_code=code.code,
                sequence_number=code.sequence_number,
                code_month=code.code_month,
                status=BookingStatus.PENDING,
            )
            if now is not None:
                booking.created_at = now
            booking.rooms = [
                BookingRoom(
                    position=position,
                    status=RoomLineStatus.PENDING,
                    expected_check_in=day_start,
                    expected_check_out=day_end,
                    number_of_adults=room.number_of_adults,
                    number_of_children=room.number_of_children,
                    additional_guests=[],
                )
                for position, room in enumerate(rooms)
            ]
            self.bookings.add(booking)
            refresh_totals(self.db, booking)

        self._log_operation("Temporary booking created", booking.booking_code, {"room_lines": len(booking.rooms)})
        return booking

    def set_line_room_type(
        self,
        booking_id: str,
        index: int,
        room_type_id: str,
        number_of_adults: int = 1,
        number_of_children: int = 0,
    ) -> Booking:
        """
        Pick the room type of one line and freeze its nightly price.

        Raises:
            CapacityConflictError: Other live bookings plus this booking's
                lines of the type exceed the type's rooms
        """
        with self.transaction():
            booking = self._pending(booking_id)
            line = self._line(booking, index)
            room_type = self.room_types.get_by_id(room_type_id)

            same_type = [
                RequestedLine(room_type.id, other.expected_check_in, other.expected_check_out)
                for other in booking.rooms
                if other is not line and other.room_type_id == room_type.id
            ]
            same_type.append(RequestedLine(room_type.id, line.expected_check_in, line.expected_check_out))
            self.detector.ensure_capacity(same_type, exclude_booking_id=booking.id)

            self.builder.apply_room_type(line, room_type, number_of_adults, number_of_children)
            line.status = RoomLineStatus.PENDING
            refresh_totals(self.db, booking)

        self._log_operation(
            "Room type selected",
            booking.booking_code,
            {"line_index": index, "room_type": room_type.name},
        )
        return booking

    def remove_line_room_type(self, booking_id: str, index: int) -> Booking:
        with self.transaction():
            booking = self._pending(booking_id)
            self._clear_line(self._line(booking, index))
            refresh_totals(self.db, booking)
        return booking

    def reset_temporary_booking(self, booking_id: str) -> Booking:
        """Clear every line's type and services and the booking-level services."""
        with self.transaction():
            booking = self._pending(booking_id)
            for line in booking.rooms:
                self._clear_line(line)
            booking.services = []
            refresh_totals(self.db, booking)

        self._log_operation("Temporary booking reset", booking.booking_code)
        return booking

    def add_line_services(self, booking_id: str, index: int, services: Sequence[ServiceSelection]) -> Booking:
        """Replace the room-scoped services of one line."""
        with self.transaction():
            booking = self._pending(booking_id)
            line = self._line(booking, index)
            line.services = self.builder.service_items(services)
            refresh_totals(self.db, booking)
        return booking

    @track_performance("confirm_temporary_booking")
    def confirm_temporary_booking(
        self,
        booking_id: str,
        customer_id: str,
        payment_method: PaymentMethod = PaymentMethod.CASH,
    ) -> Booking:
        """
        Attach the customer and price the booking.

        Online (vnpay) bookings stay ``pending`` until the gateway reports
        payment; any other method confirms the booking as ``booked``.
        """
        with self.transaction():
            booking = self._pending(booking_id)
            untyped = [line.position for line in booking.rooms if not line.room_type_id]
            if untyped:
                raise ValidationError(
                    "Vui lòng chọn loại phòng cho tất cả các phòng",
                    field_errors={"rooms": [f"line {position} has no room type" for position in untyped]},
                )
            self.detector.ensure_capacity(
                [
                    RequestedLine(line.room_type_id, line.expected_check_in, line.expected_check_out)
                    for line in booking.rooms
                ],
                exclude_booking_id=booking.id,
            )

            customer = self.customers.get_by_id(customer_id)
            snapshot = customer.snapshot()
            booking.customer_id = customer.id
            booking.customer_snapshot = snapshot

            if payment_method != PaymentMethod.VNPAY:
                booking.status = BookingStatus.BOOKED
            line_status = RoomLineStatus(booking.status.value)
            for line in booking.rooms:
                line.status = line_status
            if booking.rooms:
                booking.rooms[0].main_guest = self._main_guest(snapshot)

            refresh_totals(self.db, booking)

        self._log_operation(
            "Temporary booking confirmed",
            booking.booking_code,
            {
                "status": booking.status.value,
                "payment_method": payment_method.value,
                "total_price": str(booking.total_price),
            },
        )
        return booking

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _pending(self, booking_id: str) -> Booking:
        booking = self.bookings.get_by_id(booking_id)
        if booking.status != BookingStatus.PENDING:
            raise InvalidTransitionError(booking.status.value, "edit temporary booking")
        return booking

    @staticmethod
    def _line(booking: Booking, index: int) -> BookingRoom:
        if index < 0 or index >= len(booking.rooms):
            raise ValidationError(
                "Chỉ số phòng không hợp lệ",
                field_errors={"index": [f"must be between 0 and {len(booking.rooms) - 1}"]},
            )
        return booking.rooms[index]

    @staticmethod
    def _clear_line(line: BookingRoom) -> None:
        line.room_type_id = None
        line.room_type = None
        line.room_id = None
        line.room = None
        line.price_per_night = None
        line.extra_bed_added = False
        line.services = []

    @staticmethod
    def _main_guest(snapshot: dict) -> dict:
        guest = {
            key: snapshot.get(key)
            for key in ("honorific", "first_name", "last_name", "identification_number", "phone_number", "email")
        }
        guest["gender"] = GENDER_BY_HONORIFIC.get(snapshot.get("honorific"))
        return guest
