"""
Core booking service: create/update, detail/list queries, lookup,
booking-level services and desk cash settlement.

Every write that touches dates or room types runs the conflict detector
first, excluding the booking itself on edits.
"""

from datetime import datetime
from decimal import Decimal
from typing import List, Optional, Sequence, Set

from sqlalchemy.orm import Session

from app.core.exceptions import InvalidTransitionError, NotFoundError, RoomConflictError, ValidationError
from app.models.base.enums import (
    BookingStatus,
    PaymentCategory,
    PaymentMethod,
    PaymentRecordStatus,
    RoomLineStatus,
    RoomStatus,
)
from app.models.booking.booking import Booking
from app.models.booking.booking_room import BookingRoom
from app.models.payment.payment import Payment
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.customer.customer_repository import CustomerRepository
from app.repositories.payment.payment_repository import PaymentRepository
from app.repositories.room.room_repository import RoomRepository
from app.schemas.booking.booking_base import BookingCreate, BookingUpdate, RoomLineCreate, ServiceSelection
from app.services.base import BaseService, track_performance
from app.services.booking.booking_code import BookingCodeGenerator
from app.services.booking.line_builder import BookingLineBuilder, refresh_totals
from app.services.pricing.price_calculator import PriceBreakdown, price_for_booking
from app.services.reservation.conflict_detector import ConflictDetector, RequestedLine
from app.utils.validators import PhoneValidator

CANCELLATION_REQUEST_NOTE = "Khách hàng yêu cầu hủy đặt phòng"

# line status a freshly built line takes for each booking status
LINE_STATUS_FOR_BOOKING = {
    BookingStatus.PENDING: RoomLineStatus.PENDING,
    BookingStatus.BOOKED: RoomLineStatus.BOOKED,
    BookingStatus.CHECKED_IN: RoomLineStatus.BOOKED,
}


def requested_lines(rooms: Sequence[RoomLineCreate]) -> List[RequestedLine]:
    return [
        RequestedLine(
            room_type_id=r.room_type_id,
            check_in=r.expected_check_in,
            check_out=r.expected_check_out,
            room_id=r.room_id,
        )
        for r in rooms
    ]


class BookingService(BaseService):
    """
    Core booking operations.

    Responsibilities:
    - Capacity-checked create and edit
    - Query operations (detail, list, lookup, by room)
    - Booking-level services and cash settlement
    """

    def __init__(self, db_session: Session):
        super().__init__(db_session)
        self.bookings = BookingRepository(db_session)
        self.customers = CustomerRepository(db_session)
        self.rooms = RoomRepository(db_session)
        self.payments = PaymentRepository(db_session)
        self.detector = ConflictDetector(db_session)
        self.builder = BookingLineBuilder(db_session)
        self.codes = BookingCodeGenerator(db_session)

    # -------------------------------------------------------------------------
    # Create / Update
    # -------------------------------------------------------------------------

    @track_performance("create_booking")
    def create_booking(self, data: BookingCreate, now: Optional[datetime] = None) -> Booking:
        """
        Create a confirmed (``booked``) booking.

        Raises:
            NotFoundError: Customer, room type, room or service missing
            CapacityConflictError: A room type would be over-booked
            RoomConflictError: A named room is already held
        """
        with self.transaction():
            customer = self.customers.get_by_id(data.customer_id)
            requested = requested_lines(data.rooms)
            self.detector.ensure_capacity(requested)
            self.detector.ensure_rooms_free(requested)

            code = self.codes.next_code(now)
            booking = Booking(
                booking_code=code.code,
                sequence_number=code.sequence_number,
                code_month=code.code_month,
                customer_id=customer.id,
                customer_snapshot=customer.snapshot(),
                status=BookingStatus.BOOKED,
                notes=data.notes,
                internal_notes=data.internal_notes,
            )
            if now is not None:
                booking.created_at = now
            booking.rooms = self.builder.build_lines(data.rooms, RoomLineStatus.BOOKED)
            booking.services = self.builder.service_items(data.services)
            self.bookings.add(booking)
            refresh_totals(self.db, booking)

        self._log_operation(
            "Booking created",
            booking.booking_code,
            {"room_lines": len(booking.rooms), "total_price": str(booking.total_price)},
        )
        return booking

    @track_performance("update_booking")
    def update_booking(self, booking_id: str, data: BookingUpdate) -> Booking:
        """
        Edit notes and, when ``rooms`` is given, replace the room lines.

        Raises:
            InvalidTransitionError: The booking is completed or cancelled
            RoomConflictError: A checked-in line's room is held for its new dates
        """
        with self.transaction():
            booking = self.bookings.get_by_id(booking_id)
            self._ensure_editable(booking, "update")

            if data.rooms is not None:
                requested = requested_lines(data.rooms)
                self.detector.ensure_capacity(requested, exclude_booking_id=booking.id)
                self.detector.ensure_rooms_free(requested, exclude_booking_id=booking.id)
                previous = list(booking.rooms)
                booking.rooms = self.builder.build_lines(
                    data.rooms,
                    LINE_STATUS_FOR_BOOKING[booking.status],
                    previous=previous,
                    keep_rooms=self._keepable_rooms(booking, data.rooms, previous),
                )

            provided = data.provided()
            if "notes" in provided:
                booking.notes = provided["notes"]
            if "internal_notes" in provided:
                booking.internal_notes = provided["internal_notes"]

            refresh_totals(self.db, booking)

        self._log_operation("Booking updated", booking.booking_code, {"rooms_replaced": data.rooms is not None})
        return booking

    # -------------------------------------------------------------------------
    # Queries
    # -------------------------------------------------------------------------

    def get_booking(self, booking_id: str) -> Booking:
        return self.bookings.get_by_id(booking_id)

    def list_bookings(
        self,
        status: Optional[BookingStatus] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Booking]:
        return self.bookings.list_bookings(status=status, skip=skip, limit=limit)

    def lookup_booking(self, booking_code: Optional[str], phone_number: Optional[str]) -> Booking:
        """
        Guest self-service lookup by code and phone.

        Raises:
            ValidationError: Code or phone missing
            NotFoundError: No booking matches both
        """
        if not booking_code or not phone_number:
            raise ValidationError(
                "Vui lòng cung cấp mã đặt phòng và số điện thoại",
                field_errors={"booking_code": ["required"], "phone_number": ["required"]},
            )
        booking = self.bookings.find_by_code_and_phones(
            booking_code.strip(),
            PhoneValidator.lookup_variants(phone_number),
        )
        if booking is None:
            raise NotFoundError("Booking", message="Không tìm thấy đặt phòng")
        return booking

    def get_active_booking_for_room(self, room_id: str) -> Booking:
        """
        The checked-in booking occupying a room.

        A room marked ``occupied`` with no checked-in booking is stale and
        is released back to ``available`` before NotFound is raised.
        """
        booking = self.bookings.find_checked_in_for_room(room_id)
        if booking is not None:
            return booking

        room = self.rooms.find_by_id(room_id)
        if room is not None and room.status == RoomStatus.OCCUPIED:
            with self.transaction():
                room.status = RoomStatus.AVAILABLE
            self._logger.warning(
                "Released stale occupied room",
                extra={"room_id": room_id, "room_number": room.room_number},
            )
        raise NotFoundError("Booking", message="Không tìm thấy đặt phòng cho phòng này")

    def price(self, booking_id: str) -> PriceBreakdown:
        return price_for_booking(self.bookings.get_by_id(booking_id))

    # -------------------------------------------------------------------------
    # Services, notes, settlement
    # -------------------------------------------------------------------------

    def save_booking_services(self, booking_id: str, services: Sequence[ServiceSelection]) -> Booking:
        """Replace booking-level services (e.g. transportation) and reprice."""
        with self.transaction():
            booking = self.bookings.get_by_id(booking_id)
            self._ensure_editable(booking, "update services of")
            booking.services = self.builder.service_items(services)
            refresh_totals(self.db, booking)

        self._log_operation("Booking services saved", booking.booking_code, {"service_count": len(services)})
        return booking

    def request_cancellation(self, booking_id: str, now: Optional[datetime] = None) -> Booking:
        """Flag a guest's cancellation request for staff; only from ``booked``."""
        now = now or datetime.utcnow()
        with self.transaction():
            booking = self.bookings.get_by_id(booking_id)
            if booking.status != BookingStatus.BOOKED:
                raise InvalidTransitionError(
                    booking.status.value,
                    "request cancellation of",
                    message="Chỉ có thể yêu cầu hủy đặt phòng đang ở trạng thái 'Đã đặt'",
                )
            note = f"[{now.strftime('%d/%m/%Y %H:%M:%S')}] {CANCELLATION_REQUEST_NOTE}"
            booking.internal_notes = f"{booking.internal_notes}\n{note}" if booking.internal_notes else note

        self._log_operation("Cancellation requested", booking.booking_code)
        return booking

    def settle_cash(self, booking_id: str, money_received: Decimal) -> Booking:
        """
        Record cash taken at the desk.

        Received cash accumulates across calls; change is what exceeds the
        total.
        """
        if money_received is None or Decimal(str(money_received)) < 0:
            raise ValidationError("money_received must be non-negative", {"money_received": ["negative"]})
        received = Decimal(str(money_received))

        with self.transaction():
            booking = self.bookings.get_by_id(booking_id)
            if booking.status == BookingStatus.CANCELLED:
                raise InvalidTransitionError(booking.status.value, "settle")

            booking.total_price = price_for_booking(booking).total
            if received > 0:
                self.payments.add(Payment(
                    booking_id=booking.id,
                    amount=received,
                    method=PaymentMethod.CASH,
                    category=PaymentCategory.OFFLINE,
                    status=PaymentRecordStatus.PAID,
                    paid_at=datetime.utcnow(),
                    note="Thanh toán tiền mặt tại quầy",
                ))
            booking.money_received = (booking.money_received or Decimal("0")) + received
            booking.change_amount = max(Decimal("0"), booking.money_received - booking.total_price)
            refresh_totals(self.db, booking)

        self._log_operation(
            "Cash settled",
            booking.booking_code,
            {"money_received": str(booking.money_received), "change_amount": str(booking.change_amount)},
        )
        return booking

    def delete_booking(self, booking_id: str) -> None:
        with self.transaction():
            booking = self.bookings.get_by_id(booking_id)
            code = booking.booking_code
            self.bookings.delete(booking)
        self._log_operation("Booking deleted", code)

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def _keepable_rooms(
        self,
        booking: Booking,
        rooms: Sequence[RoomLineCreate],
        previous: Sequence[BookingRoom],
    ) -> Set[int]:
        """
        Positions whose earlier room can follow the line to its edited dates.

        A room held elsewhere for the new window is dropped from a line that
        has not checked in yet; a checked-in line cannot lose its room.
        """
        named = {r.room_id for r in rooms if r.room_id}
        keep: Set[int] = set()
        for position, (request, earlier) in enumerate(zip(rooms, previous)):
            if request.room_id or not earlier.room_id or earlier.room_type_id != request.room_type_id:
                continue
            if earlier.status == RoomLineStatus.COMPLETED:
                keep.add(position)
                continue
            taken = earlier.room_id in named or self.detector.room_is_taken(
                earlier.room_id,
                request.expected_check_in,
                request.expected_check_out,
                booking.id,
            )
            if not taken:
                keep.add(position)
            elif earlier.status == RoomLineStatus.CHECKED_IN:
                raise RoomConflictError(earlier.room.room_number, earlier.room_id)
        return keep

    @staticmethod
    def _ensure_editable(booking: Booking, operation: str) -> None:
        if booking.is_terminal:
            raise InvalidTransitionError(booking.status.value, operation)
