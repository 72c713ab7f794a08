# app/services/booking/line_builder.py
"""
Building room lines and service selections from requests.

Prices are frozen here: a line's nightly price (extra bed included) is
read from its room type once, and each service selection keeps the
service's price at selection time.
"""

from typing import Dict, List, Optional, Sequence, Set

from sqlalchemy.orm import Session

from app.core.exceptions import NotFoundError, ValidationError
from app.models.base.enums import RoomLineStatus
from app.models.booking.booking import Booking
from app.models.booking.booking_room import BookingRoom
from app.models.booking.booking_service_item import BookingServiceItem
from app.models.room.room_type import RoomType
from app.repositories.room.room_repository import RoomRepository, RoomTypeRepository
from app.repositories.service.service_repository import ServiceRepository
from app.schemas.booking.booking_base import RoomLineCreate, ServiceSelection
from app.services.payment.payment_aggregator import PaymentAggregator
from app.services.pricing.price_calculator import price_for_booking, resolve_nightly_price


class BookingLineBuilder:
    """Turns validated request schemas into room lines and service items."""

    def __init__(self, session: Session):
        self.session = session
        self.rooms = RoomRepository(session)
        self.room_types = RoomTypeRepository(session)
        self.services = ServiceRepository(session)

    def service_items(self, selections: Sequence[ServiceSelection]) -> List[BookingServiceItem]:
        """
        Snapshot the selected services.

        Raises:
            NotFoundError: A selected service does not exist
        """
        catalog = self.services.find_by_ids([s.service_id for s in selections])
        items = []
        for selection in selections:
            service = catalog.get(selection.service_id)
            if service is None:
                raise NotFoundError("Service", selection.service_id)
            items.append(BookingServiceItem(
                service_id=service.id,
                service=service,
                service_name=service.name,
                category=service.category,
                unit_price=service.price,
                quantity=selection.quantity,
            ))
        return items

    def apply_room_type(
        self,
        line: BookingRoom,
        room_type: RoomType,
        number_of_adults: int,
        number_of_children: int = 0,
    ) -> BookingRoom:
        """Set the type and freeze its nightly price onto the line."""
        if room_type.max_guests is not None and number_of_adults + number_of_children > room_type.max_guests:
            raise ValidationError(
                f"Room type {room_type.name} allows at most {room_type.max_guests} guests",
                field_errors={"number_of_adults": ["exceeds max_guests"]},
            )
        price, extra_bed = resolve_nightly_price(room_type, number_of_adults)
        line.room_type_id = room_type.id
        line.room_type = room_type
        line.number_of_adults = number_of_adults
        line.number_of_children = number_of_children
        line.price_per_night = price
        line.extra_bed_added = extra_bed
        return line

    def build_lines(
        self,
        requests: Sequence[RoomLineCreate],
        status: RoomLineStatus,
        previous: Optional[Sequence[BookingRoom]] = None,
        keep_rooms: Optional[Set[int]] = None,
    ) -> List[BookingRoom]:
        """
        Room lines for a create or full-replace edit.

        When ``previous`` lines are given, each position keeps its progress
        (line status, actual dates, room snapshot, and its room unless the
        request names another one). ``keep_rooms`` limits which positions
        may carry their earlier room over.
        """
        room_types: Dict[str, RoomType] = self.room_types.find_by_ids(
            list({r.room_type_id for r in requests})
        )
        rooms = self.rooms.find_by_ids([r.room_id for r in requests if r.room_id])
        previous = list(previous or [])

        lines = []
        for position, request in enumerate(requests):
            room_type = room_types.get(request.room_type_id)
            if room_type is None:
                raise NotFoundError("RoomType", request.room_type_id)

            room = None
            if request.room_id:
                room = rooms.get(request.room_id)
                if room is None:
                    raise NotFoundError("Room", request.room_id)
                if room.room_type_id != room_type.id:
                    raise ValidationError(
                        f"Room {room.room_number} is not of type {room_type.name}",
                        field_errors={"room_id": ["room type mismatch"]},
                    )

            line = BookingRoom(
                position=position,
                status=status,
                expected_check_in=request.expected_check_in,
                expected_check_out=request.expected_check_out,
                main_guest=request.main_guest.model_dump(mode="json") if request.main_guest else None,
                additional_guests=[g.model_dump(mode="json") for g in request.additional_guests],
            )
            self.apply_room_type(line, room_type, request.number_of_adults, request.number_of_children)

            if position < len(previous):
                earlier = previous[position]
                line.status = earlier.status
                line.actual_check_in = earlier.actual_check_in
                line.actual_check_out = earlier.actual_check_out
                line.room_snapshot = earlier.room_snapshot
                carry = keep_rooms is None or position in keep_rooms
                if carry and room is None and earlier.room_id and earlier.room_type_id == room_type.id:
                    room = earlier.room

            if room is not None:
                line.room_id = room.id
                line.room = room

            line.services = self.service_items(request.services)
            lines.append(line)
        return lines


def refresh_totals(session: Session, booking: Booking) -> Booking:
    """Recompute the stored total, then the payment status against it."""
    booking.total_price = price_for_booking(booking).total
    PaymentAggregator(session).recompute_status(booking)
    return booking
