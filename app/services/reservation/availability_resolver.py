# app/services/reservation/availability_resolver.py
"""
Room availability for a requested date range.

Each room gets a query-time ``visible_status`` that answers "is this room
free for these dates", alongside its persistent ``status`` which answers
"what is it doing right now".
"""

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import date, datetime
from typing import Any, Dict, List, Optional, Set

from sqlalchemy.orm import Session

from app.core.exceptions import ValidationError
from app.core.logging import get_logger
from app.models.base.enums import CheckoutHint, RoomStatus, VisibleStatus
from app.models.room.room import Room
from app.models.room.room_type import RoomType
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.room.room_repository import RoomRepository, RoomTypeRepository
from app.services.reservation.conflict_detector import ConflictDetector

logger = get_logger(__name__)


@dataclass
class RoomAvailability:
    room: Room
    visible_status: VisibleStatus
    checkout: Optional[CheckoutHint] = None

    def to_dict(self) -> Dict[str, Any]:
        room = self.room
        return {
            "id": room.id,
            "room_number": room.room_number,
            "floor": room.floor,
            "room_type_id": room.room_type_id,
            "status": room.status,
            "housekeeping_status": room.housekeeping_status,
            "do_not_disturb": room.do_not_disturb,
            "visible_status": self.visible_status,
            "checkout": self.checkout,
        }


@dataclass
class TypeAvailability:
    room_type: RoomType
    rooms: List[RoomAvailability] = field(default_factory=list)

    @property
    def available_count(self) -> int:
        return sum(1 for r in self.rooms if r.visible_status == VisibleStatus.AVAILABLE)

    def to_dict(self) -> Dict[str, Any]:
        room_type = self.room_type
        return {
            "room_type": {
                "id": room_type.id,
                "name": room_type.name,
                "capacity": room_type.capacity,
                "max_guests": room_type.max_guests,
                "price_per_night": room_type.price_per_night,
                "extra_bed_allowed": room_type.extra_bed_allowed,
                "extra_bed_price": room_type.extra_bed_price,
                "amenities": room_type.amenities,
            },
            "available_count": self.available_count,
            "rooms": [r.to_dict() for r in self.rooms],
        }


class AvailabilityResolver:
    """Resolves per-room availability from the catalog and the live reservations."""

    def __init__(self, session: Session):
        self.session = session
        self.detector = ConflictDetector(session)
        self.bookings = BookingRepository(session)
        self.rooms = RoomRepository(session)
        self.room_types = RoomTypeRepository(session)

    def resolve(
        self,
        check_in: datetime,
        check_out: datetime,
        room_type_id: Optional[str] = None,
        today: Optional[date] = None,
    ) -> List[RoomAvailability]:
        """
        Per-room availability in room-number order.

        Lines assigned to a room mark that room; lines holding only a type
        reserve the first N still-available rooms of that type.
        """
        if check_out < check_in:
            raise ValidationError(
                "Check-out must not be before check-in",
                field_errors={"check_out": ["before check_in"]},
            )

        rooms = self.rooms.list_rooms(room_type_id)
        conflicting = self.detector.find_conflicting_lines(check_in, check_out, room_type_id=room_type_id)

        conflicted_rooms: Set[str] = set()
        reserved_per_type: Dict[str, int] = defaultdict(int)
        for line in conflicting:
            if line.room_id:
                conflicted_rooms.add(line.room_id)
            elif line.room_type_id:
                reserved_per_type[line.room_type_id] += 1

        hints = self.checkout_hints(today)

        results = []
        for room in rooms:
            results.append(RoomAvailability(
                room=room,
                visible_status=self._visible_status(room, room.id in conflicted_rooms),
                checkout=hints.get(room.id),
            ))

        for type_id, count in reserved_per_type.items():
            free = [
                r for r in results
                if r.room.room_type_id == type_id and r.visible_status == VisibleStatus.AVAILABLE
            ]
            for entry in free[:count]:
                entry.visible_status = VisibleStatus.BOOKED

        logger.debug(
            "Availability resolved",
            extra={
                "room_count": len(results),
                "room_conflicts": len(conflicted_rooms),
                "type_holds": dict(reserved_per_type),
            },
        )
        return results

    def resolve_grouped(
        self,
        check_in: datetime,
        check_out: datetime,
        today: Optional[date] = None,
    ) -> List[TypeAvailability]:
        """Client view: rooms grouped by type. Types without rooms are absent."""
        groups: Dict[str, TypeAvailability] = {}
        for entry in self.resolve(check_in, check_out, today=today):
            type_id = entry.room.room_type_id
            if type_id not in groups:
                groups[type_id] = TypeAvailability(room_type=entry.room.room_type)
            groups[type_id].rooms.append(entry)
        return sorted(groups.values(), key=lambda g: g.room_type.name)

    def remaining_for_type(self, room_type_id: str, check_in: datetime, check_out: datetime) -> int:
        self.room_types.get_by_id(room_type_id)
        return max(0, self.detector.remaining(room_type_id, check_in, check_out))

    def checkout_hints(self, today: Optional[date] = None) -> Dict[str, CheckoutHint]:
        """``today``/``past`` for in-house rooms by expected check-out date."""
        today = today or datetime.utcnow().date()
        hints: Dict[str, CheckoutHint] = {}
        for line in self.bookings.find_in_house_lines():
            expected = line.expected_check_out.date()
            if expected == today:
                hints[line.room_id] = CheckoutHint.TODAY
            elif expected < today:
                hints[line.room_id] = CheckoutHint.PAST
        return hints

    @staticmethod
    def _visible_status(room: Room, conflicted: bool) -> VisibleStatus:
        if conflicted:
            if room.status == RoomStatus.OCCUPIED:
                return VisibleStatus.OCCUPIED
            return VisibleStatus.BOOKED
        if room.status == RoomStatus.MAINTENANCE:
            return VisibleStatus.MAINTENANCE
        # the current occupant is expected to be gone by the requested dates
        return VisibleStatus.AVAILABLE
