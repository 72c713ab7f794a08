# app/services/reservation/conflict_detector.py
"""
Date-overlap predicate and occupancy counting.

Availability listing, booking creation and booking edits all go through
this module so the three paths agree on what counts as a conflict.
"""

from collections import Counter
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Sequence, Set, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions import CapacityConflictError, NotFoundError, RoomConflictError, ValidationError
from app.core.logging import get_logger
from app.models.booking.booking_room import BookingRoom
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.room.room_repository import RoomRepository, RoomTypeRepository

logger = get_logger(__name__)

Window = Tuple[Optional[datetime], Optional[datetime]]


def effective_window(line: Any) -> Window:
    """Actual check-in/out when both are set, else expected check-in/out."""
    if getattr(line, "actual_check_in", None) and getattr(line, "actual_check_out", None):
        return line.actual_check_in, line.actual_check_out
    return getattr(line, "expected_check_in", None), getattr(line, "expected_check_out", None)


def windows_overlap(a: Window, b: Window) -> bool:
    """Inclusive overlap: a same-day handover is a conflict. Undated windows never overlap."""
    a_in, a_out = a
    b_in, b_out = b
    if None in (a_in, a_out, b_in, b_out):
        return False
    return a_in <= b_out and a_out >= b_in


def has_overlap(line_a: Any, line_b: Any) -> bool:
    return windows_overlap(effective_window(line_a), effective_window(line_b))


@dataclass(frozen=True)
class RequestedLine:
    """A room line being created or edited, before it is persisted."""
    room_type_id: Optional[str]
    check_in: Optional[datetime]
    check_out: Optional[datetime]
    room_id: Optional[str] = None

    @property
    def window(self) -> Window:
        return self.check_in, self.check_out


class ConflictDetector:
    """Counts live reservations against the room catalog."""

    def __init__(self, session: Session):
        self.session = session
        self.bookings = BookingRepository(session)
        self.rooms = RoomRepository(session)
        self.room_types = RoomTypeRepository(session)

    def find_conflicting_lines(
        self,
        check_in: datetime,
        check_out: datetime,
        room_type_id: Optional[str] = None,
        exclude_booking_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[BookingRoom]:
        return self.bookings.find_overlapping_lines(
            check_in,
            check_out,
            room_type_id=room_type_id,
            exclude_booking_id=exclude_booking_id,
            now=now,
        )

    def count_conflicts(
        self,
        room_type_id: str,
        check_in: datetime,
        check_out: datetime,
        exclude_booking_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        """Live room lines of this type whose effective window overlaps the range."""
        return self.bookings.count_overlapping_lines(
            room_type_id,
            check_in,
            check_out,
            exclude_booking_id=exclude_booking_id,
            now=now,
        )

    def remaining(
        self,
        room_type_id: str,
        check_in: datetime,
        check_out: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> int:
        total = self.rooms.count_by_type(room_type_id)
        return total - self.count_conflicts(room_type_id, check_in, check_out, exclude_booking_id)

    def room_is_taken(
        self,
        room_id: str,
        check_in: datetime,
        check_out: datetime,
        exclude_booking_id: Optional[str] = None,
    ) -> bool:
        return bool(self.bookings.find_overlapping_lines(
            check_in,
            check_out,
            room_id=room_id,
            exclude_booking_id=exclude_booking_id,
        ))

    def ensure_capacity(
        self,
        requested: Sequence[RequestedLine],
        exclude_booking_id: Optional[str] = None,
        lock: bool = True,
    ) -> None:
        """
        Reject a request that would over-book any room type.

        For each type, an existing line that overlaps any requested window
        of that type is counted once. The request fits when those
        conflicts plus the number of lines requested stay within the
        type's room count.

        Raises:
            ValidationError: A line is missing dates or has check-out before check-in
            NotFoundError: A requested type does not exist or has no rooms
            CapacityConflictError: Not enough rooms of a type remain
        """
        typed = [line for line in requested if line.room_type_id]
        for line in typed:
            if line.check_in is None or line.check_out is None:
                raise ValidationError(
                    "Check-in and check-out dates are required",
                    field_errors={"rooms": ["missing expected check-in or check-out"]},
                )
            if line.check_out < line.check_in:
                raise ValidationError(
                    "Check-out must not be before check-in",
                    field_errors={"rooms": ["check-out before check-in"]},
                )

        type_counts: Dict[str, int] = Counter(line.room_type_id for line in typed)
        if not type_counts:
            return

        if lock:
            self.room_types.lock_for_capacity(list(type_counts))
        room_types = self.room_types.find_by_ids(list(type_counts))

        for type_id, requested_count in type_counts.items():
            room_type = room_types.get(type_id)
            if room_type is None:
                raise NotFoundError("RoomType", type_id)
            total_rooms = self.rooms.count_by_type(type_id)
            if total_rooms == 0:
                raise NotFoundError(
                    "Room",
                    message=f"No rooms exist for room type {room_type.name}",
                )

            conflicting_ids: Set[str] = set()
            for line in typed:
                if line.room_type_id != type_id:
                    continue
                conflicting_ids.update(
                    existing.id for existing in self.find_conflicting_lines(
                        line.check_in,
                        line.check_out,
                        room_type_id=type_id,
                        exclude_booking_id=exclude_booking_id,
                    )
                )
            conflicts = len(conflicting_ids)
            if conflicts + requested_count > total_rooms:
                logger.warning(
                    "Capacity conflict",
                    extra={
                        "room_type_id": type_id,
                        "total_rooms": total_rooms,
                        "conflicts": conflicts,
                        "requested": requested_count,
                    },
                )
                raise CapacityConflictError(
                    room_type.name,
                    remaining=max(0, total_rooms - conflicts),
                    requested=requested_count,
                )

    def ensure_rooms_free(
        self,
        requested: Iterable[RequestedLine],
        exclude_booking_id: Optional[str] = None,
    ) -> None:
        """
        Reject lines naming a physical room already held for an overlapping window.

        Raises:
            NotFoundError: The room does not exist
            RoomConflictError: The room is taken
        """
        for line in requested:
            if not line.room_id:
                continue
            room = self.rooms.get_by_id(line.room_id)
            if line.check_in is None or line.check_out is None:
                continue
            if self.room_is_taken(line.room_id, line.check_in, line.check_out, exclude_booking_id):
                raise RoomConflictError(room.room_number, room.id)
