# app/repositories/booking/booking_repository.py
"""
Booking repository.

Holds the queries behind conflict detection, availability, booking-code
sequencing, lookup and the pending-booking sweep.
"""

from datetime import datetime, timedelta
from typing import List, Optional, Sequence

from sqlalchemy import and_, case, func, or_, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session, selectinload

from app.config.settings import settings
from app.core.exceptions import RepositoryError
from app.models.base.enums import BookingStatus
from app.models.booking.booking import Booking
from app.models.booking.booking_room import BookingRoom
from app.repositories.base.base_repository import BaseRepository

# Statuses that hold capacity unconditionally
RESERVING_STATUSES = (BookingStatus.BOOKED, BookingStatus.CHECKED_IN)


def effective_check_in_expr():
    """SQL form of the effective window start: actual when both actual dates are set."""
    both_actual = and_(
        BookingRoom.actual_check_in.is_not(None),
        BookingRoom.actual_check_out.is_not(None),
    )
    return case((both_actual, BookingRoom.actual_check_in), else_=BookingRoom.expected_check_in)


def effective_check_out_expr():
    both_actual = and_(
        BookingRoom.actual_check_in.is_not(None),
        BookingRoom.actual_check_out.is_not(None),
    )
    return case((both_actual, BookingRoom.actual_check_out), else_=BookingRoom.expected_check_out)


class BookingRepository(BaseRepository[Booking]):
    """Repository for the booking aggregate."""

    def __init__(self, db: Session):
        super().__init__(Booking, db)

    # ==================== Conflict Queries ====================

    def live_booking_clause(self, now: Optional[datetime] = None):
        """
        Bookings that currently hold capacity.

        Booked and checked-in bookings always do; a pending booking does
        while it is younger than the pending TTL.
        """
        now = now or datetime.utcnow()
        cutoff = now - timedelta(minutes=settings.PENDING_BOOKING_TTL_MINUTES)
        return or_(
            Booking.status.in_(RESERVING_STATUSES),
            and_(
                Booking.status == BookingStatus.PENDING,
                Booking.created_at >= cutoff,
            ),
        )

    def find_overlapping_lines(
        self,
        check_in: datetime,
        check_out: datetime,
        room_type_id: Optional[str] = None,
        room_id: Optional[str] = None,
        exclude_booking_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> List[BookingRoom]:
        """
        Room lines of live bookings whose effective window intersects
        ``[check_in, check_out]`` (inclusive on both ends).

        Args:
            room_type_id: Restrict to lines desiring this type
            room_id: Restrict to lines assigned to this physical room
            exclude_booking_id: Booking being edited
        """
        conditions = [
            self.live_booking_clause(now),
            effective_check_in_expr() <= check_out,
            effective_check_out_expr() >= check_in,
        ]
        if room_type_id is not None:
            conditions.append(BookingRoom.room_type_id == room_type_id)
        if room_id is not None:
            conditions.append(BookingRoom.room_id == room_id)
        if exclude_booking_id is not None:
            conditions.append(BookingRoom.booking_id != exclude_booking_id)

        query = (
            select(BookingRoom)
            .join(Booking, BookingRoom.booking_id == Booking.id)
            .where(and_(*conditions))
        )
        try:
            return list(self.db.execute(query).scalars().unique().all())
        except SQLAlchemyError as e:
            raise RepositoryError(f"Conflict query failed: {e}") from e

    def count_overlapping_lines(
        self,
        room_type_id: str,
        check_in: datetime,
        check_out: datetime,
        exclude_booking_id: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> int:
        return len(self.find_overlapping_lines(
            check_in,
            check_out,
            room_type_id=room_type_id,
            exclude_booking_id=exclude_booking_id,
            now=now,
        ))

    def find_in_house_lines(self) -> List[BookingRoom]:
        """Assigned lines that have checked in but not yet checked out."""
        query = (
            select(BookingRoom)
            .join(Booking, BookingRoom.booking_id == Booking.id)
            .where(and_(
                Booking.status.in_((BookingStatus.PENDING,) + RESERVING_STATUSES),
                BookingRoom.room_id.is_not(None),
                BookingRoom.actual_check_in.is_not(None),
                BookingRoom.actual_check_out.is_(None),
                BookingRoom.expected_check_out.is_not(None),
            ))
        )
        return list(self.db.execute(query).scalars().unique().all())

    # ==================== Lookup ====================

    def find_by_code(self, booking_code: str) -> Optional[Booking]:
        query = select(Booking).where(Booking.booking_code == booking_code)
        return self.db.execute(query).scalars().first()

    def find_by_code_and_phones(self, booking_code: str, phones: Sequence[str]) -> Optional[Booking]:
        """Match the code, then the snapshot phone against any accepted variant."""
        booking = self.find_by_code(booking_code)
        if booking is None:
            return None
        phone = (booking.customer_snapshot or {}).get("phone_number")
        if phone and phone in phones:
            return booking
        return None

    def find_checked_in_for_room(self, room_id: str) -> Optional[Booking]:
        query = (
            select(Booking)
            .join(BookingRoom, BookingRoom.booking_id == Booking.id)
            .where(and_(
                BookingRoom.room_id == room_id,
                Booking.status == BookingStatus.CHECKED_IN,
            ))
        )
        return self.db.execute(query).scalars().first()

    def list_bookings(
        self,
        status: Optional[BookingStatus] = None,
        skip: int = 0,
        limit: int = 100,
    ) -> List[Booking]:
        query = select(Booking).options(selectinload(Booking.rooms))
        if status is not None:
            query = query.where(Booking.status == status)
        query = query.order_by(Booking.created_at.desc()).offset(skip).limit(limit)
        return list(self.db.execute(query).scalars().all())

    # ==================== Sequencing ====================

    def get_max_sequence(self, code_month: str) -> int:
        """Highest sequence number issued for an ``MMYY`` month code, 0 if none."""
        query = select(func.max(Booking.sequence_number)).where(Booking.code_month == code_month)
        try:
            return self.db.execute(query).scalar() or 0
        except SQLAlchemyError as e:
            raise RepositoryError(f"Sequence query failed: {e}") from e

    # ==================== Expiry ====================

    def find_expired_pending(self, cutoff: datetime) -> List[Booking]:
        query = select(Booking).where(and_(
            Booking.status == BookingStatus.PENDING,
            Booking.created_at < cutoff,
        ))
        return list(self.db.execute(query).scalars().all())
