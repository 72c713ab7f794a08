# app/services/booking/booking_code.py
"""
Booking code generation: ``BK-<MMYY>-<00001>``.
"""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.repositories.booking.booking_repository import BookingRepository
from app.utils.datetime_utils import DateTimeHelper

CODE_PREFIX = "BK"


@dataclass(frozen=True)
class BookingCode:
    code: str
    code_month: str
    sequence_number: int


def format_booking_code(code_month: str, sequence_number: int) -> str:
    return f"{CODE_PREFIX}-{code_month}-{sequence_number:05d}"


class BookingCodeGenerator:
    """
    Issues the next code for the current hotel-local month.

    Max-plus-one is racy on its own; the unique constraint on
    ``bookings.booking_code`` turns a lost race into a failed commit
    instead of a duplicate code.
    """

    def __init__(self, session: Session):
        self.bookings = BookingRepository(session)

    def next_code(self, now: Optional[datetime] = None) -> BookingCode:
        now = now or datetime.utcnow()
        code_month = DateTimeHelper.month_code(now, settings.HOTEL_TIMEZONE)
        sequence_number = self.bookings.get_max_sequence(code_month) + 1
        return BookingCode(
            code=format_booking_code(code_month, sequence_number),
            code_month=code_month,
            sequence_number=sequence_number,
        )
