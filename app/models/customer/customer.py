# app/models/customer/customer.py
"""
Customer directory model.

Bookings copy the fields they need into a snapshot, so a customer row
can change or disappear without altering past bookings.
"""

from datetime import date
from typing import Any, Dict, Optional

from sqlalchemy import Date, String
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base.base_model import TimestampModel

__all__ = ["Customer"]


class Customer(TimestampModel):
    """Guest or booker known to the hotel."""

    __tablename__ = "customers"

    honorific: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    first_name: Mapped[str] = mapped_column(String(100), nullable=False)
    last_name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[Optional[str]] = mapped_column(String(255), nullable=True, index=True)
    phone_number: Mapped[Optional[str]] = mapped_column(String(20), nullable=True, index=True)
    identification_number: Mapped[Optional[str]] = mapped_column(String(50), nullable=True)
    date_of_birth: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    nationality: Mapped[Optional[str]] = mapped_column(String(100), nullable=True)

    @property
    def full_name(self) -> str:
        return f"{self.last_name} {self.first_name}".strip()

    def snapshot(self) -> Dict[str, Any]:
        """Fields denormalized onto a booking."""
        return {
            "honorific": self.honorific,
            "first_name": self.first_name,
            "last_name": self.last_name,
            "email": self.email,
            "phone_number": self.phone_number,
            "identification_number": self.identification_number,
        }
