# app/repositories/payment/payment_repository.py
"""
Payment repository.
"""

from decimal import Decimal
from typing import List, Optional

from sqlalchemy import and_, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.exceptions import RepositoryError
from app.models.base.enums import PaymentRecordStatus
from app.models.payment.payment import Payment
from app.repositories.base.base_repository import BaseRepository


class PaymentRepository(BaseRepository[Payment]):
    """Repository for payment records."""

    def __init__(self, db: Session):
        super().__init__(Payment, db)

    def sum_paid(self, booking_id: str) -> Decimal:
        """Sum of amounts in status ``paid`` for a booking."""
        query = select(func.coalesce(func.sum(Payment.amount), 0)).where(and_(
            Payment.booking_id == booking_id,
            Payment.status == PaymentRecordStatus.PAID,
        ))
        try:
            return Decimal(str(self.db.execute(query).scalar_one()))
        except SQLAlchemyError as e:
            raise RepositoryError(f"Payment sum failed: {e}") from e

    def find_by_transaction_code(self, transaction_code: str) -> Optional[Payment]:
        query = select(Payment).where(Payment.transaction_code == transaction_code)
        return self.db.execute(query).scalars().first()

    def list_for_booking(self, booking_id: str) -> List[Payment]:
        query = (
            select(Payment)
            .where(Payment.booking_id == booking_id)
            .order_by(Payment.created_at.desc())
        )
        return list(self.db.execute(query).scalars().all())

    def delete_pending_for_booking(self, booking_id: str) -> int:
        query = delete(Payment).where(and_(
            Payment.booking_id == booking_id,
            Payment.status == PaymentRecordStatus.PENDING,
        ))
        try:
            result = self.db.execute(query)
            return result.rowcount or 0
        except SQLAlchemyError as e:
            raise RepositoryError(f"Pending payment cleanup failed: {e}") from e
