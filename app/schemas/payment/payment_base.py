# --- File: app/schemas/payment/payment_base.py ---
"""
Payment record schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Optional

from pydantic import Field

from app.models.base.enums import PaymentCategory, PaymentMethod, PaymentRecordStatus
from app.schemas.common.base import BaseCreateSchema, BaseResponseSchema, BaseSchema

__all__ = [
    "PaymentCreate",
    "PaymentStatusUpdate",
    "ManualPaymentConfirm",
    "PaymentResponse",
]


class PaymentCreate(BaseCreateSchema):
    """Settlement record against a booking."""

    booking_id: str = Field(..., description="Booking being paid")
    amount: Decimal = Field(..., ge=0, description="Amount settled")
    method: PaymentMethod = Field(PaymentMethod.CASH)
    category: PaymentCategory = Field(PaymentCategory.OFFLINE)
    status: PaymentRecordStatus = Field(PaymentRecordStatus.PENDING)
    is_deposit: bool = False
    transaction_code: Optional[str] = Field(None, max_length=100)
    note: Optional[str] = Field(None, max_length=1000)


class PaymentStatusUpdate(BaseSchema):
    status: PaymentRecordStatus


class ManualPaymentConfirm(BaseSchema):
    """Staff confirmation of a payment received outside the gateway."""

    booking_id: str
    method: PaymentMethod = PaymentMethod.BANK_TRANSFER


class PaymentResponse(BaseResponseSchema):
    booking_id: str
    amount: Decimal
    method: PaymentMethod
    category: PaymentCategory
    status: PaymentRecordStatus
    is_deposit: bool
    transaction_code: Optional[str] = None
    note: Optional[str] = None
    payment_metadata: Optional[Dict[str, Any]] = None
    paid_at: Optional[datetime] = None
