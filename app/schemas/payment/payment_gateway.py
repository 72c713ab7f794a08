# --- File: app/schemas/payment/payment_gateway.py ---
"""
Payment gateway integration schemas.

Requests for a hosted-checkout URL and the outcome of the gateway's
return callback.
"""

from decimal import Decimal
from typing import Optional

from pydantic import Field

from app.models.base.enums import BookingStatus, PaymentRecordStatus
from app.schemas.common.base import BaseSchema

__all__ = [
    "GatewayRequest",
    "GatewayRedirect",
    "GatewayReturnResult",
]


class GatewayRequest(BaseSchema):
    """
    Gateway payment initiation request.

    ``amount`` defaults to the outstanding balance.
    """

    amount: Optional[Decimal] = Field(None, gt=0, description="Amount to charge")
    order_description: Optional[str] = Field(None, max_length=255)


class GatewayRedirect(BaseSchema):
    payment_id: str
    transaction_code: str = Field(..., description="Reference sent as vnp_TxnRef")
    payment_url: str


class GatewayReturnResult(BaseSchema):
    """Outcome of a gateway return; ``code`` follows the gateway's response codes."""

    code: str = Field(..., description="00 success, 97 bad signature, 01 not found, 04 amount mismatch")
    message: str
    success: bool
    transaction_code: Optional[str] = None
    booking_code: Optional[str] = None
    payment_status: Optional[PaymentRecordStatus] = None
    booking_status: Optional[BookingStatus] = None
