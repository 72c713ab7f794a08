from app.schemas.payment.payment_base import (
    ManualPaymentConfirm,
    PaymentCreate,
    PaymentResponse,
    PaymentStatusUpdate,
)
from app.schemas.payment.payment_gateway import GatewayRedirect, GatewayRequest, GatewayReturnResult

__all__ = [
    "GatewayRedirect",
    "GatewayRequest",
    "GatewayReturnResult",
    "ManualPaymentConfirm",
    "PaymentCreate",
    "PaymentResponse",
    "PaymentStatusUpdate",
]
