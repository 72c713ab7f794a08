"""
Payment service layer.

- Derived booking payment status (aggregator)
- Payment record management and manual confirmation
- VNPay-compatible online gateway
"""

from app.services.payment.payment_aggregator import PaymentAggregator, derive_payment_status
from app.services.payment.payment_service import PaymentService
from app.services.payment.online_payment_service import OnlinePaymentService

__all__ = [
    "OnlinePaymentService",
    "PaymentAggregator",
    "PaymentService",
    "derive_payment_status",
]
