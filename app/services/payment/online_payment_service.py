"""
VNPay-compatible online payment gateway.

Outbound: a signed hosted-checkout URL plus a ``pending`` payment record
keyed by the transaction reference. Inbound: the return callback, which
is verified, matched to that record and applied at most once.
"""

import hashlib
import hmac
import time
from datetime import datetime
from decimal import Decimal, InvalidOperation
from typing import Any, Mapping, Optional
from urllib.parse import quote_plus

from sqlalchemy.orm import Session

from app.config.settings import settings
from app.core.exceptions import InvalidTransitionError, ValidationError
from app.models.base.enums import (
    BookingStatus,
    PaymentCategory,
    PaymentMethod,
    PaymentRecordStatus,
    PaymentStatus,
    RoomLineStatus,
)
from app.models.payment.payment import Payment
from app.repositories.booking.booking_repository import BookingRepository
from app.repositories.payment.payment_repository import PaymentRepository
from app.schemas.payment.payment_gateway import GatewayRedirect, GatewayReturnResult
from app.services.base import BaseService, track_performance
from app.services.integrations import NotificationService, call_collaborator
from app.services.integrations.notification_service import LoggingNotificationService
from app.services.payment.payment_aggregator import PaymentAggregator
from app.utils.datetime_utils import DateTimeHelper

RESPONSE_SUCCESS = "00"
RESPONSE_NOT_FOUND = "01"
RESPONSE_ALREADY_PROCESSED = "02"
RESPONSE_AMOUNT_MISMATCH = "04"
RESPONSE_BAD_SIGNATURE = "97"

RESPONSE_MESSAGES = {
    RESPONSE_SUCCESS: "Thanh toán thành công",
    RESPONSE_NOT_FOUND: "Không tìm thấy giao dịch",
    RESPONSE_ALREADY_PROCESSED: "Giao dịch đã được xử lý",
    RESPONSE_AMOUNT_MISMATCH: "Số tiền không hợp lệ",
    RESPONSE_BAD_SIGNATURE: "Chữ ký không hợp lệ",
}
FAILED_MESSAGE = "Thanh toán thất bại"


def build_query(params: Mapping[str, Any]) -> str:
    """Sorted ``key=value`` pairs, values URL-encoded with spaces as ``+``."""
    return "&".join(
        f"{key}={quote_plus(str(params[key]))}"
        for key in sorted(params)
        if params[key] is not None and str(params[key]) != ""
    )


def sign(params: Mapping[str, Any], secret: str) -> str:
    """HMAC-SHA512 of the canonical query string."""
    return hmac.new(
        secret.encode("utf-8"),
        build_query(params).encode("utf-8"),
        hashlib.sha512,
    ).hexdigest()


def verify_signature(params: Mapping[str, Any], secret: str) -> bool:
    received = str(params.get("vnp_SecureHash") or "")
    signed = {
        key: value for key, value in params.items()
        if key.startswith("vnp_") and key not in ("vnp_SecureHash", "vnp_SecureHashType")
    }
    return hmac.compare_digest(sign(signed, secret).lower(), received.lower())


def gateway_amount(params: Mapping[str, Any]) -> Optional[Decimal]:
    """``vnp_Amount`` back in currency units; None when it is not a number."""
    try:
        return Decimal(str(params.get("vnp_Amount") or 0)) / 100
    except InvalidOperation:
        return None


class OnlinePaymentService(BaseService):
    """Gateway checkout creation and return-callback handling."""

    def __init__(
        self,
        db_session: Session,
        notifications: Optional[NotificationService] = None,
        hash_secret: Optional[str] = None,
    ):
        super().__init__(db_session)
        self.payments = PaymentRepository(db_session)
        self.bookings = BookingRepository(db_session)
        self.aggregator = PaymentAggregator(db_session)
        self.notifications = notifications or LoggingNotificationService()
        self.hash_secret = hash_secret or settings.VNPAY_HASH_SECRET

    @track_performance("create_payment_url")
    def create_payment_url(
        self,
        booking_id: str,
        amount: Optional[Decimal] = None,
        order_description: Optional[str] = None,
        client_ip: str = "127.0.0.1",
        now: Optional[datetime] = None,
    ) -> GatewayRedirect:
        """
        Signed checkout URL for a booking.

        ``amount`` defaults to the outstanding balance. The reference is
        ``<booking_code>_<epoch millis>``.
        """
        now = now or datetime.utcnow()
        with self.transaction():
            booking = self.bookings.get_by_id(booking_id)
            if booking.is_terminal:
                raise InvalidTransitionError(booking.status.value, "pay for")

            if amount is None:
                amount = Decimal(str(booking.total_price)) - self.payments.sum_paid(booking.id)
            amount = Decimal(str(amount))
            if amount <= 0:
                raise ValidationError("Số tiền thanh toán phải lớn hơn 0", field_errors={"amount": ["must be > 0"]})

            reference = f"{booking.booking_code}_{int(time.time() * 1000)}"
            params = {
                "vnp_Version": settings.VNPAY_VERSION,
                "vnp_Command": "pay",
                "vnp_TmnCode": settings.VNPAY_TMN_CODE,
                "vnp_Locale": settings.VNPAY_LOCALE,
                "vnp_CurrCode": settings.VNPAY_CURRENCY,
                "vnp_TxnRef": reference,
                "vnp_OrderInfo": order_description or f"Thanh toan dat phong {booking.booking_code}",
                "vnp_OrderType": "other",
                "vnp_Amount": int(amount * 100),
                "vnp_ReturnUrl": settings.VNPAY_RETURN_URL,
                "vnp_IpAddr": client_ip,
                "vnp_CreateDate": DateTimeHelper.gateway_timestamp(now, settings.HOTEL_TIMEZONE),
            }
            url = f"{settings.VNPAY_URL}?{build_query(params)}&vnp_SecureHash={sign(params, self.hash_secret)}"

            payment = self.payments.add(Payment(
                booking_id=booking.id,
                amount=amount,
                method=PaymentMethod.VNPAY,
                category=PaymentCategory.ONLINE,
                status=PaymentRecordStatus.PENDING,
                transaction_code=reference,
                note=f"VNPay payment initiated for {booking.booking_code}",
            ))

        self._log_operation(
            "Gateway payment initiated",
            booking.booking_code,
            {"transaction_code": reference, "amount": str(amount)},
        )
        return GatewayRedirect(payment_id=payment.id, transaction_code=reference, payment_url=url)

    @track_performance("handle_gateway_return")
    def handle_return(self, params: Mapping[str, Any]) -> GatewayReturnResult:
        """
        Apply a gateway return.

        A payment that already left ``pending`` is reported as-is and
        nothing is re-applied, so replays of the same callback are safe.
        """
        params = dict(params)
        reference = params.get("vnp_TxnRef")
        response_code = str(params.get("vnp_ResponseCode") or "")

        if not verify_signature(params, self.hash_secret):
            self._logger.warning("Gateway return with invalid signature", extra={"transaction_code": reference})
            return self._result(RESPONSE_BAD_SIGNATURE, transaction_code=reference)

        payment = self.payments.find_by_transaction_code(reference) if reference else None
        if payment is None:
            return self._result(RESPONSE_NOT_FOUND, transaction_code=reference)
        booking = payment.booking

        if payment.status != PaymentRecordStatus.PENDING:
            self._logger.info(
                "Gateway return replayed, payment already settled",
                extra={"transaction_code": reference, "payment_record_status": payment.status.value},
            )
            return self._result(
                RESPONSE_SUCCESS if payment.status == PaymentRecordStatus.PAID else RESPONSE_ALREADY_PROCESSED,
                payment=payment,
                success=payment.status == PaymentRecordStatus.PAID,
            )

        gateway_metadata = {
            "vnpay_response_code": response_code,
            "vnpay_params": {k: v for k, v in params.items() if k != "vnp_SecureHash"},
        }
        confirmed = False
        with self.transaction():
            paid_amount = gateway_amount(params)
            if paid_amount is None or paid_amount != Decimal(str(payment.amount)):
                payment.status = PaymentRecordStatus.FAILED
                payment.payment_metadata = gateway_metadata
                code = RESPONSE_AMOUNT_MISMATCH
            elif response_code == RESPONSE_SUCCESS:
                payment.status = PaymentRecordStatus.PAID
                payment.paid_at = datetime.utcnow()
                payment.payment_metadata = gateway_metadata
                self.aggregator.recompute_status(booking)
                if booking.status == BookingStatus.PENDING and booking.payment_status == PaymentStatus.PAID:
                    booking.status = BookingStatus.BOOKED
                    for line in booking.rooms:
                        if line.status == RoomLineStatus.PENDING:
                            line.status = RoomLineStatus.BOOKED
                    confirmed = True
                code = RESPONSE_SUCCESS
            else:
                payment.status = PaymentRecordStatus.FAILED
                payment.payment_metadata = gateway_metadata
                code = response_code or RESPONSE_ALREADY_PROCESSED

        self._log_operation(
            "Gateway return applied",
            booking.booking_code,
            {
                "transaction_code": reference,
                "response_code": code,
                "payment_record_status": payment.status.value,
                "booking_status": booking.status.value,
            },
        )
        if confirmed:
            call_collaborator(
                "notifications",
                self.notifications.send_booking_confirmation,
                booking,
                booking.customer_snapshot,
            )
        return self._result(code, payment=payment, success=code == RESPONSE_SUCCESS)

    @staticmethod
    def _result(
        code: str,
        payment: Optional[Payment] = None,
        success: bool = False,
        transaction_code: Optional[str] = None,
    ) -> GatewayReturnResult:
        booking = payment.booking if payment is not None else None
        return GatewayReturnResult(
            code=code,
            message=RESPONSE_MESSAGES.get(code, FAILED_MESSAGE),
            success=success,
            transaction_code=payment.transaction_code if payment is not None else transaction_code,
            booking_code=booking.booking_code if booking is not None else None,
            payment_status=payment.status if payment is not None else None,
            booking_status=booking.status if booking is not None else None,
        )
