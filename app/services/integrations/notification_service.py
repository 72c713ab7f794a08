"""
Guest notifications (booking confirmation, checkout receipt).

Mail delivery lives outside the engine; the default implementation
records what would be sent in the application log.
"""

from typing import Any, Dict, Optional, Protocol

from app.core.logging import get_logger
from app.models.booking.booking import Booking

logger = get_logger(__name__)


class NotificationService(Protocol):
    """Contract for guest notifications. Calls are fire-and-forget."""

    def send_booking_confirmation(self, booking: Booking, customer: Optional[Dict[str, Any]]) -> None:
        ...

    def send_receipt(
        self,
        booking: Booking,
        customer: Optional[Dict[str, Any]],
        receipt: Dict[str, Any],
    ) -> None:
        ...


class LoggingNotificationService:
    """Writes each notification to the log instead of sending mail."""

    def send_booking_confirmation(self, booking: Booking, customer: Optional[Dict[str, Any]]) -> None:
        email = (customer or {}).get("email")
        if not email:
            logger.warning(
                "Booking confirmation skipped, customer has no email",
                extra={"booking_code": booking.booking_code},
            )
            return
        logger.info(
            "Booking confirmation sent",
            extra={
                "booking_code": booking.booking_code,
                "recipient": email,
                "total_price": str(booking.total_price),
            },
        )

    def send_receipt(
        self,
        booking: Booking,
        customer: Optional[Dict[str, Any]],
        receipt: Dict[str, Any],
    ) -> None:
        email = (customer or {}).get("email")
        if not email:
            logger.warning(
                "Receipt skipped, customer has no email",
                extra={"booking_code": booking.booking_code},
            )
            return
        logger.info(
            "Checkout receipt sent",
            extra={
                "booking_code": booking.booking_code,
                "recipient": email,
                "grand_total": str(receipt.get("grand_total")),
            },
        )
