"""
Shared FastAPI dependencies.

Example usage in a router:
    from fastapi import Depends, APIRouter
    from app.api import deps

    router = APIRouter()

    @router.get("/bookings")
    def list_bookings(service: BookingService = Depends(deps.get_booking_service)):
        ...
"""

from fastapi import Depends, Request
from sqlalchemy.orm import Session

from app.db.session import get_db
from app.services.booking import BookingLifecycleService, BookingService, TemporaryBookingService
from app.services.catalog import CatalogService
from app.services.payment import OnlinePaymentService, PaymentService
from app.services.reservation import AvailabilityResolver

__all__ = [
    "get_db",
    "get_catalog_service",
    "get_availability_resolver",
    "get_booking_service",
    "get_lifecycle_service",
    "get_temporary_booking_service",
    "get_payment_service",
    "get_online_payment_service",
    "client_ip",
]


# --- Services ------------------------------------------------------------------

def get_catalog_service(db: Session = Depends(get_db)) -> CatalogService:
    return CatalogService(db)


def get_availability_resolver(db: Session = Depends(get_db)) -> AvailabilityResolver:
    return AvailabilityResolver(db)


def get_booking_service(db: Session = Depends(get_db)) -> BookingService:
    return BookingService(db)


def get_lifecycle_service(db: Session = Depends(get_db)) -> BookingLifecycleService:
    return BookingLifecycleService(db)


def get_temporary_booking_service(db: Session = Depends(get_db)) -> TemporaryBookingService:
    return TemporaryBookingService(db)


def get_payment_service(db: Session = Depends(get_db)) -> PaymentService:
    return PaymentService(db)


def get_online_payment_service(db: Session = Depends(get_db)) -> OnlinePaymentService:
    return OnlinePaymentService(db)


# --- Request context -----------------------------------------------------------

def client_ip(request: Request) -> str:
    """Caller address, honouring X-Forwarded-For behind a proxy."""
    forwarded = request.headers.get("x-forwarded-for")
    if forwarded:
        return forwarded.split(",")[0].strip()
    return request.client.host if request.client else "127.0.0.1"
