"""
Booking endpoints: create/edit, queries, lifecycle transitions and
desk settlement.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status

from app.api import deps
from app.models.base.enums import BookingStatus
from app.schemas.booking import (
    BookingCreate,
    BookingResponse,
    BookingServicesUpdate,
    BookingUpdate,
    CashPaymentRequest,
    CheckInRequest,
    CheckoutReceipt,
    CheckOutRequest,
    CheckOutResponse,
    PriceBreakdownResponse,
)
from app.schemas.common import MessageResponse
from app.services.booking import BookingLifecycleService, BookingService

router = APIRouter(prefix="/bookings", tags=["Bookings"])


# ========================================================================
# CREATE / QUERY
# ========================================================================

@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_booking(
    payload: BookingCreate,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.create_booking(payload)


@router.get("", response_model=List[BookingResponse])
def list_bookings(
    status_filter: Optional[BookingStatus] = Query(None, alias="status"),
    skip: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=500),
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.list_bookings(status=status_filter, skip=skip, limit=limit)


@router.get("/lookup", response_model=BookingResponse)
def lookup_booking(
    booking_code: Optional[str] = Query(None),
    phone_number: Optional[str] = Query(None),
    service: BookingService = Depends(deps.get_booking_service),
):
    """Guest lookup by booking code and phone number."""
    return service.lookup_booking(booking_code, phone_number)


@router.get("/by-room/{room_id}", response_model=BookingResponse)
def active_booking_for_room(
    room_id: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.get_active_booking_for_room(room_id)


@router.get("/{booking_id}", response_model=BookingResponse)
def get_booking(
    booking_id: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.get_booking(booking_id)


@router.patch("/{booking_id}", response_model=BookingResponse)
def update_booking(
    booking_id: str,
    payload: BookingUpdate,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.update_booking(booking_id, payload)


@router.delete("/{booking_id}", response_model=MessageResponse)
def delete_booking(
    booking_id: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    service.delete_booking(booking_id)
    return MessageResponse(message="Booking deleted")


@router.get("/{booking_id}/price", response_model=PriceBreakdownResponse)
def booking_price(
    booking_id: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.price(booking_id).to_dict()


# ========================================================================
# LIFECYCLE
# ========================================================================

@router.post("/{booking_id}/check-in", response_model=BookingResponse)
def check_in(
    booking_id: str,
    payload: Optional[CheckInRequest] = None,
    service: BookingLifecycleService = Depends(deps.get_lifecycle_service),
):
    assignments = payload.assignments if payload else []
    return service.check_in(booking_id, assignments)


@router.post("/{booking_id}/check-out", response_model=CheckOutResponse)
def check_out(
    booking_id: str,
    payload: CheckOutRequest,
    service: BookingLifecycleService = Depends(deps.get_lifecycle_service),
):
    booking, receipt = service.check_out(booking_id, payload.room_ids)
    return CheckOutResponse(
        booking=BookingResponse.model_validate(booking),
        receipt=CheckoutReceipt.model_validate(receipt),
    )


@router.post("/{booking_id}/cancel", response_model=BookingResponse)
def cancel_booking(
    booking_id: str,
    service: BookingLifecycleService = Depends(deps.get_lifecycle_service),
):
    return service.cancel(booking_id)


@router.post("/{booking_id}/request-cancellation", response_model=BookingResponse)
def request_cancellation(
    booking_id: str,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.request_cancellation(booking_id)


# ========================================================================
# SERVICES / SETTLEMENT
# ========================================================================

@router.put("/{booking_id}/services", response_model=BookingResponse)
def save_booking_services(
    booking_id: str,
    payload: BookingServicesUpdate,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.save_booking_services(booking_id, payload.services)


@router.post("/{booking_id}/cash-payment", response_model=BookingResponse)
def cash_payment(
    booking_id: str,
    payload: CashPaymentRequest,
    service: BookingService = Depends(deps.get_booking_service),
):
    return service.settle_cash(booking_id, payload.money_received)
