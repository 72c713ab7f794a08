"""
Pending booking flow used by the customer checkout screens.
"""

from fastapi import APIRouter, Depends, status

from app.api import deps
from app.schemas.booking import (
    BookingResponse,
    BookingServicesUpdate,
    TemporaryBookingCreate,
    TemporaryConfirmRequest,
    TemporaryLineTypeRequest,
)
from app.services.booking import TemporaryBookingService

router = APIRouter(prefix="/bookings/temporary", tags=["Temporary Bookings"])


@router.post("", response_model=BookingResponse, status_code=status.HTTP_201_CREATED)
def create_temporary_booking(
    payload: TemporaryBookingCreate,
    service: TemporaryBookingService = Depends(deps.get_temporary_booking_service),
):
    return service.create_temporary_booking(payload.day_start, payload.day_end, payload.rooms)


@router.put("/{booking_id}/rooms/{index}", response_model=BookingResponse)
def set_line_room_type(
    booking_id: str,
    index: int,
    payload: TemporaryLineTypeRequest,
    service: TemporaryBookingService = Depends(deps.get_temporary_booking_service),
):
    return service.set_line_room_type(
        booking_id,
        index,
        payload.room_type_id,
        payload.number_of_adults,
        payload.number_of_children,
    )


@router.delete("/{booking_id}/rooms/{index}", response_model=BookingResponse)
def remove_line_room_type(
    booking_id: str,
    index: int,
    service: TemporaryBookingService = Depends(deps.get_temporary_booking_service),
):
    return service.remove_line_room_type(booking_id, index)


@router.put("/{booking_id}/rooms/{index}/services", response_model=BookingResponse)
def add_line_services(
    booking_id: str,
    index: int,
    payload: BookingServicesUpdate,
    service: TemporaryBookingService = Depends(deps.get_temporary_booking_service),
):
    return service.add_line_services(booking_id, index, payload.services)


@router.post("/{booking_id}/reset", response_model=BookingResponse)
def reset_temporary_booking(
    booking_id: str,
    service: TemporaryBookingService = Depends(deps.get_temporary_booking_service),
):
    return service.reset_temporary_booking(booking_id)


@router.post("/{booking_id}/confirm", response_model=BookingResponse)
def confirm_temporary_booking(
    booking_id: str,
    payload: TemporaryConfirmRequest,
    service: TemporaryBookingService = Depends(deps.get_temporary_booking_service),
):
    return service.confirm_temporary_booking(booking_id, payload.customer_id, payload.payment_method)
