"""
Payment endpoints: records, manual confirmation and the online gateway.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Request, status

from app.api import deps
from app.schemas.booking import BookingResponse
from app.schemas.common import MessageResponse
from app.schemas.payment import (
    GatewayRedirect,
    GatewayRequest,
    GatewayReturnResult,
    ManualPaymentConfirm,
    PaymentCreate,
    PaymentResponse,
    PaymentStatusUpdate,
)
from app.services.payment import OnlinePaymentService, PaymentService

router = APIRouter(prefix="/payments", tags=["Payments"])


# ========================================================================
# PAYMENT RECORDS
# ========================================================================

@router.post("", response_model=PaymentResponse, status_code=status.HTTP_201_CREATED)
def record_payment(
    payload: PaymentCreate,
    service: PaymentService = Depends(deps.get_payment_service),
):
    return service.record_payment(payload)


@router.get("/booking/{booking_id}", response_model=List[PaymentResponse])
def list_payments(
    booking_id: str,
    service: PaymentService = Depends(deps.get_payment_service),
):
    return service.list_payments(booking_id)


@router.patch("/{payment_id}/status", response_model=PaymentResponse)
def update_payment_status(
    payment_id: str,
    payload: PaymentStatusUpdate,
    service: PaymentService = Depends(deps.get_payment_service),
):
    return service.update_payment_status(payment_id, payload.status)


@router.delete("/{payment_id}", response_model=MessageResponse)
def delete_payment(
    payment_id: str,
    service: PaymentService = Depends(deps.get_payment_service),
):
    service.delete_payment(payment_id)
    return MessageResponse(message="Payment deleted")


@router.post("/manual", response_model=BookingResponse)
def confirm_manual_payment(
    payload: ManualPaymentConfirm,
    service: PaymentService = Depends(deps.get_payment_service),
):
    return service.confirm_manual_payment(payload.booking_id, payload.method)


# ========================================================================
# ONLINE GATEWAY
# ========================================================================

@router.post("/vnpay/{booking_id}", response_model=GatewayRedirect)
def create_vnpay_payment(
    booking_id: str,
    payload: Optional[GatewayRequest] = None,
    client_ip: str = Depends(deps.client_ip),
    service: OnlinePaymentService = Depends(deps.get_online_payment_service),
):
    payload = payload or GatewayRequest()
    return service.create_payment_url(
        booking_id,
        amount=payload.amount,
        order_description=payload.order_description,
        client_ip=client_ip,
    )


@router.get("/vnpay/return", response_model=GatewayReturnResult)
def vnpay_return(
    request: Request,
    service: OnlinePaymentService = Depends(deps.get_online_payment_service),
):
    """Gateway redirect target; always answers 200 with the gateway-style code."""
    return service.handle_return(dict(request.query_params))
