"""
Booking response schemas.
"""

from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, List, Union

from pydantic import Field

from app.models.base.enums import BookingStatus, PaymentStatus, RoomLineStatus, ServiceCategory
from app.schemas.common.base import BaseResponseSchema, BaseSchema

__all__ = [
    "ServiceItemResponse",
    "BookingRoomResponse",
    "BookingResponse",
    "LinePriceResponse",
    "PriceBreakdownResponse",
    "ReceiptServiceLine",
    "ReceiptRoomLine",
    "CheckoutReceipt",
    "CheckOutResponse",
]


class ServiceItemResponse(BaseSchema):
    id: str
    service_id: Union[str, None] = None
    service_name: str
    category: ServiceCategory
    unit_price: Decimal
    quantity: int


class BookingRoomResponse(BaseSchema):
    id: str
    position: int
    room_type_id: Union[str, None] = None
    room_id: Union[str, None] = None
    status: RoomLineStatus
    expected_check_in: Union[datetime, None] = None
    expected_check_out: Union[datetime, None] = None
    actual_check_in: Union[datetime, None] = None
    actual_check_out: Union[datetime, None] = None
    number_of_adults: int
    number_of_children: int
    extra_bed_added: bool
    price_per_night: Union[Decimal, None] = None
    room_snapshot: Union[Dict[str, Any], None] = None
    main_guest: Union[Dict[str, Any], None] = None
    additional_guests: List[Dict[str, Any]] = Field(default_factory=list)
    services: List[ServiceItemResponse] = Field(default_factory=list)


class BookingResponse(BaseResponseSchema):
    booking_code: str
    customer_id: Union[str, None] = None
    customer_snapshot: Union[Dict[str, Any], None] = None
    status: BookingStatus
    payment_status: PaymentStatus
    total_price: Decimal
    money_received: Decimal
    change_amount: Decimal
    notes: Union[str, None] = None
    internal_notes: Union[str, None] = None
    rooms: List[BookingRoomResponse] = Field(default_factory=list)
    services: List[ServiceItemResponse] = Field(default_factory=list)


class LinePriceResponse(BaseSchema):
    line_id: Union[str, None] = None
    nights: int
    price_per_night: Decimal
    room_cost: Decimal
    services_cost: Decimal
    total: Decimal


class PriceBreakdownResponse(BaseSchema):
    room_total: Decimal
    services_total: Decimal
    total: Decimal
    lines: List[LinePriceResponse] = Field(default_factory=list)


class ReceiptServiceLine(BaseSchema):
    name: str
    category: ServiceCategory
    unit_price: Decimal
    quantity: int
    amount: Decimal


class ReceiptRoomLine(BaseSchema):
    room_number: Union[str, None] = None
    room_type: Union[str, None] = None
    check_in: Union[datetime, None] = None
    check_out: Union[datetime, None] = None
    nights: int
    price_per_night: Decimal
    room_cost: Decimal
    services: List[ReceiptServiceLine] = Field(default_factory=list)


class CheckoutReceipt(BaseSchema):
    booking_code: str
    customer: Union[Dict[str, Any], None] = None
    rooms: List[ReceiptRoomLine] = Field(default_factory=list)
    booking_services: List[ReceiptServiceLine] = Field(default_factory=list)
    room_total: Decimal
    services_total: Decimal
    grand_total: Decimal
    paid: Decimal
    balance_due: Decimal
    payment_status: PaymentStatus
    issued_at: datetime


class CheckOutResponse(BaseSchema):
    booking: BookingResponse
    receipt: CheckoutReceipt
