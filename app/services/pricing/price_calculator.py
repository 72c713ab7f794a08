# app/services/pricing/price_calculator.py
"""
Booking price calculation.

Pure functions over a booking and its room lines: nightly room cost with
the frozen extra-bed surcharge, service cost by pricing category, and the
booking total. Missing prices count as zero; nothing here touches the
database.
"""

import math
from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Any, Dict, Iterable, List, Optional, Tuple, Union

from app.models.base.enums import ServiceCategory
from app.services.reservation.conflict_detector import effective_window

ZERO = Decimal("0")
SECONDS_PER_DAY = 24 * 60 * 60


def _money(value: Any) -> Decimal:
    if value is None:
        return ZERO
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


# ==================== NIGHTS ====================

def calculate_nights(check_in: Optional[datetime], check_out: Optional[datetime]) -> int:
    """
    Nights between two instants, rounded up, never below 1.

    A same-day stay, a reversed range or a missing date all bill one night.
    """
    if check_in is None or check_out is None:
        return 1
    diff = (check_out - check_in).total_seconds()
    return max(1, math.ceil(diff / SECONDS_PER_DAY))


def line_nights(line: Any) -> int:
    check_in, check_out = effective_window(line)
    return calculate_nights(check_in, check_out)


def booking_nights(lines: Iterable[Any]) -> int:
    """Overall stay: earliest start to latest end over every dated line."""
    starts, ends = [], []
    for line in lines:
        check_in, check_out = effective_window(line)
        if check_in is not None and check_out is not None:
            starts.append(check_in)
            ends.append(check_out)
    if not starts:
        return 1
    return calculate_nights(min(starts), max(ends))


# ==================== NIGHTLY PRICE ====================

def resolve_nightly_price(room_type: Any, number_of_adults: Optional[int]) -> Tuple[Decimal, bool]:
    """
    Nightly price for a line of this type and the extra-bed flag.

    The surcharge applies when adults exceed the type's base capacity and
    the type allows an extra bed. Callers freeze the result onto the line.
    """
    base = _money(getattr(room_type, "price_per_night", None))
    adults = number_of_adults or 0
    capacity = getattr(room_type, "capacity", None) or 0
    if adults > capacity and getattr(room_type, "extra_bed_allowed", False):
        return base + _money(getattr(room_type, "extra_bed_price", None)), True
    return base, False


def line_nightly_price(line: Any) -> Decimal:
    """Frozen line price, else the type's price, else zero."""
    if getattr(line, "price_per_night", None) is not None:
        return _money(line.price_per_night)
    room_type = getattr(line, "room_type", None)
    if room_type is not None:
        return _money(getattr(room_type, "price_per_night", None))
    return ZERO


# ==================== SERVICE PRICING ====================

@dataclass(frozen=True)
class ServiceContext:
    """What a service is priced against: its room line or the whole stay."""
    nights: int
    guests: int


@dataclass(frozen=True)
class PerUnit:
    unit_price: Decimal
    quantity: int

    def amount(self, context: ServiceContext) -> Decimal:
        return self.unit_price * self.quantity


@dataclass(frozen=True)
class PerDuration:
    unit_price: Decimal
    quantity: int

    def amount(self, context: ServiceContext) -> Decimal:
        return self.unit_price * context.nights


@dataclass(frozen=True)
class PerPerson:
    unit_price: Decimal
    quantity: int

    def amount(self, context: ServiceContext) -> Decimal:
        return self.unit_price * context.guests


@dataclass(frozen=True)
class Fixed:
    unit_price: Decimal
    quantity: int

    def amount(self, context: ServiceContext) -> Decimal:
        return self.unit_price


ServicePricing = Union[PerUnit, PerDuration, PerPerson, Fixed]

# transportation and minibar are sold per unit
CATEGORY_PRICING = {
    ServiceCategory.PER_UNIT: PerUnit,
    ServiceCategory.PER_DURATION: PerDuration,
    ServiceCategory.PER_PERSON: PerPerson,
    ServiceCategory.FIXED: Fixed,
    ServiceCategory.TRANSPORTATION: PerUnit,
    ServiceCategory.MINIBAR: PerUnit,
}


def pricing_for(category: Any, unit_price: Any, quantity: Optional[int]) -> ServicePricing:
    """Build the pricing variant for a category; unknown categories price per unit."""
    try:
        variant = CATEGORY_PRICING[ServiceCategory(category)]
    except ValueError:
        variant = PerUnit
    return variant(_money(unit_price), 1 if quantity is None else quantity)


def service_amount(item: Any, context: ServiceContext) -> Decimal:
    pricing = pricing_for(
        getattr(item, "category", None) or ServiceCategory.PER_UNIT,
        getattr(item, "unit_price", None),
        getattr(item, "quantity", None),
    )
    return pricing.amount(context)


# ==================== BREAKDOWN ====================

@dataclass
class LinePrice:
    line_id: Optional[str]
    nights: int
    price_per_night: Decimal
    room_cost: Decimal
    services_cost: Decimal

    @property
    def total(self) -> Decimal:
        return self.room_cost + self.services_cost


@dataclass
class PriceBreakdown:
    room_total: Decimal = ZERO
    services_total: Decimal = ZERO
    lines: List[LinePrice] = field(default_factory=list)

    @property
    def total(self) -> Decimal:
        return self.room_total + self.services_total

    def to_dict(self) -> Dict[str, Any]:
        return {
            "room_total": self.room_total,
            "services_total": self.services_total,
            "total": self.total,
            "lines": [
                {
                    "line_id": line.line_id,
                    "nights": line.nights,
                    "price_per_night": line.price_per_night,
                    "room_cost": line.room_cost,
                    "services_cost": line.services_cost,
                    "total": line.total,
                }
                for line in self.lines
            ],
        }


def price_line(line: Any) -> LinePrice:
    nights = line_nights(line)
    nightly = line_nightly_price(line)
    context = ServiceContext(
        nights=nights,
        guests=(getattr(line, "number_of_adults", 0) or 0) + (getattr(line, "number_of_children", 0) or 0),
    )
    services_cost = sum(
        (service_amount(item, context) for item in (getattr(line, "services", None) or [])),
        ZERO,
    )
    return LinePrice(
        line_id=getattr(line, "id", None),
        nights=nights,
        price_per_night=nightly,
        room_cost=nightly * nights,
        services_cost=services_cost,
    )


def price_for_booking(booking: Any) -> PriceBreakdown:
    """
    Room total, services total and grand total for a booking.

    Lines without a room type (a pending booking mid-selection) are skipped.
    Booking-level services are priced against the overall stay and the
    guests of every line.
    """
    lines = [
        line for line in (getattr(booking, "rooms", None) or [])
        if getattr(line, "room_type_id", None) is not None
        or getattr(line, "price_per_night", None) is not None
    ]
    breakdown = PriceBreakdown()
    for line in lines:
        line_price = price_line(line)
        breakdown.lines.append(line_price)
        breakdown.room_total += line_price.room_cost
        breakdown.services_total += line_price.services_cost

    booking_context = ServiceContext(
        nights=booking_nights(lines),
        guests=sum(
            (getattr(line, "number_of_adults", 0) or 0) + (getattr(line, "number_of_children", 0) or 0)
            for line in lines
        ),
    )
    for item in getattr(booking, "services", None) or []:
        breakdown.services_total += service_amount(item, booking_context)

    return breakdown
