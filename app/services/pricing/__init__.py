from app.services.pricing.price_calculator import (
    Fixed,
    PerDuration,
    PerPerson,
    PerUnit,
    PriceBreakdown,
    ServiceContext,
    calculate_nights,
    price_for_booking,
    pricing_for,
    resolve_nightly_price,
)

__all__ = [
    "Fixed",
    "PerDuration",
    "PerPerson",
    "PerUnit",
    "PriceBreakdown",
    "ServiceContext",
    "calculate_nights",
    "price_for_booking",
    "pricing_for",
    "resolve_nightly_price",
]
