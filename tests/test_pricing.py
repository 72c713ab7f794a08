"""Price calculation: nights, extra bed, service categories, booking totals."""

from datetime import datetime, timedelta
from decimal import Decimal
from types import SimpleNamespace

from app.models.base.enums import ServiceCategory
from app.services.pricing import (
    ServiceContext,
    calculate_nights,
    price_for_booking,
    pricing_for,
    resolve_nightly_price,
)

DOUBLE = SimpleNamespace(
    price_per_night=Decimal("500000"),
    capacity=2,
    extra_bed_allowed=True,
    extra_bed_price=Decimal("100000"),
)


def line(check_in, check_out, price="500000", adults=2, children=0, services=(), **kwargs):
    return SimpleNamespace(
        id=kwargs.get("id"),
        room_type_id="double",
        room_type=DOUBLE,
        price_per_night=Decimal(price) if price is not None else None,
        expected_check_in=check_in,
        expected_check_out=check_out,
        actual_check_in=kwargs.get("actual_check_in"),
        actual_check_out=kwargs.get("actual_check_out"),
        number_of_adults=adults,
        number_of_children=children,
        services=list(services),
    )


def item(category, unit_price, quantity=1):
    return SimpleNamespace(category=category, unit_price=Decimal(unit_price), quantity=quantity)


class TestNights:
    def test_whole_days(self):
        assert calculate_nights(datetime(2030, 1, 10, 14), datetime(2030, 1, 12, 14)) == 2

    def test_partial_day_rounds_up(self):
        assert calculate_nights(datetime(2030, 1, 10, 14), datetime(2030, 1, 12, 12)) == 2
        assert calculate_nights(datetime(2030, 1, 10, 12), datetime(2030, 1, 12, 14)) == 3

    def test_same_day_and_reversed_bill_one_night(self):
        day = datetime(2030, 1, 10, 14)
        assert calculate_nights(day, day) == 1
        assert calculate_nights(day, day - timedelta(days=2)) == 1

    def test_missing_date_bills_one_night(self):
        assert calculate_nights(None, datetime(2030, 1, 10)) == 1


class TestNightlyPrice:
    def test_extra_bed_surcharge_when_adults_exceed_capacity(self):
        price, extra_bed = resolve_nightly_price(DOUBLE, 3)
        assert price == Decimal("600000")
        assert extra_bed is True

    def test_no_surcharge_within_capacity(self):
        assert resolve_nightly_price(DOUBLE, 2) == (Decimal("500000"), False)

    def test_no_surcharge_when_extra_bed_not_allowed(self):
        single = SimpleNamespace(price_per_night=Decimal("300000"), capacity=1,
                                 extra_bed_allowed=False, extra_bed_price=Decimal("100000"))
        assert resolve_nightly_price(single, 2) == (Decimal("300000"), False)


class TestServicePricing:
    context = ServiceContext(nights=3, guests=2)

    def test_per_unit_multiplies_quantity(self):
        assert pricing_for(ServiceCategory.PER_UNIT, "50000", 4).amount(self.context) == Decimal("200000")

    def test_per_duration_multiplies_nights(self):
        assert pricing_for(ServiceCategory.PER_DURATION, "50000", 4).amount(self.context) == Decimal("150000")

    def test_per_person_multiplies_guests(self):
        assert pricing_for(ServiceCategory.PER_PERSON, "50000", 4).amount(self.context) == Decimal("100000")

    def test_fixed_ignores_quantity(self):
        assert pricing_for(ServiceCategory.FIXED, "50000", 4).amount(self.context) == Decimal("50000")

    def test_transportation_and_minibar_price_per_unit(self):
        assert pricing_for(ServiceCategory.TRANSPORTATION, "200000", 2).amount(self.context) == Decimal("400000")
        assert pricing_for(ServiceCategory.MINIBAR, "20000", 3).amount(self.context) == Decimal("60000")

    def test_missing_quantity_counts_as_one(self):
        assert pricing_for(ServiceCategory.PER_UNIT, "50000", None).amount(self.context) == Decimal("50000")


class TestBookingTotal:
    def test_rooms_and_services(self):
        stay = line(
            datetime(2030, 1, 10, 14),
            datetime(2030, 1, 12, 12),
            services=[item(ServiceCategory.PER_DURATION, "50000")],
        )
        booking = SimpleNamespace(rooms=[stay], services=[item(ServiceCategory.FIXED, "200000")])

        breakdown = price_for_booking(booking)

        assert breakdown.room_total == Decimal("1000000")
        assert breakdown.services_total == Decimal("300000")
        assert breakdown.total == Decimal("1300000")

    def test_actual_dates_override_expected_once_both_set(self):
        stay = line(
            datetime(2030, 1, 10, 14),
            datetime(2030, 1, 12, 12),
            actual_check_in=datetime(2030, 1, 10, 15),
            actual_check_out=datetime(2030, 1, 11, 11),
        )
        assert price_for_booking(SimpleNamespace(rooms=[stay], services=[])).room_total == Decimal("500000")

    def test_only_actual_check_in_keeps_expected_window(self):
        stay = line(
            datetime(2030, 1, 10, 14),
            datetime(2030, 1, 12, 12),
            actual_check_in=datetime(2030, 1, 11, 9),
        )
        assert price_for_booking(SimpleNamespace(rooms=[stay], services=[])).room_total == Decimal("1000000")

    def test_line_without_price_uses_room_type_price(self):
        stay = line(datetime(2030, 1, 10, 14), datetime(2030, 1, 11, 12), price=None)
        assert price_for_booking(SimpleNamespace(rooms=[stay], services=[])).room_total == Decimal("500000")

    def test_untyped_lines_are_skipped(self):
        untyped = line(datetime(2030, 1, 10, 14), datetime(2030, 1, 11, 12), price=None)
        untyped.room_type_id = None
        untyped.room_type = None
        assert price_for_booking(SimpleNamespace(rooms=[untyped], services=[])).total == Decimal("0")

    def test_repricing_is_stable(self):
        stay = line(datetime(2030, 1, 10, 14), datetime(2030, 1, 13, 12), adults=3, price="600000")
        booking = SimpleNamespace(rooms=[stay], services=[])
        assert price_for_booking(booking).total == price_for_booking(booking).total == Decimal("1800000")
