# backend/octo_mock/services/catalog/seed.py
"""
Products the mock API ships with.

Product "1" is a guided tour with fixed start times priced per unit,
product "2" a day pass with opening hours priced per booking.
"""

from .models import (
    AvailabilityConfig,
    AvailabilityType,
    Currency,
    Option,
    OptionRestrictions,
    Price,
    PricingPer,
    Product,
    ProductContent,
    ProductPricing,
    Unit,
    UnitRestrictions,
    UnitType,
)


def _tour_units() -> tuple[Unit, ...]:
    return (
        Unit(
            id="adult",
            type=UnitType.ADULT,
            internal_name="Adult",
            price=Price(original=2500, retail=2500, net=2000),
            restrictions=UnitRestrictions(min_age=18, max_age=100),
        ),
        Unit(
            id="child",
            type=UnitType.CHILD,
            internal_name="Child",
            price=Price(original=1500, retail=1500, net=1200),
            restrictions=UnitRestrictions(min_age=3, max_age=17, accompanied_by=("adult",)),
        ),
        Unit(
            id="infant",
            type=UnitType.INFANT,
            internal_name="Infant",
            price=Price(original=0, retail=0, net=0),
            restrictions=UnitRestrictions(min_age=0, max_age=2, accompanied_by=("adult",)),
        ),
    )


def build_products(default_capacity: int = 10) -> list[Product]:
    tour_times = ("09:00", "12:00", "15:00")
    tour = Product(
        id="1",
        internal_name="London walking tour",
        availability_type=AvailabilityType.START_TIME,
        pricing=ProductPricing(
            pricing_per=PricingPer.UNIT,
            default_currency=Currency.GBP,
            available_currencies=(Currency.GBP,),
        ),
        availability_config=AvailabilityConfig(
            start_times=tour_times,
            capacity=default_capacity,
            duration_minutes=120,
        ),
        content=ProductContent(
            title="London walking tour",
            location="London",
            short_description="Two hour guided walk through the City.",
            highlights=("St Paul's Cathedral", "Millennium Bridge"),
            inclusions=("Guide",),
            exclusions=("Food and drinks",),
            cancellation_policy="Free cancellation up to 1 hour before the start.",
        ),
        options=(
            Option(
                id="DEFAULT",
                default=True,
                internal_name="Morning to afternoon departures",
                availability_local_start_times=tour_times,
                units=_tour_units(),
                restrictions=OptionRestrictions(min_units=1, max_units=10),
            ),
            Option(
                id="PRIVATE",
                internal_name="Private group",
                availability_local_start_times=tour_times,
                units=_tour_units(),
                restrictions=OptionRestrictions(min_units=1, max_units=4),
                capacity=4,
            ),
        ),
    )

    day_pass = Product(
        id="2",
        internal_name="Museum day pass",
        availability_type=AvailabilityType.OPENING_HOURS,
        pricing=ProductPricing(
            pricing_per=PricingPer.BOOKING,
            default_currency=Currency.GBP,
            available_currencies=(Currency.GBP, Currency.EUR),
        ),
        availability_config=AvailabilityConfig(
            opening_hours=(("10:00", "18:00"),),
            days_of_week=frozenset({1, 2, 3, 4, 5, 6}),  # closed on Mondays
            closed_dates=frozenset({"2021-12-25", "2021-12-26"}),
            capacity=default_capacity * 5,
        ),
        content=ProductContent(
            title="Museum day pass",
            location="London",
            short_description="Entry to every gallery for one day.",
        ),
        options=(
            Option(
                id="DEFAULT",
                default=True,
                internal_name="Day pass",
                units=(
                    Unit(
                        id="adult",
                        type=UnitType.ADULT,
                        internal_name="Adult",
                        price=Price(original=1800, retail=1800, net=1500),
                    ),
                ),
                restrictions=OptionRestrictions(min_units=1, max_units=6),
                booking_price=Price(original=1800, retail=1800, net=1500),
            ),
        ),
    )

    return [tour, day_pass]
