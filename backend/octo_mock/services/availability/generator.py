# backend/octo_mock/services/availability/generator.py
"""
Availability generator.

Materialises the slots of a product option for a window of calendar days
from the product's recurrence rules and the capacity ledger. Nothing is
stored: the same inputs and the same ledger state give the same output.

Contains:
✓ days_of_week / closed_dates of the product
✓ start times (START_TIME) or one slot per day (OPENING_HOURS)
✓ remaining capacity (configured capacity − units in the ledger)
✓ pricing (per unit or per booking)

Does NOT contain:
✗ Selection by date / range / ids (AvailabilityService)
✗ Capability-based field filtering (response schemas)
"""

from collections.abc import Iterable
from datetime import date, timedelta
from zoneinfo import ZoneInfo

from ...errors import InvalidUnitIdError, OptionNotFoundError
from ..capabilities import Capability
from ..catalog.models import AvailabilityType, Option, Price, PricingPer, Product
from .dates import format_slot_id, local_datetime
from .ledger import CapacityLedger, SlotKey
from .models import Availability, RequestedUnit, UnitPricing

UTC = ZoneInfo("UTC")

CUTOFF_UNITS = {"minute": "minutes", "hour": "hours", "day": "days"}


def _cutoff_delta(option: Option) -> timedelta:
    unit = CUTOFF_UNITS.get(option.cancellation_cutoff_unit)
    if unit is None:
        raise ValueError(f"Unknown cancellation cutoff unit {option.cancellation_cutoff_unit!r}")
    return timedelta(**{unit: option.cancellation_cutoff_amount})


class AvailabilityGenerator:

    def __init__(self, ledger: CapacityLedger, horizon_days: int = 90):
        if horizon_days < 1:
            raise ValueError(f"horizon_days must be positive, got {horizon_days}")
        self.ledger = ledger
        self.horizon_days = horizon_days

    def window(self, reference_date: date, days: int | None = None) -> list[date]:
        """Calendar days covered by a generation starting at reference_date."""
        days = days or self.horizon_days
        return [reference_date + timedelta(days=offset) for offset in range(days)]

    def generate(
        self,
        product: Product,
        option_id: str,
        capabilities: Iterable[Capability],
        reference_date: date,
        units: list[RequestedUnit] | None = None,
        days: int | None = None,
    ) -> list[Availability]:
        """
        Slots for `days` days starting at `reference_date`, in chronological order.

        Raises:
            OptionNotFoundError: option_id is not an option of product.
            InvalidUnitIdError: a requested unit is not a unit of the option.
        """
        option = product.get_option(option_id)
        if option is None:
            raise OptionNotFoundError(option_id)

        unit_pricing: tuple[UnitPricing, ...] = ()
        pricing = None
        if Capability.PRICING in set(capabilities) or units:
            unit_pricing, pricing = self._pricing(product, option, units or [])

        config = product.availability_config
        total_capacity = product.option_capacity(option)

        slots = []
        for day in self.window(reference_date, days):
            if day.weekday() not in config.days_of_week:
                continue
            if day.isoformat() in config.closed_dates:
                continue

            for start in self._start_times(product):
                slot_id = format_slot_id(day, start, product.time_zone)
                key = SlotKey(product.id, option.id, slot_id)
                slots.append(self._slot(
                    product=product,
                    option=option,
                    day=day,
                    slot_id=slot_id,
                    start=start,
                    capacity=self.ledger.remaining(key, total_capacity),
                    total_capacity=total_capacity,
                    unit_pricing=unit_pricing,
                    pricing=pricing,
                ))

        return slots

    # ── Helpers ──────────────────────────────────────────────────────────

    def _start_times(self, product: Product) -> list[str | None]:
        if product.availability_type == AvailabilityType.START_TIME:
            return sorted(product.availability_config.start_times)
        return [None]

    def _slot(
        self,
        product: Product,
        option: Option,
        day: date,
        slot_id: str,
        start: str | None,
        capacity: int,
        total_capacity: int,
        unit_pricing: tuple[UnitPricing, ...],
        pricing: Price | None,
    ) -> Availability:
        config = product.availability_config
        tz = product.time_zone

        if start is not None:
            starts_at = local_datetime(day, start, tz)
            ends_at = starts_at + timedelta(minutes=config.duration_minutes)
            opening_hours: tuple[tuple[str, str], ...] = ()
        else:
            opening_hours = config.opening_hours
            starts_at = local_datetime(day, opening_hours[0][0], tz)
            ends_at = local_datetime(day, opening_hours[-1][1], tz)

        cutoff = starts_at - _cutoff_delta(option)

        return Availability(
            id=slot_id,
            product_id=product.id,
            option_id=option.id,
            local_date_time_start=starts_at.isoformat(),
            local_date_time_end=ends_at.isoformat(),
            all_day=start is None,
            capacity=max(capacity, 0),
            total_capacity=total_capacity,
            max_units=option.restrictions.max_units,
            utc_cutoff_at=cutoff.astimezone(UTC).strftime("%Y-%m-%dT%H:%M:%SZ"),
            opening_hours=opening_hours,
            unit_pricing=unit_pricing,
            pricing=pricing,
        )

    def _pricing(
        self,
        product: Product,
        option: Option,
        units: list[RequestedUnit],
    ) -> tuple[tuple[UnitPricing, ...], Price | None]:
        currency = product.pricing.default_currency

        requested = []
        for unit in units:
            option_unit = option.get_unit(unit.id)
            if option_unit is None:
                raise InvalidUnitIdError(unit.id)
            requested.append((option_unit, unit.quantity))

        if product.pricing.pricing_per == PricingPer.BOOKING:
            return (), option.booking_price or Price.zero(currency)

        unit_pricing = tuple(UnitPricing(unit_id=unit.id, price=unit.price) for unit in option.units)
        if not requested:
            return unit_pricing, None

        total = Price.zero(currency)
        for option_unit, quantity in requested:
            total = total + option_unit.price * quantity
        return unit_pricing, total
