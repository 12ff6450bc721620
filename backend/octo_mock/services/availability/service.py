# backend/octo_mock/services/availability/service.py
"""
Availability service.

Loads the product, asks the generator for slots and narrows them down:
- get_availability: one of three selectors (date, date range, id list)
- find_booking_availability: exactly one slot, for booking creation
"""

from collections.abc import Callable, Iterable
from datetime import date, datetime, timezone

from ...errors import BadRequestError, InternalServerError, InvalidAvailabilityIdError
from ..capabilities import Capability
from ..catalog import ProductCatalog
from ..catalog.models import Product
from .dates import (
    availability_id_date,
    enumerate_days,
    format_availability_key,
    parse_availability_id,
    parse_local_date,
)
from .generator import AvailabilityGenerator
from .models import Availability, AvailabilityQuery


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


class AvailabilityService:

    def __init__(
        self,
        catalog: ProductCatalog,
        generator: AvailabilityGenerator,
        now: Callable[[], datetime] = utc_now,
    ):
        self.catalog = catalog
        self.generator = generator
        self.now = now

    def today(self, product: Product) -> date:
        """Current calendar day in the product timezone."""
        return date.fromisoformat(format_availability_key(self.now(), product.time_zone))

    def get_availability(
        self,
        query: AvailabilityQuery,
        capabilities: Iterable[Capability],
    ) -> list[Availability]:
        """
        Slots of the queried option, anchored at today.

        Raises:
            ProductNotFoundError, OptionNotFoundError, InvalidUnitIdError
            InvalidRangeError: local_date_start is after local_date_end.
            BadRequestError: a date selector is not "YYYY-MM-DD".
        """
        product = self.catalog.get_product(query.product_id)
        reference_date = self.today(product)

        availabilities = self._generate(
            product,
            query.option_id,
            capabilities,
            reference_date,
            units=list(query.units),
        )

        if query.local_date:
            return self._single_date(query.local_date, availabilities)
        if query.local_date_start and query.local_date_end:
            return self._interval(query.local_date_start, query.local_date_end, availabilities)
        if query.availability_ids is not None:
            return self._by_ids(query.availability_ids, availabilities)
        return []

    def find_booking_availability(
        self,
        product: Product,
        option_id: str,
        availability_id: str,
        capabilities: Iterable[Capability],
    ) -> Availability:
        """
        The slot with exactly this id, provided it can still be booked.

        Raises:
            InvalidAvailabilityIdError: malformed id, or no such slot.
            BadRequestError: the slot exists but has no capacity left.
        """
        # fast reject before any generation work
        parse_availability_id(availability_id, product.availability_type)

        day = date.fromisoformat(availability_id_date(availability_id))
        availabilities = self._generate(product, option_id, capabilities, day, days=1)

        availability = next((a for a in availabilities if a.id == availability_id), None)
        if availability is None:
            raise InvalidAvailabilityIdError(availability_id)
        if not availability.available:
            raise BadRequestError("not available", availabilityId=availability_id)
        return availability

    # ── Helpers ──────────────────────────────────────────────────────────

    def _generate(
        self,
        product: Product,
        option_id: str,
        capabilities: Iterable[Capability],
        reference_date: date,
        units=None,
        days: int | None = None,
    ) -> list[Availability]:
        availabilities = self.generator.generate(
            product,
            option_id,
            capabilities,
            reference_date,
            units=units,
            days=days,
        )

        window = {d.isoformat() for d in self.generator.window(reference_date, days)}
        for availability in availabilities:
            if availability.local_date not in window:
                raise InternalServerError(
                    f"generated availability {availability.id} outside of requested window"
                )
        return availabilities

    def _single_date(self, local_date: str, availabilities: list[Availability]) -> list[Availability]:
        _parse_date(local_date, "localDate")
        return [a for a in availabilities if a.local_date == local_date]

    def _interval(
        self,
        start: str,
        end: str,
        availabilities: list[Availability],
    ) -> list[Availability]:
        days = enumerate_days(
            _parse_date(start, "localDateStart"),
            _parse_date(end, "localDateEnd"),
        )
        interval = {day.isoformat() for day in days}
        return [a for a in availabilities if a.local_date in interval]

    def _by_ids(self, availability_ids: Iterable[str], availabilities: list[Availability]) -> list[Availability]:
        ids = set(availability_ids)
        return [a for a in availabilities if a.id in ids]


def _parse_date(value: str, field: str) -> date:
    try:
        return parse_local_date(value)
    except ValueError:
        raise BadRequestError(f"{field} must be in YYYY-MM-DD format", **{field: value}) from None
