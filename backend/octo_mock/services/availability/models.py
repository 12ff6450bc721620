# backend/octo_mock/services/availability/models.py

from dataclasses import dataclass
from enum import Enum

from ..catalog.models import Price


class AvailabilityStatus(str, Enum):
    AVAILABLE = "AVAILABLE"
    LIMITED = "LIMITED"
    SOLD_OUT = "SOLD_OUT"


@dataclass(frozen=True)
class UnitPricing:
    unit_id: str
    price: Price


@dataclass(frozen=True)
class RequestedUnit:
    id: str
    quantity: int


@dataclass(frozen=True)
class AvailabilityQuery:
    """Which slots of a product option to return.

    Exactly one selector is applied, in this order: local_date,
    local_date_start/local_date_end, availability_ids.
    """

    product_id: str
    option_id: str
    local_date: str | None = None
    local_date_start: str | None = None
    local_date_end: str | None = None
    availability_ids: tuple[str, ...] | None = None
    units: tuple[RequestedUnit, ...] = ()


@dataclass(frozen=True)
class Availability:
    """
    A bookable slot, derived from Product + capacity ledger on every read.

    `capacity` is what is left to book; `total_capacity` what the slot
    started with.
    """

    id: str
    product_id: str
    option_id: str
    local_date_time_start: str
    local_date_time_end: str
    all_day: bool
    capacity: int
    total_capacity: int
    max_units: int | None
    utc_cutoff_at: str
    opening_hours: tuple[tuple[str, str], ...] = ()
    unit_pricing: tuple[UnitPricing, ...] = ()
    pricing: Price | None = None

    @property
    def available(self) -> bool:
        return self.capacity > 0

    @property
    def vacancies(self) -> int:
        return self.capacity

    @property
    def local_date(self) -> str:
        return self.id.split("T")[0]

    @property
    def status(self) -> AvailabilityStatus:
        if self.capacity <= 0:
            return AvailabilityStatus.SOLD_OUT
        if self.capacity < self.total_capacity / 2:
            return AvailabilityStatus.LIMITED
        return AvailabilityStatus.AVAILABLE
