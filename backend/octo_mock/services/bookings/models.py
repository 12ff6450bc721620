# backend/octo_mock/services/bookings/models.py

from dataclasses import dataclass, field
from enum import Enum

from ..catalog.models import Price


class BookingStatus(str, Enum):
    CONFIRMED = "CONFIRMED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True)
class Contact:
    full_name: str | None = None
    first_name: str | None = None
    last_name: str | None = None
    email_address: str | None = None
    phone_number: str | None = None
    locales: tuple[str, ...] = ()
    postal_code: str | None = None
    country: str | None = None
    notes: str | None = None


@dataclass(frozen=True)
class UnitItemRequest:
    unit_id: str
    reseller_reference: str | None = None
    contact: Contact = field(default_factory=Contact)


@dataclass(frozen=True)
class CreateBookingRequest:
    product_id: str
    option_id: str
    availability_id: str
    unit_items: tuple[UnitItemRequest, ...]
    uuid: str | None = None
    reseller_reference: str | None = None
    contact: Contact = field(default_factory=Contact)
    notes: str | None = None


@dataclass(frozen=True)
class UnitItem:
    uuid: str
    unit_id: str
    supplier_reference: str
    status: BookingStatus
    reseller_reference: str | None = None
    contact: Contact = field(default_factory=Contact)


@dataclass(frozen=True)
class Booking:
    uuid: str
    supplier_reference: str
    status: BookingStatus
    product_id: str
    option_id: str
    availability_id: str
    local_date_time_start: str
    local_date_time_end: str
    all_day: bool
    units_booked: int
    unit_items: tuple[UnitItem, ...]
    delivery_methods: tuple[str, ...]
    utc_created_at: str
    utc_updated_at: str
    utc_confirmed_at: str | None = None
    test_mode: bool = False
    reseller_reference: str | None = None
    contact: Contact = field(default_factory=Contact)
    notes: str | None = None
    pricing: Price | None = None
    utc_cancelled_at: str | None = None
    cancel_reason: str | None = None

    @property
    def cancellable(self) -> bool:
        return self.status == BookingStatus.CONFIRMED

    @property
    def freesale(self) -> bool:
        return False
