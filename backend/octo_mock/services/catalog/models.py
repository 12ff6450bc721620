# backend/octo_mock/services/catalog/models.py
"""
Product aggregates.

Products are seeded at startup and never mutated afterwards, so every
aggregate here is a frozen dataclass.
"""

from dataclasses import dataclass, field
from enum import Enum


class AvailabilityType(str, Enum):
    START_TIME = "START_TIME"  # datetime slots
    OPENING_HOURS = "OPENING_HOURS"  # one slot per day


class PricingPer(str, Enum):
    UNIT = "UNIT"
    BOOKING = "BOOKING"


class Currency(str, Enum):
    GBP = "GBP"
    EUR = "EUR"
    USD = "USD"


class DeliveryFormat(str, Enum):
    PDF_URL = "PDF_URL"
    QRCODE = "QRCODE"


class DeliveryMethod(str, Enum):
    VOUCHER = "VOUCHER"
    TICKET = "TICKET"


class RedemptionMethod(str, Enum):
    DIGITAL = "DIGITAL"
    PRINT = "PRINT"
    MANIFEST = "MANIFEST"


class UnitType(str, Enum):
    ADULT = "ADULT"
    YOUTH = "YOUTH"
    CHILD = "CHILD"
    INFANT = "INFANT"
    FAMILY = "FAMILY"
    SENIOR = "SENIOR"
    STUDENT = "STUDENT"
    MILITARY = "MILITARY"
    OTHER = "OTHER"


CURRENCY_PRECISION = 2


@dataclass(frozen=True)
class Price:
    """Amounts in minor units (pence, cents)."""

    original: int
    retail: int
    net: int
    currency: Currency = Currency.GBP

    def __post_init__(self):
        if min(self.original, self.retail, self.net) < 0:
            raise ValueError("Price amounts cannot be negative")

    def __mul__(self, quantity: int) -> "Price":
        return Price(
            original=self.original * quantity,
            retail=self.retail * quantity,
            net=self.net * quantity,
            currency=self.currency,
        )

    def __add__(self, other: "Price") -> "Price":
        if other.currency != self.currency:
            raise ValueError(f"Cannot add {other.currency.value} to {self.currency.value}")
        return Price(
            original=self.original + other.original,
            retail=self.retail + other.retail,
            net=self.net + other.net,
            currency=self.currency,
        )

    @classmethod
    def zero(cls, currency: Currency) -> "Price":
        return cls(original=0, retail=0, net=0, currency=currency)


@dataclass(frozen=True)
class UnitRestrictions:
    min_age: int = 0
    max_age: int = 100
    id_required: bool = False
    min_quantity: int | None = None
    max_quantity: int | None = None
    pax_count: int = 1
    accompanied_by: tuple[str, ...] = ()


@dataclass(frozen=True)
class Unit:
    id: str
    type: UnitType
    price: Price
    internal_name: str = ""
    reference: str | None = None
    restrictions: UnitRestrictions = field(default_factory=UnitRestrictions)
    required_contact_fields: tuple[str, ...] = ()


@dataclass(frozen=True)
class OptionRestrictions:
    min_units: int = 0
    max_units: int | None = None


@dataclass(frozen=True)
class Option:
    id: str
    units: tuple[Unit, ...]
    default: bool = False
    internal_name: str = ""
    reference: str | None = None
    availability_local_start_times: tuple[str, ...] = ()
    cancellation_cutoff: str = "1 hour"
    cancellation_cutoff_amount: int = 1
    cancellation_cutoff_unit: str = "hour"
    required_contact_fields: tuple[str, ...] = ()
    restrictions: OptionRestrictions = field(default_factory=OptionRestrictions)
    # overrides AvailabilityConfig.capacity when set
    capacity: int | None = None
    # price of the whole booking, used when the product is priced per booking
    booking_price: Price | None = None

    def get_unit(self, unit_id: str) -> Unit | None:
        return next((unit for unit in self.units if unit.id == unit_id), None)


@dataclass(frozen=True)
class AvailabilityConfig:
    """Recurrence rules slots are generated from."""

    start_times: tuple[str, ...] = ("00:00",)  # local "HH:MM"
    opening_hours: tuple[tuple[str, str], ...] = (("09:00", "17:00"),)
    days_of_week: frozenset[int] = frozenset(range(7))  # 0 = Monday
    closed_dates: frozenset[str] = frozenset()  # "YYYY-MM-DD"
    capacity: int = 10
    duration_minutes: int = 60

    def __post_init__(self):
        if self.capacity < 0:
            raise ValueError("Capacity cannot be negative")
        if any(day not in range(7) for day in self.days_of_week):
            raise ValueError(f"days_of_week must be within 0..6, got {sorted(self.days_of_week)}")


@dataclass(frozen=True)
class ProductPricing:
    pricing_per: PricingPer
    default_currency: Currency
    available_currencies: tuple[Currency, ...] = ()

    def __post_init__(self):
        if not self.available_currencies:
            object.__setattr__(self, "available_currencies", (self.default_currency,))


@dataclass(frozen=True)
class ProductContent:
    title: str = ""
    country: str = "GB"
    location: str | None = None
    subtitle: str | None = None
    short_description: str | None = None
    description: str | None = None
    highlights: tuple[str, ...] = ()
    inclusions: tuple[str, ...] = ()
    exclusions: tuple[str, ...] = ()
    booking_terms: str | None = None
    redemption_instructions: str | None = None
    cancellation_policy: str | None = None
    cover_image_url: str | None = None


@dataclass(frozen=True)
class ProductPickup:
    pickup_required: bool = False
    pickup_available: bool = False
    pickup_points: tuple[str, ...] = ()


@dataclass(frozen=True)
class Product:
    id: str
    internal_name: str
    availability_type: AvailabilityType
    options: tuple[Option, ...]
    pricing: ProductPricing
    availability_config: AvailabilityConfig = field(default_factory=AvailabilityConfig)
    reference: str | None = None
    locale: str = "en"
    time_zone: str = "Europe/London"
    allow_freesale: bool = False
    instant_confirmation: bool = True
    instant_delivery: bool = True
    availability_required: bool = True
    delivery_formats: tuple[DeliveryFormat, ...] = (DeliveryFormat.PDF_URL, DeliveryFormat.QRCODE)
    delivery_methods: tuple[DeliveryMethod, ...] = (DeliveryMethod.VOUCHER, DeliveryMethod.TICKET)
    redemption_method: RedemptionMethod = RedemptionMethod.DIGITAL
    content: ProductContent = field(default_factory=ProductContent)
    pickup: ProductPickup = field(default_factory=ProductPickup)

    def __post_init__(self):
        ids = [option.id for option in self.options]
        if len(ids) != len(set(ids)):
            raise ValueError(f"Option ids must be unique within product {self.id}")

    def get_option(self, option_id: str) -> Option | None:
        return next((option for option in self.options if option.id == option_id), None)

    def option_capacity(self, option: Option) -> int:
        if option.capacity is not None:
            return option.capacity
        return self.availability_config.capacity
