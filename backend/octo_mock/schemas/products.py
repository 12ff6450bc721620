# backend/octo_mock/schemas/products.py
"""
Pydantic schemas for the products API.

Capability blocks are optional fields left unset unless the capability
was requested; routers answer with `response_model_exclude_unset=True`
so unset blocks are omitted. Fields outside a block have no default and
are always sent, None included.
  octo/content  product and option descriptions
  octo/pricing  prices
  octo/pickups  pickup settings
"""

from collections.abc import Iterable
from typing import Optional

from pydantic import BaseModel, ConfigDict
from pydantic.alias_generators import to_camel

from ..services.capabilities import Capability
from ..services.catalog.models import CURRENCY_PRECISION, Option, Price, Product, Unit


class PriceRead(BaseModel):
    original: int
    retail: int
    net: int
    currency: str
    currency_precision: int
    included_taxes: list[dict]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_price(cls, price: Price) -> "PriceRead":
        return cls(
            original=price.original,
            retail=price.retail,
            net=price.net,
            currency=price.currency.value,
            currency_precision=CURRENCY_PRECISION,
            included_taxes=[],
        )


class UnitRestrictionsRead(BaseModel):
    min_age: int
    max_age: int
    id_required: bool
    min_quantity: Optional[int]
    max_quantity: Optional[int]
    pax_count: int
    accompanied_by: list[str]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class UnitRead(BaseModel):
    id: str
    internal_name: str
    reference: Optional[str]
    type: str
    required_contact_fields: list[str]
    restrictions: UnitRestrictionsRead

    # octo/pricing
    pricing_from: Optional[list[PriceRead]] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_unit(cls, unit: Unit, capabilities: set[Capability]) -> "UnitRead":
        restrictions = unit.restrictions
        read = cls(
            id=unit.id,
            internal_name=unit.internal_name,
            reference=unit.reference,
            type=unit.type.value,
            required_contact_fields=list(unit.required_contact_fields),
            restrictions=UnitRestrictionsRead(
                min_age=restrictions.min_age,
                max_age=restrictions.max_age,
                id_required=restrictions.id_required,
                min_quantity=restrictions.min_quantity,
                max_quantity=restrictions.max_quantity,
                pax_count=restrictions.pax_count,
                accompanied_by=list(restrictions.accompanied_by),
            ),
        )
        if Capability.PRICING in capabilities:
            read.pricing_from = [PriceRead.from_price(unit.price)]
        return read


class OptionRestrictionsRead(BaseModel):
    min_units: int
    max_units: Optional[int]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class OptionRead(BaseModel):
    id: str
    default: bool
    internal_name: str
    reference: Optional[str]
    availability_local_start_times: list[str]
    cancellation_cutoff: str
    cancellation_cutoff_amount: int
    cancellation_cutoff_unit: str
    required_contact_fields: list[str]
    restrictions: OptionRestrictionsRead
    units: list[UnitRead]

    # octo/content
    title: Optional[str] = None
    # octo/pricing, per-booking products only
    pricing_from: Optional[list[PriceRead]] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_option(cls, option: Option, capabilities: set[Capability]) -> "OptionRead":
        read = cls(
            id=option.id,
            default=option.default,
            internal_name=option.internal_name,
            reference=option.reference,
            availability_local_start_times=list(option.availability_local_start_times),
            cancellation_cutoff=option.cancellation_cutoff,
            cancellation_cutoff_amount=option.cancellation_cutoff_amount,
            cancellation_cutoff_unit=option.cancellation_cutoff_unit,
            required_contact_fields=list(option.required_contact_fields),
            restrictions=OptionRestrictionsRead(
                min_units=option.restrictions.min_units,
                max_units=option.restrictions.max_units,
            ),
            units=[UnitRead.from_unit(unit, capabilities) for unit in option.units],
        )
        if Capability.CONTENT in capabilities:
            read.title = option.internal_name
        if Capability.PRICING in capabilities and option.booking_price is not None:
            read.pricing_from = [PriceRead.from_price(option.booking_price)]
        return read


class ProductRead(BaseModel):
    id: str
    internal_name: str
    reference: Optional[str]
    locale: str
    time_zone: str
    allow_freesale: bool
    instant_confirmation: bool
    instant_delivery: bool
    availability_required: bool
    availability_type: str
    delivery_formats: list[str]
    delivery_methods: list[str]
    redemption_method: str
    options: list[OptionRead]

    # octo/content
    title: Optional[str] = None
    country: Optional[str] = None
    location: Optional[str] = None
    subtitle: Optional[str] = None
    short_description: Optional[str] = None
    description: Optional[str] = None
    highlights: Optional[list[str]] = None
    inclusions: Optional[list[str]] = None
    exclusions: Optional[list[str]] = None
    booking_terms: Optional[str] = None
    redemption_instructions: Optional[str] = None
    cancellation_policy: Optional[str] = None
    cover_image_url: Optional[str] = None

    # octo/pricing
    default_currency: Optional[str] = None
    available_currencies: Optional[list[str]] = None
    pricing_per: Optional[str] = None

    # octo/pickups
    pickup_required: Optional[bool] = None
    pickup_available: Optional[bool] = None
    pickup_points: Optional[list[str]] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_product(cls, product: Product, capabilities: Iterable[Capability]) -> "ProductRead":
        capabilities = set(capabilities)
        read = cls(
            id=product.id,
            internal_name=product.internal_name,
            reference=product.reference,
            locale=product.locale,
            time_zone=product.time_zone,
            allow_freesale=product.allow_freesale,
            instant_confirmation=product.instant_confirmation,
            instant_delivery=product.instant_delivery,
            availability_required=product.availability_required,
            availability_type=product.availability_type.value,
            delivery_formats=[fmt.value for fmt in product.delivery_formats],
            delivery_methods=[method.value for method in product.delivery_methods],
            redemption_method=product.redemption_method.value,
            options=[OptionRead.from_option(option, capabilities) for option in product.options],
        )

        if Capability.CONTENT in capabilities:
            content = product.content
            read.title = content.title
            read.country = content.country
            read.location = content.location
            read.subtitle = content.subtitle
            read.short_description = content.short_description
            read.description = content.description
            read.highlights = list(content.highlights)
            read.inclusions = list(content.inclusions)
            read.exclusions = list(content.exclusions)
            read.booking_terms = content.booking_terms
            read.redemption_instructions = content.redemption_instructions
            read.cancellation_policy = content.cancellation_policy
            read.cover_image_url = content.cover_image_url

        if Capability.PRICING in capabilities:
            read.default_currency = product.pricing.default_currency.value
            read.available_currencies = [c.value for c in product.pricing.available_currencies]
            read.pricing_per = product.pricing.pricing_per.value

        if Capability.PICKUPS in capabilities:
            read.pickup_required = product.pickup.pickup_required
            read.pickup_available = product.pickup.pickup_available
            read.pickup_points = list(product.pickup.pickup_points)

        return read
