# backend/octo_mock/schemas/availability.py
"""
Pydantic schemas for the availability API.
"""

from collections.abc import Iterable
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator
from pydantic.alias_generators import to_camel

from ..services.availability import Availability, AvailabilityQuery, RequestedUnit
from ..services.capabilities import Capability
from .products import PriceRead


class AvailabilityUnit(BaseModel):
    """Units the caller intends to book, used for pricing."""
    id: str
    quantity: int = Field(ge=1)

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class AvailabilityRequest(BaseModel):
    """
    POST /availability body.

    One selector is required: localDate, localDateStart + localDateEnd,
    or availabilityIds.
    """
    product_id: str
    option_id: str
    local_date: str | None = None
    local_date_start: str | None = None
    local_date_end: str | None = None
    availability_ids: list[str] | None = None
    units: list[AvailabilityUnit] = []

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @model_validator(mode="after")
    def check_selector(self) -> "AvailabilityRequest":
        if (self.local_date_start is None) != (self.local_date_end is None):
            raise ValueError("localDateStart and localDateEnd must be given together")
        if not (self.local_date or self.local_date_start or self.availability_ids is not None):
            raise ValueError("localDate, localDateStart/localDateEnd or availabilityIds is required")
        return self

    def to_query(self) -> AvailabilityQuery:
        return AvailabilityQuery(
            product_id=self.product_id,
            option_id=self.option_id,
            local_date=self.local_date,
            local_date_start=self.local_date_start,
            local_date_end=self.local_date_end,
            availability_ids=tuple(self.availability_ids) if self.availability_ids is not None else None,
            units=tuple(RequestedUnit(id=unit.id, quantity=unit.quantity) for unit in self.units),
        )


class OpeningHoursRead(BaseModel):
    from_: str = Field(alias="from")
    to: str

    model_config = ConfigDict(populate_by_name=True)


class UnitPricingRead(PriceRead):
    unit_id: str


class AvailabilityRead(BaseModel):
    """One slot; pricing fields only with octo/pricing."""
    id: str
    local_date_time_start: str
    local_date_time_end: str
    all_day: bool
    available: bool
    status: str
    vacancies: int
    capacity: int
    max_units: Optional[int]
    utc_cutoff_at: str
    opening_hours: list[OpeningHoursRead]

    # octo/pricing
    unit_pricing: Optional[list[UnitPricingRead]] = None
    pricing: Optional[PriceRead] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_availability(
        cls,
        availability: Availability,
        capabilities: Iterable[Capability],
    ) -> "AvailabilityRead":
        read = cls(
            id=availability.id,
            local_date_time_start=availability.local_date_time_start,
            local_date_time_end=availability.local_date_time_end,
            all_day=availability.all_day,
            available=availability.available,
            status=availability.status.value,
            vacancies=availability.vacancies,
            capacity=availability.capacity,
            max_units=availability.max_units,
            utc_cutoff_at=availability.utc_cutoff_at,
            opening_hours=[
                OpeningHoursRead(from_=start, to=end) for start, end in availability.opening_hours
            ],
        )
        if Capability.PRICING in capabilities:
            if availability.unit_pricing:
                read.unit_pricing = [
                    UnitPricingRead(
                        unit_id=item.unit_id,
                        **PriceRead.from_price(item.price).model_dump(),
                    )
                    for item in availability.unit_pricing
                ]
            if availability.pricing is not None:
                read.pricing = PriceRead.from_price(availability.pricing)
        return read
