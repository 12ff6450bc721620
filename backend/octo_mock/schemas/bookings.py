# backend/octo_mock/schemas/bookings.py

from collections.abc import Iterable
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..services.bookings import Booking, Contact, CreateBookingRequest, UnitItemRequest
from ..services.bookings.models import UnitItem
from ..services.capabilities import Capability
from .products import PriceRead


class ContactIn(BaseModel):
    full_name: Optional[str] = None
    first_name: Optional[str] = None
    last_name: Optional[str] = None
    email_address: Optional[str] = None
    phone_number: Optional[str] = None
    locales: list[str] = []
    postal_code: Optional[str] = None
    country: Optional[str] = None
    notes: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_contact(self) -> Contact:
        return Contact(
            full_name=self.full_name,
            first_name=self.first_name,
            last_name=self.last_name,
            email_address=self.email_address,
            phone_number=self.phone_number,
            locales=tuple(self.locales),
            postal_code=self.postal_code,
            country=self.country,
            notes=self.notes,
        )


class UnitItemIn(BaseModel):
    unit_id: str
    reseller_reference: Optional[str] = None
    contact: ContactIn = ContactIn()

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookingCreate(BaseModel):
    uuid: Optional[str] = None
    product_id: str
    option_id: str
    availability_id: str
    unit_items: list[UnitItemIn] = Field(min_length=1)
    reseller_reference: Optional[str] = None
    contact: ContactIn = ContactIn()
    notes: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_request(self) -> CreateBookingRequest:
        return CreateBookingRequest(
            uuid=self.uuid,
            product_id=self.product_id,
            option_id=self.option_id,
            availability_id=self.availability_id,
            unit_items=tuple(
                UnitItemRequest(
                    unit_id=item.unit_id,
                    reseller_reference=item.reseller_reference,
                    contact=item.contact.to_contact(),
                )
                for item in self.unit_items
            ),
            reseller_reference=self.reseller_reference,
            contact=self.contact.to_contact(),
            notes=self.notes,
        )


class BookingCancel(BaseModel):
    reason: Optional[str] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class ContactRead(BaseModel):
    full_name: Optional[str]
    first_name: Optional[str]
    last_name: Optional[str]
    email_address: Optional[str]
    phone_number: Optional[str]
    locales: list[str]
    postal_code: Optional[str]
    country: Optional[str]
    notes: Optional[str]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_contact(cls, contact: Contact) -> "ContactRead":
        return cls(
            full_name=contact.full_name,
            first_name=contact.first_name,
            last_name=contact.last_name,
            email_address=contact.email_address,
            phone_number=contact.phone_number,
            locales=list(contact.locales),
            postal_code=contact.postal_code,
            country=contact.country,
            notes=contact.notes,
        )


class UnitItemRead(BaseModel):
    uuid: str
    reseller_reference: Optional[str]
    supplier_reference: str
    unit_id: str
    status: str
    utc_redeemed_at: Optional[str]
    contact: ContactRead
    ticket: Optional[dict]

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_unit_item(cls, item: UnitItem) -> "UnitItemRead":
        return cls(
            uuid=item.uuid,
            reseller_reference=item.reseller_reference,
            supplier_reference=item.supplier_reference,
            unit_id=item.unit_id,
            status=item.status.value,
            utc_redeemed_at=None,
            contact=ContactRead.from_contact(item.contact),
            ticket=None,
        )


class CancellationRead(BaseModel):
    refund: str
    reason: Optional[str]
    utc_cancelled_at: str

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookingAvailabilityRead(BaseModel):
    id: str
    local_date_time_start: str
    local_date_time_end: str
    all_day: bool

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class BookingRead(BaseModel):
    id: str
    uuid: str
    test_mode: bool
    reseller_reference: Optional[str]
    supplier_reference: str
    status: str
    utc_created_at: str
    utc_updated_at: str
    utc_expires_at: Optional[str]
    utc_redeemed_at: Optional[str]
    utc_confirmed_at: Optional[str]
    product_id: str
    option_id: str
    cancellable: bool
    cancellation: Optional[CancellationRead]
    freesale: bool
    availability_id: str
    availability: BookingAvailabilityRead
    contact: ContactRead
    notes: Optional[str]
    delivery_methods: list[str]
    voucher: Optional[dict]
    unit_items: list[UnitItemRead]

    # octo/pricing
    pricing: Optional[PriceRead] = None

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    @classmethod
    def from_booking(cls, booking: Booking, capabilities: Iterable[Capability]) -> "BookingRead":
        cancellation = None
        if booking.utc_cancelled_at is not None:
            cancellation = CancellationRead(
                refund="FULL",
                reason=booking.cancel_reason,
                utc_cancelled_at=booking.utc_cancelled_at,
            )

        read = cls(
            id=booking.uuid,
            uuid=booking.uuid,
            test_mode=booking.test_mode,
            reseller_reference=booking.reseller_reference,
            supplier_reference=booking.supplier_reference,
            status=booking.status.value,
            utc_created_at=booking.utc_created_at,
            utc_updated_at=booking.utc_updated_at,
            utc_expires_at=None,
            utc_redeemed_at=None,
            utc_confirmed_at=booking.utc_confirmed_at,
            product_id=booking.product_id,
            option_id=booking.option_id,
            cancellable=booking.cancellable,
            cancellation=cancellation,
            freesale=booking.freesale,
            availability_id=booking.availability_id,
            availability=BookingAvailabilityRead(
                id=booking.availability_id,
                local_date_time_start=booking.local_date_time_start,
                local_date_time_end=booking.local_date_time_end,
                all_day=booking.all_day,
            ),
            contact=ContactRead.from_contact(booking.contact),
            notes=booking.notes,
            delivery_methods=list(booking.delivery_methods),
            voucher=None,
            unit_items=[UnitItemRead.from_unit_item(item) for item in booking.unit_items],
        )
        if Capability.PRICING in capabilities and booking.pricing is not None:
            read.pricing = PriceRead.from_price(booking.pricing)
        return read
