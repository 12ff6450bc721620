# backend/octo_mock/services/bookings/__init__.py
"""
Booking ledger.

create_booking re-resolves the slot, holds its capacity in the capacity
ledger, then stores the booking row. cancel_booking is a status
transition that gives the capacity back; bookings are never deleted.
"""

import logging
import secrets
import string
import uuid as uuid_lib
from collections.abc import Callable, Iterable
from dataclasses import replace
from datetime import datetime

from ...errors import (
    BadRequestError,
    BookingNotFoundError,
    CapacityExceededError,
    InternalServerError,
    InvalidUnitIdError,
    OptionNotFoundError,
)
from ..availability import AvailabilityService, CapacityLedger, SlotKey
from ..availability.service import utc_now
from ..capabilities import Capability
from ..catalog import ProductCatalog
from ..catalog.models import Option, Price, PricingPer, Product
from .models import (
    Booking,
    BookingStatus,
    Contact,
    CreateBookingRequest,
    UnitItem,
    UnitItemRequest,
)
from .store import BookingStore, SupplierReferenceTakenError

logger = logging.getLogger(__name__)

SUPPLIER_REFERENCE_ALPHABET = string.ascii_uppercase + string.digits
SUPPLIER_REFERENCE_LENGTH = 6
SUPPLIER_REFERENCE_ATTEMPTS = 5


def generate_supplier_reference() -> str:
    return "".join(
        secrets.choice(SUPPLIER_REFERENCE_ALPHABET)
        for _ in range(SUPPLIER_REFERENCE_LENGTH)
    )


def _format_utc(moment: datetime) -> str:
    return moment.strftime("%Y-%m-%dT%H:%M:%SZ")


def _with_supplier_reference(booking: Booking, supplier_reference: str) -> Booking:
    """Unit item references are derived from the booking reference."""
    return replace(
        booking,
        supplier_reference=supplier_reference,
        unit_items=tuple(
            replace(item, supplier_reference=f"{supplier_reference}-{index}")
            for index, item in enumerate(booking.unit_items, start=1)
        ),
    )


class BookingService:

    def __init__(
        self,
        catalog: ProductCatalog,
        availability_service: AvailabilityService,
        ledger: CapacityLedger,
        store: BookingStore,
        now: Callable[[], datetime] = utc_now,
    ):
        self.catalog = catalog
        self.availability_service = availability_service
        self.ledger = ledger
        self.store = store
        self.now = now

    def create_booking(
        self,
        request: CreateBookingRequest,
        capabilities: Iterable[Capability],
    ) -> Booking:
        """
        Reserve capacity on a slot and record the booking.

        Raises:
            ProductNotFoundError, OptionNotFoundError, InvalidUnitIdError
            InvalidAvailabilityIdError: malformed or unknown availability id.
            BadRequestError: slot not available, unit restrictions violated,
                or the caller-supplied uuid is taken.
            CapacityExceededError: fewer vacancies than unit items.
        """
        product = self.catalog.get_product(request.product_id)
        option = product.get_option(request.option_id)
        if option is None:
            raise OptionNotFoundError(request.option_id)

        quantity = len(request.unit_items)
        self._validate_units(option, request.unit_items)

        if request.uuid is not None and self.store.exists(request.uuid):
            raise BadRequestError("booking uuid already exists", uuid=request.uuid)

        availability = self.availability_service.find_booking_availability(
            product,
            option.id,
            request.availability_id,
            capabilities,
        )
        if quantity > availability.capacity:
            raise CapacityExceededError(availability.id, quantity, availability.capacity)

        key = SlotKey(product.id, option.id, availability.id)
        self.ledger.reserve(key, quantity, product.option_capacity(option))

        now = _format_utc(self.now())
        supplier_reference = generate_supplier_reference()
        booking = Booking(
            uuid=request.uuid or str(uuid_lib.uuid4()),
            test_mode=False,
            reseller_reference=request.reseller_reference,
            supplier_reference=supplier_reference,
            status=BookingStatus.CONFIRMED,
            product_id=product.id,
            option_id=option.id,
            availability_id=availability.id,
            local_date_time_start=availability.local_date_time_start,
            local_date_time_end=availability.local_date_time_end,
            all_day=availability.all_day,
            units_booked=quantity,
            unit_items=tuple(
                UnitItem(
                    uuid=str(uuid_lib.uuid4()),
                    unit_id=item.unit_id,
                    supplier_reference=f"{supplier_reference}-{index}",
                    status=BookingStatus.CONFIRMED,
                    reseller_reference=item.reseller_reference,
                    contact=item.contact,
                )
                for index, item in enumerate(request.unit_items, start=1)
            ),
            contact=request.contact,
            notes=request.notes,
            pricing=self._booking_price(product, option, request.unit_items),
            delivery_methods=tuple(method.value for method in product.delivery_methods),
            utc_created_at=now,
            utc_updated_at=now,
            utc_confirmed_at=now,
        )

        try:
            return self._store_booking(booking)
        except Exception:
            self.ledger.release(key, quantity)
            raise

    def get_booking(self, uuid: str) -> Booking:
        """
        Raises:
            BookingNotFoundError: no booking with this uuid.
        """
        booking = self.store.get(uuid)
        if booking is None:
            raise BookingNotFoundError(uuid)
        return booking

    def get_bookings(
        self,
        reseller_reference: str | None = None,
        supplier_reference: str | None = None,
    ) -> list[Booking]:
        """Bookings matching every given reference; all bookings when none is given."""
        return self.store.list(
            reseller_reference=reseller_reference,
            supplier_reference=supplier_reference,
        )

    def cancel_booking(self, uuid: str, reason: str | None = None) -> Booking:
        """
        Mark a booking cancelled and give its units back to the slot.

        Raises:
            BookingNotFoundError: no booking with this uuid.
            BadRequestError: the booking is already cancelled.
        """
        booking = self.get_booking(uuid)
        if not booking.cancellable:
            raise BadRequestError("booking cannot be cancelled", uuid=uuid)

        now = _format_utc(self.now())
        cancelled = replace(
            booking,
            status=BookingStatus.CANCELLED,
            unit_items=tuple(
                replace(item, status=BookingStatus.CANCELLED) for item in booking.unit_items
            ),
            utc_updated_at=now,
            utc_cancelled_at=now,
            cancel_reason=reason,
        )
        # a concurrent cancel may have won since the read above
        if not self.store.cancel(cancelled):
            raise BadRequestError("booking cannot be cancelled", uuid=uuid)
        self.ledger.release(
            SlotKey(booking.product_id, booking.option_id, booking.availability_id),
            booking.units_booked,
        )
        return cancelled

    # ── Helpers ──────────────────────────────────────────────────────────

    def _store_booking(self, booking: Booking) -> Booking:
        for _ in range(SUPPLIER_REFERENCE_ATTEMPTS):
            try:
                return self.store.add(booking)
            except SupplierReferenceTakenError as exc:
                logger.warning(f"Supplier reference {exc.supplier_reference} taken, regenerating")
                booking = _with_supplier_reference(booking, generate_supplier_reference())
        raise InternalServerError("could not allocate a unique supplier reference")

    def _validate_units(self, option: Option, unit_items: tuple[UnitItemRequest, ...]) -> None:
        for item in unit_items:
            if option.get_unit(item.unit_id) is None:
                raise InvalidUnitIdError(item.unit_id)

        quantity = len(unit_items)
        restrictions = option.restrictions
        if quantity < max(restrictions.min_units, 1):
            raise BadRequestError(
                f"at least {max(restrictions.min_units, 1)} unit items are required",
                optionId=option.id,
            )
        if restrictions.max_units is not None and quantity > restrictions.max_units:
            raise BadRequestError(
                f"at most {restrictions.max_units} unit items are allowed",
                optionId=option.id,
            )

    def _booking_price(
        self,
        product: Product,
        option: Option,
        unit_items: tuple[UnitItemRequest, ...],
    ) -> Price:
        currency = product.pricing.default_currency
        if product.pricing.pricing_per == PricingPer.BOOKING:
            return option.booking_price or Price.zero(currency)

        total = Price.zero(currency)
        for item in unit_items:
            total = total + option.get_unit(item.unit_id).price
        return total


__all__ = [
    "Booking",
    "BookingService",
    "BookingStatus",
    "BookingStore",
    "Contact",
    "CreateBookingRequest",
    "UnitItemRequest",
    "generate_supplier_reference",
]
