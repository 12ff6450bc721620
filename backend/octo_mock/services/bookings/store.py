# backend/octo_mock/services/bookings/store.py
"""
Booking rows in the SQL database.

Session use is serialised: the default database is a single in-memory
SQLite connection shared by every request thread.
"""

import json
import logging
import threading
from dataclasses import asdict

from sqlalchemy import func, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import sessionmaker

from ...errors import BadRequestError
from ...models import Bookings as DBBooking
from ..catalog.models import Currency, Price
from .models import Booking, BookingStatus, Contact, UnitItem

logger = logging.getLogger(__name__)


class SupplierReferenceTakenError(Exception):
    """Another booking already holds this supplier reference."""

    def __init__(self, supplier_reference: str):
        super().__init__(supplier_reference)
        self.supplier_reference = supplier_reference


class BookingStore:

    def __init__(self, session_factory: sessionmaker):
        self.session_factory = session_factory
        self._lock = threading.Lock()

    def exists(self, uuid: str) -> bool:
        with self._lock, self.session_factory() as db:
            return db.get(DBBooking, uuid) is not None

    def add(self, booking: Booking) -> Booking:
        """
        Insert a new booking.

        Raises:
            BadRequestError: uuid already taken.
            SupplierReferenceTakenError: supplier reference already taken.
        """
        with self._lock, self.session_factory() as db:
            seq = (db.scalar(select(func.max(DBBooking.seq))) or 0) + 1
            db.add(_to_row(booking, seq))
            try:
                db.commit()
            except IntegrityError:
                db.rollback()
                if db.get(DBBooking, booking.uuid) is not None:
                    raise BadRequestError("booking uuid already exists", uuid=booking.uuid) from None
                raise SupplierReferenceTakenError(booking.supplier_reference) from None
            logger.info(f"Booking stored: {booking.uuid} ({booking.supplier_reference})")
            return booking

    def cancel(self, cancelled: Booking) -> bool:
        """
        Store a cancelled booking, provided its row is still CONFIRMED.

        Check and write are one UPDATE, so of two concurrent cancels of the
        same booking exactly one returns True.
        """
        with self._lock, self.session_factory() as db:
            result = db.execute(
                update(DBBooking)
                .where(
                    DBBooking.uuid == cancelled.uuid,
                    DBBooking.status == BookingStatus.CONFIRMED.value,
                )
                .values(
                    status=cancelled.status.value,
                    unit_items=_dump_unit_items(cancelled.unit_items),
                    utc_updated_at=cancelled.utc_updated_at,
                    utc_cancelled_at=cancelled.utc_cancelled_at,
                    cancel_reason=cancelled.cancel_reason,
                )
            )
            db.commit()
            return result.rowcount == 1

    def get(self, uuid: str) -> Booking | None:
        with self._lock, self.session_factory() as db:
            row = db.get(DBBooking, uuid)
            return _from_row(row) if row is not None else None

    def list(
        self,
        reseller_reference: str | None = None,
        supplier_reference: str | None = None,
    ) -> list[Booking]:
        with self._lock, self.session_factory() as db:
            query = select(DBBooking).order_by(DBBooking.seq)
            if reseller_reference is not None:
                query = query.where(DBBooking.reseller_reference == reseller_reference)
            if supplier_reference is not None:
                query = query.where(DBBooking.supplier_reference == supplier_reference)
            return [_from_row(row) for row in db.scalars(query).all()]


# ── Row mapping ──────────────────────────────────────────────────────────


def _to_row(booking: Booking, seq: int) -> DBBooking:
    return DBBooking(
        uuid=booking.uuid,
        seq=seq,
        test_mode=booking.test_mode,
        reseller_reference=booking.reseller_reference,
        supplier_reference=booking.supplier_reference,
        status=booking.status.value,
        product_id=booking.product_id,
        option_id=booking.option_id,
        availability_id=booking.availability_id,
        local_date_time_start=booking.local_date_time_start,
        local_date_time_end=booking.local_date_time_end,
        all_day=booking.all_day,
        units_booked=booking.units_booked,
        unit_items=_dump_unit_items(booking.unit_items),
        contact=json.dumps(_contact_dict(booking.contact)),
        notes=booking.notes,
        pricing=json.dumps(asdict(booking.pricing)) if booking.pricing else None,
        delivery_methods=json.dumps(list(booking.delivery_methods)),
        utc_created_at=booking.utc_created_at,
        utc_updated_at=booking.utc_updated_at,
        utc_confirmed_at=booking.utc_confirmed_at,
        utc_cancelled_at=booking.utc_cancelled_at,
        cancel_reason=booking.cancel_reason,
    )


def _from_row(row: DBBooking) -> Booking:
    pricing = None
    if row.pricing:
        data = json.loads(row.pricing)
        pricing = Price(
            original=data["original"],
            retail=data["retail"],
            net=data["net"],
            currency=Currency(data["currency"]),
        )

    return Booking(
        uuid=row.uuid,
        test_mode=bool(row.test_mode),
        reseller_reference=row.reseller_reference,
        supplier_reference=row.supplier_reference,
        status=BookingStatus(row.status),
        product_id=row.product_id,
        option_id=row.option_id,
        availability_id=row.availability_id,
        local_date_time_start=row.local_date_time_start,
        local_date_time_end=row.local_date_time_end,
        all_day=bool(row.all_day),
        units_booked=row.units_booked,
        unit_items=tuple(_load_unit_item(item) for item in json.loads(row.unit_items)),
        contact=_load_contact(json.loads(row.contact) if row.contact else {}),
        notes=row.notes,
        pricing=pricing,
        delivery_methods=tuple(json.loads(row.delivery_methods)),
        utc_created_at=row.utc_created_at,
        utc_updated_at=row.utc_updated_at,
        utc_confirmed_at=row.utc_confirmed_at,
        utc_cancelled_at=row.utc_cancelled_at,
        cancel_reason=row.cancel_reason,
    )


def _contact_dict(contact: Contact) -> dict:
    data = asdict(contact)
    data["locales"] = list(contact.locales)
    return data


def _load_contact(data: dict) -> Contact:
    return Contact(**{**data, "locales": tuple(data.get("locales", ()))})


def _dump_unit_items(unit_items: tuple[UnitItem, ...]) -> str:
    return json.dumps([
        {
            "uuid": item.uuid,
            "unit_id": item.unit_id,
            "supplier_reference": item.supplier_reference,
            "status": item.status.value,
            "reseller_reference": item.reseller_reference,
            "contact": _contact_dict(item.contact),
        }
        for item in unit_items
    ])


def _load_unit_item(data: dict) -> UnitItem:
    return UnitItem(
        uuid=data["uuid"],
        unit_id=data["unit_id"],
        supplier_reference=data["supplier_reference"],
        status=BookingStatus(data["status"]),
        reseller_reference=data.get("reseller_reference"),
        contact=_load_contact(data.get("contact") or {}),
    )
