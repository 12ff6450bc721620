# backend/octo_mock/routers/bookings.py
# bookings are never deleted: cancellation is POST /bookings/{uuid}/cancel,
# PATCH and DELETE are answered with 405 by the router

import logging
from typing import Optional

from fastapi import APIRouter, Depends, status

from ..dependencies import get_booking_service, get_capabilities
from ..schemas.bookings import BookingCancel, BookingCreate, BookingRead
from ..services.bookings import BookingService
from ..services.capabilities import Capability

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/bookings", tags=["bookings"])


@router.post(
    "",
    response_model=BookingRead,
    response_model_exclude_unset=True,
    status_code=status.HTTP_200_OK,
)
def create_booking(
    data: BookingCreate,
    service: BookingService = Depends(get_booking_service),
    capabilities: list[Capability] = Depends(get_capabilities),
):
    booking = service.create_booking(data.to_request(), capabilities)
    logger.info(
        f"Booking created: {booking.uuid} availability={booking.availability_id} "
        f"units={booking.units_booked}"
    )
    return BookingRead.from_booking(booking, capabilities)


@router.get("", response_model=list[BookingRead], response_model_exclude_unset=True)
def list_bookings(
    resellerReference: Optional[str] = None,
    supplierReference: Optional[str] = None,
    service: BookingService = Depends(get_booking_service),
    capabilities: list[Capability] = Depends(get_capabilities),
):
    bookings = service.get_bookings(
        reseller_reference=resellerReference,
        supplier_reference=supplierReference,
    )
    return [BookingRead.from_booking(booking, capabilities) for booking in bookings]


@router.get("/{uuid}", response_model=BookingRead, response_model_exclude_unset=True)
def get_booking(
    uuid: str,
    service: BookingService = Depends(get_booking_service),
    capabilities: list[Capability] = Depends(get_capabilities),
):
    return BookingRead.from_booking(service.get_booking(uuid), capabilities)


@router.post("/{uuid}/cancel", response_model=BookingRead, response_model_exclude_unset=True)
def cancel_booking(
    uuid: str,
    data: BookingCancel | None = None,
    service: BookingService = Depends(get_booking_service),
    capabilities: list[Capability] = Depends(get_capabilities),
):
    booking = service.cancel_booking(uuid, reason=data.reason if data else None)
    logger.info(f"Booking cancelled: {booking.uuid}")
    return BookingRead.from_booking(booking, capabilities)

