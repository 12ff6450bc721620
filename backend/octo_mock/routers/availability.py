# backend/octo_mock/routers/availability.py
"""
Availability API endpoint.

POST /availability - slots of a product option for a date, a date range
                     or a list of availability ids
"""

from fastapi import APIRouter, Depends

from ..dependencies import get_availability_service, get_capabilities
from ..schemas.availability import AvailabilityRead, AvailabilityRequest
from ..services.availability import AvailabilityService
from ..services.capabilities import Capability

router = APIRouter(prefix="/availability", tags=["availability"])


@router.post("", response_model=list[AvailabilityRead], response_model_exclude_unset=True)
def check_availability(
    data: AvailabilityRequest,
    service: AvailabilityService = Depends(get_availability_service),
    capabilities: list[Capability] = Depends(get_capabilities),
):
    availabilities = service.get_availability(data.to_query(), capabilities)
    return [
        AvailabilityRead.from_availability(availability, capabilities)
        for availability in availabilities
    ]
