# backend/octo_mock/services/availability/__init__.py
"""
Availability module.

Slots are never stored: the generator derives them from the product and
the capacity ledger, the service selects from them.
"""

from .dates import enumerate_days, format_availability_key, parse_availability_id
from .generator import AvailabilityGenerator
from .ledger import CapacityLedger, InMemoryCapacityLedger, RedisCapacityLedger, SlotKey
from .models import Availability, AvailabilityQuery, AvailabilityStatus, RequestedUnit
from .service import AvailabilityService

__all__ = [
    "Availability",
    "AvailabilityGenerator",
    "AvailabilityQuery",
    "AvailabilityService",
    "AvailabilityStatus",
    "CapacityLedger",
    "InMemoryCapacityLedger",
    "RedisCapacityLedger",
    "RequestedUnit",
    "SlotKey",
    "enumerate_days",
    "format_availability_key",
    "parse_availability_id",
]
