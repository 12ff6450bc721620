# backend/octo_mock/dependencies.py
"""
Service singletons for FastAPI `Depends`.

Tests swap them through `app.dependency_overrides`.
"""

from functools import lru_cache

from fastapi import Request

from .config import settings
from .database import SessionLocal, engine, init_db
from .redis_client import redis_client
from .services.availability import (
    AvailabilityGenerator,
    AvailabilityService,
    CapacityLedger,
    InMemoryCapacityLedger,
    RedisCapacityLedger,
)
from .services.bookings import BookingService, BookingStore
from .services.capabilities import Capability
from .services.catalog import ProductCatalog, build_products


@lru_cache
def get_catalog() -> ProductCatalog:
    products = build_products(settings.default_capacity) if settings.seed_catalog else []
    return ProductCatalog(products)


@lru_cache
def get_capacity_ledger() -> CapacityLedger:
    if redis_client is not None:
        return RedisCapacityLedger(redis_client)
    return InMemoryCapacityLedger()


@lru_cache
def get_booking_store() -> BookingStore:
    init_db(engine)
    return BookingStore(SessionLocal)


@lru_cache
def get_availability_service() -> AvailabilityService:
    generator = AvailabilityGenerator(
        get_capacity_ledger(),
        horizon_days=settings.availability_horizon_days,
    )
    return AvailabilityService(get_catalog(), generator)


@lru_cache
def get_booking_service() -> BookingService:
    return BookingService(
        catalog=get_catalog(),
        availability_service=get_availability_service(),
        ledger=get_capacity_ledger(),
        store=get_booking_store(),
    )


def get_capabilities(request: Request) -> list[Capability]:
    """Capabilities parsed from the Octo-Capabilities header by the middleware."""
    return getattr(request.state, "capabilities", [])
