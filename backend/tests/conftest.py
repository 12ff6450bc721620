"""Pytest configuration and shared fixtures."""

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient

from octo_mock.config import Settings
from octo_mock.database import build_engine, build_sessionmaker, init_db
from octo_mock.services.availability import (
    AvailabilityGenerator,
    AvailabilityService,
    InMemoryCapacityLedger,
)
from octo_mock.services.bookings import BookingService, BookingStore
from octo_mock.services.catalog import ProductCatalog, build_products

# Monday 2021-12-20, 08:00 in London
NOW = datetime(2021, 12, 20, 8, 0, tzinfo=timezone.utc)


def fixed_now() -> datetime:
    return NOW


@pytest.fixture
def catalog() -> ProductCatalog:
    return ProductCatalog(build_products(default_capacity=10))


@pytest.fixture
def tour(catalog):
    return catalog.get_product("1")


@pytest.fixture
def day_pass(catalog):
    return catalog.get_product("2")


@pytest.fixture
def ledger() -> InMemoryCapacityLedger:
    return InMemoryCapacityLedger()


@pytest.fixture
def generator(ledger) -> AvailabilityGenerator:
    return AvailabilityGenerator(ledger, horizon_days=30)


@pytest.fixture
def availability_service(catalog, generator) -> AvailabilityService:
    return AvailabilityService(catalog, generator, now=fixed_now)


@pytest.fixture
def booking_store() -> BookingStore:
    engine = build_engine(Settings(database_url="sqlite://", _env_file=None))
    init_db(engine)
    yield BookingStore(build_sessionmaker(engine))
    engine.dispose()


@pytest.fixture
def booking_service(catalog, availability_service, ledger, booking_store) -> BookingService:
    return BookingService(
        catalog=catalog,
        availability_service=availability_service,
        ledger=ledger,
        store=booking_store,
        now=fixed_now,
    )


@pytest.fixture
def api_client(catalog, availability_service, booking_service, ledger, booking_store) -> TestClient:
    from octo_mock import dependencies
    from octo_mock.main import app

    app.dependency_overrides.update({
        dependencies.get_catalog: lambda: catalog,
        dependencies.get_capacity_ledger: lambda: ledger,
        dependencies.get_booking_store: lambda: booking_store,
        dependencies.get_availability_service: lambda: availability_service,
        dependencies.get_booking_service: lambda: booking_service,
    })
    yield TestClient(app)
    app.dependency_overrides.clear()
