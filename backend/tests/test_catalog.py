"""Unit tests for catalog aggregates and capability parsing.

Run with: pytest backend/tests/test_catalog.py -v
"""

import pytest

from octo_mock.errors import ProductNotFoundError
from octo_mock.services.capabilities import Capability, parse_capabilities
from octo_mock.services.catalog import ProductCatalog, build_products
from octo_mock.services.catalog.models import AvailabilityConfig, Currency, Price, Product


class TestPrice:

    def test_rejects_negative_amount(self):
        with pytest.raises(ValueError):
            Price(original=-1, retail=0, net=0)

    def test_multiply_and_add(self):
        adult = Price(original=2500, retail=2500, net=2000)
        child = Price(original=1500, retail=1500, net=1200)
        total = adult * 2 + child
        assert (total.original, total.retail, total.net) == (6500, 6500, 5200)

    def test_cannot_mix_currencies(self):
        with pytest.raises(ValueError):
            Price(1, 1, 1, Currency.GBP) + Price(1, 1, 1, Currency.EUR)


class TestProductCatalog:

    def test_lookup(self, catalog):
        assert catalog.get_product("2").internal_name == "Museum day pass"

    def test_unknown_product(self, catalog):
        with pytest.raises(ProductNotFoundError) as exc_info:
            catalog.get_product("99")
        assert exc_info.value.product_id == "99"

    def test_rejects_duplicate_products(self):
        products = build_products()
        with pytest.raises(ValueError):
            ProductCatalog(products + products[:1])

    def test_option_ids_unique_within_product(self, tour):
        with pytest.raises(ValueError):
            Product(
                id="3",
                internal_name="broken",
                availability_type=tour.availability_type,
                options=(tour.options[0], tour.options[0]),
                pricing=tour.pricing,
            )

    def test_option_capacity(self, tour):
        assert tour.option_capacity(tour.get_option("DEFAULT")) == 10
        assert tour.option_capacity(tour.get_option("PRIVATE")) == 4
        assert tour.get_option("NOPE") is None

    def test_availability_config_validation(self):
        with pytest.raises(ValueError):
            AvailabilityConfig(capacity=-1)
        with pytest.raises(ValueError):
            AvailabilityConfig(days_of_week=frozenset({7}))


class TestParseCapabilities:

    def test_known_capabilities_in_order(self):
        assert parse_capabilities("octo/pricing, octo/content,octo/pricing") == [
            Capability.PRICING, Capability.CONTENT,
        ]

    def test_unknown_and_empty(self):
        assert parse_capabilities("octo/adjustments") == []
        assert parse_capabilities(None) == []
        assert parse_capabilities("") == []
