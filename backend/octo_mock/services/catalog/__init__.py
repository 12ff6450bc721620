# backend/octo_mock/services/catalog/__init__.py
"""
Product catalog: read-only lookup from product id to Product.
"""

from ...errors import ProductNotFoundError
from .models import AvailabilityType, Option, PricingPer, Product
from .seed import build_products


class ProductCatalog:
    """In-memory, read-only product lookup."""

    def __init__(self, products: list[Product] | None = None):
        self._products: dict[str, Product] = {}
        for product in products or []:
            if product.id in self._products:
                raise ValueError(f"Duplicate product id {product.id}")
            self._products[product.id] = product

    def get_products(self) -> list[Product]:
        return list(self._products.values())

    def get_product(self, product_id: str) -> Product:
        product = self._products.get(product_id)
        if product is None:
            raise ProductNotFoundError(product_id)
        return product


__all__ = [
    "AvailabilityType",
    "Option",
    "PricingPer",
    "Product",
    "ProductCatalog",
    "build_products",
]
