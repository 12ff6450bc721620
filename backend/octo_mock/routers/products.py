# backend/octo_mock/routers/products.py

from fastapi import APIRouter, Depends

from ..dependencies import get_capabilities, get_catalog
from ..schemas.products import ProductRead
from ..services.capabilities import Capability
from ..services.catalog import ProductCatalog

router = APIRouter(prefix="/products", tags=["products"])


@router.get("", response_model=list[ProductRead], response_model_exclude_unset=True)
def list_products(
    catalog: ProductCatalog = Depends(get_catalog),
    capabilities: list[Capability] = Depends(get_capabilities),
):
    return [ProductRead.from_product(product, capabilities) for product in catalog.get_products()]


@router.get("/{product_id}", response_model=ProductRead, response_model_exclude_unset=True)
def get_product(
    product_id: str,
    catalog: ProductCatalog = Depends(get_catalog),
    capabilities: list[Capability] = Depends(get_capabilities),
):
    return ProductRead.from_product(catalog.get_product(product_id), capabilities)
