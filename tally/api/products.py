"""REST API endpoints for products."""

from fastapi import APIRouter, Depends, Query
from typing import Any

from tally.api.deps import get_catalog
from tally.schemas.inventory import ProductRequest, ProductResponse
from tally.services.product_catalog import ProductCatalog

router = APIRouter(prefix="/api/products", tags=["products"])


def _bom(request: ProductRequest) -> list[dict[str, Any]] | None:
    if request.bom is None:
        return None
    return [{"materialId": item.material_id, "qty": item.qty} for item in request.bom]


@router.get("/")
async def list_products(
    archived: bool = Query(default=False),
    catalog: ProductCatalog = Depends(get_catalog),
) -> dict[str, Any]:
    """List products with the units current stock can build.

    ``sellable`` is null for products without a bill of materials.
    """
    items = await catalog.list_with_availability(archived=archived)
    return {
        "products": [
            ProductResponse.model_validate(item.product).model_copy(update={"sellable": item.sellable})
            for item in items
        ],
        "count": len(items),
    }


@router.post("/", status_code=201, response_model=ProductResponse)
async def create_product(request: ProductRequest, catalog: ProductCatalog = Depends(get_catalog)):
    product = await catalog.add_product(
        name=request.name,
        sku=request.sku,
        variant=request.variant,
        price=request.price,
        bom=_bom(request),
    )
    sellable = await catalog.sellable_quantity(product.id)
    return ProductResponse.model_validate(product).model_copy(update={"sellable": sellable})


@router.put("/{product_id}", response_model=ProductResponse)
async def update_product(
    product_id: str,
    request: ProductRequest,
    catalog: ProductCatalog = Depends(get_catalog),
):
    product = await catalog.update_product(
        product_id,
        name=request.name,
        sku=request.sku,
        variant=request.variant,
        price=request.price,
        bom=_bom(request),
    )
    sellable = await catalog.sellable_quantity(product.id)
    return ProductResponse.model_validate(product).model_copy(update={"sellable": sellable})


@router.post("/{product_id}/archive", response_model=ProductResponse)
async def archive_product(product_id: str, catalog: ProductCatalog = Depends(get_catalog)):
    return await catalog.archive_product(product_id)
