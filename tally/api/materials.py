"""REST API endpoints for materials and stock levels."""

from fastapi import APIRouter, Depends, Query
from typing import Any

from tally.api.deps import get_ledger
from tally.schemas.inventory import (
    AdjustRequest,
    MaterialCreateRequest,
    MaterialResponse,
    QuantityRequest,
)
from tally.services.inventory_ledger import InventoryLedger

router = APIRouter(prefix="/api/materials", tags=["materials"])


@router.get("/")
async def list_materials(
    archived: bool = Query(default=False),
    search: str | None = Query(default=None),
    ledger: InventoryLedger = Depends(get_ledger),
) -> dict[str, Any]:
    """List materials, newest first.

    Args:
        archived: List archived materials instead of active ones
        search: Case-insensitive match on name, SKU or variant
        ledger: Inventory ledger

    Returns:
        Dictionary with materials and their count
    """
    materials = await ledger.list_materials(archived=archived, search=search)
    return {
        "materials": [MaterialResponse.model_validate(m) for m in materials],
        "count": len(materials),
    }


@router.get("/low-stock")
async def list_low_stock(ledger: InventoryLedger = Depends(get_ledger)) -> dict[str, Any]:
    materials = await ledger.low_stock_materials()
    return {
        "materials": [MaterialResponse.model_validate(m) for m in materials],
        "count": len(materials),
    }


@router.post("/", status_code=201, response_model=MaterialResponse)
async def create_material(
    request: MaterialCreateRequest,
    ledger: InventoryLedger = Depends(get_ledger),
):
    """Add a material. Duplicate SKUs answer 409."""
    return await ledger.add_material(
        name=request.name,
        sku=request.sku,
        variant=request.variant,
        on_hand=request.on_hand,
        reorder_point=request.reorder_point,
        cost=request.cost,
    )


@router.put("/{material_id}/quantity", response_model=MaterialResponse)
async def set_quantity(
    material_id: str,
    request: QuantityRequest,
    ledger: InventoryLedger = Depends(get_ledger),
):
    """Set the on-hand quantity to an absolute value."""
    return await ledger.adjust_quantity(material_id, request.on_hand)


@router.post("/{material_id}/adjust", response_model=MaterialResponse)
async def adjust_quantity(
    material_id: str,
    request: AdjustRequest,
    ledger: InventoryLedger = Depends(get_ledger),
):
    """Apply a relative change atomically; the result is clamped at 0."""
    return await ledger.adjust_by(material_id, request.delta)


@router.post("/{material_id}/archive", response_model=MaterialResponse)
async def archive_material(material_id: str, ledger: InventoryLedger = Depends(get_ledger)):
    return await ledger.archive_material(material_id)
