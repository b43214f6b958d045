"""REST API endpoints for bulk order import."""

import logging

from fastapi import APIRouter, Depends, File, HTTPException, Request, UploadFile

from tally.api.deps import get_order_importer
from tally.schemas.orders import ImportResultResponse
from tally.services.order_importer import OrderImporter

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/imports", tags=["imports"])


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="CSV import files must be UTF-8 encoded") from None


@router.post("/orders", response_model=ImportResultResponse)
async def import_orders_file(
    file: UploadFile = File(...),
    importer: OrderImporter = Depends(get_order_importer),
):
    """Import orders from an uploaded CSV file.

    Required columns: external_id, channel, customer_name, sku, qty.
    A malformed file answers 422 before anything is written; per-order
    problems are listed in ``errors`` of a 200 response.
    """
    filename = file.filename or ""
    if file.content_type != "text/csv" and not filename.lower().endswith(".csv"):
        raise HTTPException(status_code=400, detail="Please upload a CSV file")

    text = _decode(await file.read())
    result = await importer.import_csv(text)
    logger.info(f"Imported {filename}: {len(result.new_orders)} new orders")
    return result


@router.post("/orders/text", response_model=ImportResultResponse)
async def import_orders_text(
    request: Request,
    importer: OrderImporter = Depends(get_order_importer),
):
    """Import orders from a raw CSV request body."""
    text = _decode(await request.body())
    return await importer.import_csv(text)
