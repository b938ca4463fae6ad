"""
Export functionality for the catalog scraper API.

This module provides utilities for exporting already extracted products
to CSV and JSON downloads.
"""

import csv
import io
import json
import logging
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse, Response
from pydantic import BaseModel

from ..models import ScrapeFailure
from ..processing.assembler import assemble_export

# Setup logging
logger = logging.getLogger(__name__)

CSV_FIELDS = ["name", "description", "price", "imageUrl"]
EXPORT_FILENAME = "whatsapp-catalog"

# Create router
router = APIRouter(
    prefix="/api/export",
    tags=["Export"],
)


class ExportRequest(BaseModel):
    products: Optional[Any] = None


def products_to_csv(products: List[Dict[str, Any]]) -> str:
    """
    Serialize products to CSV with a fixed column order.

    Args:
        products: Product dictionaries, as returned by the scrape endpoint.

    Returns:
        CSV text with a header row; missing fields are empty.
    """
    output = io.StringIO()
    writer = csv.DictWriter(
        output,
        fieldnames=CSV_FIELDS,
        extrasaction="ignore",
        restval="",
        quoting=csv.QUOTE_ALL,
    )
    writer.writeheader()
    for product in products:
        writer.writerow({field: _cell(product.get(field)) for field in CSV_FIELDS})
    return output.getvalue()


def _cell(value: Any) -> Any:
    return "" if value is None else value


def products_to_json(products: List[Dict[str, Any]]) -> str:
    """Serialize products to the pretty-printed JSON export envelope."""
    envelope = assemble_export(products)
    return json.dumps(envelope.model_dump(by_alias=True), indent=2, ensure_ascii=False)


def _products_required() -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ScrapeFailure(error="A products array is required").model_dump(),
    )


def _is_product_list(products: Any) -> bool:
    return isinstance(products, list) and all(isinstance(p, dict) for p in products)


@router.post("/csv")
async def export_to_csv(request: ExportRequest):
    """Export products to CSV format."""
    if not _is_product_list(request.products):
        return _products_required()

    try:
        content = products_to_csv(request.products)
    except (csv.Error, TypeError, ValueError) as e:
        logger.error(f"Error exporting products to CSV: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ScrapeFailure(error=str(e)).model_dump(),
        )

    return Response(
        content=content,
        media_type="text/csv; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}.csv"},
    )


@router.post("/json")
async def export_to_json(request: ExportRequest):
    """Export products to JSON format."""
    if not _is_product_list(request.products):
        return _products_required()

    return Response(
        content=products_to_json(request.products),
        media_type="application/json; charset=utf-8",
        headers={"Content-Disposition": f"attachment; filename={EXPORT_FILENAME}.json"},
    )
