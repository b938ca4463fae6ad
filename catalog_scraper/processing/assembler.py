"""
Wrapping extracted products into scrape and export payloads.
"""

from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from ..models import ExportEnvelope, ProductRecord, ScrapeResult


def utc_timestamp(moment: Optional[datetime] = None) -> str:
    """Format a moment (default: now) as an ISO-8601 UTC string ending in ``Z``."""
    moment = moment or datetime.now(timezone.utc)
    return moment.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace(
        "+00:00", "Z"
    )


def assemble_result(
    url: str, products: List[ProductRecord], scraped_at: Optional[datetime] = None
) -> ScrapeResult:
    """
    Build the response for a successful scrape.

    Args:
        url: Catalog URL as given by the caller.
        products: Extracted products.
        scraped_at: Capture time. Defaults to now.

    Returns:
        ScrapeResult with count and timestamp.
    """
    return ScrapeResult(
        url=url,
        total_products=len(products),
        products=list(products),
        scraped_at=utc_timestamp(scraped_at),
    )


def assemble_export(
    products: List[Dict[str, Any]], exported_at: Optional[datetime] = None
) -> ExportEnvelope:
    """Build the JSON export envelope for already extracted products."""
    return ExportEnvelope(
        exported_at=utc_timestamp(exported_at),
        total_products=len(products),
        products=products,
    )
