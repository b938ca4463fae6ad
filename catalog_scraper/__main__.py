"""
Command-line interface for catalog_scraper.
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from .api.export import products_to_csv
from .exceptions import CatalogScraperError
from .extraction import CatalogScraper
from .models import ScrapeFailure, ScrapeResult

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def scrape(url: str) -> ScrapeResult:
    """
    Scrape a catalog with a browser that lives for this call only.

    Args:
        url: Catalog link or phone number.
    """
    async with CatalogScraper() as scraper:
        logger.info(f"Scraping catalog {url}")
        return await scraper.scrape_catalog(url)


def render(result: ScrapeResult, output_format: str) -> str:
    """Render a scrape result as JSON or as the CSV export."""
    if output_format == "csv":
        return products_to_csv([p.model_dump(by_alias=True) for p in result.products])
    return json.dumps(result.model_dump(by_alias=True), indent=2, ensure_ascii=False)


def main(args: Optional[List[str]] = None) -> int:
    """Main function to parse arguments and run the scrape."""
    parser = argparse.ArgumentParser(
        description="Extract products from a public WhatsApp Business catalog"
    )
    parser.add_argument(
        "url",
        help="Catalog URL (https://wa.me/c/NUMBER) or phone number"
    )
    parser.add_argument(
        "--format",
        choices=["json", "csv"],
        default="json",
        help="Output format"
    )
    parser.add_argument(
        "--output",
        help="Output file path (default: print to stdout)"
    )

    parsed = parser.parse_args(args)

    try:
        result = asyncio.run(scrape(parsed.url))
    except CatalogScraperError as e:
        logger.error(f"Scrape failed: {e}")
        print(json.dumps(ScrapeFailure(error=str(e)).model_dump(), indent=2))
        return 1

    content = render(result, parsed.format)

    # Save to file if specified
    if parsed.output:
        with open(parsed.output, "w", encoding="utf-8", newline="") as f:
            f.write(content)
        logger.info(f"Saved {result.total_products} products to {parsed.output}")
    else:
        print(content)

    return 0


if __name__ == "__main__":
    sys.exit(main())
