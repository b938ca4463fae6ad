#!/usr/bin/env python
"""
Example script demonstrating how to scrape a WhatsApp Business catalog
with custom extraction thresholds.
"""

import argparse
import asyncio
import json
import logging
import os
import sys

# Add parent directory to path to import catalog_scraper
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

from catalog_scraper.config import AppConfig, ExtractionConfig
from catalog_scraper.extraction import CatalogScraper

# Set up logging
logging.basicConfig(
    level=logging.INFO,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)
logger = logging.getLogger(__name__)


async def scrape(url: str, min_block_height: float, max_block_height: float):
    """
    Scrape a catalog with adjusted block-scan thresholds.

    Args:
        url: Catalog URL or phone number.
        min_block_height: Smallest product tile height in pixels.
        max_block_height: Largest product tile height in pixels.
    """
    app_config = AppConfig(
        extraction=ExtractionConfig(
            min_block_height=min_block_height,
            max_block_height=max_block_height,
        )
    )

    async with CatalogScraper(config=app_config) as scraper:
        result = await scraper.scrape_catalog(url)

    print(json.dumps(result.model_dump(by_alias=True), indent=2, ensure_ascii=False))
    logger.info(f"Extracted {result.total_products} products from {url}")


def main():
    parser = argparse.ArgumentParser(description="Scrape a WhatsApp Business catalog")
    parser.add_argument("url", help="Catalog URL (https://wa.me/c/NUMBER) or phone number")
    parser.add_argument("--min-block-height", type=float, default=150)
    parser.add_argument("--max-block-height", type=float, default=600)
    args = parser.parse_args()

    asyncio.run(scrape(args.url, args.min_block_height, args.max_block_height))


if __name__ == "__main__":
    main()
