"""
WhatsApp Business catalog scraper package.

This package renders public storefront catalog pages in a headless browser
and extracts product names, descriptions, prices and images using a chain
of DOM heuristics.
"""

import logging
from typing import Optional

from .config import AppConfig, get_config
from .exceptions import (CatalogScraperError, InvalidCatalogUrl,
                         NavigationError, NavigationTimeout)
from .extraction import CatalogScraper
from .models import ProductRecord, ScrapeResult

# Set up package logger
logging.basicConfig(
    level=logging.INFO, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)

# Version
__version__ = "0.1.0"


async def scrape_catalog(url: str, config: Optional[AppConfig] = None) -> ScrapeResult:
    """
    Scrape a catalog with a short-lived browser.

    Args:
        url: Catalog link or phone number.
        config: Configuration to use. If None, uses the global config.

    Returns:
        ScrapeResult with the extracted products.
    """
    async with CatalogScraper(config=config) as scraper:
        return await scraper.scrape_catalog(url)


__all__ = [
    "scrape_catalog",
    "CatalogScraper",
    "ProductRecord",
    "ScrapeResult",
    "CatalogScraperError",
    "InvalidCatalogUrl",
    "NavigationError",
    "NavigationTimeout",
    "get_config",
]
