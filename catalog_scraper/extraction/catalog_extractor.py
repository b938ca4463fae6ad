"""
Catalog scraper: navigates to a catalog page and runs the extraction chain.
"""

import logging
from typing import List, Optional

from ..config import AppConfig, get_config
from ..crawler.js_renderer import CatalogRenderer
from ..crawler.url_normalizer import normalize_catalog_url
from ..models import ProductRecord, ScrapeResult
from ..processing.assembler import assemble_result
from .strategies import EXTRACTION_CHAIN, run_chain

# Set up logging
logger = logging.getLogger(__name__)


class CatalogScraper:
    """Extracts products from public storefront catalog pages."""

    def __init__(
        self,
        renderer: Optional[CatalogRenderer] = None,
        config: Optional[AppConfig] = None,
        strategies=None,
    ):
        """
        Initialize the catalog scraper.

        Args:
            renderer: Renderer that provides pages. Created from config if None;
                the browser itself is only launched by the first scrape.
            config: Application configuration. If None, uses the global config.
            strategies: Extraction strategies to try in order.
        """
        self.config = config or get_config()
        self.renderer = renderer or CatalogRenderer(self.config.browser)
        self.strategies = strategies or EXTRACTION_CHAIN

    async def scrape(self, catalog_url: str) -> List[ProductRecord]:
        """
        Extract products from a catalog.

        Args:
            catalog_url: Catalog link or a phone number.

        Returns:
            List of ProductRecord; empty if no strategy found anything.

        Raises:
            InvalidCatalogUrl: If the URL cannot be normalized.
            NavigationError: If the page cannot be loaded.
        """
        url = normalize_catalog_url(catalog_url)
        browser_config = self.config.browser

        async with self.renderer.open_page() as page:
            try:
                await page.configure_viewport(
                    browser_config.viewport_width,
                    browser_config.viewport_height,
                    browser_config.user_agent,
                )

                logger.info(f"Navigating to {url}")
                await page.navigate(
                    url,
                    wait_until=browser_config.wait_until,
                    timeout_ms=browser_config.navigation_timeout_ms,
                )
                await page.wait(browser_config.post_navigation_wait_ms)
                logger.info(f"Final URL: {page.current_url()}")

                products = await run_chain(
                    page,
                    strategies=self.strategies,
                    settings=self.config.extraction,
                    scroll=self.config.scroll,
                )
            except Exception as e:
                logger.error(f"Error scraping {url}: {str(e)}")
                raise

        logger.info(f"Products found: {len(products)}")
        return products

    async def scrape_catalog(self, catalog_url: str) -> ScrapeResult:
        """
        Extract products and wrap them with count and timestamp.

        Args:
            catalog_url: Catalog link or a phone number, echoed in the result.

        Returns:
            ScrapeResult for the catalog.
        """
        products = await self.scrape(catalog_url)
        return assemble_result(catalog_url, products)

    async def close(self) -> None:
        """Shut down the browser if it was started."""
        await self.renderer.close()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
