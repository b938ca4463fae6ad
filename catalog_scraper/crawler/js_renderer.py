"""
Page rendering using Playwright for script-rendered catalog pages.
"""

import abc
import asyncio
import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, Any, AsyncIterator, Optional

from playwright.async_api import Browser, Page, Playwright, async_playwright
from playwright.async_api import Error as PlaywrightError
from playwright.async_api import TimeoutError as PlaywrightTimeoutError

from ..config import BrowserConfig, config
from ..exceptions import NavigationError, NavigationTimeout

if TYPE_CHECKING:
    from ..extraction.evaluators import Evaluator

logger = logging.getLogger(__name__)


class CatalogPage(abc.ABC):
    """
    A rendered page the extraction code can drive and inspect.

    Implementations wrap a real browser tab; tests use an in-memory fake.
    """

    @abc.abstractmethod
    async def navigate(self, url: str, wait_until: str, timeout_ms: int) -> None:
        """
        Navigate to a URL and wait for the given load state.

        Raises:
            NavigationTimeout: If the load state is not reached in time
            NavigationError: If the page cannot be loaded
        """
        pass

    @abc.abstractmethod
    async def query_dom(self, evaluator: "Evaluator") -> Any:
        """Run an evaluator inside the page and return its JSON result."""
        pass

    @abc.abstractmethod
    def current_url(self) -> str:
        """Return the URL after redirects."""
        pass

    @abc.abstractmethod
    async def scroll_by(self, pixels: int) -> None:
        """Scroll the viewport down by ``pixels``."""
        pass

    @abc.abstractmethod
    async def document_height(self) -> float:
        """Return the current scrollable height of the document."""
        pass

    @abc.abstractmethod
    async def configure_viewport(self, width: int, height: int, user_agent: str) -> None:
        """Set viewport size and user agent before navigation."""
        pass

    @abc.abstractmethod
    async def wait(self, ms: int) -> None:
        """Pause for a fixed number of milliseconds."""
        pass

    @abc.abstractmethod
    async def close(self) -> None:
        """Release the page."""
        pass


class PlaywrightPage(CatalogPage):
    """CatalogPage backed by a Playwright page."""

    def __init__(self, page: Page):
        self._page = page

    async def navigate(self, url: str, wait_until: str, timeout_ms: int) -> None:
        try:
            response = await self._page.goto(url, wait_until=wait_until, timeout=timeout_ms)
        except PlaywrightTimeoutError as e:
            raise NavigationTimeout(
                f"Timed out after {timeout_ms}ms loading {url}: {e.message}"
            ) from e
        except PlaywrightError as e:
            raise NavigationError(f"Error loading {url}: {e.message}") from e

        if response is not None and not response.ok:
            # Storefront pages keep rendering client-side on some error statuses
            logger.warning(f"HTTP {response.status} for {url}, continuing with rendered DOM")

    async def query_dom(self, evaluator: "Evaluator") -> Any:
        logger.debug(f"Evaluating {evaluator.name}")
        return await self._page.evaluate(evaluator.script, evaluator.arg)

    def current_url(self) -> str:
        return self._page.url

    async def scroll_by(self, pixels: int) -> None:
        await self._page.evaluate("(distance) => window.scrollBy(0, distance)", pixels)

    async def document_height(self) -> float:
        return await self._page.evaluate("() => document.body.scrollHeight")

    async def configure_viewport(self, width: int, height: int, user_agent: str) -> None:
        await self._page.set_viewport_size({"width": width, "height": height})
        if user_agent:
            await self._page.set_extra_http_headers({"User-Agent": user_agent})

    async def wait(self, ms: int) -> None:
        await self._page.wait_for_timeout(ms)

    async def close(self) -> None:
        await self._page.close()


class CatalogRenderer:
    """
    Owns a headless Chromium instance and hands out one page per scrape.

    The browser is launched on first use and shared by every page opened
    from this renderer until ``close()`` is called.
    """

    def __init__(self, browser_config: Optional[BrowserConfig] = None):
        """
        Initialize the renderer.

        Args:
            browser_config: Browser settings. If None, uses the global config.
        """
        self.browser_config = browser_config or config.browser
        self._playwright: Optional[Playwright] = None
        self._browser: Optional[Browser] = None
        self._lock = asyncio.Lock()

    @property
    def is_running(self) -> bool:
        return self._browser is not None

    async def _get_browser(self) -> Browser:
        """
        Launch the browser if needed and return it.

        Returns:
            Browser: Running browser instance.
        """
        async with self._lock:
            if self._browser and not self._browser.is_connected():
                logger.warning("Browser disconnected, launching a new one")
                self._browser = None

            if not self._browser:
                if not self._playwright:
                    self._playwright = await async_playwright().start()
                try:
                    self._browser = await self._playwright.chromium.launch(
                        headless=self.browser_config.headless,
                        args=self.browser_config.launch_args,
                        executable_path=self.browser_config.executable_path,
                    )
                except Exception as e:
                    logger.error(f"Browser launch failed: {str(e)}")
                    # Stop the driver so a failed launch does not leave it running
                    await self._playwright.stop()
                    self._playwright = None
                    raise
                logger.info("Browser launched")
        return self._browser

    @asynccontextmanager
    async def open_page(self) -> AsyncIterator[CatalogPage]:
        """
        Open a new page, closing it on exit whatever happens inside the block.

        Yields:
            CatalogPage: The page for a single scrape.
        """
        browser = await self._get_browser()
        page = PlaywrightPage(await browser.new_page())
        try:
            yield page
        finally:
            try:
                await page.close()
            except PlaywrightError as e:
                logger.warning(f"Could not close page: {e.message}")

    async def close(self) -> None:
        """
        Close the browser and playwright instances.
        """
        async with self._lock:
            if self._browser:
                await self._browser.close()
                self._browser = None
                logger.info("Browser closed")

            if self._playwright:
                await self._playwright.stop()
                self._playwright = None

    async def __aenter__(self):
        await self._get_browser()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()
