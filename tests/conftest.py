"""
Shared fixtures: an in-memory page and renderer standing in for the browser.
"""

from contextlib import asynccontextmanager

import pytest

from catalog_scraper.config import AppConfig, BrowserConfig, ScrollConfig
from catalog_scraper.crawler.js_renderer import CatalogPage
from catalog_scraper.extraction import CatalogScraper


class FakePage(CatalogPage):
    """
    Page that answers evaluators from canned responses keyed by evaluator name.

    A response may be a value or a callable receiving the evaluator argument.
    """

    def __init__(self, responses=None, heights=None, final_url=None, navigation_error=None):
        self.responses = responses or {}
        self.heights = list(heights or [0])
        self.final_url = final_url
        self.navigation_error = navigation_error
        self.evaluated = []
        self.navigations = []
        self.scrolls = []
        self.waits = []
        self.viewport = None
        self.closed = False

    @property
    def evaluator_names(self):
        return [name for name, _ in self.evaluated]

    async def navigate(self, url, wait_until, timeout_ms):
        self.navigations.append((url, wait_until, timeout_ms))
        if self.navigation_error is not None:
            raise self.navigation_error
        if self.final_url is None:
            self.final_url = url

    async def query_dom(self, evaluator):
        self.evaluated.append((evaluator.name, dict(evaluator.arg)))
        response = self.responses.get(evaluator.name, [])
        if callable(response):
            return response(evaluator.arg)
        return response

    def current_url(self):
        return self.final_url or ""

    async def scroll_by(self, pixels):
        self.scrolls.append(pixels)

    async def document_height(self):
        if len(self.heights) > 1:
            return self.heights.pop(0)
        return self.heights[0]

    async def configure_viewport(self, width, height, user_agent):
        self.viewport = (width, height, user_agent)

    async def wait(self, ms):
        self.waits.append(ms)

    async def close(self):
        self.closed = True


class FakeRenderer:
    """Renderer handing out a single FakePage."""

    def __init__(self, page):
        self.page = page
        self.pages_opened = 0
        self.closed = False

    @asynccontextmanager
    async def open_page(self):
        self.pages_opened += 1
        try:
            yield self.page
        finally:
            await self.page.close()

    async def close(self):
        self.closed = True


@pytest.fixture
def app_config():
    """Configuration with the default extraction settings."""
    return AppConfig(
        browser=BrowserConfig(post_navigation_wait_ms=3000),
        scroll=ScrollConfig(),
    )


@pytest.fixture
def make_page():
    """Return a FakePage factory."""
    return FakePage


@pytest.fixture
def make_scraper(app_config):
    """Return a factory building a CatalogScraper around a FakePage."""

    def factory(page, **kwargs):
        renderer = FakeRenderer(page)
        return CatalogScraper(renderer=renderer, config=app_config, **kwargs)

    return factory
