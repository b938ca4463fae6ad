"""
Scrolling to make lazily loaded catalog content render.
"""

import logging
from typing import Optional

from ..config import ScrollConfig, config
from .js_renderer import CatalogPage

logger = logging.getLogger(__name__)


async def auto_scroll(page: CatalogPage, settings: Optional[ScrollConfig] = None) -> int:
    """
    Scroll down in fixed steps until the scrolled distance reaches the
    document height, then wait for deferred content to settle.

    The height is re-read on every tick, so content appended while
    scrolling extends the loop.

    Args:
        page: Page to scroll.
        settings: Scroll settings. If None, uses the global config.

    Returns:
        Total distance scrolled, in pixels.
    """
    settings = settings or config.scroll
    total_scrolled = 0
    ticks = 0

    while True:
        scroll_height = await page.document_height()
        await page.scroll_by(settings.step_px)
        total_scrolled += settings.step_px
        ticks += 1

        if total_scrolled >= scroll_height:
            break
        await page.wait(settings.tick_interval_ms)

    logger.debug(f"Scrolled {total_scrolled}px in {ticks} ticks")
    await page.wait(settings.settle_ms)
    return total_scrolled
