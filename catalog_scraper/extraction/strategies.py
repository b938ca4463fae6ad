"""
Product extraction strategies for catalog pages.

Each strategy is an async function taking a rendered page and the
extraction settings and returning a list of ProductRecord. The DOM side
of a strategy is an Evaluator; the ``build_*`` helpers turn the raw
evaluator output into records and do not need a browser.
"""

import logging
import re
from typing import Any, Dict, List, Optional

from ..config import ExtractionConfig, ScrollConfig, config
from ..crawler.js_renderer import CatalogPage
from ..crawler.lazy_load import auto_scroll
from ..models import ProductRecord
from ..processing.deduplicator import Deduplicator
from . import evaluators

logger = logging.getLogger(__name__)


def _text(value: Any) -> str:
    return value.strip() if isinstance(value, str) else ""


def build_card_records(
    cards: List[Dict[str, Any]], settings: ExtractionConfig
) -> List[ProductRecord]:
    """
    Build records from raw product cards.

    Args:
        cards: Raw cards with ``name``, ``description``, ``price`` and ``imageUrl``.
        settings: Extraction settings.

    Returns:
        One record per card, in page order.
    """
    records = []
    for index, card in enumerate(cards, start=1):
        name = _text(card.get("name")) or settings.name_placeholder.format(index=index)
        records.append(
            ProductRecord(
                name=name,
                description=_text(card.get("description"))[: settings.max_description_length],
                price=_text(card.get("price")),
                image_url=card.get("imageUrl") or "",
            )
        )
    return records


def select_fragments(levels: List[List[str]], settings: ExtractionConfig) -> Optional[List[str]]:
    """
    Pick the text fragments of the nearest ancestor level that has enough text.

    Args:
        levels: Raw texts per ancestor level, nearest first.
        settings: Extraction settings.

    Returns:
        The distinct non-empty fragments of the first qualifying level, or
        None if no level within the walk limit qualifies.
    """
    for texts in levels[: settings.max_ancestor_levels]:
        fragments: List[str] = []
        for raw in texts:
            text = _text(raw)
            if 0 < len(text) < settings.max_fragment_length and text not in fragments:
                fragments.append(text)
        if len(fragments) >= settings.min_fragments:
            return fragments
    return None


def build_image_records(
    images: List[Dict[str, Any]], settings: ExtractionConfig
) -> List[ProductRecord]:
    """
    Build records from prominent images and the text found around them.

    The first fragment is the name, the last one the price, and the ones
    in between make up the description.
    """
    records = []
    for index, image in enumerate(images, start=1):
        fragments = select_fragments(image.get("levels") or [], settings)
        if not fragments:
            continue
        records.append(
            ProductRecord(
                name=fragments[0] or settings.name_placeholder.format(index=index),
                description=" ".join(fragments[1:-1])[: settings.max_description_length],
                price=fragments[-1],
                image_url=image.get("imageUrl") or "",
            )
        )
    return records


def is_candidate_block(block: Dict[str, Any], settings: ExtractionConfig) -> bool:
    """Check whether an image-bearing container looks like a product tile."""
    raw_text = block.get("text") or ""
    if len(raw_text) <= settings.min_block_text_length:
        return False
    if block.get("display") == "none":
        return False
    height = block.get("height") or 0
    if not settings.min_block_height < height < settings.max_block_height:
        return False
    if not block.get("imageUrl"):
        return False
    return len(raw_text.strip()) > settings.min_image_block_text_length


def build_block_records(
    blocks: List[Dict[str, Any]], settings: ExtractionConfig
) -> List[ProductRecord]:
    """
    Build records from container measurements.

    The first text line is the name and the remaining lines the
    description; the price is the first currency amount in the text.
    """
    price_pattern = re.compile(settings.price_pattern)
    records = []
    for block in blocks:
        if not is_candidate_block(block, settings):
            continue

        lines = block["text"].strip().split("\n")
        price_match = price_pattern.search(block["text"])
        records.append(
            ProductRecord(
                name=lines[0][: settings.max_name_length] or settings.block_name_placeholder,
                description=" ".join(lines[1:])[: settings.max_description_length],
                price=price_match.group(0) if price_match else "",
                image_url=block["imageUrl"],
            )
        )
    return records


async def known_selector_scan(
    page: CatalogPage, settings: ExtractionConfig, scroll: Optional[ScrollConfig] = None
) -> List[ProductRecord]:
    """
    Read product cards from the first known card selector that matches.

    Matches are never combined across selectors.
    """
    for selector in settings.card_selectors:
        cards = await page.query_dom(evaluators.card_scan(selector, settings))
        if cards:
            logger.info(f"Selector {selector!r} matched {len(cards)} elements")
            return build_card_records(cards, settings)
        logger.debug(f"Selector {selector!r} matched nothing")
    return []


async def image_anchored_scan(
    page: CatalogPage, settings: ExtractionConfig, scroll: Optional[ScrollConfig] = None
) -> List[ProductRecord]:
    """Find products around visually prominent images."""
    images = await page.query_dom(evaluators.image_ancestor_scan(settings)) or []
    logger.debug(f"Found {len(images)} images above the size threshold")
    return build_image_records(images, settings)


async def block_scan(
    page: CatalogPage, settings: ExtractionConfig, scroll: Optional[ScrollConfig] = None
) -> List[ProductRecord]:
    """
    Scroll to load deferred content, then scan every image-bearing container.

    Containers repeat at several nesting levels, so the output is deduplicated.
    """
    await auto_scroll(page, scroll)
    blocks = await page.query_dom(evaluators.block_scan(settings)) or []
    records = build_block_records(blocks, settings)
    return Deduplicator().deduplicate(records)


# Tried in order; the first strategy returning anything wins.
EXTRACTION_CHAIN = (known_selector_scan, image_anchored_scan, block_scan)


async def run_chain(
    page: CatalogPage,
    strategies=EXTRACTION_CHAIN,
    settings: Optional[ExtractionConfig] = None,
    scroll: Optional[ScrollConfig] = None,
) -> List[ProductRecord]:
    """
    Run extraction strategies in order and return the first non-empty result.

    Args:
        page: Rendered catalog page.
        strategies: Strategy functions to try.
        settings: Extraction settings. If None, uses the global config.
        scroll: Scroll settings passed to strategies that scroll.

    Returns:
        Records from the first strategy that found any, else an empty list.
    """
    settings = settings or config.extraction
    for strategy in strategies:
        products = await strategy(page, settings, scroll)
        if products:
            logger.info(f"{strategy.__name__} extracted {len(products)} products")
            return products
        logger.info(f"{strategy.__name__} found no products")
    return []
