"""
Extraction strategies and the catalog scraper that drives them.
"""

from .catalog_extractor import CatalogScraper
from .evaluators import Evaluator
from .strategies import (EXTRACTION_CHAIN, block_scan, image_anchored_scan,
                         known_selector_scan, run_chain)

__all__ = [
    "CatalogScraper",
    "Evaluator",
    "EXTRACTION_CHAIN",
    "known_selector_scan",
    "image_anchored_scan",
    "block_scan",
    "run_chain",
]
