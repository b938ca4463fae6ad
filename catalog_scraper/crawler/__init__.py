"""
Page rendering and navigation helpers for catalog pages.
"""

from .js_renderer import CatalogPage, CatalogRenderer, PlaywrightPage
from .lazy_load import auto_scroll
from .url_normalizer import normalize_catalog_url

__all__ = [
    "CatalogPage",
    "CatalogRenderer",
    "PlaywrightPage",
    "auto_scroll",
    "normalize_catalog_url",
]
