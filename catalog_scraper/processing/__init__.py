"""
Processing package for the catalog scraper.

This package contains modules for post-processing extracted products:
deduplication and wrapping results for the caller.
"""

from .assembler import assemble_export, assemble_result
from .deduplicator import Deduplicator, deduplicate_products

__all__ = [
    "Deduplicator",
    "deduplicate_products",
    "assemble_result",
    "assemble_export",
]
