"""
Module for product deduplication functionality.

Catalog tiles are nested, so a brute-force scan usually sees the same
product several times. Two records are duplicates when both their image
URL and their name match exactly.
"""

import logging
from typing import List, Set, Tuple

from ..models import ProductRecord

logger = logging.getLogger(__name__)


class Deduplicator:
    """
    Class responsible for dropping repeated product records.
    """

    def product_signature(self, product: ProductRecord) -> Tuple[str, str]:
        """
        Generate the identity key of a product.

        Args:
            product: The product to generate a signature for.

        Returns:
            The ``(image_url, name)`` pair, compared case-sensitively.
        """
        return (product.image_url, product.name)

    def is_duplicate(self, product1: ProductRecord, product2: ProductRecord) -> bool:
        """
        Check if two products are duplicates.
        """
        return self.product_signature(product1) == self.product_signature(product2)

    def deduplicate(self, products: List[ProductRecord]) -> List[ProductRecord]:
        """
        Remove duplicates, keeping the first occurrence of each product.

        Args:
            products: Products in encounter order.

        Returns:
            A new list with later duplicates dropped; records are not modified.
        """
        seen: Set[Tuple[str, str]] = set()
        unique = []
        for product in products:
            signature = self.product_signature(product)
            if signature in seen:
                continue
            seen.add(signature)
            unique.append(product)

        dropped = len(products) - len(unique)
        if dropped:
            logger.debug(f"Dropped {dropped} duplicate products")
        return unique


def deduplicate_products(products: List[ProductRecord]) -> List[ProductRecord]:
    """
    Remove duplicate products from a list.

    Args:
        products: Products in encounter order.

    Returns:
        The products without repeated ``(image_url, name)`` pairs.
    """
    return Deduplicator().deduplicate(products)
