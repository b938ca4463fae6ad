"""
Validation and normalization of catalog URLs.
"""

import re

from ..exceptions import InvalidCatalogUrl

CANONICAL_CATALOG_URL = "https://wa.me/c/{phone}"

# Already-valid catalog links are returned untouched.
CATALOG_URL_PATTERNS = [
    re.compile(r"https?://wa\.me/c/(\d+)", re.ASCII),
    re.compile(r"https?://api\.whatsapp\.com/c/(\d+)", re.ASCII),
    re.compile(r"https?://wa\.me/message/(\w+)", re.ASCII),
]

PHONE_NUMBER_PATTERN = re.compile(r"(\d{10,15})", re.ASCII)

INVALID_URL_MESSAGE = (
    "Invalid WhatsApp catalog URL. Use the format: https://wa.me/c/NUMBER"
)


def normalize_catalog_url(url: str) -> str:
    """
    Validate a catalog URL and rewrite bare phone numbers into catalog links.

    Args:
        url: Catalog link or any text containing a 10-15 digit phone number.

    Returns:
        A navigable catalog URL.

    Raises:
        InvalidCatalogUrl: If no known link shape or phone number is found.
    """
    for pattern in CATALOG_URL_PATTERNS:
        if pattern.search(url):
            return url

    phone_match = PHONE_NUMBER_PATTERN.search(url)
    if phone_match:
        return CANONICAL_CATALOG_URL.format(phone=phone_match.group(1))

    raise InvalidCatalogUrl(INVALID_URL_MESSAGE)
