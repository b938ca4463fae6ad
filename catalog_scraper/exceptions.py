"""
Exceptions for the catalog scraper.

This module defines the errors a scrape call can fail with. An empty
catalog is not an error: the extraction chain returns an empty list.
"""


class CatalogScraperError(Exception):
    """Base class for catalog scraper exceptions."""

    pass


class InvalidCatalogUrl(CatalogScraperError, ValueError):
    """
    Exception raised when a catalog URL cannot be normalized.

    The message is meant for end users and includes the expected
    ``https://wa.me/c/NUMBER`` format.
    """

    pass


class NavigationError(CatalogScraperError):
    """
    Exception raised when the browser cannot reach the catalog page.
    """

    pass


class NavigationTimeout(NavigationError):
    """
    Exception raised when navigation does not finish within the timeout.
    """

    pass
