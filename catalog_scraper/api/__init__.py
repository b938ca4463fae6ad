"""
API module for the catalog scraper.

This module contains the FastAPI application that exposes scraping and
CSV/JSON export over HTTP.
"""

from .app import app, start_server

__all__ = ["app", "start_server"]
