"""
Configuration module for the catalog scraper.
"""

import os
from typing import Any, Dict, List, Optional

from dotenv import load_dotenv
from pydantic import BaseModel, Field

# Load environment variables from .env file
load_dotenv()

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/121.0.0.0 Safari/537.36"
)

DEFAULT_LAUNCH_ARGS = [
    "--no-sandbox",
    "--disable-setuid-sandbox",
    "--disable-dev-shm-usage",
    "--disable-accelerated-2d-canvas",
    "--no-first-run",
    "--no-zygote",
    "--disable-gpu",
    "--single-process",
]

DEFAULT_CARD_SELECTORS = [
    '[data-testid="product-item"]',
    ".product-item",
    '[class*="product"]',
    '[class*="catalog"] [class*="item"]',
    'div[role="listitem"]',
    '[class*="ProductCard"]',
    '[class*="catalog-item"]',
]


class BrowserConfig(BaseModel):
    """Headless browser settings."""

    headless: bool = Field(
        default=os.getenv("HEADLESS", "true").lower() == "true",
        description="Whether to run the browser in headless mode",
    )
    executable_path: Optional[str] = Field(
        default=os.getenv("BROWSER_EXECUTABLE_PATH") or None,
        description="Custom Chromium executable (e.g. the one shipped in a container image)",
    )
    launch_args: List[str] = Field(
        default_factory=lambda: list(DEFAULT_LAUNCH_ARGS),
        description="Extra command line flags passed to Chromium",
    )
    viewport_width: int = Field(default=1366, description="Viewport width in pixels")
    viewport_height: int = Field(default=768, description="Viewport height in pixels")
    user_agent: str = Field(
        default=os.getenv("USER_AGENT", DEFAULT_USER_AGENT),
        description="User agent string to use for requests",
    )
    navigation_timeout_ms: int = Field(
        default=int(os.getenv("NAVIGATION_TIMEOUT_MS", "60000")),
        description="Navigation timeout in milliseconds",
    )
    wait_until: str = Field(
        default=os.getenv("NAVIGATION_WAIT_UNTIL", "networkidle"),
        description="Load state that ends navigation (load, domcontentloaded, networkidle, commit)",
    )
    post_navigation_wait_ms: int = Field(
        default=int(os.getenv("POST_NAVIGATION_WAIT_MS", "3000")),
        description="Fixed pause after navigation for script-rendered content",
    )


class ScrollConfig(BaseModel):
    """Lazy-load scrolling settings."""

    step_px: int = Field(default=300, description="Pixels scrolled per tick")
    tick_interval_ms: int = Field(default=100, description="Pause between ticks")
    settle_ms: int = Field(
        default=2000, description="Pause after the last tick for deferred content"
    )


class ExtractionConfig(BaseModel):
    """Selectors and thresholds used by the extraction strategies."""

    # Known-selector scan
    card_selectors: List[str] = Field(
        default_factory=lambda: list(DEFAULT_CARD_SELECTORS),
        description="Product card selectors, tried in order",
    )
    name_selector: str = 'h1, h2, h3, h4, [class*="name"], [class*="title"]'
    description_selector: str = 'p, [class*="description"], [class*="desc"]'
    price_selector: str = '[class*="price"], [class*="Price"]'
    lazy_image_attribute: str = "data-src"
    name_placeholder: str = "Product {index}"

    # Image-anchored scan
    min_image_width: float = 100
    min_image_height: float = 100
    max_ancestor_levels: int = 5
    text_selector: str = "span, p, h1, h2, h3, h4, div"
    max_fragment_length: int = 500
    min_fragments: int = 2

    # Block scan
    block_selector: str = "div"
    min_block_height: float = 150
    max_block_height: float = 600
    min_block_text_length: int = 10
    min_image_block_text_length: int = 5
    block_name_placeholder: str = "No name"
    price_pattern: str = r"[$€£][\d,.]+"

    # Shared
    max_name_length: int = 100
    max_description_length: int = 200


class ServerConfig(BaseModel):
    """HTTP server settings."""

    host: str = Field(default=os.getenv("HOST", "0.0.0.0"), description="Bind host")
    port: int = Field(default=int(os.getenv("PORT", "3000")), description="Bind port")
    log_level: str = Field(
        default=os.getenv("LOG_LEVEL", "INFO").upper(), description="Root logging level"
    )
    static_dir: str = Field(
        default=os.getenv("STATIC_DIR", "./public"),
        description="Directory with the web front-end, served at / when present",
    )
    cors_origins: List[str] = Field(
        default_factory=lambda: ["*"], description="Allowed CORS origins"
    )


class AppConfig(BaseModel):
    """Main application configuration."""

    browser: BrowserConfig = Field(default_factory=BrowserConfig)
    scroll: ScrollConfig = Field(default_factory=ScrollConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)

    def to_dict(self) -> Dict[str, Any]:
        """Convert the configuration to a dictionary."""
        return {
            "browser": self.browser.model_dump(),
            "scroll": self.scroll.model_dump(),
            "extraction": self.extraction.model_dump(),
            "server": self.server.model_dump(),
        }


# Create a singleton instance of the configuration
config = AppConfig()


def get_config() -> AppConfig:
    """Get the global configuration instance."""
    return config
