"""
Command-line entry point for the catalog scraper API server.

Defaults come from ``ServerConfig`` (``HOST``, ``PORT``, ``LOG_LEVEL`` or
``.env``); flags override them for a single run.
"""

import argparse
import logging
import sys
from typing import List, Optional

from ..config import ServerConfig, get_config
from .app import start_server

logger = logging.getLogger(__name__)

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]


def build_parser(server: ServerConfig) -> argparse.ArgumentParser:
    """Build the argument parser with defaults taken from the server config."""
    parser = argparse.ArgumentParser(
        description="Serve catalog scraping and CSV/JSON export over HTTP"
    )
    parser.add_argument("--host", default=server.host, help=f"Bind host (default: {server.host})")
    parser.add_argument(
        "--port", type=int, default=server.port, help=f"Bind port (default: {server.port})"
    )
    parser.add_argument("--reload", action="store_true", help="Reload on code changes")
    parser.add_argument(
        "--log-level",
        type=str.upper,
        choices=LOG_LEVELS,
        default=server.log_level,
        help=f"Root logging level (default: {server.log_level})",
    )
    return parser


def main(args: Optional[List[str]] = None) -> int:
    """Start the API server; returns the process exit code."""
    parsed = build_parser(get_config().server).parse_args(args)

    logging.basicConfig(
        level=getattr(logging, parsed.log_level),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    logging.getLogger().setLevel(parsed.log_level)
    logger.info(f"Serving catalog scraper API on http://{parsed.host}:{parsed.port}")

    try:
        start_server(host=parsed.host, port=parsed.port, reload=parsed.reload)
    except KeyboardInterrupt:
        logger.info("Server stopped by user")
    except Exception as e:
        logger.error(f"Error starting server: {e}", exc_info=True)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
