"""
FastAPI application for the catalog scraper.
"""

import logging
import os
from contextlib import asynccontextmanager
from typing import Any, Optional

import uvicorn
from fastapi import Depends, FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles
from pydantic import BaseModel

from ..config import get_config
from ..extraction.catalog_extractor import CatalogScraper
from ..models import ScrapeFailure, ScrapeResult
from ..processing.assembler import utc_timestamp
from .export import router as export_router

# Setup logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    app.state.scraper = None
    yield
    # Shut the shared browser down with the server
    if app.state.scraper is not None:
        await app.state.scraper.close()
        app.state.scraper = None
        logger.info("Scraper closed")


# Create FastAPI app
app = FastAPI(
    title="Catalog Scraper API",
    description="API for extracting products from public WhatsApp Business catalogs",
    version="0.1.0",
    lifespan=lifespan,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=get_config().server.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(export_router)


class ScrapeRequest(BaseModel):
    # Any JSON value; the handler rejects non-strings with a 400
    url: Optional[Any] = None


async def get_scraper(request: Request) -> CatalogScraper:
    """Return the shared scraper, creating it on first use."""
    scraper = getattr(request.app.state, "scraper", None)
    if scraper is None:
        scraper = CatalogScraper()
        request.app.state.scraper = scraper
        logger.info("Scraper initialized")
    return scraper


def _bad_request(error: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content=ScrapeFailure(error=error).model_dump(),
    )


# Routes
@app.get("/health")
async def health():
    """Liveness probe."""
    return {"status": "ok", "timestamp": utc_timestamp()}


@app.post(
    "/api/scrape",
    response_model=ScrapeResult,
    response_model_by_alias=True,
    responses={400: {"model": ScrapeFailure}, 500: {"model": ScrapeFailure}},
)
async def scrape_catalog(
    request: Optional[ScrapeRequest] = None, scraper=Depends(get_scraper)
):
    """Extract the products of a catalog."""
    url = request.url if request is not None else None
    if not url:
        return _bad_request("URL is required")
    if not isinstance(url, str):
        return _bad_request("URL must be a string")

    try:
        return await scraper.scrape_catalog(url)
    except Exception as e:
        logger.error(f"Error scraping catalog: {str(e)}")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ScrapeFailure(error=str(e)).model_dump(),
        )


# Front-end, mounted last so API routes take precedence
_static_dir = get_config().server.static_dir
if os.path.isdir(_static_dir):
    app.mount("/", StaticFiles(directory=_static_dir, html=True), name="static")


def start_server(host: str = "0.0.0.0", port: int = 3000, reload: bool = False):
    """Start the FastAPI server using uvicorn."""
    try:
        uvicorn.run(
            "catalog_scraper.api.app:app",
            host=host,
            port=port,
            reload=reload,
        )
    except Exception as e:
        logger.error(f"Failed to start server: {str(e)}")
        raise
