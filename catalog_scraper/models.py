"""
Pydantic models for catalog scraping results.
"""

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field


class ProductRecord(BaseModel):
    """A single product found on a catalog page."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        json_schema_extra={
            "example": {
                "name": "Shoe",
                "description": "Red shoe",
                "price": "$19.99",
                "imageUrl": "https://example.com/images/shoe.png",
            }
        },
    )

    name: str = Field(..., min_length=1, description="Product name or a placeholder")
    description: str = Field("", description="Product description, bounded length")
    price: str = Field("", description="Price text exactly as rendered on the page")
    image_url: str = Field("", alias="imageUrl", description="Product image URL")


class ScrapeResult(BaseModel):
    """Successful scrape response."""

    model_config = ConfigDict(populate_by_name=True)

    success: Literal[True] = True
    url: str = Field(..., description="Catalog URL as supplied by the caller")
    total_products: int = Field(..., alias="totalProducts")
    products: List[ProductRecord] = Field(default_factory=list)
    scraped_at: str = Field(..., alias="scrapedAt")


class ScrapeFailure(BaseModel):
    """Failed scrape response."""

    success: Literal[False] = False
    error: str


class ExportEnvelope(BaseModel):
    """JSON export payload."""

    model_config = ConfigDict(populate_by_name=True)

    exported_at: str = Field(..., alias="exportedAt")
    total_products: int = Field(..., alias="totalProducts")
    products: List[Dict[str, Any]] = Field(
        default_factory=list, description="Products exactly as posted by the client"
    )
