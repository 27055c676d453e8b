"""Catalog search schemas."""

from pydantic import ConfigDict

from src.schemas.base import CamelModel


class CatalogProductResponse(CamelModel):
    """Catalog product summary."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    full_name: str
    brand_name: str | None
    upc_sku: str | None
    serving_size: str
    product_type: str


class CatalogSearchResponse(CamelModel):
    """Catalog search results."""

    results: list[CatalogProductResponse]
