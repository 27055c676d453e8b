"""Duplicate check schemas."""

from pydantic import ConfigDict, Field

from src.models.enums import ProductSource
from src.schemas.base import CamelModel


class DuplicateCheckRequest(CamelModel):
    """Candidate product to check before adding it."""

    product_name: str = Field(..., min_length=1, max_length=500)
    brand_name: str | None = Field(None, max_length=255)
    upc_sku: str | None = Field(None, max_length=100)


class DuplicateResponse(CamelModel):
    """A known product that resembles the candidate."""

    model_config = ConfigDict(from_attributes=True)

    source: ProductSource
    product_id: int
    product_name: str
    brand_name: str | None
    upc_sku: str | None
    serving_size: str | None
    product_type: str | None


class DuplicateCheckResponse(CamelModel):
    """Duplicate check result."""

    has_duplicates: bool
    duplicates: list[DuplicateResponse]
    message: str
