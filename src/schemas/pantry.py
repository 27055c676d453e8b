"""Pantry and custom supplement schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field

from src.models.enums import SupplementSource
from src.schemas.base import CamelModel


class PantryItemCreate(CamelModel):
    """Add a catalog product to the pantry."""

    product_id: int = Field(..., gt=0)
    product_name: str = Field(..., min_length=1, max_length=500)
    brand_name: str | None = Field(None, max_length=255)
    upc_sku: str | None = Field(None, max_length=100)
    serving_size: str | None = Field(None, max_length=100)
    quantity: int = Field(1, ge=1)


class PantryItemCreateResponse(CamelModel):
    """Result of adding to the pantry."""

    message: str
    pantry_id: int


class PantryEntryResponse(CamelModel):
    """One row of the combined pantry listing."""

    source: SupplementSource
    id: int
    user_id: int
    product_id: int
    product_name: str
    brand_name: str | None
    upc_sku: str | None
    serving_size: str | None
    quantity: int
    added_at: datetime


class PantryListResponse(CamelModel):
    """Combined pantry listing."""

    pantry: list[PantryEntryResponse]


class CustomSupplementCreate(CamelModel):
    """Create a custom supplement."""

    product_name: str = Field(..., min_length=1, max_length=500)
    brand_name: str | None = Field(None, max_length=255)
    upc_sku: str | None = Field(None, max_length=100)
    serving_size: str | None = Field(None, max_length=100)
    product_type: str | None = Field(None, max_length=100)
    description: str | None = None


class CustomSupplementResponse(CamelModel):
    """Custom supplement response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    product_name: str
    brand_name: str | None
    upc_sku: str | None
    serving_size: str | None
    product_type: str | None
    description: str | None
    added_at: datetime


class CustomSupplementCreateResponse(CamelModel):
    """Result of creating a custom supplement."""

    message: str
    custom_supplement_id: int


class CustomSupplementListResponse(CamelModel):
    """A user's custom supplements."""

    custom_supplements: list[CustomSupplementResponse]
