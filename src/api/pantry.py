"""Pantry API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query, status

from src.api.dependencies import get_current_user_id, get_pantry_service
from src.models.enums import SupplementSource
from src.schemas.base import MessageResponse
from src.schemas.pantry import (
    PantryEntryResponse,
    PantryItemCreate,
    PantryItemCreateResponse,
    PantryListResponse,
)
from src.services.pantry_service import PantryService

router = APIRouter(prefix="/api/pantry", tags=["pantry"])


@router.get("", response_model=PantryListResponse)
def list_pantry(
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """List catalog products and custom supplements in the user's pantry."""
    entries = service.list_pantry(user_id)
    return PantryListResponse(pantry=[PantryEntryResponse(**entry) for entry in entries])


@router.post("/add", response_model=PantryItemCreateResponse, status_code=status.HTTP_201_CREATED)
def add_to_pantry(
    item_data: PantryItemCreate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Add a catalog product to the pantry (re-adding replaces the existing entry)."""
    item = service.add_item(
        user_id,
        product_id=item_data.product_id,
        product_name=item_data.product_name,
        brand_name=item_data.brand_name,
        upc_sku=item_data.upc_sku,
        serving_size=item_data.serving_size,
        quantity=item_data.quantity,
    )
    return PantryItemCreateResponse(message="Product added to pantry", pantry_id=item.id)


@router.delete("/{product_id}", response_model=MessageResponse)
def remove_from_pantry(
    product_id: int,
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
    source: Annotated[SupplementSource, Query()] = SupplementSource.PANTRY,
):
    """Remove a pantry product, or a custom supplement when source=custom."""
    service.remove_item(user_id, product_id, source)
    if source == SupplementSource.CUSTOM:
        return MessageResponse(message="Custom supplement removed")
    return MessageResponse(message="Product removed from pantry")
