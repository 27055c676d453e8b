"""Custom supplement API endpoints."""

from typing import Annotated

from fastapi import APIRouter, Depends, status

from src.api.dependencies import get_current_user_id, get_pantry_service
from src.schemas.pantry import (
    CustomSupplementCreate,
    CustomSupplementCreateResponse,
    CustomSupplementListResponse,
    CustomSupplementResponse,
)
from src.services.pantry_service import PantryService

router = APIRouter(prefix="/api/custom-supplements", tags=["custom-supplements"])


@router.post(
    "/add", response_model=CustomSupplementCreateResponse, status_code=status.HTTP_201_CREATED
)
def add_custom_supplement(
    supplement_data: CustomSupplementCreate,
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """Create a supplement that is not in the catalog."""
    supplement = service.add_custom_supplement(
        user_id,
        product_name=supplement_data.product_name,
        brand_name=supplement_data.brand_name,
        upc_sku=supplement_data.upc_sku,
        serving_size=supplement_data.serving_size,
        product_type=supplement_data.product_type,
        description=supplement_data.description,
    )
    return CustomSupplementCreateResponse(
        message="Custom supplement added",
        custom_supplement_id=supplement.id,
    )


@router.get("", response_model=CustomSupplementListResponse)
def list_custom_supplements(
    user_id: Annotated[int, Depends(get_current_user_id)],
    service: Annotated[PantryService, Depends(get_pantry_service)],
):
    """List the user's custom supplements, newest first."""
    supplements = service.list_custom_supplements(user_id)
    return CustomSupplementListResponse(
        custom_supplements=[CustomSupplementResponse.model_validate(s) for s in supplements]
    )
