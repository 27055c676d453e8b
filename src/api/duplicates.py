"""Duplicate check endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends

from src.api.dependencies import get_current_user_id, get_duplicate_detector
from src.schemas.duplicates import DuplicateCheckRequest, DuplicateCheckResponse, DuplicateResponse
from src.services.duplicate_detector import DuplicateDetector

router = APIRouter(prefix="/api", tags=["duplicates"])


@router.post("/check-duplicates", response_model=DuplicateCheckResponse)
def check_duplicates(
    candidate: DuplicateCheckRequest,
    user_id: Annotated[int, Depends(get_current_user_id)],
    detector: Annotated[DuplicateDetector, Depends(get_duplicate_detector)],
):
    """Look for catalog products or custom supplements resembling the candidate."""
    matches = detector.find_duplicates(
        user_id,
        product_name=candidate.product_name,
        brand_name=candidate.brand_name,
        upc_sku=candidate.upc_sku,
    )

    if matches:
        message = f"Found {len(matches)} similar product(s)"
    else:
        message = "No duplicates found"

    return DuplicateCheckResponse(
        has_duplicates=bool(matches),
        duplicates=[DuplicateResponse.model_validate(match) for match in matches],
        message=message,
    )
