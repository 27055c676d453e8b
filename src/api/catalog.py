"""DSLD catalog search endpoint."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from src.schemas.catalog import CatalogProductResponse, CatalogSearchResponse
from src.services.catalog import ProductCatalog, get_catalog
from src.services.errors import ValidationError

router = APIRouter(prefix="/api/dsld", tags=["catalog"])


@router.get("/search", response_model=CatalogSearchResponse)
def search_catalog(
    catalog: Annotated[ProductCatalog, Depends(get_catalog)],
    query: Annotated[str, Query()] = "",
):
    """Free-text search over product name, brand and UPC."""
    if len(query.strip()) < 2:
        raise ValidationError("Search query must be at least 2 characters long")

    products = catalog.search(query)
    return CatalogSearchResponse(
        results=[CatalogProductResponse.model_validate(product) for product in products]
    )
