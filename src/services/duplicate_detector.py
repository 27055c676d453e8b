"""Duplicate detection for supplements a user is about to add."""

import logging
from dataclasses import dataclass

from sqlalchemy.orm import Session

from src.config import get_settings
from src.models.custom_supplement import CustomSupplement
from src.models.enums import ProductSource
from src.services.catalog import ProductCatalog
from src.services.similarity import similarity

logger = logging.getLogger(__name__)

# Catalog matches are labelled by origin rather than by their LanguaL category
CATALOG_PRODUCT_TYPE = "DSLD Database"


@dataclass
class DuplicateMatch:
    """A known product that looks like the candidate."""

    source: ProductSource
    product_id: int
    product_name: str
    brand_name: str | None
    upc_sku: str | None
    serving_size: str | None
    product_type: str | None


def _normalize(value: str | None) -> str:
    return (value or "").strip().lower()


def is_likely_duplicate(
    candidate_name: str,
    candidate_brand: str | None,
    candidate_upc: str | None,
    known_name: str,
    known_brand: str | None,
    known_upc: str | None,
    name_threshold: float,
    brand_threshold: float,
) -> bool:
    """Decide whether a known product duplicates the candidate.

    An exact UPC match (trimmed, case-insensitive) is always a duplicate.
    Otherwise the names must be more similar than name_threshold, and when
    both sides carry a brand the brands must be more similar than
    brand_threshold as well.
    """
    upc = _normalize(candidate_upc)
    if upc and upc == _normalize(known_upc):
        return True

    if similarity(_normalize(candidate_name), _normalize(known_name)) <= name_threshold:
        return False

    brand = _normalize(candidate_brand)
    other_brand = _normalize(known_brand)
    if brand and other_brand:
        return similarity(brand, other_brand) > brand_threshold
    return True


class DuplicateDetector:
    """Compare a candidate product against the catalog and the user's custom supplements."""

    def __init__(
        self,
        db: Session,
        catalog: ProductCatalog,
        name_threshold: float | None = None,
        brand_threshold: float | None = None,
    ):
        settings = get_settings()
        self.db = db
        self.catalog = catalog
        self.name_threshold = (
            settings.duplicate_name_threshold if name_threshold is None else name_threshold
        )
        self.brand_threshold = (
            settings.duplicate_brand_threshold if brand_threshold is None else brand_threshold
        )

    def find_duplicates(
        self,
        user_id: int,
        product_name: str,
        brand_name: str | None = None,
        upc_sku: str | None = None,
    ) -> list[DuplicateMatch]:
        """Return every known product that likely duplicates the candidate.

        Catalog matches come first, then the user's custom supplements.
        """
        matches = self._catalog_matches(product_name, brand_name, upc_sku)
        matches.extend(self._custom_matches(user_id, product_name, brand_name, upc_sku))

        if matches:
            logger.info(f"Found {len(matches)} possible duplicate(s) for '{product_name}'")
        return matches

    def _is_match(self, name, brand, upc, known_name, known_brand, known_upc) -> bool:
        return is_likely_duplicate(
            name,
            brand,
            upc,
            known_name,
            known_brand,
            known_upc,
            self.name_threshold,
            self.brand_threshold,
        )

    def _catalog_matches(
        self, product_name: str, brand_name: str | None, upc_sku: str | None
    ) -> list[DuplicateMatch]:
        if not self.catalog.is_available:
            logger.warning("DSLD catalog not available; checking custom supplements only")
            return []

        return [
            DuplicateMatch(
                source=ProductSource.CATALOG,
                product_id=product.id,
                product_name=product.full_name,
                brand_name=product.brand_name,
                upc_sku=product.upc_sku,
                serving_size=product.serving_size,
                product_type=CATALOG_PRODUCT_TYPE,
            )
            for product in self.catalog.iter_products()
            if self._is_match(
                product_name,
                brand_name,
                upc_sku,
                product.full_name,
                product.brand_name,
                product.upc_sku,
            )
        ]

    def _custom_matches(
        self,
        user_id: int,
        product_name: str,
        brand_name: str | None,
        upc_sku: str | None,
    ) -> list[DuplicateMatch]:
        supplements = (
            self.db.query(CustomSupplement).filter(CustomSupplement.user_id == user_id).all()
        )
        return [
            DuplicateMatch(
                source=ProductSource.CUSTOM,
                product_id=supplement.id,
                product_name=supplement.product_name,
                brand_name=supplement.brand_name,
                upc_sku=supplement.upc_sku,
                serving_size=supplement.serving_size,
                product_type=supplement.product_type,
            )
            for supplement in supplements
            if self._is_match(
                product_name,
                brand_name,
                upc_sku,
                supplement.product_name,
                supplement.brand_name,
                supplement.upc_sku,
            )
        ]
