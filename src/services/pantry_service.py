"""Pantry service: catalog products and custom supplements a user tracks."""

import logging
from datetime import UTC, datetime
from typing import Any

from sqlalchemy.orm import Session

from src.models.custom_supplement import CustomSupplement
from src.models.enums import SupplementSource
from src.models.pantry import PantryItem
from src.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def _sort_key(added_at: datetime | None) -> datetime:
    # SQLite returns naive datetimes; everything is stored in UTC
    if added_at is None:
        return datetime.min.replace(tzinfo=UTC)
    if added_at.tzinfo is None:
        return added_at.replace(tzinfo=UTC)
    return added_at


class PantryService:
    """Service for pantry-related operations."""

    def __init__(self, db: Session):
        self.db = db

    def list_pantry(self, user_id: int) -> list[dict[str, Any]]:
        """List pantry items and custom supplements together, newest first.

        Each entry is tagged with its source. Custom supplements report their
        own id as product_id and a quantity of 1.
        """
        pantry_items = self.db.query(PantryItem).filter(PantryItem.user_id == user_id).all()
        custom_supplements = (
            self.db.query(CustomSupplement).filter(CustomSupplement.user_id == user_id).all()
        )

        entries = [
            {
                "source": SupplementSource.PANTRY,
                "id": item.id,
                "user_id": item.user_id,
                "product_id": item.product_id,
                "product_name": item.product_name,
                "brand_name": item.brand_name,
                "upc_sku": item.upc_sku,
                "serving_size": item.serving_size,
                "quantity": item.quantity,
                "added_at": item.added_at,
            }
            for item in pantry_items
        ]
        entries.extend(
            {
                "source": SupplementSource.CUSTOM,
                "id": supplement.id,
                "user_id": supplement.user_id,
                "product_id": supplement.id,
                "product_name": supplement.product_name,
                "brand_name": supplement.brand_name,
                "upc_sku": supplement.upc_sku,
                "serving_size": supplement.serving_size,
                "quantity": 1,
                "added_at": supplement.added_at,
            }
            for supplement in custom_supplements
        )

        entries.sort(key=lambda entry: _sort_key(entry["added_at"]), reverse=True)
        return entries

    def add_item(
        self,
        user_id: int,
        product_id: int,
        product_name: str,
        brand_name: str | None = None,
        upc_sku: str | None = None,
        serving_size: str | None = None,
        quantity: int = 1,
    ) -> PantryItem:
        """Add a catalog product to the pantry, replacing any existing row for it."""
        if quantity < 1:
            raise ValidationError("Quantity must be at least 1")

        item = (
            self.db.query(PantryItem)
            .filter(PantryItem.user_id == user_id, PantryItem.product_id == product_id)
            .first()
        )

        if item:
            logger.info(f"Replacing pantry product {product_id} for user {user_id}")
        else:
            item = PantryItem(user_id=user_id, product_id=product_id)
            self.db.add(item)

        item.product_name = product_name
        item.brand_name = brand_name
        item.upc_sku = upc_sku
        item.serving_size = serving_size
        item.quantity = quantity
        item.added_at = datetime.now(UTC)

        self.db.commit()
        self.db.refresh(item)
        return item

    def remove_item(
        self,
        user_id: int,
        product_id: int,
        source: SupplementSource = SupplementSource.PANTRY,
    ) -> None:
        """Remove a pantry product or a custom supplement.

        For source "pantry" product_id is the catalog id; for "custom" it is the
        custom supplement's own id.
        """
        if source == SupplementSource.CUSTOM:
            deleted = (
                self.db.query(CustomSupplement)
                .filter(CustomSupplement.user_id == user_id, CustomSupplement.id == product_id)
                .delete(synchronize_session=False)
            )
            missing_message = "Custom supplement not found"
        else:
            deleted = (
                self.db.query(PantryItem)
                .filter(PantryItem.user_id == user_id, PantryItem.product_id == product_id)
                .delete(synchronize_session=False)
            )
            missing_message = "Product not found in pantry"

        self.db.commit()
        if deleted == 0:
            raise NotFoundError(missing_message)

    def add_custom_supplement(
        self,
        user_id: int,
        product_name: str,
        brand_name: str | None = None,
        upc_sku: str | None = None,
        serving_size: str | None = None,
        product_type: str | None = None,
        description: str | None = None,
    ) -> CustomSupplement:
        """Create a user-authored supplement."""
        if not product_name or not product_name.strip():
            raise ValidationError("Product name is required")

        supplement = CustomSupplement(
            user_id=user_id,
            product_name=product_name.strip(),
            brand_name=brand_name,
            upc_sku=upc_sku,
            serving_size=serving_size,
            product_type=product_type,
            description=description,
        )
        self.db.add(supplement)
        self.db.commit()
        self.db.refresh(supplement)
        return supplement

    def list_custom_supplements(self, user_id: int) -> list[CustomSupplement]:
        """List a user's custom supplements, newest first."""
        return (
            self.db.query(CustomSupplement)
            .filter(CustomSupplement.user_id == user_id)
            .order_by(CustomSupplement.added_at.desc(), CustomSupplement.id.desc())
            .all()
        )
