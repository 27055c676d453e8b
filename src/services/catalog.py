"""Read-only access to the bundled DSLD supplement catalog.

The catalog is a directory of JSON files, one product per file, as exported by
the NIH Dietary Supplement Label Database. Files are read at query time.
"""

import json
import logging
from collections.abc import Iterator
from dataclasses import dataclass
from pathlib import Path

from src.config import get_settings
from src.services.errors import ServiceError

logger = logging.getLogger(__name__)

NOT_AVAILABLE = "N/A"


class CatalogUnavailableError(ServiceError):
    """The catalog directory is missing."""


@dataclass
class CatalogProduct:
    """The subset of a DSLD label the application uses."""

    id: int
    full_name: str
    brand_name: str | None
    upc_sku: str | None
    serving_size: str
    product_type: str

    @classmethod
    def from_label(cls, label: dict) -> "CatalogProduct":
        """Build a product from a raw DSLD label document.

        Raises TypeError when the document is not a JSON object.
        """
        if not isinstance(label, dict):
            raise TypeError(f"expected a JSON object, got {type(label).__name__}")

        serving_sizes = label.get("servingSizes") or []
        serving_size = NOT_AVAILABLE
        if serving_sizes and isinstance(serving_sizes[0], dict):
            serving_size = serving_sizes[0].get("unit") or NOT_AVAILABLE

        product_type = label.get("productType")
        if isinstance(product_type, dict):
            product_type = product_type.get("langualCodeDescription")
        elif not isinstance(product_type, str):
            product_type = None

        return cls(
            id=int(label["id"]),
            full_name=label.get("fullName") or "",
            brand_name=label.get("brandName"),
            upc_sku=label.get("upcSku"),
            serving_size=serving_size,
            product_type=product_type or NOT_AVAILABLE,
        )


class ProductCatalog:
    """Free-text search over the DSLD JSON export."""

    def __init__(self, data_dir: str | Path):
        self.data_dir = Path(data_dir)

    @property
    def is_available(self) -> bool:
        """Check if the catalog directory exists."""
        return self.data_dir.is_dir()

    def iter_products(self) -> Iterator[CatalogProduct]:
        """Yield every readable product in the catalog.

        Unreadable or malformed files are logged and skipped.
        """
        if not self.is_available:
            raise CatalogUnavailableError("DSLD database not found")

        for path in sorted(self.data_dir.glob("*.json")):
            try:
                label = json.loads(path.read_text(encoding="utf-8"))
                yield CatalogProduct.from_label(label)
            except (OSError, ValueError, KeyError, TypeError, AttributeError) as e:
                logger.warning(f"Skipping unreadable catalog file {path.name}: {e}")

    def search(self, query: str, limit: int | None = None) -> list[CatalogProduct]:
        """Find products whose name, brand or UPC contains the query (case-insensitive)."""
        limit = limit or get_settings().dsld_search_limit
        term = query.strip().lower()

        results = []
        for product in self.iter_products():
            haystacks = (product.full_name, product.brand_name or "", product.upc_sku or "")
            if any(term in value.lower() for value in haystacks):
                results.append(product)
                if len(results) >= limit:
                    break
        return results


def get_catalog() -> ProductCatalog:
    """Get the catalog configured by DSLD_DATA_DIR."""
    return ProductCatalog(get_settings().dsld_data_dir)
