"""Pantry item model for catalog products a user tracks."""

from sqlalchemy import (
    CheckConstraint,
    Column,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
)
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import AddedAtMixin


class PantryItem(Base, AddedAtMixin):
    """A catalog product in a user's pantry.

    Product fields are copied from the catalog when the item is added so the
    pantry can be listed without reading the catalog again.
    """

    __tablename__ = "user_pantry"
    __table_args__ = (
        UniqueConstraint("user_id", "product_id", name="uq_pantry_user_product"),
        CheckConstraint("quantity >= 1", name="ck_pantry_quantity_positive"),
    )

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_id = Column(Integer, nullable=False)  # Catalog (DSLD) product id
    product_name = Column(String(500), nullable=False)
    brand_name = Column(String(255), nullable=True)
    upc_sku = Column(String(100), nullable=True)
    serving_size = Column(String(100), nullable=True)
    quantity = Column(Integer, nullable=False, default=1)

    # Relationships
    user = relationship("User", backref="pantry_items")
