"""Custom supplement model for products that are not in the catalog."""

from sqlalchemy import Column, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base
from src.models.mixins import AddedAtMixin


class CustomSupplement(Base, AddedAtMixin):
    """User-authored product descriptor."""

    __tablename__ = "custom_supplements"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    product_name = Column(String(500), nullable=False)
    brand_name = Column(String(255), nullable=True)
    upc_sku = Column(String(100), nullable=True)
    serving_size = Column(String(100), nullable=True)
    product_type = Column(String(100), nullable=True)
    description = Column(Text, nullable=True)

    # Relationships
    user = relationship("User", backref="custom_supplements")
