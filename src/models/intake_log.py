"""Intake log model: one row per dose taken."""

from datetime import UTC, datetime

from sqlalchemy import Column, DateTime, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from src.database import Base


class IntakeLogEntry(Base):
    """Record of a user taking a dose of a supplement at a point in time."""

    __tablename__ = "supplement_tracking"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(Integer, ForeignKey("users.id"), nullable=False, index=True)
    # Catalog product id when source is "pantry", CustomSupplement.id when "custom"
    supplement_id = Column(Integer, nullable=True)
    supplement_name = Column(String(500), nullable=False)
    brand_name = Column(String(255), nullable=True)
    dosage = Column(String(50), nullable=False)
    unit = Column(String(20), nullable=False)
    taken_at = Column(DateTime(timezone=True), nullable=False, index=True)
    notes = Column(Text, nullable=True)
    source = Column(String(20), nullable=False, default="pantry")
    created_at = Column(DateTime(timezone=True), default=lambda: datetime.now(UTC), nullable=False)

    # Relationships
    user = relationship("User", backref="intake_log")
