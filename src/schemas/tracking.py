"""Supplement intake tracking schemas."""

from datetime import datetime

from pydantic import ConfigDict, Field, field_validator

from src.models.enums import DosageUnit, SupplementSource
from src.schemas.base import CamelModel


class IntakeLogCreate(CamelModel):
    """Log a dose."""

    supplement_id: int | None = None
    supplement_name: str = Field(..., min_length=1, max_length=500)
    brand_name: str | None = Field(None, max_length=255)
    dosage: str = Field(..., min_length=1, max_length=50)
    unit: DosageUnit
    taken_at: datetime
    notes: str | None = None
    source: SupplementSource = SupplementSource.PANTRY

    @field_validator("dosage", mode="before")
    @classmethod
    def dosage_as_text(cls, value):
        """Accept JSON numbers as well as numeric strings."""
        if isinstance(value, int | float) and not isinstance(value, bool):
            return str(value)
        return value


class IntakeLogResponse(CamelModel):
    """Intake log entry response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    supplement_id: int | None
    supplement_name: str
    brand_name: str | None
    dosage: str
    unit: DosageUnit
    taken_at: datetime
    notes: str | None
    source: SupplementSource
    created_at: datetime


class IntakeLogCreateResponse(CamelModel):
    """Result of logging a dose."""

    message: str
    tracking_id: int


class IntakeLogListResponse(CamelModel):
    """Intake entries, newest first."""

    tracking: list[IntakeLogResponse]
