"""Supplement intake logging."""

import logging
from datetime import UTC, date, datetime, time, timedelta
from decimal import Decimal, InvalidOperation

from sqlalchemy.orm import Session

from src.models.enums import DosageUnit, SupplementSource
from src.models.intake_log import IntakeLogEntry
from src.services.errors import NotFoundError, ValidationError

logger = logging.getLogger(__name__)


def to_utc(value: datetime) -> datetime:
    """Normalize a timestamp to UTC, treating naive values as already UTC."""
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def _validate_dosage(dosage: str) -> str:
    dosage = dosage.strip()
    try:
        amount = Decimal(dosage)
    except InvalidOperation:
        raise ValidationError("Dosage must be a number") from None
    if not amount.is_finite() or amount <= 0:
        raise ValidationError("Dosage must be a positive number")
    return dosage


class TrackingService:
    """Log, list and delete supplement intake entries."""

    def __init__(self, db: Session):
        self.db = db

    def log_intake(
        self,
        user_id: int,
        supplement_name: str,
        dosage: str,
        unit: DosageUnit,
        taken_at: datetime,
        supplement_id: int | None = None,
        brand_name: str | None = None,
        notes: str | None = None,
        source: SupplementSource = SupplementSource.PANTRY,
    ) -> IntakeLogEntry:
        """Record that a user took a dose of a supplement."""
        if not supplement_name or not supplement_name.strip():
            raise ValidationError("Supplement name is required")

        entry = IntakeLogEntry(
            user_id=user_id,
            supplement_id=supplement_id,
            supplement_name=supplement_name.strip(),
            brand_name=brand_name,
            dosage=_validate_dosage(dosage),
            unit=DosageUnit(unit).value,
            taken_at=to_utc(taken_at),
            notes=notes,
            source=SupplementSource(source).value,
        )
        self.db.add(entry)
        self.db.commit()
        self.db.refresh(entry)
        logger.info(f"Logged intake of '{entry.supplement_name}' for user {user_id}")
        return entry

    def list_intake(
        self,
        user_id: int,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[IntakeLogEntry]:
        """List a user's intake entries, newest first.

        start_date and end_date are inclusive and compared with the UTC
        calendar date of taken_at. Either bound may be omitted.
        """
        if start_date and end_date and start_date > end_date:
            raise ValidationError("startDate must be on or before endDate")

        query = self.db.query(IntakeLogEntry).filter(IntakeLogEntry.user_id == user_id)
        if start_date:
            query = query.filter(
                IntakeLogEntry.taken_at >= datetime.combine(start_date, time.min, tzinfo=UTC)
            )
        if end_date:
            next_day = end_date + timedelta(days=1)
            query = query.filter(
                IntakeLogEntry.taken_at < datetime.combine(next_day, time.min, tzinfo=UTC)
            )

        return query.order_by(IntakeLogEntry.taken_at.desc(), IntakeLogEntry.id.desc()).all()

    def delete_intake(self, user_id: int, entry_id: int) -> None:
        """Delete one of the user's entries; other users' entries never match."""
        deleted = (
            self.db.query(IntakeLogEntry)
            .filter(IntakeLogEntry.id == entry_id, IntakeLogEntry.user_id == user_id)
            .delete(synchronize_session=False)
        )
        self.db.commit()
        if deleted == 0:
            raise NotFoundError("Tracking entry not found")
