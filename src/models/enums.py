"""Enums for model fields."""

from enum import StrEnum


class SupplementSource(StrEnum):
    """Which table a supplement reference points into."""

    PANTRY = "pantry"
    CUSTOM = "custom"


class DosageUnit(StrEnum):
    """Units accepted for an intake log dosage."""

    MG = "mg"
    G = "g"
    MCG = "mcg"
    IU = "IU"
    CAPSULE = "capsule"
    TABLET = "tablet"
    SERVING = "serving"


class ProductSource(StrEnum):
    """Where a known product descriptor came from during duplicate detection."""

    CATALOG = "dsld"
    CUSTOM = "custom"
