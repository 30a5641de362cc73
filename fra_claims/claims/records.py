"""Claim records built from recognition output."""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import StrEnum
from typing import Any

from fra_claims.ocr.models import FamilyMember, RecognitionResult
from fra_claims.utils.logger import get_logger

logger = get_logger(__name__)

_FORM_FIELDS = (
    "spouse_name",
    "father_mother_name",
    "address",
    "gram_panchayat",
    "tehsil_taluka",
    "district",
    "state",
    "scheduled_tribe",
    "scheduled_tribe_certificate",
    "other_traditional_forest_dweller",
    "spouse_scheduled_tribe",
    "land_for_habitation",
    "land_for_self_cultivation",
    "disputed_lands",
    "pattas_leases_grants",
    "land_for_rehabilitation_alternative",
    "land_displaced_without_compensation",
    "survey_number",
)


class ClaimStatus(StrEnum):
    """Review state of a claim."""

    PENDING = "pending"
    APPROVED = "approved"
    REJECTED = "rejected"
    REVIEW_REQUIRED = "review_required"


@dataclass
class ClaimRecord:
    """A claim as handed to the persistence layer."""

    claim_id: str
    claimant_name: str
    village: str
    area: float
    status: ClaimStatus = ClaimStatus.PENDING
    spouse_name: str | None = None
    father_mother_name: str | None = None
    address: str | None = None
    gram_panchayat: str | None = None
    tehsil_taluka: str | None = None
    district: str | None = None
    state: str | None = None
    scheduled_tribe: str | None = None
    scheduled_tribe_certificate: str | None = None
    other_traditional_forest_dweller: str | None = None
    spouse_scheduled_tribe: str | None = None
    family_members: list[FamilyMember] = field(default_factory=list)
    land_for_habitation: float = 0.0
    land_for_self_cultivation: float = 0.0
    disputed_lands: float = 0.0
    pattas_leases_grants: float = 0.0
    land_for_rehabilitation_alternative: float = 0.0
    land_displaced_without_compensation: float = 0.0
    survey_number: str | None = None
    ocr_confidence: int | None = None
    raw_ocr_text: str | None = None
    boundary_geometry: dict[str, Any] | None = None
    created_at: datetime | None = None


def parse_area(value: str | float | None) -> float:
    """Parse a recognized area string, returning 0.0 when unreadable."""
    if value is None:
        return 0.0
    try:
        return float(value)
    except (TypeError, ValueError):
        logger.debug("Unreadable area value %r", value)
        return 0.0


def build_claim_record(
    result: RecognitionResult,
    boundary: dict[str, Any] | None = None,
    status: ClaimStatus = ClaimStatus.PENDING,
    created_at: datetime | None = None,
) -> ClaimRecord:
    """Create a claim record from a recognition result.

    Every form field is carried over; the area string is parsed to
    hectares and the transcript is kept as the raw OCR text.

    Args:
        result: Recognized (and possibly corrected) claim fields.
        boundary: Optional GeoJSON boundary for the parcel.
        status: Initial review status.
        created_at: Creation time; defaults to now in UTC.

    Returns:
        The new claim record.
    """
    return ClaimRecord(
        claim_id=result.claim_id,
        claimant_name=result.claimant_name,
        village=result.village,
        area=parse_area(result.area),
        status=status,
        family_members=list(result.family_members),
        ocr_confidence=result.confidence,
        raw_ocr_text=result.raw_text,
        boundary_geometry=boundary,
        created_at=created_at or datetime.now(timezone.utc),
        **{name: getattr(result, name) for name in _FORM_FIELDS},
    )
