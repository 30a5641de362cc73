"""Result types produced by the mock FORM-A recognition engine."""

from dataclasses import asdict, dataclass, field, fields
from typing import Any


@dataclass(frozen=True)
class FamilyMember:
    """A household member listed on a claim form."""

    name: str
    age: int
    relation: str


@dataclass(frozen=True)
class RecognitionResult:
    """Structured fields recognized from a FORM-A claim document.

    Land sub-amounts are in hectares. ``area`` is the total claimed area
    kept as a decimal string, and ``confidence`` is an integer percent.
    """

    claimant_name: str
    village: str
    claim_id: str
    area: str
    raw_text: str
    confidence: int
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
    family_members: tuple[FamilyMember, ...] = ()
    land_for_habitation: float = 0.0
    land_for_self_cultivation: float = 0.0
    disputed_lands: float = 0.0
    pattas_leases_grants: float = 0.0
    land_for_rehabilitation_alternative: float = 0.0
    land_displaced_without_compensation: float = 0.0
    survey_number: str | None = None

    @classmethod
    def field_names(cls) -> set[str]:
        return {f.name for f in fields(cls)}

    def to_dict(self) -> dict[str, Any]:
        """Return a JSON-ready mapping of all fields."""
        data = asdict(self)
        data["family_members"] = [asdict(m) for m in self.family_members]
        return data


@dataclass
class EntityCandidates:
    """Candidate values found by the label-anchored entity patterns."""

    villages: list[str] = field(default_factory=list)
    names: list[str] = field(default_factory=list)
    areas: list[str] = field(default_factory=list)
    ids: list[str] = field(default_factory=list)
