"""Pydantic request/response schemas for the FastAPI endpoints."""

from pydantic import BaseModel, Field


class FamilyMemberResponse(BaseModel):
    """Response schema for a household member on a claim."""

    name: str
    age: int
    relation: str


class RecognitionResponse(BaseModel):
    """Response schema for a recognized FORM-A claim."""

    claimant_name: str
    spouse_name: str | None = None
    father_mother_name: str | None = None
    address: str | None = None
    village: str
    gram_panchayat: str | None = None
    tehsil_taluka: str | None = None
    district: str | None = None
    state: str | None = None
    scheduled_tribe: str | None = None
    scheduled_tribe_certificate: str | None = None
    other_traditional_forest_dweller: str | None = None
    spouse_scheduled_tribe: str | None = None
    family_members: list[FamilyMemberResponse] = Field(default_factory=list)
    land_for_habitation: float = 0.0
    land_for_self_cultivation: float = 0.0
    disputed_lands: float = 0.0
    pattas_leases_grants: float = 0.0
    land_for_rehabilitation_alternative: float = 0.0
    land_displaced_without_compensation: float = 0.0
    claim_id: str
    area: str
    survey_number: str | None = None
    raw_text: str
    confidence: int = Field(ge=0, le=100)


class EntityRequest(BaseModel):
    """Request schema for standalone entity extraction."""

    text: str


class EntityResponse(BaseModel):
    """Response schema listing entity candidates by kind."""

    villages: list[str]
    names: list[str]
    areas: list[str]
    ids: list[str]


class VillageResponse(BaseModel):
    """Response schema for a village location."""

    village: str
    lat: float
    lng: float
    district: str | None = None
    state: str | None = None


class VillagesResponse(BaseModel):
    """Response schema listing known villages."""

    villages: list[VillageResponse]


class BoundaryRequest(BaseModel):
    """Request schema for boundary generation."""

    village: str
    area_hectares: float = Field(gt=0, allow_inf_nan=False)


class BoundaryResponse(BaseModel):
    """Response schema for a GeoJSON polygon."""

    type: str = "Polygon"
    coordinates: list[list[list[float]]]


class HealthResponse(BaseModel):
    """Response schema for the health check endpoint."""

    status: str
    version: str
