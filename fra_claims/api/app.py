"""FastAPI application for the FRA claim intake API.

Provides REST endpoints for claim form recognition, reprocessing with
manual corrections, entity extraction, village lookup, and boundary
generation.
"""

import functools
import json
import uuid
from pathlib import Path
from typing import Annotated

import numpy as np
from fastapi import FastAPI, File, Form, HTTPException, UploadFile
from fastapi.middleware.cors import CORSMiddleware

from fra_claims import __version__
from fra_claims.extraction.entity_extractor import EntityExtractor
from fra_claims.geo.boundary import BoundarySynthesizer
from fra_claims.geo.villages import list_villages, lookup_village
from fra_claims.ocr.recognition_engine import (
    RecognitionEngine,
    RecognitionFileNotFoundError,
)
from fra_claims.utils.config import AppConfig, load_config
from fra_claims.utils.logger import get_logger

from .schemas import (
    BoundaryRequest,
    BoundaryResponse,
    EntityRequest,
    EntityResponse,
    HealthResponse,
    RecognitionResponse,
    VillageResponse,
    VillagesResponse,
)

logger = get_logger(__name__)

app = FastAPI(
    title="FRA Claim Intake API",
    description="Recognize forest-rights claim forms and map claimed parcels",
    version=__version__,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@functools.lru_cache(maxsize=1)
def _get_components() -> (
    tuple[RecognitionEngine, EntityExtractor, BoundarySynthesizer, AppConfig]
):
    """Initialize and return shared processing components.

    Built once per process so that a seeded generator keeps advancing
    across requests instead of restarting for every upload.

    Returns:
        Tuple of (recognition_engine, entity_extractor, boundary_synthesizer,
        config).
    """
    config = load_config()
    rng = np.random.default_rng(config.seed)
    extractor = EntityExtractor(config.extraction)
    engine = RecognitionEngine(config.recognition, extractor=extractor, rng=rng)
    synthesizer = BoundarySynthesizer(config.boundary, rng=rng)
    return engine, extractor, synthesizer, config


_ALLOWED_CONTENT_TYPES = {
    "application/pdf",
    "application/octet-stream",
}


def _is_allowed(content_type: str | None) -> bool:
    if not content_type:
        return True
    return content_type in _ALLOWED_CONTENT_TYPES or content_type.startswith("image/")


async def _save_upload(file: UploadFile, upload_dir: Path) -> Path:
    """Store an uploaded file under a unique name and return its path.

    Callers remove the file once recognition has finished.
    """
    upload_dir.mkdir(parents=True, exist_ok=True)
    suffix = Path(file.filename or "").suffix
    dest = upload_dir / f"{uuid.uuid4().hex}{suffix}"
    dest.write_bytes(await file.read())
    return dest


@app.get("/health", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Return system health status."""
    return HealthResponse(status="healthy", version=__version__)


@app.post("/recognize", response_model=RecognitionResponse)
async def recognize_document(
    file: Annotated[UploadFile, File(...)],
) -> RecognitionResponse:
    """Recognize the fields of an uploaded FORM-A claim.

    Args:
        file: Uploaded claim document (PDF or image).

    Returns:
        Recognized claim fields with a confidence score.
    """
    if not _is_allowed(file.content_type):
        raise HTTPException(
            status_code=400,
            detail=f"Unsupported file type: {file.content_type}",
        )

    try:
        engine, _, _, config = _get_components()
        path = await _save_upload(file, Path(config.api.upload_dir))
        try:
            result = await engine.process(
                path, file.content_type or "application/octet-stream"
            )
        finally:
            path.unlink(missing_ok=True)
        return RecognitionResponse(**result.to_dict())
    except RecognitionFileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except HTTPException:
        raise
    except Exception as exc:
        logger.error("Recognition failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post("/recognize/reprocess", response_model=RecognitionResponse)
async def reprocess_document(
    file: Annotated[UploadFile, File(...)],
    corrections: Annotated[str, Form()] = "{}",
) -> RecognitionResponse:
    """Re-run recognition and apply reviewer corrections.

    Args:
        file: Uploaded claim document.
        corrections: JSON object mapping field names to corrected values.

    Returns:
        Corrected claim fields with confidence 100.
    """
    try:
        parsed = json.loads(corrections)
    except json.JSONDecodeError as exc:
        raise HTTPException(
            status_code=422, detail=f"Corrections are not valid JSON: {exc.msg}"
        ) from exc
    if not isinstance(parsed, dict):
        raise HTTPException(
            status_code=422, detail="Corrections must be a JSON object"
        )

    try:
        engine, _, _, config = _get_components()
        path = await _save_upload(file, Path(config.api.upload_dir))
        try:
            result = await engine.reprocess_with_corrections(path, parsed)
        finally:
            path.unlink(missing_ok=True)
        return RecognitionResponse(**result.to_dict())
    except RecognitionFileNotFoundError as exc:
        raise HTTPException(status_code=404, detail=str(exc)) from exc
    except Exception as exc:
        logger.error("Reprocessing failed: %s", exc)
        raise HTTPException(status_code=500, detail=str(exc)) from exc


@app.post("/entities", response_model=EntityResponse)
async def extract_entities(request: EntityRequest) -> EntityResponse:
    """Extract village, name, area, and claim id candidates from text."""
    _, extractor, _, _ = _get_components()
    candidates = await extractor.extract(request.text)
    return EntityResponse(
        villages=candidates.villages,
        names=candidates.names,
        areas=candidates.areas,
        ids=candidates.ids,
    )


@app.get("/villages", response_model=VillagesResponse)
async def get_villages() -> VillagesResponse:
    """List all villages with known coordinates."""
    return VillagesResponse(
        villages=[VillageResponse(**v.to_dict()) for v in list_villages()]
    )


@app.get("/villages/{name}", response_model=VillageResponse)
async def get_village(name: str) -> VillageResponse:
    """Look up a single village by name."""
    location = lookup_village(name)
    if location is None:
        raise HTTPException(status_code=404, detail=f"Unknown village: {name}")
    return VillageResponse(**location.to_dict())


@app.post("/boundary", response_model=BoundaryResponse)
async def generate_boundary(request: BoundaryRequest) -> BoundaryResponse:
    """Generate a synthetic boundary polygon for a claimed parcel."""
    _, _, synthesizer, _ = _get_components()
    geometry = synthesizer.generate_boundary(request.village, request.area_hectares)
    return BoundaryResponse(**geometry)
