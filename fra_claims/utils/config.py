"""Configuration management for the FRA claim intake system.

Loads and validates YAML configuration with sensible defaults
for recognition, entity extraction, boundary synthesis, and the API.
"""

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, Field

logger = logging.getLogger(__name__)


class RecognitionConfig(BaseModel):
    """Configuration for the mock recognition engine."""

    min_delay_s: float = 1.5
    max_delay_s: float = 3.5
    default_base_confidence: float = 85.0
    pdf_base_confidence: float = 90.0
    image_base_confidence: float = 75.0
    large_file_kb: float = 1000.0
    large_file_bonus: float = 5.0
    small_file_kb: float = 100.0
    small_file_penalty: float = 10.0
    confidence_noise: float = 10.0
    min_confidence: float = 15.0
    max_confidence: float = 98.0
    low_confidence_threshold: int = 50
    medium_confidence_threshold: int = 75
    illegible_digit_rate: float = 0.3
    claim_id_prefix: str = "FRA-2024"


class ExtractionConfig(BaseModel):
    """Configuration for the entity back-fill pass."""

    delay_s: float = 0.5


class BoundaryConfig(BaseModel):
    """Configuration for synthetic boundary generation."""

    degrees_per_sqrt_hectare: float = 0.001
    min_vertices: int = 6
    max_vertices: int = 8
    angle_jitter_rad: float = 0.15
    radius_jitter: float = 0.15
    fallback_lat: float = 21.0
    fallback_lng: float = 78.0
    fallback_jitter_deg: float = 1.0
    fallback_district: str = "Unknown"
    fallback_state: str = "Maharashtra"


class APIConfig(BaseModel):
    """Configuration for the HTTP API."""

    upload_dir: str = "uploads"


class AppConfig(BaseModel):
    """Top-level application configuration."""

    recognition: RecognitionConfig = Field(default_factory=RecognitionConfig)
    extraction: ExtractionConfig = Field(default_factory=ExtractionConfig)
    boundary: BoundaryConfig = Field(default_factory=BoundaryConfig)
    api: APIConfig = Field(default_factory=APIConfig)
    log_level: str = "INFO"
    seed: int | None = None


def load_config(path: Path | None = None) -> AppConfig:
    """Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.
            Defaults to configs/config.yaml.

    Returns:
        Validated application configuration.
    """
    if path is None:
        path = Path("configs/config.yaml")

    if path.exists():
        logger.info("Loading configuration from %s", path)
        with open(path) as f:
            raw = yaml.safe_load(f) or {}
        return AppConfig(**raw)

    logger.info("No config file found at %s, using defaults", path)
    return AppConfig()
