"""Shared test fixtures for the FRA claim intake test suite."""

from pathlib import Path

import numpy as np
import pytest

from fra_claims.extraction.entity_extractor import EntityExtractor
from fra_claims.ocr.recognition_engine import RecognitionEngine
from fra_claims.utils.config import RecognitionConfig


class RecordingSleep:
    """Async sleep stand-in that records requested delays without waiting."""

    def __init__(self) -> None:
        self.calls: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.calls.append(seconds)


@pytest.fixture
def sleep() -> RecordingSleep:
    return RecordingSleep()


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def engine(rng: np.random.Generator, sleep: RecordingSleep) -> RecognitionEngine:
    """Recognition engine with a seeded generator and no real delays."""
    return RecognitionEngine(
        RecognitionConfig(),
        extractor=EntityExtractor(sleep=sleep),
        rng=rng,
        sleep=sleep,
        clock=lambda: 1_700_000_009.5,
    )


@pytest.fixture
def small_pdf(tmp_path: Path) -> Path:
    """A 2 KB file standing in for a scanned claim form."""
    path = tmp_path / "claim.pdf"
    path.write_bytes(b"%PDF-1.4\n" + b"0" * 2048)
    return path


@pytest.fixture
def large_image(tmp_path: Path) -> Path:
    """A file just over the large-file threshold."""
    path = tmp_path / "claim.png"
    path.write_bytes(b"\x89PNG" + b"\x00" * (1001 * 1024))
    return path


@pytest.fixture
def fast_config_file(tmp_path: Path) -> Path:
    """YAML config with all artificial delays disabled."""
    path = tmp_path / "config.yaml"
    path.write_text(
        "recognition:\n"
        "  min_delay_s: 0\n"
        "  max_delay_s: 0\n"
        "extraction:\n"
        "  delay_s: 0\n"
        "seed: 7\n"
        f"api:\n  upload_dir: {tmp_path / 'uploads'}\n"
    )
    return path


@pytest.fixture
def project_root() -> Path:
    """Return the project root directory."""
    return Path(__file__).parent.parent
