"""Mock FORM-A recognition engine.

Simulates an OCR + NLP pipeline over an uploaded claim document: the
result is a randomized but internally consistent set of claim fields,
with a confidence score shaped by the file type and size and a
confidence-dependent amount of simulated illegibility.
"""

import asyncio
import dataclasses
import math
import re
import time
from collections.abc import Awaitable, Callable, Mapping
from pathlib import Path
from typing import Any

import numpy as np

from fra_claims.extraction.entity_extractor import EntityExtractor
from fra_claims.utils.config import RecognitionConfig
from fra_claims.utils.logger import get_logger

from . import form_data
from .models import FamilyMember, RecognitionResult

logger = get_logger(__name__)

SleepFn = Callable[[float], Awaitable[None]]

REVIEWED_CONFIDENCE = 100

_DIGIT = re.compile(r"\d")


class RecognitionFileNotFoundError(FileNotFoundError):
    """Raised when the document to recognize does not exist."""


class RecognitionEngine:
    """Produces structured claim fields for a stored document.

    Args:
        config: Recognition tuning (delays, confidence model, thresholds).
        extractor: Entity extractor used for the back-fill pass.
        rng: Random generator; pass a seeded one for reproducible output.
        sleep: Coroutine function used for the simulated processing delay.
        clock: Returns the current time in seconds, used for claim ids.
    """

    def __init__(
        self,
        config: RecognitionConfig | None = None,
        extractor: EntityExtractor | None = None,
        rng: np.random.Generator | None = None,
        sleep: SleepFn = asyncio.sleep,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self.config = config or RecognitionConfig()
        self.rng = rng if rng is not None else np.random.default_rng()
        self.extractor = extractor or EntityExtractor(sleep=sleep)
        self._sleep = sleep
        self._clock = clock

    async def process(self, file_path: Path | str, mime_type: str) -> RecognitionResult:
        """Recognize a claim document.

        Args:
            file_path: Location of the uploaded document.
            mime_type: Declared media type, e.g. ``application/pdf``.

        Returns:
            Recognized claim fields.

        Raises:
            RecognitionFileNotFoundError: If ``file_path`` does not exist.
        """
        cfg = self.config
        await self._sleep(float(self.rng.uniform(cfg.min_delay_s, cfg.max_delay_s)))

        path = Path(file_path)
        if not path.is_file():
            raise RecognitionFileNotFoundError(
                f"File not found for OCR processing: {path}"
            )

        size_kb = path.stat().st_size / 1024
        confidence = self.compute_confidence(mime_type, size_kb)

        result = self._generate(self._new_claim_id(), confidence)
        result = self._degrade(result)
        logger.info(
            "OCR processed file: %s, confidence: %d%%", path, result.confidence
        )

        return await self._backfill(result)

    async def reprocess_with_corrections(
        self, file_path: Path | str, corrections: Mapping[str, Any]
    ) -> RecognitionResult:
        """Re-run recognition and overlay manually reviewed field values.

        Corrected values are taken as given. Keys that are not result
        fields are dropped, and the confidence is always 100.
        """
        result = await self.process(file_path, "application/pdf")

        known = RecognitionResult.field_names()
        overlay: dict[str, Any] = {}
        for key, value in corrections.items():
            if key not in known:
                logger.warning("Ignoring unknown correction field: %s", key)
                continue
            overlay[key] = value

        if "family_members" in overlay:
            overlay["family_members"] = tuple(
                m if isinstance(m, FamilyMember) else FamilyMember(**m)
                for m in overlay["family_members"] or ()
            )
        overlay["confidence"] = REVIEWED_CONFIDENCE
        return dataclasses.replace(result, **overlay)

    def compute_confidence(self, mime_type: str, size_kb: float) -> float:
        """Score how legible a document is likely to be.

        PDFs score higher than images; large files gain a bonus and small
        ones a penalty. Random noise is added and the result clamped.
        """
        cfg = self.config
        if mime_type == "application/pdf":
            base = cfg.pdf_base_confidence
        elif mime_type.startswith("image/"):
            base = cfg.image_base_confidence
        else:
            base = cfg.default_base_confidence

        if size_kb > cfg.large_file_kb:
            base += cfg.large_file_bonus
        elif size_kb < cfg.small_file_kb:
            base -= cfg.small_file_penalty

        noise = float(self.rng.uniform(-cfg.confidence_noise, cfg.confidence_noise))
        return max(cfg.min_confidence, min(cfg.max_confidence, base + noise))

    def _new_claim_id(self) -> str:
        millis = int(self._clock() * 1000)
        return f"{self.config.claim_id_prefix}-{millis % 10000:04d}"

    def _pick(self, pool: tuple[str, ...]) -> str:
        return pool[int(self.rng.integers(len(pool)))]

    def _age(self, band: tuple[int, int]) -> int:
        return int(self.rng.integers(band[0], band[1] + 1))

    def _yes_no(self) -> str:
        return "Yes" if self.rng.random() > 0.5 else "No"

    def _generate(self, claim_id: str, confidence: float) -> RecognitionResult:
        village = self._pick(form_data.VILLAGES)
        claimant = self._pick(form_data.CLAIMANT_NAMES)
        spouse = self._pick(form_data.FEMALE_NAMES)
        district = self._pick(form_data.DISTRICTS)
        state = self._pick(form_data.STATES)
        gram_panchayat = self._pick(form_data.GRAM_PANCHAYATS)
        tehsil = self._pick(form_data.TEHSILS)

        total_area = round(float(self.rng.uniform(1.0, 5.0)), 2)
        habitation, cultivation, disputed = split_land_area(total_area)

        family = (
            FamilyMember(spouse, self._age(form_data.SPOUSE_AGE_BAND), "Spouse"),
            FamilyMember(form_data.SON_NAME, self._age(form_data.SON_AGE_BAND), "Son"),
            FamilyMember(
                form_data.DAUGHTER_NAME,
                self._age(form_data.DAUGHTER_AGE_BAND),
                "Daughter",
            ),
        )
        scheduled_tribe = self._yes_no()
        otfd = self._yes_no()
        address = f"Village {village}, Post {village}"
        survey_number = f"SY-{int(self.rng.integers(1000, 10999))}"
        area = str(total_area)

        raw_text = form_data.render_form_a(
            claim_id=claim_id,
            claimant_name=claimant,
            spouse_name=spouse,
            father_mother_name=form_data.PARENT_NAME,
            address=address,
            village=village,
            gram_panchayat=gram_panchayat,
            tehsil_taluka=tehsil,
            district=district,
            scheduled_tribe=scheduled_tribe,
            otfd=otfd,
            family_members=family,
            habitation=habitation,
            cultivation=cultivation,
            disputed=disputed,
            survey_number=survey_number,
            area=area,
            confidence=confidence,
        )

        return RecognitionResult(
            claimant_name=claimant,
            spouse_name=spouse,
            father_mother_name=form_data.PARENT_NAME,
            address=address,
            village=village,
            gram_panchayat=gram_panchayat,
            tehsil_taluka=tehsil,
            district=district,
            state=state,
            scheduled_tribe=scheduled_tribe,
            scheduled_tribe_certificate=form_data.ST_CERTIFICATE,
            other_traditional_forest_dweller=otfd,
            spouse_scheduled_tribe="Yes",
            family_members=family,
            land_for_habitation=habitation,
            land_for_self_cultivation=cultivation,
            disputed_lands=disputed,
            claim_id=claim_id,
            area=area,
            survey_number=survey_number,
            raw_text=raw_text,
            confidence=round(confidence),
        )

    def _degrade(self, result: RecognitionResult) -> RecognitionResult:
        """Blank out or blur fields the way a poor scan would."""
        cfg = self.config
        if result.confidence < cfg.low_confidence_threshold:
            rate = cfg.illegible_digit_rate
            raw_text = _DIGIT.sub(
                lambda m: "?" if self.rng.random() < rate else m.group(0),
                result.raw_text,
            )
            return dataclasses.replace(
                result,
                district=form_data.UNCLEAR_DISTRICT if result.district else None,
                survey_number=form_data.ILLEGIBLE_SURVEY_NUMBER,
                raw_text=raw_text,
            )
        if result.confidence < cfg.medium_confidence_threshold:
            return dataclasses.replace(
                result, raw_text=f"{result.raw_text}\n{form_data.UNCLEAR_TEXT_NOTE}"
            )
        return result

    async def _backfill(self, result: RecognitionResult) -> RecognitionResult:
        """Fill blank key fields from entities found in the raw text.

        Best effort: extraction errors are logged and the result is
        returned unchanged.
        """
        try:
            entities = await self.extractor.extract(result.raw_text or "")
        except Exception:
            logger.warning("Entity extraction failed", exc_info=True)
            return result

        patches: dict[str, str] = {}
        for field_name, candidates in (
            ("claimant_name", entities.names),
            ("village", entities.villages),
            ("claim_id", entities.ids),
            ("area", entities.areas),
        ):
            if not getattr(result, field_name) and candidates:
                patches[field_name] = candidates[0]

        if patches:
            logger.debug("Back-filled fields: %s", ", ".join(sorted(patches)))
            return dataclasses.replace(result, **patches)
        return result


def split_land_area(total_area: float) -> tuple[float, float, float]:
    """Split a total area into habitation, cultivation, and disputed parts.

    Each part is rounded to two decimals; the disputed remainder is never
    negative.
    """
    if not math.isfinite(total_area):
        raise ValueError(f"Area must be finite, got {total_area}")
    habitation = round(total_area * form_data.HABITATION_SHARE, 2)
    cultivation = round(total_area * form_data.CULTIVATION_SHARE, 2)
    disputed = round(total_area - habitation - cultivation, 2)
    return habitation, cultivation, disputed if disputed > 0 else 0.0
