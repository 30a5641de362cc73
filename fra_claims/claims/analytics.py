"""Dashboard statistics and exports over claim records.

Aggregations mirror what the claims dashboard shows: headline counts,
a status breakdown, the busiest villages, and a daily intake trend.
"""

import csv
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

from fra_claims.utils.logger import get_logger

from .records import ClaimRecord, ClaimStatus, parse_area

logger = get_logger(__name__)

EXPORT_COLUMNS = [
    "claim_id",
    "claimant_name",
    "village",
    "district",
    "state",
    "area",
    "status",
    "ocr_confidence",
    "created_at",
]

_PROCESSED = {ClaimStatus.APPROVED, ClaimStatus.REJECTED}
_AWAITING_DECISION = {ClaimStatus.PENDING, ClaimStatus.REVIEW_REQUIRED}


@dataclass
class DashboardStats:
    """Headline numbers for the claims dashboard."""

    total_claims: int
    processed: int
    total_area: float
    pending: int


def compute_dashboard_stats(claims: Iterable[ClaimRecord]) -> DashboardStats:
    """Summarize claims into dashboard counts.

    Processed claims are those approved or rejected; pending covers
    claims still waiting for a decision, including those flagged for
    review.
    """
    total = processed = pending = 0
    area = 0.0
    for claim in claims:
        total += 1
        area += claim.area
        if claim.status in _PROCESSED:
            processed += 1
        elif claim.status in _AWAITING_DECISION:
            pending += 1

    return DashboardStats(
        total_claims=total,
        processed=processed,
        total_area=round(area, 2),
        pending=pending,
    )


def status_breakdown(claims: Iterable[ClaimRecord]) -> dict[str, int]:
    """Count claims per status in first-seen order."""
    return dict(Counter(str(c.status) for c in claims))


def village_breakdown(
    claims: Iterable[ClaimRecord], limit: int = 10
) -> list[tuple[str, int]]:
    """Return the villages with the most claims, busiest first."""
    counts = Counter(c.village or "Unknown" for c in claims)
    return counts.most_common(limit)


def daily_trend(claims: Iterable[ClaimRecord]) -> list[tuple[str, int]]:
    """Count claims per creation date, oldest first.

    Claims without a creation time are skipped.
    """
    counts = Counter(
        c.created_at.date().isoformat() for c in claims if c.created_at is not None
    )
    return sorted(counts.items())


def export_claims_csv(claims: Iterable[ClaimRecord], output_path: Path) -> int:
    """Write claims to a CSV file.

    Args:
        claims: Claims to export.
        output_path: Destination file; parent directories are created.

    Returns:
        Number of rows written.
    """
    output_path.parent.mkdir(parents=True, exist_ok=True)
    rows = 0
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=EXPORT_COLUMNS)
        writer.writeheader()
        for claim in claims:
            writer.writerow(
                {
                    "claim_id": claim.claim_id,
                    "claimant_name": claim.claimant_name,
                    "village": claim.village,
                    "district": claim.district or "",
                    "state": claim.state or "",
                    "area": f"{claim.area:.2f}",
                    "status": str(claim.status),
                    "ocr_confidence": (
                        "" if claim.ocr_confidence is None else claim.ocr_confidence
                    ),
                    "created_at": (
                        claim.created_at.isoformat() if claim.created_at else ""
                    ),
                }
            )
            rows += 1

    logger.info("Exported %d claims to %s", rows, output_path)
    return rows


def load_claims_csv(input_path: Path) -> list[ClaimRecord]:
    """Read claims back from a CSV written by :func:`export_claims_csv`.

    Args:
        input_path: CSV file with the export columns.

    Returns:
        Claims in file order. Empty optional cells become ``None``.
    """
    claims: list[ClaimRecord] = []
    with open(input_path, newline="") as f:
        for row in csv.DictReader(f):
            confidence = row.get("ocr_confidence") or ""
            created_at = row.get("created_at") or ""
            claims.append(
                ClaimRecord(
                    claim_id=row["claim_id"],
                    claimant_name=row["claimant_name"],
                    village=row["village"],
                    area=parse_area(row["area"]),
                    status=ClaimStatus(row["status"]),
                    district=row.get("district") or None,
                    state=row.get("state") or None,
                    ocr_confidence=int(confidence) if confidence else None,
                    created_at=(
                        datetime.fromisoformat(created_at) if created_at else None
                    ),
                )
            )

    logger.info("Loaded %d claims from %s", len(claims), input_path)
    return claims
