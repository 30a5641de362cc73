"""Command-line interface for claim recognition, batch intake, and maps.

Provides subcommands for recognizing single claim forms, processing
folders of scans into a claims CSV, summarizing that CSV, extracting
entities from text, and generating parcel boundaries.
"""

import argparse
import asyncio
import json
import mimetypes
import sys
import time
from collections.abc import Callable
from dataclasses import asdict
from pathlib import Path
from typing import Any

import numpy as np

from fra_claims.claims.analytics import (
    compute_dashboard_stats,
    daily_trend,
    export_claims_csv,
    load_claims_csv,
    status_breakdown,
    village_breakdown,
)
from fra_claims.claims.records import ClaimRecord, build_claim_record, parse_area
from fra_claims.extraction.entity_extractor import EntityExtractor, extract_matches
from fra_claims.geo.boundary import BoundarySynthesizer
from fra_claims.geo.villages import list_villages
from fra_claims.ocr.recognition_engine import (
    RecognitionEngine,
    RecognitionFileNotFoundError,
)
from fra_claims.utils.config import AppConfig, load_config
from fra_claims.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = ("*.png", "*.jpg", "*.jpeg", "*.tiff", "*.tif", "*.pdf")


def _find_documents(input_dir: Path) -> list[Path]:
    """Find all supported claim scans in a directory.

    Args:
        input_dir: Directory to scan for documents.

    Returns:
        Sorted list of document file paths.
    """
    files: list[Path] = []
    for ext in _SUPPORTED_EXTENSIONS:
        files.extend(input_dir.glob(ext))
        files.extend(input_dir.glob(ext.upper()))
    return sorted(set(files))


def _guess_mime_type(path: Path) -> str:
    mime_type, _ = mimetypes.guess_type(path.name)
    return mime_type or "application/octet-stream"


def _build_components(
    config: AppConfig,
    clock: Callable[[], float] = time.time,
) -> tuple[RecognitionEngine, BoundarySynthesizer]:
    rng = np.random.default_rng(config.seed)
    extractor = EntityExtractor(config.extraction)
    engine = RecognitionEngine(
        config.recognition, extractor=extractor, rng=rng, clock=clock
    )
    return engine, BoundarySynthesizer(config.boundary, rng=rng)


def recognize_single(
    file_path: Path,
    config: AppConfig,
    mime_type: str | None = None,
    clock: Callable[[], float] = time.time,
) -> dict[str, Any]:
    """Recognize one claim form and return its fields.

    Args:
        file_path: Path to the scanned claim form.
        config: Application configuration.
        mime_type: Media type; guessed from the extension when omitted.
        clock: Time source for the claim id. With a fixed clock and a
            seeded config the output is fully reproducible.

    Returns:
        Recognized fields as a JSON-ready dictionary.
    """
    engine, _ = _build_components(config, clock)
    result = asyncio.run(
        engine.process(file_path, mime_type or _guess_mime_type(file_path))
    )
    return result.to_dict()


async def _recognize_all(
    files: list[Path],
    engine: RecognitionEngine,
    synthesizer: BoundarySynthesizer,
    with_boundary: bool,
) -> list[ClaimRecord | BaseException]:
    async def one(path: Path) -> ClaimRecord:
        result = await engine.process(path, _guess_mime_type(path))
        boundary = None
        if with_boundary:
            area = parse_area(result.area)
            if area > 0:
                boundary = synthesizer.generate_boundary(result.village, area)
        return build_claim_record(result, boundary=boundary)

    return await asyncio.gather(*(one(f) for f in files), return_exceptions=True)


def process_folder(
    input_dir: Path,
    output_csv: Path,
    config: AppConfig,
    with_boundary: bool = False,
    verbose: bool = False,
) -> dict[str, int]:
    """Recognize all claim scans in a folder and export claims to CSV.

    Files are recognized concurrently; a failure on one file does not
    stop the others.

    Args:
        input_dir: Directory containing claim scans.
        output_csv: Path for the output CSV file.
        config: Application configuration.
        with_boundary: Whether to synthesize a boundary for each claim.
        verbose: Whether to print per-file outcomes.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    files = _find_documents(input_dir)
    if not files:
        logger.warning("No documents found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d documents to process", len(files))
    engine, synthesizer = _build_components(config)
    outcomes = asyncio.run(_recognize_all(files, engine, synthesizer, with_boundary))

    claims: list[ClaimRecord] = []
    for path, outcome in zip(files, outcomes):
        if isinstance(outcome, BaseException):
            logger.error("Failed to process %s: %s", path.name, outcome)
            if verbose:
                print(f"FAILED  {path.name}: {outcome}")
            continue
        claims.append(outcome)
        if verbose:
            print(
                f"OK      {path.name}: {outcome.claim_id} "
                f"({outcome.ocr_confidence}% confidence)"
            )

    export_claims_csv(claims, output_csv)
    logger.info("Results written to %s", output_csv)

    summary = {
        "total": len(files),
        "successful": len(claims),
        "failed": len(files) - len(claims),
    }
    _print_summary(summary, output_csv, compute_dashboard_stats(claims).total_area)
    return summary


def _print_summary(
    summary: dict[str, int], output_csv: Path, total_area: float
) -> None:
    """Print batch processing summary to stdout.

    Args:
        summary: Counts of total, successful, and failed documents.
        output_csv: Path to the output CSV.
        total_area: Total claimed area across successful claims.
    """
    print(f"\n{'=' * 50}")
    print("Batch Intake Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Area (ha):  {total_area:.2f}")
    print(f"Output:     {output_csv}")


def summarize_claims(input_csv: Path, top_villages: int = 10) -> dict[str, Any]:
    """Build dashboard numbers from a claims CSV produced by ``batch``.

    Args:
        input_csv: Exported claims file.
        top_villages: How many of the busiest villages to include.

    Returns:
        Headline stats plus status, village, and daily breakdowns.
    """
    claims = load_claims_csv(input_csv)
    return {
        "dashboard": asdict(compute_dashboard_stats(claims)),
        "statuses": status_breakdown(claims),
        "villages": [
            {"village": village, "count": count}
            for village, count in village_breakdown(claims, limit=top_villages)
        ],
        "trend": [{"date": day, "count": count} for day, count in daily_trend(claims)],
    }


def _emit(payload: object, output: Path | None) -> None:
    output_str = json.dumps(payload, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(output_str)
        print(f"Output written to {output}")
    else:
        print(output_str)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="FRA Claim Intake",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="YAML configuration file"
    )
    parser.add_argument(
        "--seed", type=int, default=None, help="Seed for reproducible output"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    recognize_parser = subparsers.add_parser(
        "recognize", help="Recognize a single claim form"
    )
    recognize_parser.add_argument("file", type=Path, help="Claim form to process")
    recognize_parser.add_argument(
        "--mime", default=None, help="Media type (default: guessed from extension)"
    )
    recognize_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    batch_parser = subparsers.add_parser(
        "batch", help="Process a folder of claim forms"
    )
    batch_parser.add_argument(
        "input_dir", type=Path, help="Input directory with claim forms"
    )
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("claims.csv"),
        help="Output CSV file (default: claims.csv)",
    )
    batch_parser.add_argument(
        "--with-boundary",
        action="store_true",
        help="Generate a boundary polygon for each claim",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    entities_parser = subparsers.add_parser(
        "entities", help="Extract entities from a text file"
    )
    entities_parser.add_argument("file", type=Path, help="Text file to scan")

    boundary_parser = subparsers.add_parser(
        "boundary", help="Generate a parcel boundary polygon"
    )
    boundary_parser.add_argument("village", help="Village name")
    boundary_parser.add_argument("area", type=float, help="Claimed area in hectares")
    boundary_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    subparsers.add_parser("villages", help="List villages with known coordinates")

    stats_parser = subparsers.add_parser(
        "stats", help="Summarize a claims CSV for the dashboard"
    )
    stats_parser.add_argument("input_csv", type=Path, help="Claims CSV from batch")
    stats_parser.add_argument(
        "--top", type=int, default=10, help="Number of villages to list (default: 10)"
    )
    stats_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    args = parser.parse_args(argv)

    config = load_config(args.config)
    if args.seed is not None:
        config.seed = args.seed
    setup_logging(config.log_level)

    if args.command == "recognize":
        try:
            result = recognize_single(args.file, config, args.mime)
        except RecognitionFileNotFoundError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        _emit(result, args.output)
    elif args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        process_folder(
            args.input_dir,
            args.output,
            config,
            args.with_boundary,
            args.verbose,
        )
    elif args.command == "entities":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        candidates = extract_matches(args.file.read_text())
        _emit(asdict(candidates), None)
    elif args.command == "boundary":
        _, synthesizer = _build_components(config)
        try:
            geometry = synthesizer.generate_boundary(args.village, args.area)
        except ValueError as exc:
            print(f"Error: {exc}", file=sys.stderr)
            sys.exit(1)
        _emit(geometry, args.output)
    elif args.command == "villages":
        _emit([v.to_dict() for v in list_villages()], None)
    elif args.command == "stats":
        if not args.input_csv.is_file():
            print(f"Error: {args.input_csv} does not exist", file=sys.stderr)
            sys.exit(1)
        _emit(summarize_claims(args.input_csv, args.top), args.output)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
